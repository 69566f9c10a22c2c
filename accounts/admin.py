from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from accounts.models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("username", "name", "phone_number", "role", "is_staff")
    list_filter = ("role", "is_staff", "is_active")
    search_fields = ("username", "name", "phone_number")
    fieldsets = UserAdmin.fieldsets + (("Reservation profile", {"fields": ("name", "phone_number", "role")}),)
