from rest_framework import permissions

from utils.rbac import is_customer, is_owner


class IsStoreOwnerRole(permissions.BasePermission):
    """
    Only accounts registered with the owner role.

    Whether the owner owns the particular store is checked by the service.
    """

    message = "Only store owners can perform this action."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_owner(request.user))


class IsCustomerRole(permissions.BasePermission):
    message = "Only customers can perform this action."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and is_customer(request.user))
