from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from accounts.api.views import AccountAPIView, SignInAPIView, SignUpAPIView

app_name = "accounts"

urlpatterns = [
    path("signup/", SignUpAPIView.as_view(), name="signup"),
    path("signin/", SignInAPIView.as_view(), name="signin"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("me/", AccountAPIView.as_view(), name="me"),
]
