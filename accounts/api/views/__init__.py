from .account_views import AccountAPIView, SignInAPIView, SignUpAPIView

__all__ = ["AccountAPIView", "SignInAPIView", "SignUpAPIView"]
