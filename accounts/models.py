# Models live in accounts.domain.models; re-exported for Django's app loader.
from accounts.domain.models import CustomUser  # noqa: F401
