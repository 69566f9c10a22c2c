# Models live in stores.domain.models; re-exported for Django's app loader.
from stores.domain.models import Reservation, Review, Store  # noqa: F401
