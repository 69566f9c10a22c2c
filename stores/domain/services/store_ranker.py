"""
StoreRanker - Store Listing & Geo Ranking

Pages through stores ordered by name, by rating, or by distance from a point.
Distance ranking filters by radius before paginating, so the reported count is
the number of stores inside the radius regardless of page size.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError

from stores.domain.models import Store
from stores.infra.observability.metrics import ranking_duration
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .geo import EARTH_RADIUS_KM, haversine_km
from .pagination import paginate

logger = logging.getLogger(__name__)

CRITERION_NAME = "name"
CRITERION_RATING = "rating"
CRITERION_DISTANCE = "distance"
CRITERIA = (CRITERION_NAME, CRITERION_RATING, CRITERION_DISTANCE)


class StoreRanker(BaseService):
    """
    Read-only ranking over the store table.

    Orderings:
    - name: ascending by name
    - rating: descending by rating, ties by name
    - distance: ascending by Haversine distance within a radius, ties by name
    """

    def __init__(self, max_page_size: Optional[int] = None, earth_radius_km: Optional[float] = None):
        super().__init__()
        config = getattr(settings, "RESERVATIONS", {})
        self.max_page_size = max_page_size or config.get("MAX_PAGE_SIZE", 100)
        self.earth_radius_km = earth_radius_km or config.get("EARTH_RADIUS_KM", EARTH_RADIUS_KM)

    @BaseService.log_performance
    def rank(
        self,
        criterion: str,
        page: int,
        size: int,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
        radius_km: Optional[float] = None,
    ) -> ServiceResult[Dict[str, Any]]:
        """
        Rank stores and return one zero-based page.

        Args:
            criterion: "name", "rating" or "distance"
            page: zero-based page index
            size: page size (1..max_page_size)
            lat, lng, radius_km: required for "distance"

        Returns:
            ServiceResult with {"results", "count", "page", "size", "num_pages",
            "has_next", "has_previous", "criterion"}

        Example:
            >>> result = store_ranker.rank("distance", 0, 10, lat=37.5, lng=127.0, radius_km=3)
            >>> if result.ok:
            ...     nearest = result.value["results"][0]
            ...     print(nearest.name, nearest.distance_km)
        """
        if criterion not in CRITERIA:
            return service_err(
                ErrorCodes.INVALID_CRITERION,
                f"Unknown ranking criterion '{criterion}', expected one of {', '.join(CRITERIA)}",
            )

        if page is None or page < 0:
            return service_err(ErrorCodes.INVALID_INPUT, "page must be zero or greater")
        if size is None or size <= 0 or size > self.max_page_size:
            return service_err(ErrorCodes.INVALID_INPUT, f"size must be between 1 and {self.max_page_size}")

        start_time = time.time()
        try:
            if criterion == CRITERION_DISTANCE:
                if lat is None or lng is None or radius_km is None:
                    return service_err(
                        ErrorCodes.MISSING_PARAMETER, "distance ranking requires lat, lng and radius"
                    )
                if not (-90 <= lat <= 90) or not (-180 <= lng <= 180) or radius_km < 0:
                    return service_err(
                        ErrorCodes.INVALID_INPUT, "lat/lng must be valid coordinates and radius non-negative"
                    )
                candidates = self._within_radius(lat, lng, radius_km)
            elif criterion == CRITERION_RATING:
                candidates = Store.objects.order_by("-rating", "name")
            else:
                candidates = Store.objects.order_by("name")

            return service_ok(self._paginate(candidates, criterion, page, size))

        except DatabaseError as e:
            self.logger.error(f"Database error ranking stores by {criterion}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Store storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error ranking stores by {criterion}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
        finally:
            ranking_duration.labels(criterion=criterion).observe(time.time() - start_time)

    def _within_radius(self, lat: float, lng: float, radius_km: float) -> List[Store]:
        """Stores no farther than radius_km, nearest first, each annotated with distance_km."""
        matches = []
        for store in Store.objects.all():
            distance = haversine_km(lat, lng, store.latitude, store.longitude, self.earth_radius_km)
            if distance <= radius_km:
                store.distance_km = round(distance, 3)
                matches.append((distance, store.name, store))

        matches.sort(key=lambda item: (item[0], item[1]))
        self.logger.debug(f"{len(matches)} stores within {radius_km}km of ({lat}, {lng})")
        return [store for _, _, store in matches]

    @staticmethod
    def _paginate(candidates, criterion: str, page: int, size: int) -> Dict[str, Any]:
        result = paginate(candidates, page, size)
        result["criterion"] = criterion
        return result
