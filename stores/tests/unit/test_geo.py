import pytest

from stores.domain.services.geo import haversine_km


@pytest.mark.unit
class TestHaversine:
    def test_same_point_is_zero(self):
        assert haversine_km(37.5665, 126.9780, 37.5665, 126.9780) == 0.0

    def test_symmetric(self):
        forward = haversine_km(37.5665, 126.9780, 35.1796, 129.0756)
        backward = haversine_km(35.1796, 129.0756, 37.5665, 126.9780)
        assert forward == pytest.approx(backward)

    def test_seoul_to_busan(self):
        # Seoul City Hall to Busan City Hall is roughly 325 km as the crow flies
        assert haversine_km(37.5665, 126.9780, 35.1796, 129.0756) == pytest.approx(325, abs=5)

    def test_one_degree_of_latitude(self):
        # 2 * pi * 6371 / 360
        assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=0.01)

    def test_antipodal_points_do_not_fail(self):
        assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(20015.09, abs=0.1)
