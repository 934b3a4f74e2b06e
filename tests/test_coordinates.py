"""
Tests for coordinate utilities.
"""

import pytest
from numpy.testing import assert_allclose

from vboxfile.utils.coordinates import DMS, dms_to_minutes


class TestDMS:
    """Tests for DMS construction and validation."""

    def test_valid_latitude(self):
        dms = DMS(51, 59, 5.9838, "N")

        assert dms.degrees == 51
        assert dms.minutes == 59
        assert dms.bearing == "N"

    @pytest.mark.parametrize("args", [
        (51, 59, 5.9838, "X"),
        (51, 60, 0.0, "N"),
        (51, 59, 60.0, "N"),
        (-1, 0, 0.0, "N"),
        (91, 0, 0.0, "N"),
        (90, 0, 0.5, "S"),
        (181, 0, 0.0, "E"),
        (10, 0, float("nan"), "W"),
    ])
    def test_invalid_values_rejected(self, args):
        with pytest.raises(ValueError):
            DMS(*args)

    def test_longitude_allows_up_to_180(self):
        assert DMS(180, 0, 0.0, "W").to_decimal_degrees() == -180.0


class TestDecimalDegrees:
    """Tests for decimal degree conversion."""

    def test_exact_half_degree(self):
        """-0.5 longitude is 0°30'0" West."""
        dms = DMS.from_decimal_degrees(-0.5, "longitude")

        assert dms == DMS(0, 30, 0.0, "W")

    def test_hemisphere_from_sign(self):
        assert DMS.from_decimal_degrees(10.0, "latitude").bearing == "N"
        assert DMS.from_decimal_degrees(-10.0, "latitude").bearing == "S"
        assert DMS.from_decimal_degrees(10.0, "longitude").bearing == "E"
        assert DMS.from_decimal_degrees(-10.0, "longitude").bearing == "W"

    @pytest.mark.parametrize("value,axis", [
        (51.985, "latitude"),
        (-33.8688, "latitude"),
        (151.2093, "longitude"),
        (-0.9748783, "longitude"),
    ])
    def test_round_trip(self, value, axis):
        """Decimal degrees -> DMS -> decimal degrees recovers the input."""
        dms = DMS.from_decimal_degrees(value, axis)

        assert 0 <= dms.minutes < 60
        assert 0.0 <= dms.seconds < 60.0
        assert_allclose(dms.to_decimal_degrees(), value, rtol=1e-12)

    def test_unknown_axis(self):
        with pytest.raises(ValueError):
            DMS.from_decimal_degrees(1.0, "altitude")

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            DMS.from_decimal_degrees(float("inf"), "latitude")


class TestDmsToMinutes:
    """Tests for the VBOX minutes conversion."""

    def test_latitude_north(self):
        """51°59'5.9838"N is 3119.09973 minutes."""
        assert_allclose(dms_to_minutes(DMS(51, 59, 5.9838, "N")), 3119.09973, rtol=1e-12)

    def test_longitude_west(self):
        """00°58'29.562"W is 58.4927 minutes."""
        assert_allclose(dms_to_minutes(DMS(0, 58, 29.562, "W")), 58.4927, rtol=1e-12)

    @pytest.mark.parametrize("positive,negative", [("N", "S"), ("W", "E")])
    def test_sign_convention(self, positive, negative):
        """N and W are positive, S and E negative, with equal magnitude."""
        plus = dms_to_minutes(DMS(12, 34, 56.789, positive))
        minus = dms_to_minutes(DMS(12, 34, 56.789, negative))

        assert plus >= 0
        assert minus <= 0
        assert plus == -minus

    def test_zero(self):
        assert dms_to_minutes(DMS(0, 0, 0.0, "E")) == 0.0
