"""
Geographic coordinate utilities.

VBOX files store latitude and longitude as signed decimal minutes, positive
for North and West. Positions are held as degrees/minutes/seconds with a
hemisphere bearing (DMS) and converted on output.
"""

import math
from dataclasses import dataclass

BEARINGS = ("N", "S", "E", "W")
AXES = ("latitude", "longitude")

# Maximum degrees per bearing
_LIMITS = {"N": 90.0, "S": 90.0, "E": 180.0, "W": 180.0}


def _check_axis(axis: str) -> None:
    if axis not in AXES:
        raise ValueError(f"Unknown axis '{axis}', expected one of {AXES}")


@dataclass(frozen=True)
class DMS:
    """A latitude or longitude as degrees, minutes, seconds and bearing."""

    degrees: int
    minutes: int
    seconds: float
    bearing: str

    def __post_init__(self):
        if self.bearing not in BEARINGS:
            raise ValueError(f"Invalid bearing '{self.bearing}', expected one of {BEARINGS}")
        if int(self.degrees) != self.degrees or self.degrees < 0:
            raise ValueError(f"Degrees must be a non-negative integer: {self.degrees}")
        if int(self.minutes) != self.minutes or not 0 <= self.minutes < 60:
            raise ValueError(f"Minutes must be an integer in [0, 60): {self.minutes}")
        if not math.isfinite(self.seconds) or not 0.0 <= self.seconds < 60.0:
            raise ValueError(f"Seconds must be in [0, 60): {self.seconds}")

        object.__setattr__(self, "degrees", int(self.degrees))
        object.__setattr__(self, "minutes", int(self.minutes))
        object.__setattr__(self, "seconds", float(self.seconds))

        limit = _LIMITS[self.bearing]
        if abs(self.to_decimal_degrees()) > limit:
            raise ValueError(f"{self} exceeds {limit} degrees")

    @classmethod
    def from_decimal_degrees(cls, value: float, axis: str) -> "DMS":
        """
        Build a DMS from signed decimal degrees.

        Args:
            value: Decimal degrees (WGS84), negative for South / West
            axis: "latitude" or "longitude"
        """
        _check_axis(axis)
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be finite: {value}")

        if axis == "latitude":
            bearing = "N" if value >= 0 else "S"
        else:
            bearing = "E" if value >= 0 else "W"

        magnitude = abs(value)
        degrees = int(magnitude)
        remainder = (magnitude - degrees) * 60.0
        minutes = int(remainder)
        seconds = (remainder - minutes) * 60.0

        # Float noise can round up to a full minute
        if seconds >= 60.0:
            seconds -= 60.0
            minutes += 1
        if minutes >= 60:
            minutes -= 60
            degrees += 1

        return cls(degrees, minutes, max(seconds, 0.0), bearing)

    def to_decimal_degrees(self) -> float:
        """Signed decimal degrees, negative for South / West."""
        magnitude = self.degrees + self.minutes / 60.0 + self.seconds / 3600.0
        return -magnitude if self.bearing in ("S", "W") else magnitude

    def __str__(self) -> str:
        return f"{self.degrees}°{self.minutes}'{self.seconds}\"{self.bearing}"


def dms_to_minutes(dms: DMS) -> float:
    """
    Convert a DMS into the minutes-only representation used by VBOX.

    The result is positive for bearing N or W and negative for S or E.
    e.g. 51°59'5.9838"N -> 3119.09973
    """
    deg = dms.degrees * 60.0
    minutes = float(dms.minutes)
    sec = dms.seconds / 60.0
    nw_multiplier = 1.0 if dms.bearing in ("N", "W") else -1.0

    return (deg + minutes + sec) * nw_multiplier

