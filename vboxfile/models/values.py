"""
Typed channel values and their fixed-width VBOX renderings.

Each value kind knows how to format itself for the [data] section. Values
carry no reference to the channel they belong to; lining a row up with the
document's channels is up to the caller.
"""

import math
from dataclasses import dataclass
from datetime import time as time_of_day

from vboxfile.errors import TimeFormatError
from vboxfile.utils.coordinates import DMS, dms_to_minutes


# HHMMSS.ss, hundredths truncated. Field 0 is the time, field 1 the hundredths.
TIME_OF_DAY_PATTERN = "{0.hour:02d}{0.minute:02d}{0.second:02d}.{1:02d}"

SATELLITES_DGPS = 128
SATELLITES_BRAKE_TRIGGER = 64

SECONDS_PER_DAY = 86400


def _format_time_of_day(value) -> str:
    try:
        return TIME_OF_DAY_PATTERN.format(value, value.microsecond // 10000)
    except (AttributeError, TypeError, ValueError) as e:
        raise TimeFormatError(value, e) from e


def _check_time_pattern() -> None:
    sentinel = time_of_day(17, 5, 38, 190000)
    try:
        rendered = _format_time_of_day(sentinel)
    except TimeFormatError as e:
        raise RuntimeError(f"Invalid time-of-day pattern: {TIME_OF_DAY_PATTERN}") from e
    if rendered != "170538.19":
        raise RuntimeError(f"Invalid time-of-day pattern: {TIME_OF_DAY_PATTERN}")


_check_time_pattern()


def _finite_float(value, kind: str) -> float:
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{kind} must be finite: {value}")
    return result


class ChannelValue:
    """Base class for a single cell of the [data] section."""

    __slots__ = ()

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class Satellites(ChannelValue):
    """
    Number of satellites in use.

    64 is added when the brake trigger input is active and 128 when the
    logger uses a DGPS correction, e.g. 137 = 128 (DGPS) + 9 satellites.
    """

    count: int

    def __post_init__(self):
        if isinstance(self.count, bool) or int(self.count) != self.count:
            raise ValueError(f"Satellites must be an integer: {self.count}")
        if not 0 <= self.count <= 255:
            raise ValueError(f"Satellites must be in [0, 255]: {self.count}")
        object.__setattr__(self, "count", int(self.count))

    @classmethod
    def encode(cls, in_use: int, brake_trigger: bool = False, dgps: bool = False) -> "Satellites":
        if not 0 <= in_use < SATELLITES_BRAKE_TRIGGER:
            raise ValueError(f"Satellites in use must be in [0, 63]: {in_use}")
        count = in_use
        if brake_trigger:
            count += SATELLITES_BRAKE_TRIGGER
        if dgps:
            count += SATELLITES_DGPS
        return cls(count)

    @property
    def in_use(self) -> int:
        return self.count & (SATELLITES_BRAKE_TRIGGER - 1)

    @property
    def brake_trigger(self) -> bool:
        return bool(self.count & SATELLITES_BRAKE_TRIGGER)

    @property
    def dgps(self) -> bool:
        return bool(self.count & SATELLITES_DGPS)

    def render(self) -> str:
        return f"{self.count:03d}"


@dataclass(frozen=True)
class Time(ChannelValue):
    """UTC time since midnight, rendered as HHMMSS.ss."""

    value: time_of_day

    @classmethod
    def from_seconds(cls, seconds: float) -> "Time":
        """Build from seconds since midnight (wrapped to one day)."""
        seconds = _finite_float(seconds, "Time") % SECONDS_PER_DAY
        micros = int(round(seconds * 1_000_000))
        # Rounding can land exactly on midnight
        micros %= SECONDS_PER_DAY * 1_000_000
        whole, micro = divmod(micros, 1_000_000)
        hour, rest = divmod(whole, 3600)
        minute, second = divmod(rest, 60)
        return cls(time_of_day(hour, minute, second, micro))

    def render(self) -> str:
        return _format_time_of_day(self.value)


@dataclass(frozen=True)
class Coordinates(ChannelValue):
    """
    Latitude or longitude in signed decimal minutes.

    Latitude: +ve = North, e.g. 03119.09973 = 51D 59M 5.9838S
    Longitude: +ve = West, e.g. 00058.49277 = 00D 58M 29.562S
    """

    dms: DMS

    @property
    def minutes(self) -> float:
        return dms_to_minutes(self.dms)

    def render(self) -> str:
        return f"{self.minutes:+013.6f}"


@dataclass(frozen=True)
class Velocity(ChannelValue):
    """Velocity in km/h, e.g. 010.184"""

    kmh: float

    def __post_init__(self):
        object.__setattr__(self, "kmh", _finite_float(self.kmh, "Velocity"))

    def render(self) -> str:
        return f"{self.kmh:07.3f}"


@dataclass(frozen=True)
class Heading(ChannelValue):
    """Heading in degrees from North, e.g. 213.90"""

    degrees: float

    def __post_init__(self):
        object.__setattr__(self, "degrees", _finite_float(self.degrees, "Heading"))

    def render(self) -> str:
        return f"{self.degrees:06.2f}"


@dataclass(frozen=True)
class Height(ChannelValue):
    """Height above sea level in meters (WGS84), e.g. +00091.70"""

    meters: float

    def __post_init__(self):
        object.__setattr__(self, "meters", _finite_float(self.meters, "Height"))

    def render(self) -> str:
        return f"{self.meters:+08.2f}"
