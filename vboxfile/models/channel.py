"""
Channel identity for VBOX files.

Known channel names and units are enums whose values are the exact strings
used in the file. Anything else is carried verbatim by the Custom* fallbacks,
so parsing never fails and rendering always returns the original text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ChannelName(Enum):
    """Channel names with a fixed meaning in VBOX files."""

    SATELLITES = "satellites"
    TIME = "time"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    VELOCITY = "velocity"
    HEADING = "heading"
    HEIGHT = "height"
    LONG_ACCEL = "long accel"
    LAT_ACCEL = "lat accel"

    def __str__(self) -> str:
        return self.value


class ChannelUnit(Enum):
    """Units with a fixed meaning in VBOX files."""

    KMH = "kmh"
    G = "g"

    def __str__(self) -> str:
        return self.value


_KNOWN_NAMES = {member.value: member for member in ChannelName}
_KNOWN_UNITS = {member.value: member for member in ChannelUnit}


@dataclass(frozen=True)
class CustomChannelName:
    """Device specific channel name, e.g. "lean_angle"."""

    value: str

    def __post_init__(self):
        if self.value in _KNOWN_NAMES:
            raise ValueError(
                f"'{self.value}' is a known channel name, use {_KNOWN_NAMES[self.value]}"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CustomChannelUnit:
    """Unit not covered by ChannelUnit, e.g. "ms2"."""

    value: str

    def __post_init__(self):
        if self.value in _KNOWN_UNITS:
            raise ValueError(
                f"'{self.value}' is a known channel unit, use {_KNOWN_UNITS[self.value]}"
            )

    def __str__(self) -> str:
        return self.value


AnyChannelName = Union[ChannelName, CustomChannelName]
AnyChannelUnit = Union[ChannelUnit, CustomChannelUnit]


def parse_channel_name(text: str) -> AnyChannelName:
    """Map text to a ChannelName, falling back to CustomChannelName."""
    known = _KNOWN_NAMES.get(text)
    if known is not None:
        return known
    return CustomChannelName(text)


def parse_channel_unit(text: str) -> AnyChannelUnit:
    """Map text to a ChannelUnit, falling back to CustomChannelUnit."""
    known = _KNOWN_UNITS.get(text)
    if known is not None:
        return known
    return CustomChannelUnit(text)


def render_channel_name(name: AnyChannelName) -> str:
    return name.value


def render_channel_unit(unit: AnyChannelUnit) -> str:
    return unit.value


@dataclass(frozen=True)
class Channel:
    """
    A named column of the data section with an optional unit.

    Two channels with the same name cannot live in one document; the unit
    plays no part in that check.
    """

    name: AnyChannelName
    unit: Optional[AnyChannelUnit] = None

    @classmethod
    def of(cls, name: str, unit: Optional[str] = None) -> "Channel":
        """Build a channel from its textual name and unit."""
        return cls(
            name=parse_channel_name(name),
            unit=parse_channel_unit(unit) if unit is not None else None,
        )

    def __str__(self) -> str:
        if self.unit is None:
            return render_channel_name(self.name)
        return f"{render_channel_name(self.name)} {render_channel_unit(self.unit)}"
