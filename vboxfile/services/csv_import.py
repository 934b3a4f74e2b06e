"""
CSV to VBOX importer.

Reads CSV exports from TrackAddict/RaceRender, RaceChrono or plain CSV
files with recognizable column names, and builds a VboxDocument with one
channel per usable column.
"""

import io
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from vboxfile.models.channel import Channel, ChannelName, ChannelUnit
from vboxfile.models.document import VboxDocument
from vboxfile.models.values import (
    ChannelValue,
    Coordinates,
    Heading,
    Height,
    Satellites,
    Time,
    Velocity,
)
from vboxfile.utils.coordinates import DMS


logger = logging.getLogger(__name__)

MPH_TO_KMH = 1.609344
MS_TO_KMH = 3.6
SECONDS_PER_DAY = 86400

# Numeric time column thresholds
EPOCH_MS_MIN = 1.0e11
EPOCH_S_MIN = 1.0e9
ELAPSED_MS_MIN = 1.0e5
# Elapsed-time logs start at (or very near) zero
ELAPSED_START_MAX = 1.0

# Column name mappings - loggers use various naming conventions
COLUMN_MAPPINGS = {
    "time": ["Time", "time", "TIME", "GPS Time", "gps_time", "Timestamp", "timestamp", "UTC Time"],
    "satellites": ["Satellites", "satellites", "Sats", "sats", "GPS Sats", "num_sats", "satellites_used"],
    "latitude": ["Latitude", "latitude", "LATITUDE", "Lat", "lat", "LAT"],
    "longitude": ["Longitude", "longitude", "LONGITUDE", "Lon", "lon", "LON", "Long", "long"],
    "altitude": ["Altitude", "altitude", "ALTITUDE", "Alt", "alt", "Elevation", "elevation", "Height", "height"],
    "speed_mph": ["MPH", "mph", "Speed (MPH)", "speed_mph"],
    "speed_kph": ["KPH", "kph", "Speed (KPH)", "speed_kph", "Speed (km/h)", "velocity", "Velocity"],
    "speed_ms": ["Speed (m/s)", "speed_ms", "Speed", "speed"],
    "heading": ["Heading", "heading", "HEADING", "Bearing", "bearing"],
}


class CsvImporter:
    """Builds VBOX documents from telemetry CSV files."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def import_file(self, filepath: Path, comment: Optional[str] = None) -> VboxDocument:
        filepath = Path(filepath)
        df = self._read_csv(filepath)
        if df.empty:
            raise ValueError(f"No data rows in CSV: {filepath}")
        col_map = self._map_columns(df.columns.tolist())

        if col_map["latitude"] is None or col_map["longitude"] is None:
            raise ValueError(f"No latitude/longitude columns found in CSV: {filepath}")

        n_samples = len(df)
        recorded_at = self._extract_datetime(filepath)
        seconds_of_day, epoch_start = self._parse_time_column(df, col_map, recorded_at)
        if epoch_start is not None:
            recorded_at = epoch_start

        lat = self._extract_column(df, col_map, "latitude", n_samples)
        lon = self._extract_column(df, col_map, "longitude", n_samples)

        # (channel, values, factory) in VBOX column order
        columns: list[tuple[Channel, NDArray[np.float64], Callable[[float], ChannelValue]]] = []

        sats = self._extract_column(df, col_map, "satellites", n_samples)
        if not np.all(np.isnan(sats)):
            sats = np.where((sats >= 0) & (sats <= 255), np.floor(sats), np.nan)
            columns.append((Channel(ChannelName.SATELLITES), sats, lambda v: Satellites(int(v))))

        columns.append((Channel(ChannelName.TIME), seconds_of_day, Time.from_seconds))
        columns.append((
            Channel(ChannelName.LATITUDE),
            np.where(np.abs(lat) <= 90.0, lat, np.nan),
            lambda v: Coordinates(DMS.from_decimal_degrees(v, "latitude")),
        ))
        columns.append((
            Channel(ChannelName.LONGITUDE),
            np.where(np.abs(lon) <= 180.0, lon, np.nan),
            lambda v: Coordinates(DMS.from_decimal_degrees(v, "longitude")),
        ))

        speed = self._extract_speed_kmh(df, col_map, n_samples)
        if not np.all(np.isnan(speed)):
            columns.append((Channel(ChannelName.VELOCITY, ChannelUnit.KMH), speed, Velocity))

        heading = self._extract_column(df, col_map, "heading", n_samples)
        if not np.all(np.isnan(heading)):
            columns.append((Channel(ChannelName.HEADING), np.mod(heading, 360.0), Heading))

        altitude = self._extract_column(df, col_map, "altitude", n_samples)
        if not np.all(np.isnan(altitude)):
            columns.append((Channel(ChannelName.HEIGHT), altitude, Height))

        valid = np.ones(n_samples, dtype=np.bool_)
        for _, values, _ in columns:
            valid &= ~np.isnan(values)

        dropped = int(n_samples - np.count_nonzero(valid))
        if dropped:
            logger.warning(f"Dropped {dropped} of {n_samples} rows with missing values from {filepath.name}")

        document = VboxDocument(strict=self.strict)
        if recorded_at is not None:
            document.set_creation_time(recorded_at)
        if comment is not None:
            document.set_comment(comment)
        for channel, _, _ in columns:
            document.add_channel(channel)

        rows = (
            [factory(float(values[i])) for _, values, factory in columns]
            for i in np.flatnonzero(valid)
        )
        count = document.extend_samples(rows)
        logger.info(f"Imported {count} samples, {len(columns)} channels from {filepath.name}")
        return document

    def _read_csv(self, filepath: Path) -> pd.DataFrame:
        # Read the whole file once so we can detect non-standard headers
        with open(filepath, "r", encoding="utf-8-sig") as f:
            lines = f.read().splitlines()

        if not lines:
            return pd.DataFrame()

        # RaceRender export: header lines are comments starting with '#'
        if lines[0].strip().startswith("#"):
            skip_rows = 0
            for i, line in enumerate(lines):
                if not line.strip().startswith("#"):
                    skip_rows = i
                    break
            df = pd.read_csv(io.StringIO("\n".join(lines[skip_rows:])))
            df.columns = df.columns.str.strip()
            return df

        # RaceChrono export: metadata block followed by a header row beginning with 'timestamp'
        header_idx = self._find_header_line(lines)
        if header_idx is not None and header_idx > 0:
            data_start = self._find_data_start(lines, header_idx)
            cleaned = "\n".join([lines[header_idx]] + lines[data_start:])
            df = pd.read_csv(io.StringIO(cleaned))
            df.columns = df.columns.str.strip()
            return df

        df = pd.read_csv(io.StringIO("\n".join(lines)))
        df.columns = df.columns.str.strip()
        return df

    def _find_header_line(self, lines: list[str]) -> Optional[int]:
        """Locate the line index that contains the actual CSV header."""
        header_candidates = {"timestamp", "time", "gps time", "gps_time", "gpstime", "utc time"}
        for i, line in enumerate(lines):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            first_cell = stripped.split(",")[0].strip().lower()
            if first_cell in header_candidates:
                return i
        return None

    def _find_data_start(self, lines: list[str], header_idx: int) -> int:
        """Find the first line after header that looks like numeric data."""
        numeric = re.compile(r"^-?\d+(?:\.\d+)?$")
        for i in range(header_idx + 1, len(lines)):
            first_cell = lines[i].split(",")[0].strip()
            if first_cell and numeric.match(first_cell):
                return i
        return header_idx + 1

    def _map_columns(self, columns: list[str]) -> dict[str, Optional[str]]:
        col_map: dict[str, Optional[str]] = {}
        for std_name, variants in COLUMN_MAPPINGS.items():
            col_map[std_name] = None
            for variant in variants:
                if variant in columns:
                    col_map[std_name] = variant
                    break
        return col_map

    def _parse_time_column(
        self,
        df: pd.DataFrame,
        col_map: dict[str, Optional[str]],
        recorded_at: Optional[datetime],
    ) -> tuple[NDArray[np.float64], Optional[datetime]]:
        """
        Convert the time column to seconds since midnight (UTC).

        Numeric columns are read as epoch milliseconds (> 1e11), epoch
        seconds (> 1e9), elapsed milliseconds (> 1e5), or seconds. Seconds
        starting near zero, or running past one day, are elapsed time and
        are anchored to the time of day in the file name when there is one;
        any other seconds are already seconds since midnight.

        Returns the seconds and, for epoch timestamps, the UTC datetime of
        the first sample.
        """
        time_col = col_map.get("time")
        if time_col is None or time_col not in df.columns:
            raise ValueError("No time column found in CSV")

        times = df[time_col].values
        if isinstance(times[0], str) and ":" in times[0]:
            parsed = []
            for t in times:
                parts = str(t).split(":")
                try:
                    if len(parts) == 3:
                        h, m, s = float(parts[0]), float(parts[1]), float(parts[2])
                        parsed.append(h * 3600 + m * 60 + s)
                    elif len(parts) == 2:
                        m, s = float(parts[0]), float(parts[1])
                        parsed.append(m * 60 + s)
                    else:
                        parsed.append(float(t))
                except ValueError:
                    parsed.append(np.nan)
            return np.array(parsed, dtype=np.float64), None

        times = pd.to_numeric(df[time_col], errors="coerce").values.astype(np.float64)
        if time_col.lower().replace(" ", "") in ("gpstime", "gps_time"):
            times = times / 1000.0

        valid = times[~np.isnan(times)]
        if len(valid) == 0:
            return times, None

        max_val = float(np.max(valid))
        if max_val > EPOCH_MS_MIN:
            times = times / 1000.0  # epoch ms -> s
            valid = valid / 1000.0
            max_val /= 1000.0

        if max_val > EPOCH_S_MIN:
            start = datetime.fromtimestamp(float(valid[0]), tz=timezone.utc)
            return np.mod(times, SECONDS_PER_DAY), start

        if max_val > ELAPSED_MS_MIN:
            times = times / 1000.0  # elapsed ms -> s
            valid = valid / 1000.0
            max_val /= 1000.0

        if valid[0] >= ELAPSED_START_MAX and max_val < SECONDS_PER_DAY:
            return times, None

        # Elapsed seconds: anchor to the recording time of day when known
        offset = 0.0
        if recorded_at is not None:
            offset = recorded_at.hour * 3600 + recorded_at.minute * 60 + recorded_at.second
        return np.mod(times - valid[0] + offset, SECONDS_PER_DAY), None

    def _extract_speed_kmh(
        self,
        df: pd.DataFrame,
        col_map: dict[str, Optional[str]],
        n_samples: int,
    ) -> NDArray[np.float64]:
        for speed_type, factor in [
            ("speed_ms", MS_TO_KMH),
            ("speed_mph", MPH_TO_KMH),
            ("speed_kph", 1.0),
        ]:
            speed = self._extract_column(df, col_map, speed_type, n_samples)
            if not np.all(np.isnan(speed)):
                return speed * factor
        return np.full(n_samples, np.nan, dtype=np.float64)

    def _extract_column(
        self,
        df: pd.DataFrame,
        col_map: dict[str, Optional[str]],
        std_name: str,
        n_samples: int,
    ) -> NDArray[np.float64]:
        col = col_map.get(std_name)
        if col is None or col not in df.columns:
            return np.full(n_samples, np.nan, dtype=np.float64)
        return pd.to_numeric(df[col], errors="coerce").values.astype(np.float64)

    def _extract_datetime(self, filepath: Path) -> Optional[datetime]:
        patterns = [
            r"(\d{4})-(\d{2})-(\d{2})_(\d{2})(\d{2})(\d{2})",
            r"(\d{4})(\d{2})(\d{2})_(\d{2})(\d{2})(\d{2})",
            r"(\d{4})-(\d{2})-(\d{2})",
            r"(\d{4})(\d{2})(\d{2})",
        ]
        for pattern in patterns:
            match = re.search(pattern, filepath.stem)
            if match:
                parts = [int(g) for g in match.groups()]
                try:
                    return datetime(*parts)
                except ValueError:
                    pass
        return None


def import_csv(filepath: Path, comment: Optional[str] = None, strict: bool = False) -> VboxDocument:
    """
    Import a telemetry CSV into a VboxDocument.
    """
    return CsvImporter(strict=strict).import_file(Path(filepath), comment=comment)
