"""
Tests for the CSV to VBOX importer.
"""

from datetime import datetime, timezone

import pytest

from vboxfile.models.channel import Channel, ChannelName, ChannelUnit
from vboxfile.models.values import Satellites, Time
from vboxfile.services.csv_import import CsvImporter, import_csv
from vboxfile.services.writer import render_document


@pytest.fixture
def sample_csv_content():
    """Standard RaceRender format CSV content."""
    return """# RaceRender Data
Time,Latitude,Longitude,Altitude,MPH,Heading,X,Y,GPS_Update,Accuracy
0.000,32.9857000,-89.7898000,10.0,0.0,0.0,0.000,0.000,1,3.0
0.100,32.9857100,-89.7897900,10.0,15.5,45.0,0.100,0.050,1,3.0
0.200,32.9857200,-89.7897800,10.0,25.3,48.0,0.150,0.080,1,3.0
0.300,32.9857300,-89.7897700,10.0,30.1,50.0,0.180,0.100,1,3.0
0.400,32.9857400,-89.7897600,10.0,32.5,52.0,0.200,0.110,1,3.0
"""


@pytest.fixture
def sample_csv_file(sample_csv_content, tmp_path):
    """Create a temporary CSV file."""
    csv_file = tmp_path / "test_run.csv"
    csv_file.write_text(sample_csv_content)
    return csv_file


@pytest.fixture
def epoch_csv_file(tmp_path):
    """CSV with epoch milliseconds, satellites and km/h speed."""
    csv_file = tmp_path / "epoch_run.csv"
    csv_file.write_text("""Timestamp,Sats,Lat,Lon,KPH
1641469669000,9,51.985,-0.9748783,58.493
1641469669100,137,51.9851,-0.9748,58.6
""")
    return csv_file


class TestCsvImporter:
    """Tests for CsvImporter."""

    def test_racerender_channels(self, sample_csv_file):
        """Channels follow VBOX order for the columns present."""
        doc = CsvImporter().import_file(sample_csv_file)

        assert doc.channels == (
            Channel(ChannelName.TIME),
            Channel(ChannelName.LATITUDE),
            Channel(ChannelName.LONGITUDE),
            Channel(ChannelName.VELOCITY, ChannelUnit.KMH),
            Channel(ChannelName.HEADING),
            Channel(ChannelName.HEIGHT),
        )
        assert len(doc.samples) == 5

    def test_racerender_first_row(self, sample_csv_file):
        """Elapsed time from zero, West longitude positive, height signed."""
        doc = import_csv(sample_csv_file)

        first = [v.render() for v in doc.samples[0]]

        assert first == [
            "000000.00",
            "+01979.142000",
            "+05387.388000",
            "000.000",
            "000.00",
            "+0010.00",
        ]

    def test_speed_converted_to_kmh(self, sample_csv_file):
        """15.5 mph is 24.945 km/h."""
        doc = import_csv(sample_csv_file)

        assert doc.samples[1][3].render() == "024.945"

    def test_elapsed_time_steps(self, sample_csv_file):
        doc = import_csv(sample_csv_file)

        assert [row[0].render() for row in doc.samples] == [
            "000000.00", "000000.10", "000000.20", "000000.30", "000000.40",
        ]

    def test_no_creation_time_without_date(self, sample_csv_file):
        assert import_csv(sample_csv_file).creation_time is None

    def test_epoch_time(self, epoch_csv_file):
        """Epoch milliseconds give UTC time of day and the creation time."""
        doc = import_csv(epoch_csv_file)

        assert doc.creation_time == datetime(2022, 1, 6, 11, 47, 49, tzinfo=timezone.utc)
        assert [row[1].render() for row in doc.samples] == ["114749.00", "114749.10"]

    def test_satellites_column(self, epoch_csv_file):
        doc = import_csv(epoch_csv_file)

        assert doc.channels[0] == Channel(ChannelName.SATELLITES)
        assert doc.samples[1][0] == Satellites(137)
        assert doc.samples[0][0].render() == "009"

    def test_kph_kept(self, epoch_csv_file):
        doc = import_csv(epoch_csv_file)

        assert doc.samples[0][4].render() == "058.493"

    def test_date_from_filename(self, tmp_path):
        """Elapsed times are anchored to the time in the file name."""
        csv_file = tmp_path / "session_2023-05-04_101500.csv"
        csv_file.write_text("Time,Latitude,Longitude\n0.0,10.0,20.0\n1.5,10.0,20.0\n")

        doc = import_csv(csv_file)

        assert doc.creation_time == datetime(2023, 5, 4, 10, 15, 0)
        assert [row[0] for row in doc.samples] == [
            Time.from_seconds(36900.0),
            Time.from_seconds(36901.5),
        ]

    def test_clock_time_strings(self, tmp_path):
        csv_file = tmp_path / "clock.csv"
        csv_file.write_text("Time,Latitude,Longitude\n17:05:38.19,10.0,20.0\n17:05:38.29,10.0,20.0\n")

        doc = import_csv(csv_file)

        assert [row[0].render() for row in doc.samples] == ["170538.19", "170538.29"]

    def test_seconds_since_midnight(self, tmp_path):
        """Numeric times away from zero are already a time of day."""
        csv_file = tmp_path / "vbox_export.csv"
        csv_file.write_text("Time,Latitude,Longitude\n61538.19,10.0,20.0\n61538.29,10.0,20.0\n")

        doc = import_csv(csv_file)

        assert [row[0].render() for row in doc.samples] == ["170538.19", "170538.29"]
        assert doc.creation_time is None

    def test_elapsed_milliseconds(self, tmp_path):
        """Elapsed milliseconds are not mistaken for epoch seconds."""
        csv_file = tmp_path / "elapsed_ms.csv"
        csv_file.write_text("Time,Latitude,Longitude\n0,10.0,20.0\n150000,10.0,20.0\n20000000,10.0,20.0\n")

        doc = import_csv(csv_file)

        assert doc.creation_time is None
        assert [row[0].render() for row in doc.samples] == ["000000.00", "000230.00", "053320.00"]

    def test_rows_with_missing_values_dropped(self, tmp_path):
        csv_file = tmp_path / "gaps.csv"
        csv_file.write_text(
            "Time,Latitude,Longitude,Altitude\n"
            "0.0,10.0,20.0,5.0\n"
            "0.1,,20.0,5.0\n"
            "0.2,10.0,20.0,\n"
            "0.3,10.0,20.0,5.0\n"
        )

        doc = import_csv(csv_file)

        assert len(doc.samples) == 2

    def test_comment_passed_through(self, sample_csv_file):
        doc = import_csv(sample_csv_file, comment="Autocross\nRun 1")

        assert "[comments]\nAutocross\nRun 1\n" in render_document(doc)

    def test_missing_coordinates(self, tmp_path):
        csv_file = tmp_path / "no_gps.csv"
        csv_file.write_text("Time,MPH\n0.0,10.0\n")

        with pytest.raises(ValueError):
            import_csv(csv_file)

    def test_missing_time(self, tmp_path):
        csv_file = tmp_path / "no_time.csv"
        csv_file.write_text("Latitude,Longitude\n10.0,20.0\n")

        with pytest.raises(ValueError):
            import_csv(csv_file)

    def test_empty_file(self, tmp_path):
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")

        with pytest.raises(ValueError):
            import_csv(csv_file)

    def test_racechrono_preamble(self, tmp_path):
        """Metadata lines before the header row are skipped."""
        csv_file = tmp_path / "racechrono.csv"
        csv_file.write_text(
            "This file is created using RaceChrono\n"
            "Session title,Test\n"
            "\n"
            "timestamp,latitude,longitude,speed\n"
            "unix time,deg,deg,m/s\n"
            "1641469669.0,51.0,-1.0,10.0\n"
            "1641469670.0,51.0,-1.0,20.0\n"
        )

        doc = import_csv(csv_file)

        assert len(doc.samples) == 2
        # 10 m/s is 36 km/h
        assert doc.samples[0][3].render() == "036.000"
