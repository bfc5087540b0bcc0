"""
Tests for CSV readers.
"""

import sys
from pathlib import Path

import pytest
import requests
import responses

sys.path.insert(0, str(Path(__file__).parent.parent))

from flare.loading.readers import (
    is_remote,
    load_table,
    read_airports,
    read_flights,
    read_walks,
)

AIRPORTS_CSV = """iata,name,city,state,latitude,longitude,color,cluster,hub
ATL,Hartsfield,Atlanta,GA,33.64,-84.43,#e41a1c,east,yes
ORD,O'Hare,Chicago,IL,41.98,-87.90,#377eb8,central,yes
XYZ,,,,10,20,,,no
"""

FLIGHTS_CSV = """origin,destination,count
ATL,ORD,120
ORD,ATL,95.0
"""

WALKS_CSV = """0,1,2,3
ATL_1,ATL_2,ORD_3,
,ORD_2,ORD_3,ATL_4
,,,
"""


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


class TestLoadTable:
    """Tests for raw table loading."""

    def test_is_remote(self):
        """Test URL detection."""
        assert is_remote("https://example.com/airports.csv")
        assert is_remote("HTTP://example.com/a.csv")
        assert not is_remote("data/airports.csv")

    def test_missing_file(self, tmp_path):
        """Test that a missing local file fails clearly."""
        with pytest.raises(FileNotFoundError, match="Data file not found"):
            load_table(str(tmp_path / "nope.csv"))

    def test_cells_stay_strings(self, tmp_path):
        """Test empty cells are kept as empty strings."""
        table = load_table(write(tmp_path, "walks.csv", WALKS_CSV))
        assert list(table.columns) == ["0", "1", "2", "3"]
        assert table.iloc[1]["0"] == ""
        assert table.iloc[0]["0"] == "ATL_1"

    @responses.activate
    def test_remote_source(self):
        """Test loading over http."""
        url = "https://example.com/flights.csv"
        responses.add(responses.GET, url, body=FLIGHTS_CSV, status=200)

        flights = read_flights(url)

        assert len(flights) == 2
        assert flights[0].origin == "ATL"
        assert len(responses.calls) == 1

    @responses.activate
    def test_remote_error(self):
        """Test that HTTP errors propagate."""
        url = "https://example.com/missing.csv"
        responses.add(responses.GET, url, status=404)

        with pytest.raises(requests.HTTPError):
            load_table(url)


class TestReadAirports:
    """Tests for airport parsing."""

    def test_fields(self, tmp_path):
        """Test parsed airport fields."""
        airports = read_airports(write(tmp_path, "airports.csv", AIRPORTS_CSV))

        assert [a.iata for a in airports] == ["ATL", "ORD", "XYZ"]
        atl = airports[0]
        assert atl.latitude == pytest.approx(33.64)
        assert atl.longitude == pytest.approx(-84.43)
        assert atl.color == "#e41a1c"
        assert atl.cluster == "east"
        assert atl.label == "Hartsfield in Atlanta, GA"
        assert atl.extra == {"hub": "yes"}

    def test_layout_coordinates(self, tmp_path):
        """Test x is latitude and y is longitude."""
        airports = read_airports(write(tmp_path, "airports.csv", AIRPORTS_CSV))
        ord_ = airports[1]
        assert ord_.x == ord_.latitude
        assert ord_.y == ord_.longitude

    def test_degrees_start_at_zero(self, tmp_path):
        """Test counters are initialized."""
        airports = read_airports(write(tmp_path, "airports.csv", AIRPORTS_CSV))
        for airport in airports:
            assert airport.outgoing == 0
            assert airport.incoming == 0
            assert airport.flights == []
            assert not airport.is_fixed

    def test_empty_optional_fields(self, tmp_path):
        """Test empty optional cells become None."""
        xyz = read_airports(write(tmp_path, "airports.csv", AIRPORTS_CSV))[2]
        assert xyz.color is None
        assert xyz.name is None
        assert xyz.label == "XYZ"

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
    def test_non_finite_coordinate(self, tmp_path, value):
        """Test non-finite coordinates are rejected with their row."""
        path = write(
            tmp_path,
            "airports.csv",
            f"iata,latitude,longitude\nATL,33.6,-84.4\nORD,{value},-87.9\n",
        )
        with pytest.raises(ValueError, match="Row 2: invalid latitude"):
            read_airports(path)

    def test_missing_column(self, tmp_path):
        """Test a table without coordinates."""
        path = write(tmp_path, "airports.csv", "iata,latitude\nATL,33.6\n")
        with pytest.raises(ValueError, match="longitude"):
            read_airports(path)

    def test_bad_coordinate(self, tmp_path):
        """Test a non-numeric coordinate."""
        path = write(
            tmp_path, "airports.csv", "iata,latitude,longitude\nATL,north,-84\n"
        )
        with pytest.raises(ValueError, match="Row 1"):
            read_airports(path)


class TestReadFlights:
    """Tests for flight parsing."""

    def test_fields(self, tmp_path):
        """Test parsed flight fields."""
        flights = read_flights(write(tmp_path, "flights.csv", FLIGHTS_CSV))

        assert len(flights) == 2
        assert flights[0].origin == "ATL"
        assert flights[0].destination == "ORD"
        assert flights[0].count == 120
        assert flights[1].count == 95
        assert not flights[0].is_resolved

    def test_bad_count(self, tmp_path):
        """Test a non-numeric count."""
        path = write(tmp_path, "flights.csv", "origin,destination,count\nA,B,lots\n")
        with pytest.raises(ValueError, match="count"):
            read_flights(path)


class TestReadWalks:
    """Tests for walk parsing."""

    def test_steps(self, tmp_path):
        """Test slots beyond the file are empty."""
        walks = read_walks(write(tmp_path, "walks.csv", WALKS_CSV), max_time=6)

        assert len(walks) == 3
        assert walks[0].steps == ["ATL_1", "ATL_2", "ORD_3", "", "", ""]

    def test_length_and_start(self, tmp_path):
        """Test derived walk length and first occupied slot."""
        walks = read_walks(write(tmp_path, "walks.csv", WALKS_CSV), max_time=4)

        assert walks[0].length == 3
        assert walks[0].start == 0
        assert walks[1].length == 3
        assert walks[1].start == 1
        assert walks[1].stops == ["ORD_2", "ORD_3", "ATL_4"]

    def test_empty_walk(self, tmp_path):
        """Test a row without stops."""
        walk = read_walks(write(tmp_path, "walks.csv", WALKS_CSV), max_time=4)[2]
        assert walk.length == 0
        assert walk.start is None
        assert walk.stops == []

    def test_max_time_truncates(self, tmp_path):
        """Test only the first max_time slots are read."""
        walks = read_walks(write(tmp_path, "walks.csv", WALKS_CSV), max_time=2)
        assert walks[1].steps == ["", "ORD_2"]
        assert walks[1].length == 1
