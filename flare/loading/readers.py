"""
CSV Readers
Parse airport, flight and walk tables into typed records.

Sources may be local paths or http(s) URLs.
"""

import io
import math
import os
from typing import List, Sequence

import pandas as pd
import requests

from flare.config import Settings
from .constants import (
    AIRPORT_COLUMNS,
    AIRPORT_OPTIONAL_COLUMNS,
    FLIGHT_COLUMNS,
    HTTP_TIMEOUT_SECONDS,
    REMOTE_PREFIXES,
)
from .records import Airport, Flight, Walk


def is_remote(source: str) -> bool:
    """Check whether a data source is an http(s) URL."""
    return source.lower().startswith(REMOTE_PREFIXES)


def load_table(source: str) -> pd.DataFrame:
    """
    Load a CSV table with every cell kept as a string.

    Empty cells stay empty strings rather than NaN so callers can tell an
    empty slot from a value.

    Args:
        source: Local file path or http(s) URL

    Returns:
        DataFrame of strings

    Raises:
        FileNotFoundError: If a local source does not exist
        requests.HTTPError: If a remote source answers with an error status
    """
    if is_remote(source):
        response = requests.get(source, timeout=HTTP_TIMEOUT_SECONDS)
        response.raise_for_status()
        buffer = io.StringIO(response.text)
    else:
        if not os.path.exists(source):
            raise FileNotFoundError(f"Data file not found: {source}")
        buffer = source

    table = pd.read_csv(buffer, dtype=str, keep_default_na=False)
    table.columns = [str(column).strip() for column in table.columns]
    return table


def _require_columns(table: pd.DataFrame, columns: Sequence[str], source: str):
    missing = [column for column in columns if column not in table.columns]
    if missing:
        raise ValueError(f"{source}: missing column(s) {', '.join(missing)}")


def _parse_float(value: str, column: str, row: int) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"Row {row}: invalid {column} {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Row {row}: invalid {column} {value!r}")
    return number


def _parse_int(value: str, column: str, row: int) -> int:
    # "12.0" and "12" both count as 12
    return int(_parse_float(value, column, row))


def read_airports(source: str) -> List[Airport]:
    """
    Read airports and initialize their degree counters.

    Args:
        source: CSV path or URL with at least iata, latitude, longitude

    Returns:
        List of airports in file order
    """
    table = load_table(source)
    _require_columns(table, AIRPORT_COLUMNS, source)

    known = set(AIRPORT_COLUMNS) | set(AIRPORT_OPTIONAL_COLUMNS)
    airports = []

    for row, record in enumerate(table.to_dict("records"), start=1):
        latitude = _parse_float(record["latitude"], "latitude", row)
        longitude = _parse_float(record["longitude"], "longitude", row)

        optional = {
            column: (record.get(column) or None) for column in AIRPORT_OPTIONAL_COLUMNS
        }

        airports.append(
            Airport(
                iata=record["iata"].strip(),
                latitude=latitude,
                longitude=longitude,
                x=latitude,
                y=longitude,
                extra={k: v for k, v in record.items() if k not in known},
                **optional,
            )
        )

    return airports


def read_flights(source: str) -> List[Flight]:
    """
    Read flights given by airport code (not index).

    Args:
        source: CSV path or URL with origin, destination, count

    Returns:
        List of unresolved flights
    """
    table = load_table(source)
    _require_columns(table, FLIGHT_COLUMNS, source)

    return [
        Flight(
            origin=record["origin"].strip(),
            destination=record["destination"].strip(),
            count=_parse_int(record["count"], "count", row),
        )
        for row, record in enumerate(table.to_dict("records"), start=1)
    ]


def read_walks(source: str, max_time: int = Settings.MAX_TIME) -> List[Walk]:
    """
    Read walks laid out as one column per time slot ("0", "1", ...).

    Slots beyond the file's columns count as empty.

    Args:
        source: CSV path or URL
        max_time: Number of time slots to read

    Returns:
        List of walks
    """
    table = load_table(source)
    slots = [str(i) for i in range(max_time)]

    walks = []
    for record in table.to_dict("records"):
        steps = [(record.get(slot) or "").strip() for slot in slots]
        walks.append(Walk.from_steps(steps))

    return walks
