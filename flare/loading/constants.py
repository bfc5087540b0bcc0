"""
Loading Constants
"""

# Column names
AIRPORT_COLUMNS = ("iata", "latitude", "longitude")
AIRPORT_OPTIONAL_COLUMNS = ("color", "cluster", "name", "city", "state")
FLIGHT_COLUMNS = ("origin", "destination", "count")

# Remote sources
HTTP_TIMEOUT_SECONDS = 30
REMOTE_PREFIXES = ("http://", "https://")

# Airport filters
NA_STATE = "NA"
