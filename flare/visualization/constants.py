"""
Visualization Constants
"""

# Map configuration
MAP_TILE_URLS = {
    "CartoDB.DarkMatter": "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    "CartoDB.Positron": "https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png",
    "OpenStreetMap": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
}
GRID_CRS = "Simple"  # Planar CRS for layouts that are not geographic
GRID_ZOOM = 0  # One layout unit per pixel

# Airport bubbles
AIRPORT_OPACITY = 1.0
AIRPORT_FILL_OPACITY = 0.9

# Labels
LABEL_FONT = "12px sans-serif"
MONTH_FONT = "20px sans-serif"
MONTH_LABELS = [
    "JAN", "FEB", "MAR", "APRL", "MAY", "JUN",
    "JUL", "AUG", "SEPT", "OCT", "NOV", "DEC",
]
MONTH_AXIS_RANGE = (85, 1200)  # Layout x of first and last month
MONTH_AXIS_OFFSET = (158, 720)  # Axis translation (x, y) in layout units

# Output
MAP_TITLE = "FLARE Map"
