"""
Configuration module for the Canadian Climate Stations map.
Centralizes API endpoints, query parameters, and styling parameters.
"""

# --- API ENDPOINTS ---
STATIONS_URL = (
    "https://raw.githubusercontent.com/brubcam/GEOG-464_Lab-8/"
    "refs/heads/main/DATA/climate-stations.geojson"
)

# ECCC OGC API, daily climate observations
CLIMATE_DAILY_URL = "https://api.weather.gc.ca/collections/climate-daily/items"

# --- QUERY PARAMETERS ---
QUERY_YEAR = 2020
CLIMATE_RECORD_LIMIT = 10
CLIMATE_SORT = "-LOCAL_DATE"

# --- OPERATIONAL ---
DEFAULT_CACHE_TTL_STATIONS = 86400  # 24 hours
CLIMATE_FETCH_WORKERS = 8  # shared by all sessions
SIDEBAR_REFRESH_SECONDS = 1.0

# --- MAP ---
MAP_CENTER = [48.5, -71.0]
MAP_ZOOM = 5
MAP_HEIGHT = 600
MAX_ZOOM = 18

BASE_LAYERS = {
    "OpenStreetMap": {
        "tiles": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        "attr": "&copy; OpenStreetMap contributors",
    },
    "Esri World Imagery": {
        "tiles": (
            "https://server.arcgisonline.com/ArcGIS/rest/services/"
            "World_Imagery/MapServer/tile/{z}/{y}/{x}"
        ),
        "attr": (
            "Tiles &copy; Esri &mdash; Source: Esri, Maxar, Earthstar Geographics, "
            "and the GIS User Community"
        ),
    },
}

STATION_OVERLAY_NAME = "Climate Stations"

# --- UI STYLING ---
MARKER_STYLE = {
    "radius": 6,
    "color": "#ffffff",
    "weight": 1,
    "opacity": 1,
    "fill_opacity": 0.8,
}

THEME_COLORS = {
    "primary": "#2b83ba",
    "error": "#e74c3c",
    "background": "#fcfcfc",
    "text_main": "#1a1a1a",
    "text_muted": "#666"
}

# --- MESSAGES ---
LOADING_MESSAGE = "Loading climate data..."
NO_DATA_MESSAGE = "No recent climate data available for this station."
ERROR_MESSAGE = "There was an error loading climate data for this station."
IDLE_MESSAGE = "Click a station on the map to see its latest climate record."

# --- LOGGING ---
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
