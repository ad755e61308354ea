from .processing import fetch_latest, load_stations, stations_frame
