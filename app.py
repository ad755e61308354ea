import logging
import streamlit as st
from climate_stations import config, ui
from climate_stations.data import load_stations
from climate_stations.exceptions import StationMapError
from climate_stations.selection import ClimateSidebar

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)

# --- PAGE SETUP ---
st.set_page_config(page_title="Canadian Climate Stations", layout="wide", page_icon="🍁")
ui.apply_custom_css()

# --- DATA LOADING ---
try:
    stations = load_stations(config.STATIONS_URL)
except StationMapError as e:
    # The map still renders, just without stations
    logger.error(f"Error loading stations GeoJSON: {e}")
    stations = []

by_id = {s.identifier: s for s in stations}

if "climate_sidebar" not in st.session_state:
    st.session_state["climate_sidebar"] = ClimateSidebar()
sidebar = st.session_state["climate_sidebar"]

def on_select(identifier: str):
    station = by_id.get(identifier)
    if station is not None:
        sidebar.select(station)

# --- MAIN LAYOUT ---
ui.render_header()

tab_map, tab_charts, tab_data = st.tabs(["🗺️ Map", "📊 Analysis", "💾 Stations"])

with tab_map:
    ui.render_metrics(stations)
    layer = ui.render_stations(stations, on_select=on_select)
    event = ui.render_map(ui.build_map(layer))
    ui.dispatch_click(layer, event, st.session_state)

with tab_charts:
    st.subheader("📊 Stations by Elevation")
    ui.render_charts(stations)

with tab_data:
    st.subheader("💾 Station List")
    ui.render_data_table(stations)

ui.render_sidebar(sidebar)
