from .styles import apply_custom_css, render_header
from .components import render_sidebar, render_metrics, render_charts, render_data_table
from .map import render_stations, build_map, render_map, dispatch_click
