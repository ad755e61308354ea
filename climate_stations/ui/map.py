import html
import logging
import streamlit as st
import folium
from folium.plugins import MarkerCluster
from streamlit_folium import st_folium
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, MutableMapping, Optional, Tuple
from .. import config
from ..elevation import color_for, legend_entries
from ..models import Station

logger = logging.getLogger(__name__)

# Click positions come back from Leaflet as floats; match on rounded coordinates
POSITION_PRECISION = 6
HANDLED_CLICK_KEY = "handled_click_count"

def _position_key(lat: float, lng: float) -> Tuple[float, float]:
    return round(float(lat), POSITION_PRECISION), round(float(lng), POSITION_PRECISION)

@dataclass
class RenderedLayer:
    """Clustered station overlay plus the selection wiring for its markers."""
    cluster: MarkerCluster
    markers: List[folium.CircleMarker]
    on_select: Callable[[str], Any]
    positions: Dict[Tuple[float, float], str] = field(default_factory=dict)

    def select(self, identifier: str) -> None:
        self.on_select(identifier)

    def handle_click(self, lat: float, lng: float) -> Optional[str]:
        """Resolves a clicked position to its station and notifies `on_select` once."""
        identifier = self.positions.get(_position_key(lat, lng))
        if identifier is None:
            logger.debug(f"Click at ({lat}, {lng}) matched no station")
            return None
        self.select(identifier)
        return identifier

def station_style(station: Station) -> Dict[str, Any]:
    """Circle marker options for a station, filled by elevation class."""
    style = dict(config.MARKER_STYLE)
    style['fill_color'] = color_for(station.elevation)
    return style

def format_elevation(elevation: Optional[float]) -> str:
    return f"{elevation:g} m" if elevation is not None else "elevation unknown"

def popup_html(station: Station) -> str:
    """Popup listing name, province, climate ID and elevation."""
    return (
        f"<strong>{html.escape(station.name)}</strong><br>"
        f"Province: {html.escape(station.province)}<br>"
        f"Climate ID: {html.escape(station.identifier)}<br>"
        f"Elevation: {format_elevation(station.elevation)}"
    )

def render_stations(stations: List[Station], on_select: Callable[[str], Any]) -> RenderedLayer:
    """Builds one styled marker per station inside a single cluster layer."""
    cluster = MarkerCluster(name=config.STATION_OVERLAY_NAME)
    layer = RenderedLayer(cluster=cluster, markers=[], on_select=on_select)

    for s in stations:
        style = station_style(s)
        marker = folium.CircleMarker(
            location=[s.latitude, s.longitude],
            radius=style['radius'],
            color=style['color'],
            weight=style['weight'],
            opacity=style['opacity'],
            fill=True,
            fill_color=style['fill_color'],
            fill_opacity=style['fill_opacity'],
            popup=folium.Popup(popup_html(s), max_width=300),
            tooltip=s.name,
        )
        marker.add_to(cluster)
        layer.markers.append(marker)
        # Co-located stations resolve to the first one listed
        layer.positions.setdefault(_position_key(s.latitude, s.longitude), s.identifier)

    return layer

def _generate_map_legend() -> str:
    """Floating legend built from the same classes that style the markers."""
    items = ""
    for label, color in legend_entries():
        items += f'''
        <div style="display: flex; align-items: center; margin-bottom: 6px;">
            <i style="background:{color}; width:14px; height:14px; border-radius:50%;
                      border:1px solid #999; margin-right:10px; display:inline-block;"></i>
            <span style="font-size:12px;">{label}</span>
        </div>'''

    return f'''
    <div style="position: fixed; bottom: 40px; right: 20px; width: 150px;
                background: white; border-radius: 8px; z-index: 1000;
                padding: 12px; box-shadow: 0 2px 5px rgba(0,0,0,0.2); border: 1px solid #ccc;">
        <b style="font-size:13px;">Elevation (m)</b><br>
        {items}
    </div>'''

def build_map(layer: RenderedLayer) -> folium.Map:
    """Composes base layers, the station overlay, layer switcher, scale bar and legend."""
    m = folium.Map(location=config.MAP_CENTER, zoom_start=config.MAP_ZOOM, tiles=None, control_scale=True)

    # The first base layer added is the one shown initially
    for name, spec in config.BASE_LAYERS.items():
        folium.TileLayer(
            tiles=spec['tiles'],
            attr=spec['attr'],
            name=name,
            max_zoom=config.MAX_ZOOM,
            overlay=False,
            control=True,
        ).add_to(m)

    layer.cluster.add_to(m)
    folium.LayerControl().add_to(m)
    m.get_root().html.add_child(folium.Element(_generate_map_legend()))
    return m

def render_map(m: folium.Map) -> Dict[str, Any]:
    """Embeds the map and returns the last object click and the running click count."""
    out = st_folium(
        m,
        width=None,
        height=config.MAP_HEIGHT,
        returned_objects=["last_object_clicked", "last_object_clicked_count"],
        key="climate_stations_map",
    )
    return out or {}

def dispatch_click(layer: RenderedLayer, event: Dict[str, Any], state: MutableMapping) -> Optional[str]:
    """
    Forwards a map click to the layer once.

    st_folium returns the same event on every rerun; the click count only moves
    on a new click, so it is recorded in `state` (the session state) to tell a
    repeat click on the same marker apart from a plain rerun.
    """
    click = event.get("last_object_clicked")
    count = event.get("last_object_clicked_count")
    if not click or count == state.get(HANDLED_CLICK_KEY):
        return None
    state[HANDLED_CLICK_KEY] = count
    return layer.handle_click(click["lat"], click["lng"])
