import html
import streamlit as st
import altair as alt
from typing import List
from .. import config
from ..data import stations_frame
from ..elevation import ELEVATION_COLORS, ELEVATION_LABELS, classify
from ..models import DisplayPayload, ElevationClass, SidebarState, SidebarView, Station
from ..presenter import MESSAGE_LABEL
from ..selection import ClimateSidebar

CLASS_ORDER = [ElevationClass.LOW, ElevationClass.MEDIUM, ElevationClass.HIGH, ElevationClass.MISSING]

def _format_value(value) -> str:
    return f"{value:g}" if isinstance(value, float) else html.escape(str(value))

def payload_html(payload: DisplayPayload) -> str:
    """One paragraph per entry, in payload order."""
    out = ""
    for e in payload:
        if e.label == MESSAGE_LABEL:
            out += f"<p>{html.escape(str(e.value))}</p>"
            continue
        unit = f" {e.unit}" if e.unit else ""
        out += f"<p><strong>{e.label}:</strong> {_format_value(e.value)}{unit}</p>"
    return out

def header_html(view: SidebarView) -> str:
    return f"<strong>{html.escape(view.header)}</strong>" if view.header else ""

def body_html(view: SidebarView) -> str:
    """Body region for each of the mutually exclusive sidebar states."""
    if view.state == SidebarState.LOADING:
        return f"<p>{config.LOADING_MESSAGE}</p>"
    if view.state == SidebarState.ERROR:
        return f"<p style='color:{config.THEME_COLORS['error']}'>{config.ERROR_MESSAGE}</p>"
    if view.state in (SidebarState.NO_DATA, SidebarState.POPULATED):
        return payload_html(view.payload)
    return f"<p style='color:{config.THEME_COLORS['text_muted']}'>{config.IDLE_MESSAGE}</p>"

@st.fragment(run_every=config.SIDEBAR_REFRESH_SECONDS)
def _climate_panel(sidebar: ClimateSidebar):
    """Repaints both sidebar regions from the current view; never waits on a fetch."""
    view = sidebar.view
    st.markdown(header_html(view), unsafe_allow_html=True)
    st.markdown(body_html(view), unsafe_allow_html=True)

def render_sidebar(sidebar: ClimateSidebar):
    """Fills the sidebar's station header and climate body."""
    with st.sidebar:
        st.header(f"🌡️ Latest Climate Record ({config.QUERY_YEAR})")
        _climate_panel(sidebar)

def class_counts(stations: List[Station]) -> dict:
    counts = {cls: 0 for cls in CLASS_ORDER}
    for s in stations:
        counts[classify(s.elevation)] += 1
    return counts

def render_metrics(stations: List[Station]):
    """Station count and per-elevation-class counts."""
    counts = class_counts(stations)
    cols = st.columns(len(CLASS_ORDER) + 1)
    cols[0].metric("🛰️ Stations", len(stations))
    for col, cls in zip(cols[1:], CLASS_ORDER):
        col.metric(ELEVATION_LABELS[cls], counts[cls])

def render_charts(stations: List[Station]):
    """Bar chart of stations per elevation class, in the map's colors."""
    if not stations:
        st.info("No stations loaded.")
        return

    df = stations_frame(stations)
    labels = [ELEVATION_LABELS[c] for c in CLASS_ORDER]
    colors = [ELEVATION_COLORS[c] for c in CLASS_ORDER]

    chart = alt.Chart(df).mark_bar(cornerRadiusTopLeft=6, cornerRadiusTopRight=6, stroke="#999").encode(
        x=alt.X('elevation_class:N', sort=labels, title="Elevation Class"),
        y=alt.Y('count()', title="Station Count"),
        color=alt.Color('elevation_class:N', legend=None, scale=alt.Scale(domain=labels, range=colors)),
        tooltip=['elevation_class', 'count()']
    ).properties(height=350)

    st.altair_chart(chart, width='stretch')

def render_data_table(stations: List[Station]):
    df = stations_frame(stations)
    st.dataframe(df, width='stretch')
    st.download_button(
        "📥 Download Stations (CSV)",
        df.to_csv(index=False),
        "climate_stations.csv",
        help="Export the station list to CSV"
    )
