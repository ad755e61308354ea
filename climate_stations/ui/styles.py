import streamlit as st
from .. import config

def apply_custom_css():
    """Injects page fonts, metric cards and map frame styling."""
    st.markdown(f"""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Poppins:wght@300;400;600;700&display=swap');

        html, body, [class*="css"] {{
            font-family: 'Poppins', sans-serif;
            color: {config.THEME_COLORS["text_main"]};
        }}

        .stApp {{
            background-color: {config.THEME_COLORS["background"]};
        }}

        div[data-testid="stMetric"] {{
            background: #ffffff;
            padding: 15px;
            border-radius: 12px;
            box-shadow: 0 4px 15px rgba(0,0,0,0.05);
            border: 1px solid #f0f0f0;
        }}

        /* Map container */
        iframe {{
            border-radius: 12px;
            box-shadow: 0 4px 15px rgba(0,0,0,0.1);
        }}
    </style>
    """, unsafe_allow_html=True)

def render_header():
    st.title("🍁 Canadian Climate Stations")
    st.markdown(
        f"<h4 style='text-align: center; color: {config.THEME_COLORS['text_muted']};'>"
        "Station elevations and daily ECCC climate observations</h4>",
        unsafe_allow_html=True,
    )
