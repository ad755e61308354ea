import requests
import streamlit as st
import logging
from typing import Any, Dict, Optional
from .. import config
from ..exceptions import FetchError, ParseError

logger = logging.getLogger(__name__)

def _get_json(url: str, params: Optional[Dict[str, Any]] = None) -> Any:
    """Single-shot GET returning the decoded JSON body."""
    try:
        resp = requests.get(url, params=params)
    except requests.RequestException as e:
        raise FetchError(f"Request to {url} failed: {e}") from e

    if not resp.ok:
        raise FetchError(f"{url} returned HTTP {resp.status_code}", status_code=resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        raise ParseError(f"{url} did not return JSON: {e}") from e

@st.cache_data(ttl=config.DEFAULT_CACHE_TTL_STATIONS, show_spinner=False)
def fetch_station_collection(url: str) -> Dict[str, Any]:
    """Fetches the raw stations GeoJSON document."""
    doc = _get_json(url)
    if not isinstance(doc, dict):
        raise ParseError(f"Stations document at {url} is not a JSON object")
    return doc

def fetch_climate_daily(station_id: str, year: int, limit: int = config.CLIMATE_RECORD_LIMIT) -> Dict[str, Any]:
    """Fetches the newest daily climate features for a station and year."""
    params = {
        "limit": limit,
        "sortby": config.CLIMATE_SORT,
        "CLIMATE_IDENTIFIER": station_id,
        "LOCAL_YEAR": year,
    }
    doc = _get_json(config.CLIMATE_DAILY_URL, params=params)
    if not isinstance(doc, dict):
        raise ParseError(f"Climate response for {station_id} is not a JSON object")
    return doc
