import pandas as pd
import logging
import math
from datetime import date
from typing import Any, Dict, List, Optional, Union
from .. import config
from ..elevation import classify, ELEVATION_LABELS
from ..exceptions import ParseError
from ..models import ClimateRecord, NotFoundResult, Station
from .fetchers import fetch_station_collection, fetch_climate_daily

logger = logging.getLogger(__name__)

# Property fallbacks, first non-empty wins
NAME_KEYS = ("STATION_NAME", "name")
PROVINCE_KEYS = ("PROVINCE", "province", "PROVINCE_CODE")
IDENTIFIER_KEY = "CLIMATE_IDENTIFIER"
ELEVATION_KEY = "ELEVATION"

# ClimateRecord attribute -> climate-daily property
CLIMATE_FIELDS = {
    "max_temperature": "MAX_TEMPERATURE",
    "min_temperature": "MIN_TEMPERATURE",
    "mean_temperature": "MEAN_TEMPERATURE",
    "total_precipitation": "TOTAL_PRECIPITATION",
    "total_rain": "TOTAL_RAIN",
    "total_snow": "TOTAL_SNOW",
}

def _first_present(props: Dict[str, Any], keys) -> Optional[Any]:
    for k in keys:
        v = props.get(k)
        if v is not None and str(v).strip() != "":
            return v
    return None

def _optional_number(value: Any, field: str) -> Optional[float]:
    """None and blank strings are absent; anything else must be a finite number."""
    if value is None: return None
    if isinstance(value, str) and not value.strip(): return None
    if isinstance(value, bool):
        raise ParseError(f"{field} is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"{field} is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise ParseError(f"{field} is not a finite number: {value!r}")
    return number

def _parse_station(feature: Any, index: int) -> Station:
    if not isinstance(feature, dict):
        raise ParseError(f"Feature {index} is not an object")

    geom = feature.get('geometry')
    if not isinstance(geom, dict) or geom.get('type') != "Point":
        raise ParseError(f"Feature {index} has no point geometry")
    coords = geom.get('coordinates')
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        raise ParseError(f"Feature {index} has no point coordinates")

    props = feature.get('properties')
    if not isinstance(props, dict):
        raise ParseError(f"Feature {index} has no properties")

    identifier = _first_present(props, (IDENTIFIER_KEY,))
    name = _first_present(props, NAME_KEYS)
    if identifier is None or name is None:
        raise ParseError(f"Feature {index} is missing {IDENTIFIER_KEY} or station name")

    lon = _optional_number(coords[0], f"feature {index} longitude")
    lat = _optional_number(coords[1], f"feature {index} latitude")
    if lat is None or lon is None:
        raise ParseError(f"Feature {index} has empty coordinates")

    province = _first_present(props, PROVINCE_KEYS)
    return Station(
        identifier=str(identifier).strip(),
        name=str(name).strip(),
        province=str(province).strip() if province is not None else "",
        elevation=_optional_number(props.get(ELEVATION_KEY), f"feature {index} {ELEVATION_KEY}"),
        latitude=lat,
        longitude=lon,
    )

def parse_station_collection(doc: Dict[str, Any]) -> List[Station]:
    """Converts a GeoJSON feature collection to stations, all or nothing."""
    features = doc.get('features')
    if not isinstance(features, list):
        raise ParseError("Stations document has no 'features' list")
    return [_parse_station(f, i) for i, f in enumerate(features)]

def load_stations(url: str = config.STATIONS_URL) -> List[Station]:
    """Loads every station of the dataset in document order."""
    stations = parse_station_collection(fetch_station_collection(url))
    logger.info(f"Loaded {len(stations)} climate stations from {url}")
    return stations

def _parse_local_date(value: Any) -> date:
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as e:
        raise ParseError(f"LOCAL_DATE is not a date: {value!r}") from e

def parse_climate_record(station_id: str, props: Dict[str, Any]) -> ClimateRecord:
    """Builds a record whose numeric fields are set only when the source value is non-null."""
    if props.get('LOCAL_DATE') is None:
        raise ParseError(f"Climate record for {station_id} has no LOCAL_DATE")
    values = {attr: _optional_number(props.get(src), src) for attr, src in CLIMATE_FIELDS.items()}
    return ClimateRecord(
        station_id=station_id,
        observation_date=_parse_local_date(props['LOCAL_DATE']),
        **values,
    )

def fetch_latest(station_id: str, year: int = config.QUERY_YEAR) -> Union[ClimateRecord, NotFoundResult]:
    """Returns the most recent daily record of the year, or NotFoundResult when there is none."""
    doc = fetch_climate_daily(station_id, year)
    features = doc.get('features') or []
    if not isinstance(features, list):
        raise ParseError(f"Climate response for {station_id} has a malformed 'features' member")
    if not features:
        logger.warning(f"No climate-daily records for {station_id} in {year}")
        return NotFoundResult(station_id=station_id, year=year)

    latest = features[0]
    props = latest.get('properties') if isinstance(latest, dict) else None
    if not isinstance(props, dict):
        raise ParseError(f"Climate record for {station_id} has no properties")
    return parse_climate_record(station_id, props)

def stations_frame(stations: List[Station]) -> pd.DataFrame:
    """Tabular view of the stations for charts and export."""
    cols = ['identifier', 'name', 'province', 'elevation', 'elevation_class', 'latitude', 'longitude']
    rows = [{
        'identifier': s.identifier,
        'name': s.name,
        'province': s.province,
        'elevation': s.elevation,
        'elevation_class': ELEVATION_LABELS[classify(s.elevation)],
        'latitude': s.latitude,
        'longitude': s.longitude,
    } for s in stations]
    return pd.DataFrame(rows, columns=cols)
