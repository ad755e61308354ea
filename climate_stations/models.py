from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union


class ElevationClass(Enum):
    MISSING = "missing"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Station:
    """A fixed-location climate-observation site from the stations dataset."""
    identifier: str
    name: str
    province: str
    elevation: Optional[float]
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ClimateRecord:
    """The most recent daily observation for a station; absent fields are None."""
    station_id: str
    observation_date: date
    max_temperature: Optional[float] = None
    min_temperature: Optional[float] = None
    mean_temperature: Optional[float] = None
    total_precipitation: Optional[float] = None
    total_rain: Optional[float] = None
    total_snow: Optional[float] = None


@dataclass(frozen=True)
class NotFoundResult:
    """A well-formed response that held no records for the station and year."""
    station_id: str
    year: int


@dataclass(frozen=True)
class DisplayEntry:
    label: str
    value: Union[str, float]
    unit: str = ""


DisplayPayload = Tuple[DisplayEntry, ...]


class SidebarState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    NO_DATA = "no_data"
    ERROR = "error"
    POPULATED = "populated"


@dataclass(frozen=True)
class SidebarView:
    """Contents of the sidebar's header and body regions."""
    header: str
    state: SidebarState
    payload: DisplayPayload = ()
