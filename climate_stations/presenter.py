"""Formats climate fetch results into ordered label/value/unit entries."""

from typing import Union

from . import config
from .models import ClimateRecord, DisplayEntry, DisplayPayload, NotFoundResult

TEMPERATURE_UNIT = "°C"
PRECIPITATION_UNIT = "mm"
MESSAGE_LABEL = "Message"

# (record attribute, label, unit) in display order
RECORD_FIELDS = (
    ("max_temperature", "Max Temp", TEMPERATURE_UNIT),
    ("min_temperature", "Min Temp", TEMPERATURE_UNIT),
    ("mean_temperature", "Mean Temp", TEMPERATURE_UNIT),
    ("total_precipitation", "Total Precipitation", PRECIPITATION_UNIT),
    ("total_rain", "Total Rain", PRECIPITATION_UNIT),
    ("total_snow", "Total Snow", PRECIPITATION_UNIT),
)


def present(result: Union[ClimateRecord, NotFoundResult]) -> DisplayPayload:
    if isinstance(result, NotFoundResult):
        return (DisplayEntry(label=MESSAGE_LABEL, value=config.NO_DATA_MESSAGE),)

    entries = [DisplayEntry(label="Date", value=result.observation_date.isoformat())]
    for attr, label, unit in RECORD_FIELDS:
        value = getattr(result, attr)
        if value is not None:
            entries.append(DisplayEntry(label=label, value=value, unit=unit))
    return tuple(entries)
