"""Elevation classes shared by marker styling and the map legend."""

from typing import Dict, List, Optional, Tuple

from .models import ElevationClass

# Lower bounds of the LOW, MEDIUM and HIGH classes, in meters
ELEVATION_BREAKS = (0, 100, 300)

ELEVATION_COLORS: Dict[ElevationClass, str] = {
    ElevationClass.MISSING: "#d4d4d4",
    ElevationClass.LOW: "#91bfdb",
    ElevationClass.MEDIUM: "#ffffbf",
    ElevationClass.HIGH: "#fc8d59",
}

GRADED_CLASSES = (ElevationClass.LOW, ElevationClass.MEDIUM, ElevationClass.HIGH)

ELEVATION_LABELS: Dict[ElevationClass, str] = {
    ElevationClass.MISSING: "Unknown",
    ElevationClass.LOW: "Low",
    ElevationClass.MEDIUM: "Medium",
    ElevationClass.HIGH: "High",
}


def classify(elevation: Optional[float]) -> ElevationClass:
    """Maps an elevation in meters to its class. Zero and below are LOW."""
    if elevation is None:
        return ElevationClass.MISSING
    if elevation <= ELEVATION_BREAKS[1]:
        return ElevationClass.LOW
    if elevation <= ELEVATION_BREAKS[2]:
        return ElevationClass.MEDIUM
    return ElevationClass.HIGH


def color_for(elevation: Optional[float]) -> str:
    return ELEVATION_COLORS[classify(elevation)]


def legend_entries() -> List[Tuple[str, str]]:
    """Returns (range label, color) rows for the legend, graded classes first."""
    rows = []
    for i, cls in enumerate(GRADED_CLASSES):
        low = ELEVATION_BREAKS[i]
        high = ELEVATION_BREAKS[i + 1] if i + 1 < len(ELEVATION_BREAKS) else None
        label = f"{low}&ndash;{high}" if high is not None else f"{low}+"
        rows.append((label, ELEVATION_COLORS[cls]))
    rows.append((ELEVATION_LABELS[ElevationClass.MISSING], ELEVATION_COLORS[ElevationClass.MISSING]))
    return rows
