"""Enumerations for shot data, binning and color configuration."""

from enum import Enum
from typing import Any


class ShotType(str, Enum):
    """Shot type enumeration."""

    TWO_POINT = "2PT"
    THREE_POINT = "3PT"
    FREE_THROW = "FT"

    @classmethod
    def _missing_(cls, value: Any) -> "ShotType":
        """Accept common spellings used by box score feeds."""
        if isinstance(value, int) and not isinstance(value, bool):
            return {2: cls.TWO_POINT, 3: cls.THREE_POINT, 1: cls.FREE_THROW}.get(value)
        if isinstance(value, str):
            shot_str = value.upper().replace(" ", "").replace("-", "")
            shot_map = {
                "2PT": cls.TWO_POINT,
                "2PTFIELDGOAL": cls.TWO_POINT,
                "3PT": cls.THREE_POINT,
                "3PTFIELDGOAL": cls.THREE_POINT,
                "FT": cls.FREE_THROW,
                "FREETHROW": cls.FREE_THROW,
            }
            return shot_map.get(shot_str)
        return None


class ZoneName(str, Enum):
    """Named court zones, in reporting order."""

    RESTRICTED_AREA = "Restricted Area"
    PAINT_NON_RA = "Paint (Non-RA)"
    MID_RANGE = "Mid-Range"
    CORNER_3 = "Corner 3"
    ABOVE_BREAK_3 = "Above Break 3"


class BinMethod(str, Enum):
    """Heatmap binning method."""

    HEXBIN = "hexbin"
    GRID = "grid"


class CellSize(str, Enum):
    """Heatmap cell size, mapped to a pixel radius."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @property
    def pixels(self) -> int:
        return CELL_SIZE_PIXELS[self]


CELL_SIZE_PIXELS = {
    CellSize.SMALL: 15,
    CellSize.MEDIUM: 25,
    CellSize.LARGE: 40,
}


class ColorScaleKind(str, Enum):
    """Heatmap color interpolation scheme."""

    RED_YELLOW_GREEN = "redYellowGreen"
    VIRIDIS = "viridis"


class ComparisonKind(str, Enum):
    """Breakdown used when comparing players."""

    OVERALL = "overall"
    ZONE = "zone"
