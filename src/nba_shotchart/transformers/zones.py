"""Court zone predicates - pure, synchronous.

Zones are independent filters rather than a partition: a shot may satisfy
several predicates or none, and is counted in every zone it satisfies.
"""

from typing import Callable, Dict, Optional, Tuple

from ..models.enums import ShotType, ZoneName
from ..models.shots import Shot

ZonePredicate = Callable[[Shot], bool]


def _restricted_area(shot: Shot) -> bool:
    return shot.distance < 4


def _paint_non_ra(shot: Shot) -> bool:
    return 4 <= shot.distance < 14 and abs(shot.x) < 8


def _mid_range(shot: Shot) -> bool:
    return shot.shot_type == ShotType.TWO_POINT and (shot.distance >= 14 or abs(shot.x) >= 8)


def _corner_three(shot: Shot) -> bool:
    return shot.shot_type == ShotType.THREE_POINT and abs(shot.x) > 22


def _above_break_three(shot: Shot) -> bool:
    return shot.shot_type == ShotType.THREE_POINT and abs(shot.x) <= 22


# Declaration order is the reporting order
ZONE_PREDICATES: Dict[ZoneName, ZonePredicate] = {
    ZoneName.RESTRICTED_AREA: _restricted_area,
    ZoneName.PAINT_NON_RA: _paint_non_ra,
    ZoneName.MID_RANGE: _mid_range,
    ZoneName.CORNER_3: _corner_three,
    ZoneName.ABOVE_BREAK_3: _above_break_three,
}


def zones_for(shot: Shot) -> Tuple[ZoneName, ...]:
    """All zones whose predicate the shot satisfies, in declaration order."""
    return tuple(name for name, predicate in ZONE_PREDICATES.items() if predicate(shot))


def classify(shot: Shot) -> Optional[ZoneName]:
    """First matching zone in declaration order, or None if no zone matches."""
    for name, predicate in ZONE_PREDICATES.items():
        if predicate(shot):
            return name
    return None
