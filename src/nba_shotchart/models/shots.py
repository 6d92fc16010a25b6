"""Shot event model with court coordinates."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import ShotType


class Shot(BaseModel):
    """One field-goal or free-throw attempt.

    Coordinates are in feet with the origin at the basket and ``y`` growing
    toward half court.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    x: float = Field(..., description="Lateral offset from the basket in feet")
    y: float = Field(..., description="Offset from the basket toward half court in feet")
    made: bool
    shot_type: ShotType
    distance: float = Field(..., ge=0, description="Shot distance in feet")
    game_date: date
    opponent: str
    period: int = Field(..., ge=1, le=10)
    player_id: str = Field(..., min_length=1)
    player_name: str

    season: Optional[str] = None
    game_id: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    minutes_remaining: Optional[int] = Field(None, ge=0, le=12)
    seconds_remaining: Optional[int] = Field(None, ge=0, le=59)
    description: Optional[str] = None


class ShotFilters(BaseModel):
    """Explicit filter value threaded through every shot query."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    shot_types: Optional[List[ShotType]] = None
    opponent: Optional[str] = None
    date_range_start: Optional[date] = None
    date_range_end: Optional[date] = None

    @model_validator(mode="after")
    def check_date_range(self) -> "ShotFilters":
        if (
            self.date_range_start is not None
            and self.date_range_end is not None
            and self.date_range_start > self.date_range_end
        ):
            raise ValueError("date_range_start must not be after date_range_end")
        return self

    def to_query_params(self) -> dict:
        """Render the filters as API query parameters."""
        params: dict = {}
        if self.shot_types:
            params["shotTypes"] = [t.value for t in self.shot_types]
        if self.opponent:
            params["opponent"] = self.opponent
        if self.date_range_start:
            params["startDate"] = self.date_range_start.isoformat()
        if self.date_range_end:
            params["endDate"] = self.date_range_end.isoformat()
        return params
