"""Player and team reference records."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Player(BaseModel):
    """Player reference record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    full_name: Optional[str] = None
    position: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    seasons: List[str] = Field(default_factory=list)
    active: bool = True


class Team(BaseModel):
    """Team reference record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str
    full_name: Optional[str] = None
    abbreviation: Optional[str] = None
    city: Optional[str] = None
    conference: Optional[str] = None
    division: Optional[str] = None
    active: bool = True
