"""Derived shooting statistics models."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


def make_percentage(makes: int, attempts: int) -> float:
    """Makes divided by attempts, defined as 0 when there are no attempts."""
    if attempts <= 0:
        return 0.0
    return makes / attempts


class ShootingSplit(BaseModel):
    """Attempts and makes for one bucket of shots."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    attempts: int = Field(0, ge=0)
    makes: int = Field(0, ge=0)

    @computed_field
    @property
    def percentage(self) -> float:
        return make_percentage(self.makes, self.attempts)


class ZoneStat(ShootingSplit):
    """Shooting split for a named court zone."""

    name: str


class ShotStatsSummary(BaseModel):
    """Overall, per-type and per-zone shooting for one player and season."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    player_name: str
    season: str
    total: ShootingSplit
    two_pt: ShootingSplit
    three_pt: ShootingSplit
    free_throws: Optional[ShootingSplit] = None
    zones: List[ZoneStat] = Field(default_factory=list)

    def zone(self, name: str) -> Optional[ZoneStat]:
        """Look up a zone by name."""
        for zone in self.zones:
            if zone.name == name:
                return zone
        return None


class ComparisonRow(BaseModel):
    """One bar of the player comparison chart."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    player_id: str
    player_name: str
    category: str
    value: float


class ComparisonOutcome(BaseModel):
    """Result of fetching one player's stats during a comparison."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    player_id: str
    stats: Optional[ShotStatsSummary] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
