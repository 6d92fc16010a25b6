"""Shooting statistics aggregation - pure, synchronous."""

from typing import Callable, Dict, Iterable, List, Mapping, Sequence

from ..models.enums import ComparisonKind, ShotType
from ..models.shots import Shot
from ..models.stats import ComparisonRow, ShootingSplit, ShotStatsSummary, ZoneStat
from ..nba_logging import get_logger
from .zones import ZONE_PREDICATES

logger = get_logger(__name__)

MAX_COMPARED_PLAYERS = 3


def split_for(shots: Iterable[Shot], predicate: Callable[[Shot], bool] = lambda _: True) -> ShootingSplit:
    """Count attempts and makes among shots matching ``predicate``."""
    attempts = 0
    makes = 0
    for shot in shots:
        if predicate(shot):
            attempts += 1
            if shot.made:
                makes += 1
    return ShootingSplit(attempts=attempts, makes=makes)


def zone_stats(shots: Sequence[Shot]) -> List[ZoneStat]:
    """Per-zone splits over the whole shot set, in zone declaration order."""
    stats = []
    for name, predicate in ZONE_PREDICATES.items():
        split = split_for(shots, predicate)
        stats.append(ZoneStat(name=name.value, attempts=split.attempts, makes=split.makes))
    return stats


def aggregate(shots: Sequence[Shot], player_name: str, season: str) -> ShotStatsSummary:
    """Build overall, per-type and per-zone splits for a filtered shot list.

    Args:
        shots: Already-filtered shots for one player and season
        player_name: Display name for the summary
        season: Season label, e.g. ``"2023-24"``

    Returns:
        ShotStatsSummary; every split is zero-valued for empty input
    """
    shots = list(shots)

    summary = ShotStatsSummary(
        player_name=player_name,
        season=season,
        total=split_for(shots),
        two_pt=split_for(shots, lambda s: s.shot_type == ShotType.TWO_POINT),
        three_pt=split_for(shots, lambda s: s.shot_type == ShotType.THREE_POINT),
        free_throws=split_for(shots, lambda s: s.shot_type == ShotType.FREE_THROW),
        zones=zone_stats(shots),
    )

    logger.debug(
        "Aggregated shot stats",
        player_name=player_name,
        season=season,
        attempts=summary.total.attempts,
        makes=summary.total.makes,
    )
    return summary


def compare_summaries(
    summaries: Mapping[str, ShotStatsSummary],
    kind: ComparisonKind = ComparisonKind.OVERALL,
) -> List[ComparisonRow]:
    """Flatten player summaries into grouped bar-chart rows.

    Args:
        summaries: Player id to summary, at most ``MAX_COMPARED_PLAYERS`` entries
        kind: ``overall`` for Overall/2PT/3PT, ``zone`` for per-zone percentages

    Returns:
        Rows ordered by category, then by player in mapping order
    """
    if len(summaries) > MAX_COMPARED_PLAYERS:
        raise ValueError(f"Can compare at most {MAX_COMPARED_PLAYERS} players")

    kind = ComparisonKind(kind)
    per_player: Dict[str, Dict[str, float]] = {}
    for player_id, summary in summaries.items():
        if kind == ComparisonKind.OVERALL:
            per_player[player_id] = {
                "Overall": summary.total.percentage,
                "2PT": summary.two_pt.percentage,
                "3PT": summary.three_pt.percentage,
            }
        else:
            per_player[player_id] = {zone.name: zone.percentage for zone in summary.zones}

    categories: List[str] = []
    for values in per_player.values():
        for category in values:
            if category not in categories:
                categories.append(category)

    rows = []
    for category in categories:
        for player_id, values in per_player.items():
            if category in values:
                rows.append(
                    ComparisonRow(
                        player_id=player_id,
                        player_name=summaries[player_id].player_name,
                        category=category,
                        value=values[category],
                    )
                )
    return rows
