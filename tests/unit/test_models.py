"""Tests for shot model enumerations and validation."""

import pytest
from pydantic import ValidationError

from nba_shotchart.models import Shot, ShotType


class TestShotType:
    """Feed spellings map onto the three shot types."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (2, ShotType.TWO_POINT),
            (3, ShotType.THREE_POINT),
            (1, ShotType.FREE_THROW),
            ("3pt field goal", ShotType.THREE_POINT),
            ("2-PT", ShotType.TWO_POINT),
            ("free throw", ShotType.FREE_THROW),
        ],
    )
    def test_feed_spellings(self, value, expected):
        assert ShotType(value) == expected

    @pytest.mark.parametrize("value", [True, False])
    def test_booleans_are_not_point_values(self, value):
        with pytest.raises(ValueError):
            ShotType(value)

    def test_unknown_spelling(self):
        with pytest.raises(ValueError):
            ShotType("dunk")

    def test_shot_rejects_boolean_shot_type(self, make_shot):
        document = make_shot().model_dump(mode="json", by_alias=True)
        document["shotType"] = True

        with pytest.raises(ValidationError):
            Shot.model_validate(document)
