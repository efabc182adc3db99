"""
Deposit Defender Band Tables

Lookups over the static score and recovery band tables. Every
score-derived output (grade, position, action, urgency, recovery
multipliers) comes from these tables; no other module compares a score
against a threshold.
"""
from __future__ import annotations

from typing import Sequence, TypeVar, Union

from ..exceptions import BandLookupError
from ..models import (
    Grade,
    RecoveryBandEntry,
    ScoreBandEntry,
    StrategicPosition,
)

GRADE_A_THRESHOLD = 90

_Band = TypeVar("_Band", bound=Union[ScoreBandEntry, RecoveryBandEntry])


def _lookup(score: int, bands: Sequence[_Band], table: str) -> _Band:
    for band in bands:
        if band.min_score <= score:
            return band
    raise BandLookupError(
        message=f"No {table} entry covers score {score}",
        details={"score": score, "table": table},
    )


def lookup_score_band(score: int, bands: Sequence[ScoreBandEntry]) -> ScoreBandEntry:
    """First score band (highest first) whose min_score <= score."""
    return _lookup(score, bands, "score_bands")


def lookup_recovery_band(score: int, bands: Sequence[RecoveryBandEntry]) -> RecoveryBandEntry:
    """First recovery band (highest first) whose min_score <= score."""
    return _lookup(score, bands, "recovery_bands")


def leverage_grade(score: int, bands: Sequence[ScoreBandEntry]) -> Grade:
    """Letter grade: A at 90 and above, otherwise the band's grade."""
    if score >= GRADE_A_THRESHOLD:
        return Grade.A
    return lookup_score_band(score, bands).grade


def strategic_position(score: int, bands: Sequence[ScoreBandEntry]) -> StrategicPosition:
    return lookup_score_band(score, bands).position
