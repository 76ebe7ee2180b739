"""Severity classification for PIRS scores and the PoF/CoF risk matrix.

Every view that badges, colours, counts or filters by risk tier goes through
``classify_by_score``. The score thresholds live here and nowhere else.
"""

import math
from typing import NamedTuple, Optional

from sentinel.core.records import read_field

HIGH_SCORE_THRESHOLD = 8
MEDIUM_SCORE_THRESHOLD = 5

SCORE_TIERS = ("high", "medium", "low")
MATRIX_CELL_TIERS = ("low", "medium", "high", "critical")
MATRIX_HEADLINE_TIERS = ("Low", "Medium", "High", "Critical")

LIKELIHOOD_LABELS = ("Very Low", "Low", "Medium", "High", "Very High")
MATRIX_SIZE = 5


class ScoreClassification(NamedTuple):
    tier: str
    intent: str
    label: str


class MatrixClassification(NamedTuple):
    probability: int
    consequence: int
    cell_sum: int
    cell_tier: str
    headline_score: int
    headline_tier: str


_HIGH = ScoreClassification("high", "destructive", "High Risk")
_MEDIUM = ScoreClassification("medium", "default", "Medium Risk")
_LOW = ScoreClassification("low", "secondary", "Low Risk")


def classify_by_score(score):
    """Map a 0-10 risk score to its tier, badge intent and label.

    Scores outside 0-10 are classified with the same comparisons; nothing is
    clamped. Callers must not pass NaN or non-numeric values.
    """
    if score >= HIGH_SCORE_THRESHOLD:
        return _HIGH
    if score >= MEDIUM_SCORE_THRESHOLD:
        return _MEDIUM
    return _LOW


def score_tier(score) -> str:
    return classify_by_score(score).tier


def matches_risk_level(score, level) -> bool:
    """Feed predicate: does ``score`` fall in ``level``?

    ``"all"``, empty and unrecognised levels impose no restriction. A missing
    score only passes an unrestricted level.
    """
    if not level or level not in SCORE_TIERS:
        return True
    if score is None:
        return False
    return score_tier(score) == level


def _band_index(value: int) -> int:
    if value <= 4:
        return 0
    if value <= 6:
        return 1
    if value <= 8:
        return 2
    return 3


def matrix_cell_tier(pof, cof) -> str:
    """Cell colouring tier for the 5x5 grid, driven by ``pof + cof``."""
    return MATRIX_CELL_TIERS[_band_index(pof + cof)]


def matrix_headline_tier(pof, cof) -> str:
    """Headline tier shown next to the "P x C = Risk" figure.

    Uses the product, not the sum, and the same 4/6/8 cut points. This is a
    separate reading from ``matrix_cell_tier`` and the two may disagree.
    """
    return MATRIX_HEADLINE_TIERS[_band_index(pof * cof)]


def classify_by_matrix(pof, cof) -> MatrixClassification:
    return MatrixClassification(
        probability=pof,
        consequence=cof,
        cell_sum=pof + cof,
        cell_tier=matrix_cell_tier(pof, cof),
        headline_score=pof * cof,
        headline_tier=matrix_headline_tier(pof, cof),
    )


def resolve_matrix_inputs(record) -> tuple[Optional[int], Optional[int]]:
    """Return (pof, cof) for ``record``, deriving them from ``risk_score`` when absent.

    A zero or missing value counts as absent. The derived values are not
    clamped, so a score of 9 or 10 yields a consequence of 6.
    """
    pof = read_field(record, "probability_of_failure")
    cof = read_field(record, "consequence_of_failure")
    score = read_field(record, "risk_score")
    if not pof:
        pof = math.floor(score / 2) + 1 if score is not None else None
    if not cof:
        cof = math.ceil(score / 2) + 1 if score is not None else None
    return pof, cof


def likelihood_label(value) -> Optional[str]:
    if isinstance(value, int) and 1 <= value <= MATRIX_SIZE:
        return LIKELIHOOD_LABELS[value - 1]
    return None


def build_matrix_grid(pof=None, cof=None) -> list[list[dict]]:
    # Rows run from probability 5 down to 1 so the grid reads bottom-left low.
    grid = []
    for probability in range(MATRIX_SIZE, 0, -1):
        row = []
        for consequence in range(1, MATRIX_SIZE + 1):
            row.append(
                {
                    "probability": probability,
                    "consequence": consequence,
                    "sum": probability + consequence,
                    "tier": matrix_cell_tier(probability, consequence),
                    "highlighted": probability == pof and consequence == cof,
                }
            )
        grid.append(row)
    return grid


__all__ = [
    "HIGH_SCORE_THRESHOLD",
    "LIKELIHOOD_LABELS",
    "MEDIUM_SCORE_THRESHOLD",
    "MatrixClassification",
    "ScoreClassification",
    "build_matrix_grid",
    "classify_by_matrix",
    "classify_by_score",
    "likelihood_label",
    "matches_risk_level",
    "matrix_cell_tier",
    "matrix_headline_tier",
    "resolve_matrix_inputs",
    "score_tier",
]
