# pecem_ai/services/score_utils.py
import math
from typing import Literal


def round_score(value: float) -> int:
    """Round half up (2.5 -> 3), the way the dashboard has always displayed scores."""
    return int(math.floor(value + 0.5))


def ratio(part: float, total: float) -> float:
    return part / max(1, total)


def priority_for(score: float, high: float = 70, medium: float = 40) -> Literal["high", "medium", "low"]:
    if score >= high:
        return "high"
    if score >= medium:
        return "medium"
    return "low"
