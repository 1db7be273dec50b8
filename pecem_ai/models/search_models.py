# models/search_models.py
from typing import Generic, List, Literal, TypeVar

from pydantic import Field

from pecem_ai import config
from pecem_ai.models.base_models import Record

T = TypeVar("T")

IntentType = Literal["course", "job", "skill", "certification", "general"]


class SearchOptions(Record):
    fuzzy_match: bool = Field(default_factory=lambda: config.SEARCH_FUZZY)
    synonyms: bool = Field(default_factory=lambda: config.SEARCH_SYNONYMS)
    min_score: float = Field(default_factory=lambda: config.SEARCH_MIN_SCORE)
    max_results: int = Field(default_factory=lambda: config.SEARCH_MAX_RESULTS)


class SearchResult(Record, Generic[T]):
    item: T
    relevance_score: int = 0
    matched_fields: List[str] = []
    highlights: List[str] = []


class SearchIntent(Record):
    type: IntentType = "general"
    confidence: int = 50
