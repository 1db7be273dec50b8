# pecem_ai/services/semantic_search.py
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, TypeVar

from loguru import logger

from pecem_ai.models.course_models import Course
from pecem_ai.models.job_models import Job
from pecem_ai.models.search_models import SearchIntent, SearchOptions, SearchResult
from pecem_ai.services.score_utils import round_score
from pecem_ai.services.skill_normalizer import (
    NORMALIZED_INTENT_KEYWORDS,
    STOP_WORDS,
    get_synonyms,
    normalize_text,
)

T = TypeVar("T")

EXACT_WEIGHT = 1.0
FUZZY_WEIGHT = 0.8
SYNONYM_WEIGHT = 0.7

FUZZY_MIN_TERM_LENGTH = 4
FUZZY_MAX_LENGTH_DIFF = 2

AUTOCOMPLETE_MIN_CHARS = 2
AUTOCOMPLETE_LIMIT = 8
RELATED_TERMS_LIMIT = 5
INTENT_CONFIDENCE_PER_HIT = 40


class SearchField(NamedTuple):
    """One weighted field of a searchable record."""
    label: str
    weight: float
    value: Callable
    is_array: bool = False
    # Exact-only fields skip fuzzy and synonym matching
    exact_only: bool = False
    highlight: bool = False


COURSE_FIELDS = [
    SearchField("título", 0.40, lambda c: c.title, highlight=True),
    SearchField("descrição", 0.25, lambda c: c.description),
    SearchField("tags", 0.20, lambda c: c.tags, is_array=True),
    SearchField("categoria", 0.15, lambda c: c.category),
    SearchField("instrutor", 0.10, lambda c: c.instructor, exact_only=True),
]

JOB_FIELDS = [
    SearchField("título", 0.35, lambda j: j.title, highlight=True),
    SearchField("descrição", 0.20, lambda j: j.description),
    SearchField("habilidades obrigatórias", 0.25, lambda j: j.required_skills, is_array=True),
    SearchField("habilidades desejadas", 0.10, lambda j: j.desired_skills, is_array=True),
    SearchField("categoria", 0.10, lambda j: j.category),
    SearchField("localização", 0.10, lambda j: j.location, exact_only=True),
]


def split_terms(query: str) -> List[str]:
    # An empty query yields no terms
    return normalize_text(query).split()


# -----------------------------
# Term matching
# -----------------------------
def fuzzy_match(text: str, term: str) -> bool:
    """
    Tolerant token comparison: some whitespace token of `text` has a length
    within 2 of `term` and differs from it in at most 1 position (terms of up
    to 6 chars) or 2 positions (longer terms). Positions are compared up to
    the shorter length; this is not an edit distance.
    """
    if len(term) < FUZZY_MIN_TERM_LENGTH:
        return False

    max_diff = 1 if len(term) <= 6 else 2
    for word in text.split():
        if abs(len(word) - len(term)) > FUZZY_MAX_LENGTH_DIFF:
            continue
        differences = sum(1 for a, b in zip(word, term) if a != b)
        if differences <= max_diff:
            return True
    return False


def _term_weight(values: Sequence[str], term: str, fuzzy: bool, synonyms: bool) -> float:
    """Best tier a term reaches against normalized values: exact, then fuzzy, then synonym."""
    if any(term in v for v in values):
        return EXACT_WEIGHT
    if fuzzy and any(fuzzy_match(v, term) for v in values):
        return FUZZY_WEIGHT
    if synonyms:
        related = get_synonyms(term)
        if any(syn in v for v in values for syn in related):
            return SYNONYM_WEIGHT
    return 0.0


def _score_values(values: Sequence[str], terms: Sequence[str], fuzzy: bool, synonyms: bool) -> float:
    normalized = [normalize_text(v) for v in values]
    total = sum(_term_weight(normalized, term, fuzzy, synonyms) for term in terms)
    return total / max(1, len(terms)) * 100


def calculate_field_score(field_value: str, terms: Sequence[str], fuzzy: bool = True, synonyms: bool = True) -> float:
    """0-100 share of query terms found in a text field (exact 1.0, fuzzy 0.8, synonym 0.7)."""
    return _score_values([field_value or ""], terms, fuzzy, synonyms)


def calculate_array_field_score(
    field_values: Sequence[str], terms: Sequence[str], fuzzy: bool = True, synonyms: bool = True
) -> float:
    """Same as calculate_field_score, a term counts when any array item matches it."""
    return _score_values(field_values, terms, fuzzy, synonyms)


# -----------------------------
# Search
# -----------------------------
def _score_item(item: T, fields: Sequence[SearchField], terms: Sequence[str], options: SearchOptions) -> SearchResult:
    score = 0.0
    matched_fields = []
    highlights = []

    for field in fields:
        fuzzy = options.fuzzy_match and not field.exact_only
        synonyms = options.synonyms and not field.exact_only
        value = field.value(item)
        if field.is_array:
            field_score = calculate_array_field_score(value, terms, fuzzy, synonyms)
        else:
            field_score = calculate_field_score(value, terms, fuzzy, synonyms)

        if field_score > 0:
            score += field_score * field.weight
            matched_fields.append(field.label)
            if field.highlight:
                highlights.append(value)

    return SearchResult(
        item=item,
        relevance_score=min(100, round_score(score)),
        matched_fields=matched_fields,
        highlights=highlights,
    )


def _search(
    query: str, items: Sequence[T], fields: Sequence[SearchField], options: Optional[SearchOptions]
) -> List[SearchResult]:
    options = options or SearchOptions()
    terms = split_terms(query)

    results = [_score_item(item, fields, terms, options) for item in items]
    ranked = sorted(
        (r for r in results if r.relevance_score >= options.min_score),
        key=lambda r: r.relevance_score,
        reverse=True,
    )
    logger.debug(f"🔎 '{query}' -> {len(ranked)}/{len(items)} hits (terms={terms})")
    return ranked[:max(0, options.max_results)]


def search_courses(
    query: str, courses: Sequence[Course], options: Optional[SearchOptions] = None
) -> List[SearchResult[Course]]:
    """
    Weighted relevance over title 40%, description 25%, tags 20%,
    category 15% and instructor 10% (instructor exact match only).
    """
    return _search(query, courses, COURSE_FIELDS, options)


def search_jobs(
    query: str, jobs: Sequence[Job], options: Optional[SearchOptions] = None
) -> List[SearchResult[Job]]:
    """
    Weighted relevance over title 35%, description 20%, required skills 25%,
    desired skills 10%, category 10% and location 10% (location exact match only).
    """
    return _search(query, jobs, JOB_FIELDS, options)


# -----------------------------
# Query helpers
# -----------------------------
def extract_keywords(query: str) -> List[str]:
    return [w for w in split_terms(query) if len(w) > 2 and w not in STOP_WORDS]


def suggest_related_terms(query: str) -> List[str]:
    related: Dict[str, None] = {}
    for keyword in extract_keywords(query):
        for synonym in get_synonyms(keyword):
            related.setdefault(synonym)
    return list(related)[:RELATED_TERMS_LIMIT]


def autocomplete(partial: str, courses: Sequence[Course], jobs: Sequence[Job]) -> List[str]:
    """
    Title words that extend the typed prefix, plus course tags and job skills
    containing it (original casing kept). Deduplicated, first seen first.
    """
    normalized = normalize_text(partial)
    if len(normalized) < AUTOCOMPLETE_MIN_CHARS:
        return []

    suggestions: Dict[str, None] = {}

    def add_title_words(title: str):
        for word in normalize_text(title).split():
            if word.startswith(normalized) and len(word) > len(normalized):
                suggestions.setdefault(word)

    def add_containing(values: Sequence[str]):
        for value in values:
            if normalized in normalize_text(value):
                suggestions.setdefault(value)

    for course in courses:
        add_title_words(course.title)
        add_containing(course.tags)

    for job in jobs:
        add_title_words(job.title)
        add_containing([*job.required_skills, *job.desired_skills])

    return list(suggestions)[:AUTOCOMPLETE_LIMIT]


def analyze_search_intent(query: str) -> SearchIntent:
    """Category with the most keyword hits (ties: course, job, certification, skill)."""
    normalized = normalize_text(query)
    hits = {
        intent: sum(1 for k in keywords if k in normalized)
        for intent, keywords in NORMALIZED_INTENT_KEYWORDS.items()
    }

    best = max(hits.values(), default=0)
    if best == 0:
        return SearchIntent(type="general", confidence=50)

    intent = next(name for name, count in hits.items() if count == best)
    return SearchIntent(type=intent, confidence=min(100, best * INTENT_CONFIDENCE_PER_HIT))
