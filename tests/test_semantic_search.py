"""
Tests for text normalization, synonym expansion and semantic search
"""
import pytest

from pecem_ai.models.search_models import SearchOptions
from pecem_ai.services.semantic_search import (
    analyze_search_intent,
    autocomplete,
    calculate_array_field_score,
    calculate_field_score,
    extract_keywords,
    fuzzy_match,
    search_courses,
    search_jobs,
    suggest_related_terms,
)
from pecem_ai.services.skill_normalizer import get_synonyms, normalize_text, skills_overlap


class TestNormalization:
    """Text normalization and synonym lookup"""

    def test_normalize(self):
        """Accents, punctuation and extra spaces are removed"""
        assert normalize_text("  Operação,   Portuária! ") == "operacao portuaria"
        assert normalize_text("NR-10") == "nr 10"
        assert normalize_text("") == ""

    @pytest.mark.parametrize("text", [
        "Manutenção Elétrica (NR-10)",
        "Logística & Supply-Chain",
        "   ÁÉÍÓÚ ãõ ç   ",
    ])
    def test_normalize_is_idempotent(self, text):
        """Normalizing twice changes nothing"""
        once = normalize_text(text)
        assert normalize_text(once) == once

    def test_direct_synonyms(self):
        """Direct key lookup"""
        assert get_synonyms("empilhadeira") == ["reach stacker", "operador", "movimentacao", "carga", "armazem"]

    def test_accented_key(self):
        """Accented table keys match normalized terms"""
        assert "eletricista" in get_synonyms("Elétrica")

    def test_reverse_synonyms(self):
        """A listed synonym maps back to its key and siblings"""
        assert get_synonyms("reach stacker") == ["empilhadeira", "operador", "movimentacao", "carga", "armazem"]

    def test_unknown_term(self):
        """Unknown terms have no synonyms"""
        assert get_synonyms("astronauta") == []

    def test_skills_overlap(self):
        """Containment either way, never on blanks"""
        assert skills_overlap("Excel", "excel avançado")
        assert skills_overlap("Operação de Empilhadeira", "Empilhadeira")
        assert not skills_overlap("", "Excel")
        assert not skills_overlap("Solda", "Excel")


class TestFieldScoring:
    """Per-term tiers: exact, fuzzy, synonym"""

    def test_fuzzy_match(self):
        """Positional mismatches within the allowance"""
        assert fuzzy_match("operadur de carga", "operador")
        assert fuzzy_match("empilhadeiras", "empilhadeira")
        assert not fuzzy_match("acrga pesada", "carga")
        assert not fuzzy_match("nr 10", "nr")
        assert not fuzzy_match("op", "operador")

    def test_tiers(self):
        """Exact 100, fuzzy 80, synonym 70"""
        assert calculate_field_score("Operador de Empilhadeira", ["empilhadeira"]) == 100
        assert calculate_field_score("Operador de Empilhadera", ["empilhadeira"]) == pytest.approx(80)
        assert calculate_field_score("Reach Stacker", ["empilhadeira"]) == pytest.approx(70)
        assert calculate_field_score("Excel", ["empilhadeira"]) == 0

    def test_tiers_can_be_disabled(self):
        """Disabled tiers do not contribute"""
        assert calculate_field_score("Operador de Empilhadera", ["empilhadeira"], fuzzy=False, synonyms=False) == 0
        assert calculate_field_score("Reach Stacker", ["empilhadeira"], synonyms=False) == 0

    def test_partial_terms(self):
        """Score is averaged over the query terms"""
        assert calculate_field_score("Curso de Excel", ["excel", "solda"]) == 50

    def test_array_field(self):
        """Any array item can satisfy a term"""
        assert calculate_array_field_score(["Excel", "NR-11"], ["nr", "excel"]) == 100

    def test_no_terms(self):
        """An empty query scores zero"""
        assert calculate_field_score("Excel", []) == 0


class TestSearch:
    """Course and job search"""

    def test_empilhadeira_finds_synonym_only_courses(self, make_course):
        """Synonym expansion surfaces courses without the literal word"""
        reach = make_course(
            id="reach",
            title="Reach Stacker Avançado",
            description="Operação de reach stacker no porto",
            tags=["reach stacker"],
        )
        excel = make_course(id="excel", title="Excel Básico", description="Planilhas")

        results = search_courses("empilhadeira", [reach, excel])

        assert [r.item.id for r in results] == ["reach"]
        assert results[0].relevance_score == 60
        assert results[0].matched_fields == ["título", "descrição", "tags"]
        assert results[0].highlights == ["Reach Stacker Avançado"]

    def test_empty_query(self, make_course):
        """No terms, no results"""
        assert search_courses("", [make_course()]) == []
        assert search_courses("  !! ", [make_course()]) == []

    def test_ranked_and_capped(self, make_course):
        """Results are sorted by relevance and truncated"""
        courses = [
            make_course(id="desc", title="Básico", description="Excel para iniciantes"),
            make_course(id="title", title="Excel", description="Excel completo", tags=["excel"]),
        ]
        results = search_courses("excel", courses)
        assert [r.item.id for r in results] == ["title", "desc"]

        capped = search_courses("excel", courses, SearchOptions(max_results=1))
        assert [r.item.id for r in capped] == ["title"]

    def test_instructor_is_exact_only(self, make_course):
        """Instructor names are not fuzzy matched"""
        course = make_course(instructor="Carlos Menezes")
        exact = search_courses("menezes", [course], SearchOptions(min_score=1))
        fuzzy = search_courses("menezis", [course], SearchOptions(min_score=1))

        assert exact[0].matched_fields == ["instrutor"]
        assert exact[0].relevance_score == 10
        assert fuzzy == []

    def test_job_fields(self, make_job):
        """Job matches report the fields they hit"""
        job = make_job(requiredSkills=["Empilhadeira"], location="Caucaia, CE")
        results = search_jobs("empilhadeira", [job])

        assert results[0].matched_fields == ["título", "descrição", "habilidades obrigatórias"]
        assert results[0].highlights == ["Operador de Empilhadeira"]
        assert results[0].relevance_score == 80

    def test_job_location_exact_only(self, make_job):
        """Location contributes only on literal matches"""
        job = make_job(location="Caucaia, CE")
        results = search_jobs("caucaia", [job], SearchOptions(min_score=1))
        assert results[0].matched_fields == ["localização"]
        assert results[0].relevance_score == 10


class TestQueryHelpers:
    """Keywords, related terms, autocomplete and intent"""

    def test_extract_keywords(self):
        """Stop words and short words are dropped"""
        assert extract_keywords("Curso de operação para a empilhadeira") == ["curso", "operacao", "empilhadeira"]

    def test_suggest_related_terms(self):
        """At most five related terms"""
        assert suggest_related_terms("empilhadeira portuário") == [
            "reach stacker", "operador", "movimentacao", "carga", "armazem",
        ]
        assert suggest_related_terms("de a") == []

    def test_autocomplete(self, make_course, make_job):
        """Prefix title words and containing tags/skills"""
        course = make_course(title="Operação Portuária", tags=["Operador Logístico"])
        job = make_job(title="Operador de Empilhadeira", requiredSkills=["Operação de guindaste"])

        suggestions = autocomplete("oper", [course], [job])

        assert suggestions == [
            "operacao", "Operador Logístico", "operador", "Operação de guindaste",
        ]

    def test_autocomplete_too_short(self, make_course):
        """Fewer than two characters gives nothing"""
        assert autocomplete("o", [make_course(title="Operação")], []) == []

    def test_autocomplete_cap(self, make_course):
        """At most eight suggestions"""
        courses = [make_course(id=str(i), title=f"excel{i} avançado") for i in range(12)]
        assert len(autocomplete("ex", courses, [])) == 8

    @pytest.mark.parametrize("query, intent, confidence", [
        ("curso de empilhadeira", "course", 40),
        ("vaga de emprego", "job", 80),
        ("certificação NR-10", "certification", 40),
        ("minha habilidade", "skill", 40),
        ("curso ou vaga", "course", 40),
        ("porto do pecém", "general", 50),
    ])
    def test_intent(self, query, intent, confidence):
        """Most keyword hits wins, ties follow category order"""
        result = analyze_search_intent(query)
        assert (result.type, result.confidence) == (intent, confidence)
