"""
Tests for course recommendations and the personalized roadmap
"""
import pytest

from pecem_ai.services.course_recommendation import (
    analyze_career_progression,
    analyze_certification_gap,
    analyze_main_area_match,
    analyze_profile_completeness,
    analyze_skills_alignment,
    calculate_recommendation_score,
    get_personalized_roadmap,
    get_recommendations,
)


@pytest.fixture
def forklift_course(make_course):
    return make_course(
        id="forklift",
        title="Operação de Empilhadeira",
        description="Treinamento prático de operação com excel",
        level="basico",
        tags=["NR-11"],
    )


class TestSubAnalyses:
    """Individual additive components"""

    def test_area_match_is_capped(self, make_course):
        """Ten points per keyword, at most 30"""
        course = make_course(
            title="Operação de Empilhadeira",
            description="Equipamentos de logística",
        )
        result = analyze_main_area_match("Operação de Equipamentos", course)
        assert result.score == 30
        assert result.reason == "Alinhado com sua área: Operação de Equipamentos"

    def test_area_without_keywords(self, make_course):
        """Unknown areas never match"""
        assert analyze_main_area_match("Culinária", make_course(title="Operação")).score == 0

    def test_certification_gap(self, make_candidate, make_cert, make_course):
        """NR-tagged courses score when the certification is missing"""
        course = make_course(tags=["NR-11", "Empilhadeira"])
        assert analyze_certification_gap(make_candidate(), course).score == 25

        certified = make_candidate(certifications=[make_cert("NR-11")])
        assert analyze_certification_gap(certified, course).score == 0

    def test_certification_gap_needs_tag(self, make_candidate, make_course):
        """Courses without certification tags never score the gap"""
        assert analyze_certification_gap(make_candidate(), make_course(tags=["Excel"])).score == 0

    def test_skills_alignment(self, make_course):
        """Seven points per skill in the description, at most 20"""
        course = make_course(description="Excel e comunicação para liderança de equipes")
        assert analyze_skills_alignment(["Excel"], course).score == 7
        assert analyze_skills_alignment(["Excel", "Comunicação", "Liderança"], course).score == 20
        assert analyze_skills_alignment(["Solda"], course).score == 0

    @pytest.mark.parametrize("completeness, level, expected", [
        (60, "basico", 15),
        (85, "avancado", 15),
        (60, "avancado", 5),
        (75, "basico", 5),
        (90, "intermediario", 5),
    ])
    def test_profile_completeness(self, make_candidate, make_course, completeness, level, expected):
        """Level fit gives 15, everything else keeps 5"""
        candidate = make_candidate(profileCompleteness=completeness)
        assert analyze_profile_completeness(candidate, make_course(level=level)).score == expected

    def test_career_progression(self, make_course, make_progress):
        """Next-step courses after completing others"""
        one_done = [make_progress("a", "completed")]
        three_done = [make_progress(c, "completed") for c in ("a", "b", "c")]

        assert analyze_career_progression(make_course(level="intermediario"), one_done).score == 10
        assert analyze_career_progression(make_course(level="avancado"), one_done).score == 0
        assert analyze_career_progression(make_course(level="avancado"), three_done).score == 10
        assert analyze_career_progression(make_course(level="basico"), three_done).score == 0
        assert analyze_career_progression(make_course(level="intermediario"), []).score == 0


class TestRecommendationScore:
    """Additive score, priority and the enrolled short-circuit"""

    def test_additive_total(self, make_candidate, forklift_course):
        """Area 20 + gap 25 + skills 7 + profile 15"""
        candidate = make_candidate(profileCompleteness=60, skills=["Excel"])
        result = calculate_recommendation_score(candidate, forklift_course, [])

        assert result.score == 67
        assert result.priority == "medium"
        assert len(result.reasons) == 4

    def test_enrolled_course_scores_zero(self, make_candidate, make_progress, forklift_course):
        """Any progress record short-circuits, whatever its status"""
        progress = [make_progress("forklift", "dropped")]
        result = calculate_recommendation_score(make_candidate(), forklift_course, progress)

        assert result.score == 0
        assert result.reasons == ["Já matriculado"]
        assert result.priority == "low"


class TestGetRecommendations:
    """Ranking, exclusion and limits"""

    def test_excludes_enrolled_and_sorts(self, make_candidate, make_course, make_progress, forklift_course):
        """Enrolled courses never come back and the best comes first"""
        candidate = make_candidate(profileCompleteness=60, skills=["Excel"])
        generic_a = make_course(id="a", title="Primeiros Socorros")
        generic_b = make_course(id="b", title="Inglês Básico")
        enrolled = make_course(id="c", title="Operação de Empilhadeira Avançada", tags=["NR-11"])
        progress = [make_progress("c", "in_progress")]

        results = get_recommendations(candidate, [generic_a, forklift_course, generic_b, enrolled], progress)

        assert [r.course.id for r in results] == ["forklift", "a", "b"]
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_limit(self, make_candidate, make_course):
        """Never more than the limit"""
        courses = [make_course(id=str(i)) for i in range(10)]
        assert len(get_recommendations(make_candidate(), courses, [], limit=3)) == 3
        assert len(get_recommendations(make_candidate(), courses, [])) == 6

    def test_ties_keep_corpus_order(self, make_candidate, make_course):
        """Equal scores keep their original order"""
        courses = [make_course(id=c) for c in ("z", "y", "x")]
        assert [r.course.id for r in get_recommendations(make_candidate(), courses, [])] == ["z", "y", "x"]


class TestPersonalizedRoadmap:
    """Priority buckets with caps"""

    def test_buckets_and_caps(self, make_candidate, make_course):
        """High, medium and low buckets capped at 3, 4 and 5"""
        candidate = make_candidate(profileCompleteness=60, skills=["Excel"])
        high = [
            make_course(
                id=f"high-{i}",
                title="Operação de Empilhadeira e Equipamentos",
                description="Prática com excel",
                level="basico",
                tags=["NR-11"],
            )
            for i in range(4)
        ]
        low = [make_course(id=f"low-{i}") for i in range(6)]

        roadmap = get_personalized_roadmap(candidate, high + low, [])

        assert [r.course.id for r in roadmap.immediate] == ["high-0", "high-1", "high-2"]
        assert roadmap.short_term == []
        assert len(roadmap.long_term) == 5
        assert all(r.priority == "low" for r in roadmap.long_term)
