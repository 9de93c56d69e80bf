"""Tests for pairwise match scoring."""
from datetime import datetime, timedelta

import pytest

from src.matching.match_scorer import (
    CommonInterest,
    ComplementarySkill,
    MatchScorer,
    ScoringPoints,
)
from src.matching.profile import SkillCategory
from src.matching.scorer_protocol import Scorer


@pytest.fixture
def scorer():
    return MatchScorer()


class TestComplementarySkills:
    """Tests for bidirectional and one-way bonuses."""

    def test_no_overlap_scores_zero(self, scorer, profile_factory, now):
        """Disjoint skills, different cities, low rating, inactive: nothing fires."""
        a = profile_factory("a", offers=["Python"], wants=["Guitar"], city="Berlin", rating=3.0)
        b = profile_factory(
            "b",
            offers=["Cooking"],
            wants=["Drawing"],
            city="Paris",
            rating=2.0,
            last_active_at=now - timedelta(days=3),
        )

        result = scorer.score(a, b, now)

        assert result.score == 0
        assert result.reason == []
        assert result.complementary_skills == []
        assert result.common_interests == []

    def test_bidirectional_match(self, scorer, profile_factory, now):
        """A offers Python and wants Guitar, B is the mirror image."""
        a = profile_factory("a", offers=[("Python", "Programming")], wants=[("Guitar", "Music")])
        b = profile_factory("b", offers=[("Guitar", "Music")], wants=[("Python", "Programming")])

        result = scorer.score(a, b, now)

        assert result.score == 100
        assert result.reason == ["Perfect bidirectional skill match"]
        assert ComplementarySkill("Guitar", SkillCategory.MUSIC, "they_offer") in result.complementary_skills
        assert ComplementarySkill("Python", SkillCategory.PROGRAMMING, "you_offer") in result.complementary_skills

    def test_bidirectional_uses_smaller_side(self, scorer, profile_factory, now):
        """Bonus is 100 x min of both directions, but every skill is listed."""
        a = profile_factory("a", offers=["Python", "JavaScript"], wants=["Guitar"])
        b = profile_factory("b", offers=["Guitar"], wants=["python", "javascript"])

        result = scorer.score(a, b, now)

        assert result.score == 100
        assert len(result.complementary_skills) == 3
        directions = [s.direction for s in result.complementary_skills]
        assert directions.count("you_offer") == 2

    def test_one_way_they_offer(self, scorer, profile_factory, now):
        """A wants Spanish, B offers it, A offers nothing B wants."""
        a = profile_factory("a", offers=["Python"], wants=[("Spanish", "Language")])
        b = profile_factory("b", offers=[("Spanish", "Language")], wants=["Guitar"])

        result = scorer.score(a, b, now)

        assert result.score == 50
        assert "They can teach you" in result.reason_text
        assert result.complementary_skills == [
            ComplementarySkill("Spanish", SkillCategory.LANGUAGE, "they_offer")
        ]

    def test_one_way_you_offer(self, scorer, profile_factory, now):
        a = profile_factory("a", offers=["Python", "Rust"], wants=["Guitar"])
        b = profile_factory("b", offers=["Cooking"], wants=["Python", "Rust"])

        result = scorer.score(a, b, now)

        assert result.score == 100  # 50 per skill
        assert "You can teach them" in result.reason_text
        assert all(s.direction == "you_offer" for s in result.complementary_skills)

    def test_complementary_match_is_case_insensitive(self, scorer, profile_factory, now):
        a = profile_factory("a", wants=["SPANISH"])
        b = profile_factory("b", offers=["spanish"])

        assert scorer.score(a, b, now).score == 50

    def test_names_must_match_exactly(self, scorer, profile_factory, now):
        """No fuzzy matching: "Python 3" is not "Python"."""
        a = profile_factory("a", wants=["Python"])
        b = profile_factory("b", offers=["Python 3"])

        assert scorer.score(a, b, now).score == 0


class TestCommonInterests:
    """Tests for shared offered and wanted skills."""

    def test_common_offered_case_insensitive(self, scorer, profile_factory, now):
        a = profile_factory("a", offers=["javascript"])
        b = profile_factory("b", offers=["JavaScript"])

        result = scorer.score(a, b, now)

        assert result.score == 10
        assert result.common_interests == [CommonInterest("javascript", "offer")]

    def test_common_wanted(self, scorer, profile_factory, now):
        a = profile_factory("a", wants=["Chess", "Yoga"])
        b = profile_factory("b", wants=["chess", "yoga"])

        result = scorer.score(a, b, now)

        assert result.score == 20
        assert all(c.type == "want" for c in result.common_interests)
        assert "2 common skill(s) you both want to learn" in result.reason

    def test_common_interests_add_to_complementary(self, scorer, profile_factory, now):
        a = profile_factory("a", offers=["Python", "Drawing"], wants=["Guitar"])
        b = profile_factory("b", offers=["Guitar", "Drawing"], wants=["Python"])

        assert scorer.score(a, b, now).score == 110


class TestProfileBonuses:
    """Tests for location, rating and recency bonuses."""

    def test_same_city_case_insensitive(self, scorer, profile_factory, now):
        a = profile_factory("a", city="Berlin")
        b = profile_factory("b", city="berlin")

        result = scorer.score(a, b, now)

        assert result.score == 15
        assert "Same location" in result.reason

    def test_missing_city_gives_no_bonus(self, scorer, profile_factory, now):
        a = profile_factory("a", country="Germany")
        b = profile_factory("b", city="Berlin", country="Germany")

        assert scorer.score(a, b, now).score == 0
        assert scorer.score(b, a, now).score == 0

    @pytest.mark.parametrize(
        "rating,expected",
        [(4.5, 10), (5.0, 10), (4.49, 0), (None, 0)],
    )
    def test_candidate_rating_bonus(self, scorer, profile_factory, now, rating, expected):
        a = profile_factory("a")
        b = profile_factory("b", rating=rating)

        assert scorer.score(a, b, now).score == expected

    def test_recently_active_candidate(self, scorer, profile_factory, now):
        a = profile_factory("a")
        b = profile_factory("b", last_active_at=now - timedelta(hours=23))

        result = scorer.score(a, b, now)

        assert result.score == 5
        assert result.reason == ["Recently active"]

    def test_stale_or_missing_activity(self, scorer, profile_factory, now):
        a = profile_factory("a")
        stale = profile_factory("b", last_active_at=now - timedelta(hours=25))
        never = profile_factory("c")

        assert scorer.score(a, stale, now).score == 0
        assert scorer.score(a, never, now).score == 0

    def test_naive_timestamps_are_utc(self, scorer, profile_factory, now):
        naive = datetime(2026, 10, 19, 11, 0)  # one hour before now, no tzinfo
        a = profile_factory("a")
        b = profile_factory("b", last_active_at=naive)

        assert scorer.score(a, b, now).score == 5


class TestDirectionalScore:
    """The score reads the candidate's rating and recency, not the requester's."""

    def test_score_is_asymmetric_by_rating_bonus(self, scorer, profile_factory, now):
        a = profile_factory("a", offers=["Python"], wants=["Guitar"], rating=3.0)
        b = profile_factory("b", offers=["Guitar"], wants=["Python"], rating=4.8)

        a_to_b = scorer.score(a, b, now).score
        b_to_a = scorer.score(b, a, now).score

        assert a_to_b != b_to_a
        assert a_to_b - b_to_a == scorer.points.high_rating_points

    def test_candidate_summary_is_returned(self, scorer, profile_factory, now):
        a = profile_factory("a", offers=["Python"])
        b = profile_factory("b", wants=["Python"], city="Lyon", rating=4.0)

        result = scorer.score(a, b, now)

        assert result.candidate.id == "b"
        assert result.candidate.location.city == "Lyon"
        assert result.candidate.rating == 4.0


class TestMatchResultOutput:
    """Tests for display and serialization of results."""

    def test_reason_text_joins_factors(self, scorer, profile_factory, now):
        a = profile_factory("a", offers=["Python"], wants=["Guitar"], city="Oslo")
        b = profile_factory("b", offers=["Guitar"], wants=["Python"], city="Oslo", rating=5.0)

        result = scorer.score(a, b, now)

        assert result.score == 125
        assert result.reason_text == (
            "Perfect bidirectional skill match • Same location • Highly rated user"
        )

    def test_to_dict(self, scorer, profile_factory, now):
        a = profile_factory("a", wants=[("Spanish", "Language")])
        b = profile_factory("b", offers=[("Spanish", "Language")])

        data = scorer.score(a, b, now).to_dict()

        assert data["match_score"] == 50
        assert data["user"]["id"] == "b"
        assert data["complementary_skills"] == [
            {"name": "Spanish", "category": "Language", "direction": "they_offer"}
        ]
        assert data["common_interests"] == []


class TestScoringPoints:
    """Tests for configurable point values."""

    def test_defaults(self):
        points = ScoringPoints()
        assert points.bidirectional_points == 100
        assert points.one_way_points == 50
        assert points.common_skill_points == 10
        assert points.same_city_points == 15
        assert points.high_rating_threshold == 4.5
        assert points.recent_activity_hours == 24

    def test_from_mapping_keeps_defaults_and_ignores_unknown(self):
        points = ScoringPoints.from_mapping({"same_city_points": 30, "bogus": 1})
        assert points.same_city_points == 30
        assert points.one_way_points == 50

    def test_from_yaml(self, tmp_path, profile_factory, now):
        path = tmp_path / "scoring.yaml"
        path.write_text("scoring:\n  one_way_points: 7\n")

        scorer = MatchScorer.from_yaml(path)
        a = profile_factory("a", wants=["Chess"])
        b = profile_factory("b", offers=["Chess"])

        assert scorer.score(a, b, now).score == 7

    def test_from_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "scoring.yaml"
        path.write_text("")

        assert MatchScorer.from_yaml(path).points == ScoringPoints()


class TestScorerProtocol:
    def test_match_scorer_satisfies_protocol(self, scorer):
        assert isinstance(scorer, Scorer)
