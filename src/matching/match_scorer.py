"""Pairwise compatibility scoring between two skill-exchange profiles."""
import logging
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from src.matching.profile import Profile, Skill, SkillCategory, UserSummary

logger = logging.getLogger(__name__)

THEY_OFFER = "they_offer"
YOU_OFFER = "you_offer"

REASON_SEPARATOR = " • "


@dataclass(frozen=True)
class ComplementarySkill:
    """A skill one party offers that the other party wants."""

    name: str
    category: SkillCategory
    direction: str  # they_offer or you_offer

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "category": self.category.value, "direction": self.direction}


@dataclass(frozen=True)
class CommonInterest:
    """A skill both parties list under the same role."""

    name: str
    type: str  # offer or want

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type}


@dataclass
class MatchResult:
    """How attractive a candidate is to the requesting user."""

    candidate: UserSummary
    score: int
    reason: list[str] = field(default_factory=list)
    common_interests: list[CommonInterest] = field(default_factory=list)
    complementary_skills: list[ComplementarySkill] = field(default_factory=list)

    @property
    def reason_text(self) -> str:
        """Contributing factors joined for display."""
        return REASON_SEPARATOR.join(self.reason)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.candidate.to_dict(),
            "match_score": self.score,
            "match_reason": self.reason_text,
            "common_interests": [c.to_dict() for c in self.common_interests],
            "complementary_skills": [c.to_dict() for c in self.complementary_skills],
        }


@dataclass(frozen=True)
class ScoringPoints:
    """Point values and thresholds of the additive scoring model."""

    bidirectional_points: int = 100
    one_way_points: int = 50
    common_skill_points: int = 10
    same_city_points: int = 15
    high_rating_points: int = 10
    high_rating_threshold: float = 4.5
    recent_activity_points: int = 5
    recent_activity_hours: float = 24

    @classmethod
    def from_mapping(cls, data: Optional[dict]) -> "ScoringPoints":
        """Build from a mapping, ignoring unknown keys and keeping defaults for missing ones."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown scoring keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})


class MatchScorer:
    """Score a candidate profile from the point of view of a requester.

    The score is directional: the rating and recency bonuses read the
    candidate only, so ``score(a, b)`` and ``score(b, a)`` generally differ.
    """

    def __init__(self, points: Optional[ScoringPoints] = None):
        self.points = points or ScoringPoints()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MatchScorer":
        """
        Create a scorer from a YAML file with a top-level ``scoring`` mapping.

        Args:
            path: Path to the scoring YAML file

        Returns:
            MatchScorer using the configured points
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(ScoringPoints.from_mapping(data.get("scoring")))

    def score(
        self,
        requester: Profile,
        candidate: Profile,
        now: Optional[datetime] = None,
    ) -> MatchResult:
        """
        Score ``candidate`` for ``requester``.

        Args:
            requester: Profile of the querying user
            candidate: Profile being evaluated
            now: Evaluation time for the recency bonus (defaults to current UTC time)

        Returns:
            MatchResult with the summed score and its contributing factors
        """
        points = self.points
        score = 0
        reason: list[str] = []
        common_interests: list[CommonInterest] = []
        complementary: list[ComplementarySkill] = []

        # === COMPLEMENTARY SKILLS ===
        they_offer_for_me = [
            s for s in candidate.skills_offered if s.name_key in requester.wanted_names
        ]
        i_offer_for_them = [
            s for s in requester.skills_offered if s.name_key in candidate.wanted_names
        ]

        if they_offer_for_me and i_offer_for_them:
            score += points.bidirectional_points * min(len(they_offer_for_me), len(i_offer_for_them))
            reason.append("Perfect bidirectional skill match")
            complementary.extend(_tag(they_offer_for_me, THEY_OFFER))
            complementary.extend(_tag(i_offer_for_them, YOU_OFFER))
        elif they_offer_for_me:
            score += points.one_way_points * len(they_offer_for_me)
            reason.append("They can teach you skills you want to learn")
            complementary.extend(_tag(they_offer_for_me, THEY_OFFER))
        elif i_offer_for_them:
            score += points.one_way_points * len(i_offer_for_them)
            reason.append("You can teach them skills they want to learn")
            complementary.extend(_tag(i_offer_for_them, YOU_OFFER))

        # === COMMON INTERESTS ===
        common_offered = [
            s for s in requester.skills_offered if s.name_key in candidate.offered_names
        ]
        common_wanted = [
            s for s in requester.skills_wanted if s.name_key in candidate.wanted_names
        ]

        if common_offered:
            score += points.common_skill_points * len(common_offered)
            reason.append(f"{len(common_offered)} common skill(s) you both offer")
            common_interests.extend(CommonInterest(s.name, "offer") for s in common_offered)

        if common_wanted:
            score += points.common_skill_points * len(common_wanted)
            reason.append(f"{len(common_wanted)} common skill(s) you both want to learn")
            common_interests.extend(CommonInterest(s.name, "want") for s in common_wanted)

        # === OTHER FACTORS ===
        if requester.location is not None and requester.location.same_city(candidate.location):
            score += points.same_city_points
            reason.append("Same location")

        if candidate.rating_or_zero >= points.high_rating_threshold:
            score += points.high_rating_points
            reason.append("Highly rated user")

        if self._recently_active(candidate, now):
            score += points.recent_activity_points
            reason.append("Recently active")

        return MatchResult(
            candidate=UserSummary.from_profile(candidate),
            score=score,
            reason=reason,
            common_interests=common_interests,
            complementary_skills=complementary,
        )

    def _recently_active(self, candidate: Profile, now: Optional[datetime]) -> bool:
        """Check whether the candidate was active inside the recency window."""
        if candidate.last_active_at is None:
            return False

        now = _as_utc(now or datetime.now(timezone.utc))
        cutoff = now - timedelta(hours=self.points.recent_activity_hours)
        return _as_utc(candidate.last_active_at) > cutoff


def _tag(skills: list[Skill], direction: str) -> list[ComplementarySkill]:
    return [ComplementarySkill(s.name, s.category, direction) for s in skills]


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
