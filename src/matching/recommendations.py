"""Skill recommendations ranked by popularity."""
import logging
from dataclasses import dataclass
from typing import Any

from src.matching.exceptions import NotFoundError
from src.matching.profile import Skill, SkillOwner
from src.matching.scorer_protocol import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class RecommendationResult:
    """A popular skill the requester neither offers nor wants yet."""

    skill: Skill
    owner: SkillOwner

    @property
    def popularity(self) -> int:
        return self.skill.popularity

    def to_dict(self) -> dict[str, Any]:
        return {
            "skill": {
                "id": self.skill.id,
                "name": self.skill.name,
                "category": self.skill.category.value,
                "level": self.skill.level.value,
            },
            "user": self.owner.to_dict(),
            "popularity": self.popularity,
        }


class RecommendationFinder:
    """Surface skills offered by others that are new to the requester."""

    def __init__(self, store: ProfileStore, limit: int = 10):
        self.store = store
        self.limit = limit

    def get_skill_recommendations(self, user_id: str) -> list[RecommendationResult]:
        """
        Recommend the most popular offered skills the user does not list.

        Args:
            user_id: Requesting user's id

        Returns:
            Up to ``limit`` results, popularity descending then skill id

        Raises:
            NotFoundError: If user_id does not resolve to a profile
        """
        requester = self.store.get_profile(user_id)
        if requester is None:
            logger.warning("Recommendations requested for unknown user %s", user_id)
            raise NotFoundError(user_id)

        known = requester.offered_names | requester.wanted_names

        results = [
            RecommendationResult(skill=offered.skill, owner=offered.owner)
            for offered in self.store.list_offered_skills(exclude_owner_id=user_id)
            if offered.skill.name_key not in known
        ]
        results.sort(key=lambda r: (-r.popularity, r.skill.id))

        return results[: self.limit]
