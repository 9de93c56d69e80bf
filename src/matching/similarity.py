"""Similar-user search by shared offered-skill categories."""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from src.matching.profile import SkillCategory, UserBrief
from src.matching.scorer_protocol import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class SimilarityResult:
    """A user who offers skills in the same categories as the requester."""

    candidate: UserBrief
    similarity_score: int
    common_categories: list[SkillCategory] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.candidate.to_dict(),
            "similarity_score": self.similarity_score,
            "common_categories": [c.value for c in self.common_categories],
        }


class SimilarityFinder:
    """Rank users by overlap with the requester's offered-skill categories.

    The candidate pool is capped at ``pool_multiplier * limit`` profiles
    before scoring. This keeps each query a fixed size at the cost of
    completeness: the result is the best of the sampled pool, not the top
    ``limit`` of the whole population. Pass ``pool_multiplier=None`` (or 0)
    to scan every active profile.
    """

    def __init__(self, store: ProfileStore, pool_multiplier: Optional[int] = 2):
        self.store = store
        self.pool_multiplier = pool_multiplier

    def find_similar_users(self, user_id: str, limit: int = 10) -> list[SimilarityResult]:
        """
        Find users offering skills in the same categories.

        Args:
            user_id: Requesting user's id
            limit: Maximum number of results

        Returns:
            Results sorted by similarity descending, then candidate id. Empty
            when the user is unknown or offers nothing.
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        requester = self.store.get_profile(user_id)
        if requester is None or not requester.skills_offered:
            return []

        # Repeated categories count once per occurrence
        requester_categories = [s.category for s in requester.skills_offered]

        pool_limit = limit * self.pool_multiplier if self.pool_multiplier else None
        candidates = self.store.list_active_profiles(exclude_id=user_id, limit=pool_limit)

        results = []
        for candidate in candidates:
            candidate_categories = {s.category for s in candidate.skills_offered}
            common = [c for c in requester_categories if c in candidate_categories]
            if not common:
                continue
            results.append(
                SimilarityResult(
                    candidate=UserBrief.from_profile(candidate),
                    similarity_score=len(common),
                    common_categories=common,
                )
            )

        results.sort(key=lambda r: (-r.similarity_score, r.candidate.id))

        logger.debug(
            "User %s: %d of %d sampled candidates similar",
            user_id,
            len(results),
            len(candidates),
        )
        return results[:limit]
