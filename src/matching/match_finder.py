"""Bidirectional match search over the active candidate pool."""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from src.matching.exceptions import NotFoundError
from src.matching.match_scorer import MatchResult, MatchScorer
from src.matching.profile import Profile, SkillCategory
from src.matching.scorer_protocol import ProfileStore, Scorer

logger = logging.getLogger(__name__)


class MatchFilters(BaseModel):
    """Optional post-sort filters. All set filters must pass."""

    category: Optional[SkillCategory] = Field(
        default=None,
        description="Keep results with a complementary skill in this category",
    )
    min_rating: Optional[float] = Field(
        default=None,
        ge=0,
        le=5,
        description="Keep results whose candidate rating is at least this value",
    )
    location: Optional[str] = Field(
        default=None,
        description="Keep results whose candidate city or country equals this value",
    )

    @field_validator("location", mode="before")
    @classmethod
    def blank_location_is_unset(cls, v):
        """Treat empty or whitespace-only locations as no filter."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class MatchFinder:
    """Find, rank and filter exchange partners for a user."""

    def __init__(
        self,
        store: ProfileStore,
        scorer: Optional[Scorer] = None,
        max_workers: int = 1,
    ):
        """
        Initialize match finder.

        Args:
            store: Source of profile snapshots
            scorer: Pairwise scorer (defaults to MatchScorer with default points)
            max_workers: Threads used to score candidates (1 = sequential)
        """
        self.store = store
        self.scorer = scorer or MatchScorer()
        self.max_workers = max_workers

    def find_matches(
        self,
        user_id: str,
        filters: Union[MatchFilters, dict, None] = None,
        now: Optional[datetime] = None,
    ) -> list[MatchResult]:
        """
        Find partners whose skills complement the user's.

        Results are sorted by score descending, then candidate id ascending.

        Args:
            user_id: Requesting user's id
            filters: MatchFilters or a dict of its fields
            now: Evaluation time for recency bonuses (defaults to current UTC time)

        Returns:
            Filtered list of MatchResult, empty if nothing matches

        Raises:
            NotFoundError: If user_id does not resolve to a profile
            pydantic.ValidationError: If a filter value is invalid
        """
        if isinstance(filters, dict):
            filters = MatchFilters.model_validate(filters)

        requester = self.store.get_profile(user_id)
        if requester is None:
            logger.warning("Match search for unknown user %s", user_id)
            raise NotFoundError(user_id)

        candidates = self.store.list_active_profiles(exclude_id=user_id)
        now = now or datetime.now(timezone.utc)

        scored = self._score_candidates(requester, candidates, now)

        # Zero means no basis for a match
        matches = [m for m in scored if m.score > 0]
        matches.sort(key=lambda m: (-m.score, m.candidate.id))

        if filters is not None:
            matches = self.apply_filters(matches, filters)

        logger.debug(
            "User %s: %d candidates, %d matches returned",
            user_id,
            len(candidates),
            len(matches),
        )
        return matches

    def _score_candidates(
        self,
        requester: Profile,
        candidates: list[Profile],
        now: datetime,
    ) -> list[MatchResult]:
        """Score every candidate, keeping candidate order."""
        if self.max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                return list(pool.map(lambda c: self.scorer.score(requester, c, now), candidates))

        return [self.scorer.score(requester, c, now) for c in candidates]

    @staticmethod
    def apply_filters(
        matches: list[MatchResult],
        filters: MatchFilters,
    ) -> list[MatchResult]:
        """Apply the set filters to already ranked matches, keeping order."""
        filtered = matches

        if filters.category is not None:
            filtered = [
                m for m in filtered
                if any(s.category == filters.category for s in m.complementary_skills)
            ]

        if filters.min_rating is not None:
            filtered = [
                m for m in filtered
                if (m.candidate.rating or 0.0) >= filters.min_rating
            ]

        if filters.location:
            filtered = [
                m for m in filtered
                if m.candidate.location is not None and m.candidate.location.matches(filters.location)
            ]

        return filtered
