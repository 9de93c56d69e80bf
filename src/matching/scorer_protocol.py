"""Protocols for pluggable scorers and profile stores.

MatchScorer is the heuristic scorer; ``SqlProfileStore`` is the
database-backed store. Anything satisfying these protocols can be
passed to the finders instead.
"""
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from src.matching.match_scorer import MatchResult
from src.matching.profile import OfferedSkill, Profile


@runtime_checkable
class Scorer(Protocol):
    """Protocol for pairwise match scorers."""

    def score(
        self,
        requester: Profile,
        candidate: Profile,
        now: Optional[datetime] = None,
    ) -> MatchResult:
        """Score a candidate from the requester's point of view."""
        ...


@runtime_checkable
class ProfileStore(Protocol):
    """Read-only source of profile snapshots.

    Implementations return profiles with their skills already loaded.
    Errors raised while reading propagate to the caller unchanged.
    """

    def get_profile(self, user_id: str) -> Optional[Profile]:
        """Return the profile for ``user_id`` or None."""
        ...

    def list_active_profiles(
        self,
        exclude_id: str,
        limit: Optional[int] = None,
    ) -> list[Profile]:
        """Return active profiles other than ``exclude_id``, ordered by id."""
        ...

    def list_offered_skills(self, exclude_owner_id: str) -> list[OfferedSkill]:
        """Return every offered skill, with its owner, not owned by ``exclude_owner_id``."""
        ...
