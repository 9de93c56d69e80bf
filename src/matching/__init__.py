"""Skill exchange matching and recommendation engine."""
from .engine import MatchingEngine, get_engine, load_scorer
from .exceptions import MatchingError, NotFoundError
from .match_finder import MatchFilters, MatchFinder
from .match_scorer import MatchResult, MatchScorer, ScoringPoints
from .profile import (
    Location,
    Profile,
    Skill,
    SkillCategory,
    SkillLevel,
    SkillType,
    UserBrief,
    UserSummary,
)
from .recommendations import RecommendationFinder, RecommendationResult
from .similarity import SimilarityFinder, SimilarityResult

__all__ = [
    "MatchingEngine",
    "get_engine",
    "load_scorer",
    "MatchingError",
    "NotFoundError",
    "MatchFilters",
    "MatchFinder",
    "MatchResult",
    "MatchScorer",
    "ScoringPoints",
    "Location",
    "Profile",
    "Skill",
    "SkillCategory",
    "SkillLevel",
    "SkillType",
    "UserBrief",
    "UserSummary",
    "RecommendationFinder",
    "RecommendationResult",
    "SimilarityFinder",
    "SimilarityResult",
]
