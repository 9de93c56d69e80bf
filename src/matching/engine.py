"""Matching engine facade exposing the three query operations."""
import logging
from typing import Optional, Union

from config.settings import Settings, settings as default_settings
from src.matching.match_finder import MatchFilters, MatchFinder
from src.matching.match_scorer import MatchResult, MatchScorer
from src.matching.recommendations import RecommendationFinder, RecommendationResult
from src.matching.scorer_protocol import ProfileStore, Scorer
from src.matching.similarity import SimilarityFinder, SimilarityResult

logger = logging.getLogger(__name__)


class MatchingEngine:
    """Match, similarity and recommendation queries over one profile store.

    Queries never modify the store. ``find_matches`` scores candidates from
    the requester's point of view; see MatchScorer for the directional
    contract.
    """

    def __init__(
        self,
        store: ProfileStore,
        scorer: Optional[Scorer] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.store = store
        self.matches = MatchFinder(
            store,
            scorer=scorer,
            max_workers=self.settings.scoring_workers,
        )
        self.similarity = SimilarityFinder(
            store,
            pool_multiplier=self.settings.similarity_pool_multiplier,
        )
        self.recommendations = RecommendationFinder(
            store,
            limit=self.settings.recommendation_limit,
        )

    def find_matches(
        self,
        user_id: str,
        filters: Union[MatchFilters, dict, None] = None,
    ) -> list[MatchResult]:
        return self.matches.find_matches(user_id, filters)

    def find_similar_users(
        self,
        user_id: str,
        limit: Optional[int] = None,
    ) -> list[SimilarityResult]:
        limit = limit if limit is not None else self.settings.similar_users_limit
        return self.similarity.find_similar_users(user_id, limit=limit)

    def get_skill_recommendations(self, user_id: str) -> list[RecommendationResult]:
        return self.recommendations.get_skill_recommendations(user_id)


def load_scorer(settings: Optional[Settings] = None) -> MatchScorer:
    """Factory: create a MatchScorer from the configured scoring file.

    Uses ``scoring_config_path`` when set, else the bundled
    ``config/scoring.yaml`` when present, else built-in defaults.
    """
    settings = settings or default_settings

    path = settings.scoring_config_path
    if path is None and settings.default_scoring_path.exists():
        path = settings.default_scoring_path

    if path is None:
        return MatchScorer()

    logger.info("Loading scoring points from %s", path)
    return MatchScorer.from_yaml(path)


def get_engine(store: ProfileStore, settings: Optional[Settings] = None) -> MatchingEngine:
    """Factory: create a MatchingEngine wired from settings."""
    settings = settings or default_settings
    return MatchingEngine(store, scorer=load_scorer(settings), settings=settings)
