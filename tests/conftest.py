"""Pytest fixtures for matching engine tests."""
import itertools
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.matching.profile import Location, Profile, Skill, SkillCategory, SkillType
from src.persistence.models import Base, User
from src.persistence.models import Skill as SkillRow
from src.persistence.profile_store import SqlProfileStore

# Fixed evaluation time so recency bonuses are reproducible
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _skill_spec(entry) -> tuple[str, SkillCategory, int]:
    """Accept "Python", ("Python", "Programming") or ("Python", "Programming", 7)."""
    if isinstance(entry, str):
        return entry, SkillCategory.OTHER, 0
    name, category, *rest = entry
    return name, SkillCategory(category), rest[0] if rest else 0


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def store(test_db):
    """Profile store over the test database."""
    return SqlProfileStore(test_db)


@pytest.fixture
def user_factory(test_db):
    """
    Factory fixture to persist users with skills.

    Usage:
        alice = user_factory("alice", offers=[("Python", "Programming")], wants=["Guitar"])
    """

    def _create_user(
        user_id: str,
        offers=(),
        wants=(),
        city=None,
        country=None,
        rating=None,
        last_active=None,
        is_active: bool = True,
    ) -> User:
        user = User(
            id=user_id,
            name=user_id.title(),
            email=f"{user_id}@example.com",
            city=city,
            country=country,
            rating=rating,
            last_active=last_active,
            is_active=is_active,
        )
        skills = []
        for entries, skill_type in ((offers, SkillType.OFFER), (wants, SkillType.WANT)):
            for entry in entries:
                name, category, popularity = _skill_spec(entry)
                skills.append(
                    SkillRow(
                        name=name,
                        category=category,
                        type=skill_type,
                        popularity=popularity,
                    )
                )
        user.skills = skills
        test_db.add(user)
        test_db.commit()
        return user

    return _create_user


# =============================================================================
# SNAPSHOT FIXTURES
# =============================================================================


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def profile_factory():
    """
    Factory fixture for in-memory Profile snapshots.

    Usage:
        a = profile_factory("a", offers=["Python"], wants=["Guitar"], city="Berlin")
    """
    counter = itertools.count(1)

    def _create_profile(
        user_id: str,
        offers=(),
        wants=(),
        city=None,
        country=None,
        rating=None,
        last_active_at=None,
    ) -> Profile:
        def build(entries, skill_type):
            skills = []
            for entry in entries:
                name, category, popularity = _skill_spec(entry)
                skills.append(
                    Skill(
                        id=f"{user_id}-{next(counter)}",
                        name=name,
                        category=category,
                        owner_id=user_id,
                        type=skill_type,
                        popularity=popularity,
                    )
                )
            return tuple(skills)

        location = Location(city=city, country=country) if (city or country) else None
        return Profile(
            id=user_id,
            name=user_id.title(),
            skills_offered=build(offers, SkillType.OFFER),
            skills_wanted=build(wants, SkillType.WANT),
            location=location,
            rating=rating,
            last_active_at=last_active_at,
        )

    return _create_profile
