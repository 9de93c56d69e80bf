"""Load users and skills from a YAML fixture file."""
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import yaml
from dateutil import parser as dateutil_parser
from sqlalchemy.orm import Session

from src.matching.profile import SkillType
from src.persistence.models import Skill, User

logger = logging.getLogger(__name__)


def _parse_timestamp(value) -> Optional[datetime]:
    """Parse a fixture timestamp into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if not isinstance(value, datetime):
        value = dateutil_parser.parse(str(value))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _build_skills(entries: Optional[list], skill_type: SkillType) -> list[Skill]:
    return [
        Skill(
            name=entry["name"],
            category=entry["category"],
            level=entry.get("level"),
            description=entry.get("description"),
            tags=entry.get("tags") or [],
            verified=entry.get("verified", False),
            popularity=entry.get("popularity", 0),
            type=skill_type.value,
        )
        for entry in entries or []
    ]


def load_fixture(session: Session, path: Union[str, Path]) -> dict[str, int]:
    """
    Insert the users and skills described in a YAML fixture.

    Expected layout::

        users:
          - id: alice
            name: Alice
            city: Berlin
            rating: 4.8
            last_active: 2026-10-18T10:00:00Z
            offers: [{name: Python, category: Programming}]
            wants: [{name: Guitar, category: Music}]

    Args:
        session: Database session
        path: Path to the fixture file

    Returns:
        Counts of inserted users and skills

    Raises:
        ValueError: If a skill category, level or type is not recognized
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    users = 0
    skills = 0
    for entry in data.get("users", []):
        user = User(
            name=entry["name"],
            email=entry.get("email"),
            avatar=entry.get("avatar"),
            bio=entry.get("bio"),
            city=entry.get("city"),
            country=entry.get("country"),
            rating=entry.get("rating"),
            total_reviews=entry.get("total_reviews", 0),
            is_active=entry.get("is_active", True),
            last_active=_parse_timestamp(entry.get("last_active")),
        )
        if entry.get("id") is not None:
            user.id = str(entry["id"])
        user.skills = _build_skills(entry.get("offers"), SkillType.OFFER) + _build_skills(
            entry.get("wants"), SkillType.WANT
        )
        session.add(user)
        users += 1
        skills += len(user.skills)

    session.commit()
    logger.info("Loaded %d users and %d skills from %s", users, skills, path)
    return {"users": users, "skills": skills}
