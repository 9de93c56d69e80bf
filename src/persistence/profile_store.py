"""Database-backed profile store producing read-only snapshots."""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from src.matching.profile import (
    Location,
    OfferedSkill,
    Profile,
    Skill,
    SkillCategory,
    SkillLevel,
    SkillOwner,
    SkillType,
)
from src.persistence.models import Skill as SkillRow
from src.persistence.models import User


class SqlProfileStore:
    """Profile store reading users and skills through a SQLAlchemy session.

    Returned objects are detached snapshots; nothing is ever written.
    """

    def __init__(self, session: Session):
        """
        Initialize profile store.

        Args:
            session: Database session
        """
        self.session = session

    def get_profile(self, user_id: str) -> Optional[Profile]:
        """Get a profile by user id, regardless of activity."""
        stmt = select(User).where(User.id == user_id).options(selectinload(User.skills))
        user = self.session.execute(stmt).scalar_one_or_none()
        return to_profile(user) if user is not None else None

    def list_active_profiles(
        self,
        exclude_id: str,
        limit: Optional[int] = None,
    ) -> list[Profile]:
        """
        Get active profiles other than the requester.

        Args:
            exclude_id: Requester's user id
            limit: Maximum profiles to return (None for all)

        Returns:
            Profiles ordered by id
        """
        stmt = (
            select(User)
            .where(User.is_active.is_(True), User.id != exclude_id)
            .order_by(User.id)
            .options(selectinload(User.skills))
        )
        if limit:
            stmt = stmt.limit(limit)

        result = self.session.execute(stmt)
        return [to_profile(u) for u in result.scalars().all()]

    def list_offered_skills(self, exclude_owner_id: str) -> list[OfferedSkill]:
        """Get every offered skill not owned by ``exclude_owner_id``, with its owner."""
        stmt = (
            select(SkillRow, User)
            .join(User, SkillRow.user_id == User.id)
            .where(SkillRow.type == SkillType.OFFER.value, SkillRow.user_id != exclude_owner_id)
            .order_by(SkillRow.id)
        )
        return [
            OfferedSkill(
                skill=to_skill(row),
                owner=SkillOwner(id=owner.id, name=owner.name, rating=owner.rating),
            )
            for row, owner in self.session.execute(stmt).all()
        ]


def to_skill(row: SkillRow) -> Skill:
    """Convert a skill row into an immutable snapshot."""
    return Skill(
        id=row.id,
        name=row.name,
        category=SkillCategory(row.category),
        owner_id=row.user_id,
        type=SkillType(row.type),
        level=SkillLevel(row.level) if row.level else SkillLevel.BEGINNER,
        popularity=row.popularity or 0,
        description=row.description,
        tags=tuple(row.tags or ()),
        verified=bool(row.verified),
    )


def to_profile(user: User) -> Profile:
    """Convert a user row and its skills into an immutable snapshot."""
    skills = [to_skill(s) for s in user.skills]

    location = None
    if user.city or user.country:
        location = Location(city=user.city, country=user.country)

    return Profile(
        id=user.id,
        name=user.name,
        skills_offered=tuple(s for s in skills if s.type is SkillType.OFFER),
        skills_wanted=tuple(s for s in skills if s.type is SkillType.WANT),
        location=location,
        rating=user.rating,
        last_active_at=user.last_active,
        is_active=bool(user.is_active),
        email=user.email,
        avatar=user.avatar,
        bio=user.bio,
        total_reviews=user.total_reviews or 0,
    )
