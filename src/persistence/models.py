"""SQLAlchemy models backing the profile store."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship

from src.matching.profile import SkillCategory, SkillLevel, SkillType


def utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    """Generate a UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """Marketplace user with exchange-relevant profile fields."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=True)
    avatar = Column(String, nullable=True)
    bio = Column(Text, nullable=True)

    # Location
    city = Column(String, nullable=True)
    country = Column(String, nullable=True)

    # Reputation (average of reviews, 0-5)
    rating = Column(Float, nullable=True)
    total_reviews = Column(Integer, default=0)

    # Status
    is_active = Column(Boolean, default=True)
    last_active = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    skills = relationship(
        "Skill",
        back_populates="user",
        cascade="all, delete-orphan",
        # Insertion order, id only breaks same-instant ties
        order_by=lambda: [Skill.created_at, Skill.id],
    )

    def __repr__(self) -> str:
        return f"<User {self.name} ({self.id})>"


class Skill(Base):
    """A skill a user offers to teach or wants to learn."""

    __tablename__ = "skills"
    __table_args__ = (Index("ix_skills_type_user", "type", "user_id"),)

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)  # One of SkillCategory
    description = Column(Text)
    level = Column(String, default=SkillLevel.BEGINNER.value)  # One of SkillLevel
    tags = Column(JSON, default=list)
    type = Column(String, nullable=False)  # offer or want
    verified = Column(Boolean, default=False)

    # Maintained by the marketplace, read by recommendations
    popularity = Column(Integer, default=0)

    created_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="skills")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.name:
            self.name = self.name.strip()
        # Unknown enum values raise ValueError here, before anything is stored
        if self.category is not None:
            self.category = SkillCategory(self.category).value
        self.level = SkillLevel(self.level or SkillLevel.BEGINNER).value
        if self.type is not None:
            self.type = SkillType(self.type).value

    def __repr__(self) -> str:
        return f"<Skill {self.name} ({self.type})>"
