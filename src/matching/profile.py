"""Read-only profile and skill snapshots consumed by the matching engine."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class SkillCategory(str, Enum):
    """Closed set of skill categories."""

    PROGRAMMING = "Programming"
    DESIGN = "Design"
    MARKETING = "Marketing"
    BUSINESS = "Business"
    MUSIC = "Music"
    ART = "Art"
    LANGUAGE = "Language"
    COOKING = "Cooking"
    SPORTS = "Sports"
    PHOTOGRAPHY = "Photography"
    WRITING = "Writing"
    VIDEO_EDITING = "Video Editing"
    OTHER = "Other"


class SkillLevel(str, Enum):
    """Self-declared proficiency. Informational only, never scored."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class SkillType(str, Enum):
    """Whether a skill is offered (taught) or wanted (learned)."""

    OFFER = "offer"
    WANT = "want"


@dataclass(frozen=True)
class Skill:
    """A named capability owned by exactly one profile."""

    id: str
    name: str
    category: SkillCategory
    owner_id: str
    type: SkillType
    level: SkillLevel = SkillLevel.BEGINNER
    popularity: int = 0
    description: Optional[str] = None
    tags: tuple[str, ...] = ()
    verified: bool = False

    @property
    def name_key(self) -> str:
        """Case-insensitive comparison key for the skill name."""
        return self.name.lower()


@dataclass(frozen=True)
class Location:
    """City/country pair. Either part may be missing."""

    city: Optional[str] = None
    country: Optional[str] = None

    def same_city(self, other: Optional["Location"]) -> bool:
        """True when both cities are non-empty and equal ignoring case."""
        if other is None or not self.city or not other.city:
            return False
        return self.city.lower() == other.city.lower()

    def matches(self, value: str) -> bool:
        """True when the city or the country equals ``value`` ignoring case."""
        wanted = value.lower()
        return any(part and part.lower() == wanted for part in (self.city, self.country))

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"city": self.city, "country": self.country}


@dataclass(frozen=True)
class Profile:
    """Exchange-relevant attributes of one user.

    Skill collections are unique by skill id; duplicates passed in are
    dropped, keeping the first occurrence.
    """

    id: str
    name: str = ""
    skills_offered: tuple[Skill, ...] = ()
    skills_wanted: tuple[Skill, ...] = ()
    location: Optional[Location] = None
    rating: Optional[float] = None
    last_active_at: Optional[datetime] = None
    is_active: bool = True
    email: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    total_reviews: int = 0

    def __post_init__(self):
        object.__setattr__(self, "skills_offered", _unique_by_id(self.skills_offered))
        object.__setattr__(self, "skills_wanted", _unique_by_id(self.skills_wanted))

    @property
    def rating_or_zero(self) -> float:
        return self.rating if self.rating is not None else 0.0

    @property
    def offered_names(self) -> set[str]:
        return {s.name_key for s in self.skills_offered}

    @property
    def wanted_names(self) -> set[str]:
        return {s.name_key for s in self.skills_wanted}


def _unique_by_id(skills) -> tuple[Skill, ...]:
    seen: set[str] = set()
    unique = []
    for skill in skills:
        if skill.id in seen:
            continue
        seen.add(skill.id)
        unique.append(skill)
    return tuple(unique)


@dataclass(frozen=True)
class UserSummary:
    """Public view of a profile returned inside result records."""

    id: str
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[Location] = None
    rating: Optional[float] = None
    total_reviews: int = 0
    last_active_at: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "UserSummary":
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            avatar=profile.avatar,
            bio=profile.bio,
            location=profile.location,
            rating=profile.rating,
            total_reviews=profile.total_reviews,
            last_active_at=profile.last_active_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "avatar": self.avatar,
            "bio": self.bio,
            "location": self.location.to_dict() if self.location else None,
            "rating": self.rating,
            "total_reviews": self.total_reviews,
            "last_active_at": self.last_active_at.isoformat() if self.last_active_at else None,
        }


@dataclass(frozen=True)
class UserBrief:
    """Reputation-only view used for similar-user results. No contact or activity fields."""

    id: str
    name: str
    avatar: Optional[str] = None
    rating: Optional[float] = None
    total_reviews: int = 0

    @classmethod
    def from_profile(cls, profile: Profile) -> "UserBrief":
        return cls(
            id=profile.id,
            name=profile.name,
            avatar=profile.avatar,
            rating=profile.rating,
            total_reviews=profile.total_reviews,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "rating": self.rating,
            "total_reviews": self.total_reviews,
        }


@dataclass(frozen=True)
class SkillOwner:
    """Minimal view of the profile that owns a skill."""

    id: str
    name: str
    rating: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "rating": self.rating}


@dataclass(frozen=True)
class OfferedSkill:
    """An offered skill paired with its owner."""

    skill: Skill
    owner: SkillOwner
