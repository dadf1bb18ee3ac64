"""
Casting data model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from showrunner.core.constants import (
    DEFAULT_ACTING_STYLE,
    DEFAULT_AGE_RANGE,
    DEFAULT_ARCHETYPE,
    DEFAULT_EMOTIONAL_RANGE,
    ImportanceTier,
)


@dataclass
class ActorTemplate:
    """A real actor cited as a reference for the role."""
    name: str
    why_match: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "why_match": self.why_match}


@dataclass
class PhysicalRequirements:
    height: Optional[str] = None
    build: Optional[str] = None
    ethnicity: Optional[str] = None
    distinctive_features: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass
class PerformanceRequirements:
    acting_style: str = DEFAULT_ACTING_STYLE
    emotional_range: str = DEFAULT_EMOTIONAL_RANGE
    special_skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "acting_style": self.acting_style,
            "emotional_range": self.emotional_range,
            "special_skills": list(self.special_skills),
        }


@dataclass
class CastingProfile:
    """
    Casting profile for one registry character.

    Combines the resolved identity with generated casting content. Profiles
    built without generated content are flagged with needs_regeneration.
    """
    character_name: str
    importance: ImportanceTier
    scenes: Tuple[int, ...] = ()
    line_count: int = 0
    archetype: str = DEFAULT_ARCHETYPE
    age_range: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_AGE_RANGE))
    physical: PhysicalRequirements = field(default_factory=PhysicalRequirements)
    performance: PerformanceRequirements = field(default_factory=PerformanceRequirements)
    actor_templates: List[ActorTemplate] = field(default_factory=list)
    casting_notes: str = ""
    extras: Dict[str, Any] = field(default_factory=dict)
    needs_regeneration: bool = False

    @property
    def shoot_days(self) -> int:
        """One shoot day per distinct scene."""
        return len(set(self.scenes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "character_name": self.character_name,
            "importance": self.importance.value,
            "scenes": list(self.scenes),
            "line_count": self.line_count,
            "shoot_days": self.shoot_days,
            "archetype": self.archetype,
            "age_range": dict(self.age_range),
            "physical_requirements": self.physical.to_dict(),
            "performance_requirements": self.performance.to_dict(),
            "actor_templates": [t.to_dict() for t in self.actor_templates],
            "casting_notes": self.casting_notes,
            "extras": dict(self.extras),
            "needs_regeneration": self.needs_regeneration,
        }
