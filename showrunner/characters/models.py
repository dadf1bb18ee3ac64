"""
Character data model.

Boundary records (pydantic) validate the loosely-typed story bible and
breakdown payloads once on entry. Everything past the boundary works with
the frozen value objects below.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from showrunner.core.constants import DEFAULT_IMPORTANCE, IMPORTANCE_SYNONYMS, ImportanceTier
from showrunner.core.logging_config import get_logger


def parse_importance(value: Any, default: Optional[ImportanceTier] = DEFAULT_IMPORTANCE) -> Optional[ImportanceTier]:
    """Map a free-form importance or role label onto a tier, falling back to default."""
    if isinstance(value, ImportanceTier):
        return value
    if value is None:
        return default
    return IMPORTANCE_SYNONYMS.get(str(value).strip().lower(), default)


# =============================================================================
# BOUNDARY RECORDS
# =============================================================================

class AuthoritativeCharacter(BaseModel):
    """A story bible character: the canonical source of names."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(validation_alias=AliasChoices("name", "characterName"), min_length=1)
    importance: Optional[ImportanceTier] = None
    age: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _importance_from_role(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("importance") and data.get("role"):
            data = {**data, "importance": data["role"]}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("importance", mode="before")
    @classmethod
    def _coerce_importance(cls, value: Any) -> Optional[ImportanceTier]:
        return parse_importance(value, default=None)

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)


class SceneCharacterEntry(BaseModel):
    """One character listed in a breakdown scene."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("name", "characterName"))
    line_count: int = Field(default=0, alias="lineCount")
    importance: ImportanceTier = DEFAULT_IMPORTANCE

    @field_validator("line_count", mode="before")
    @classmethod
    def _coerce_line_count(cls, value: Any) -> int:
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            return 0

    @field_validator("importance", mode="before")
    @classmethod
    def _coerce_importance(cls, value: Any) -> ImportanceTier:
        return parse_importance(value)


class SceneBreakdown(BaseModel):
    """A breakdown scene and the characters appearing in it."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    scene_number: int = Field(alias="sceneNumber")
    scene_title: Optional[str] = Field(default=None, alias="sceneTitle")
    location: Optional[str] = None
    characters: List[SceneCharacterEntry] = Field(default_factory=list)

    @field_validator("characters", mode="before")
    @classmethod
    def _drop_unnamed(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [c for c in value if not isinstance(c, dict) or c.get("name") or c.get("characterName")]


def _coerce_all(model, items: Optional[Iterable[Any]], label: str, logger: Optional[logging.Logger]) -> list:
    logger = logger or get_logger("characters.models")
    result = []
    for index, item in enumerate(items or []):
        if isinstance(item, model):
            result.append(item)
            continue
        try:
            result.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {label} entry #{index}: {e.error_count()} error(s)")
    return result


def coerce_authoritative(
    items: Optional[Iterable[Any]],
    logger: Optional[logging.Logger] = None
) -> List[AuthoritativeCharacter]:
    """Validate story bible characters, skipping entries without a usable name."""
    return _coerce_all(AuthoritativeCharacter, items, "character", logger)


def coerce_breakdown(
    items: Optional[Iterable[Any]],
    logger: Optional[logging.Logger] = None
) -> List[SceneBreakdown]:
    """Validate breakdown scenes, skipping malformed ones."""
    return _coerce_all(SceneBreakdown, items, "breakdown scene", logger)


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class RawCharacterMention:
    """A name as it appeared in source text, consumed during registry building."""
    name: str
    scene_index: Optional[int] = None
    line_count: int = 0
    importance: Optional[ImportanceTier] = None


@dataclass(frozen=True)
class CharacterIdentity:
    """A canonical character resolved from one or more name variants."""
    name: str
    aliases: FrozenSet[str] = field(default_factory=frozenset)
    importance: ImportanceTier = DEFAULT_IMPORTANCE
    line_count: int = 0
    scenes: Tuple[int, ...] = ()
    age: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "aliases": sorted(self.aliases),
            "importance": self.importance.value,
            "line_count": self.line_count,
            "scenes": list(self.scenes),
        }
        if self.age is not None:
            data["age"] = self.age
        if self.description is not None:
            data["description"] = self.description
        return data
