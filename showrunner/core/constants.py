"""
Showrunner Constants

Global constants used throughout the Showrunner system.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple

# =============================================================================
# VERSION INFO
# =============================================================================
VERSION = "1.0.0"
PROJECT_NAME = "Showrunner"

# =============================================================================
# SCREENPLAY CONSTANTS
# =============================================================================

class ElementType(Enum):
    """Types of screenplay elements."""
    SCENE_HEADING = "scene_heading"
    ACTION = "action"
    CHARACTER_CUE = "character_cue"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    TRANSITION = "transition"


# Slug line prefixes (matched case-insensitively at line start)
SCENE_HEADING_PATTERN = r'^(?:INT\.|EXT\.|INT/EXT\.)'

# Transition keywords (matched case-insensitively at line start)
TRANSITION_KEYWORDS: Tuple[str, ...] = (
    "FADE IN:",
    "FADE OUT.",
    "CUT TO:",
    "DISSOLVE TO:",
    "MATCH CUT TO:",
)

# Prefixes that can never open a character cue (INTERN and CUTTER included)
RESERVED_CUE_KEYWORDS: Tuple[str, ...] = (
    "INT",
    "EXT",
    "FADE",
    "CUT",
    "DISSOLVE",
    "THE END",
)

# Approximation of one physical page: a page closes once it holds more elements
PAGE_ELEMENT_LIMIT = 55
MAX_CUE_LENGTH = 40
CUE_LOOKAHEAD_LINES = 2

# One page of screenplay is roughly one minute of screen time
MINUTES_PER_PAGE = 1

# =============================================================================
# CHARACTER CONSTANTS
# =============================================================================

class ImportanceTier(Enum):
    """Importance tiers used for ordering and prioritization."""
    LEAD = "lead"
    SUPPORTING = "supporting"
    BACKGROUND = "background"

    @property
    def rank(self) -> int:
        return IMPORTANCE_ORDER[self]


IMPORTANCE_ORDER: Dict[ImportanceTier, int] = {
    ImportanceTier.LEAD: 0,
    ImportanceTier.SUPPORTING: 1,
    ImportanceTier.BACKGROUND: 2,
}

DEFAULT_IMPORTANCE = ImportanceTier.SUPPORTING

# Free-form role labels seen in story bibles, mapped onto tiers
IMPORTANCE_SYNONYMS: Dict[str, ImportanceTier] = {
    "lead": ImportanceTier.LEAD,
    "protagonist": ImportanceTier.LEAD,
    "antagonist": ImportanceTier.LEAD,
    "main": ImportanceTier.LEAD,
    "supporting": ImportanceTier.SUPPORTING,
    "secondary": ImportanceTier.SUPPORTING,
    "recurring": ImportanceTier.SUPPORTING,
    "background": ImportanceTier.BACKGROUND,
    "minor": ImportanceTier.BACKGROUND,
    "extra": ImportanceTier.BACKGROUND,
    "cameo": ImportanceTier.BACKGROUND,
}

# Cue suffixes that mark delivery, not a different speaker
DELIVERY_SUFFIX_PATTERNS: Tuple[str, ...] = (
    r"\s*\(V\.O\.\)",
    r"\s*\(O\.S\.\)",
    r"\s*\(CONT['\u2019]D\)",
)

# Age parentheticals such as (45) or (30s)
AGE_PARENTHETICAL_PATTERN = r"\s*\(\d+s?\)"

# Group or noise names that never become a castable character
NOISE_NAMES: FrozenSet[str] = frozenset({
    "VOICE", "V.O.", "O.S.", "BACKGROUND", "CROWD", "ALL", "EXTRA", "EXTRAS",
    "EVERYONE", "PEOPLE", "GUESTS", "STAFF", "DEVELOPERS",
})

MIN_CHARACTER_NAME_LENGTH = 2

# =============================================================================
# CASTING CONSTANTS
# =============================================================================

DEFAULT_BATCH_SIZE = 6
TOKENS_PER_CHARACTER = 2000
MIN_BATCH_TOKENS = 15000
MAX_BATCH_TOKENS = 30000

# Field that identifies the character a decoded record belongs to
IDENTITY_FIELD = "characterName"
CAST_ARRAY_KEY = "cast"

DEFAULT_ARCHETYPE = "The Character"
DEFAULT_AGE_RANGE = {"min": 25, "max": 35}
DEFAULT_ACTING_STYLE = "naturalistic"
DEFAULT_EMOTIONAL_RANGE = "standard dramatic range"
REGENERATE_NOTE = "Profile generation failed - please regenerate"
