"""
Showrunner Characters Module

Name normalization, identity resolution, the canonical character registry
and batch planning.
"""

from .models import (
    AuthoritativeCharacter,
    SceneCharacterEntry,
    SceneBreakdown,
    RawCharacterMention,
    CharacterIdentity,
    coerce_authoritative,
    coerce_breakdown,
    parse_importance,
)
from .normalizer import normalize, display, strip_annotations
from .resolver import IdentityResolver, resolve
from .mentions import extract_mentions, mentions_from_breakdown, is_noise_name
from .registry import CharacterRegistryBuilder, build_registry, sort_identities, registry_summary
from .batching import partition
from .key_scenes import KeyScene, key_scenes_for

__all__ = [
    'AuthoritativeCharacter',
    'SceneCharacterEntry',
    'SceneBreakdown',
    'RawCharacterMention',
    'CharacterIdentity',
    'coerce_authoritative',
    'coerce_breakdown',
    'parse_importance',
    'normalize',
    'display',
    'strip_annotations',
    'IdentityResolver',
    'resolve',
    'extract_mentions',
    'mentions_from_breakdown',
    'is_noise_name',
    'CharacterRegistryBuilder',
    'build_registry',
    'sort_identities',
    'registry_summary',
    'partition',
    'KeyScene',
    'key_scenes_for',
]
