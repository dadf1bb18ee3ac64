"""
Showrunner Casting Module

Casting profiles, batch merging and the batch generation pipeline.
"""

from .models import ActorTemplate, CastingProfile, PerformanceRequirements, PhysicalRequirements
from .profiles import build_profile, placeholder_profile
from .merger import CastingMerger
from .prompts import CASTING_SYSTEM_PROMPT, build_casting_prompt
from .pipeline import CastingPipeline, token_budget

__all__ = [
    'ActorTemplate',
    'CastingProfile',
    'PerformanceRequirements',
    'PhysicalRequirements',
    'build_profile',
    'placeholder_profile',
    'CastingMerger',
    'CASTING_SYSTEM_PROMPT',
    'build_casting_prompt',
    'CastingPipeline',
    'token_budget',
]
