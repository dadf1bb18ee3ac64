"""
Showrunner Screenplay Module

Cleans generated screenplay text and assembles it into a typed, paginated document.
"""

from .models import Document, DocumentMetadata, Element, Page, SceneSpan
from .cleaner import clean
from .assembler import ScreenplayAssembler, assemble
from .scenes import split_scenes

__all__ = [
    'Document',
    'DocumentMetadata',
    'Element',
    'Page',
    'SceneSpan',
    'clean',
    'ScreenplayAssembler',
    'assemble',
    'split_scenes',
]
