"""
Screenplay document model.

A Document is an ordered list of Pages; a Page is an ordered list of Elements.
Element order across the whole document matches input line order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from showrunner.core.constants import ElementType


@dataclass(frozen=True)
class Element:
    """A single classified screenplay line."""
    element_type: ElementType
    content: str
    scene_index: Optional[int] = None   # None before the first scene heading
    character_name: Optional[str] = None  # raw cue on CHARACTER_CUE, speaker on dialogue lines

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.element_type.value,
            "content": self.content,
        }
        if self.scene_index is not None:
            data["scene_index"] = self.scene_index
        if self.character_name is not None:
            data["character_name"] = self.character_name
        return data


@dataclass
class Page:
    """One approximate screenplay page."""
    page_number: int  # 1-indexed
    elements: List[Element] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_number": self.page_number,
            "elements": [e.to_dict() for e in self.elements],
        }


@dataclass(frozen=True)
class DocumentMetadata:
    """Summary counts for an assembled document."""
    page_count: int
    scene_count: int
    character_count: int
    estimated_runtime_minutes: int

    @property
    def estimated_runtime(self) -> str:
        return f"{self.estimated_runtime_minutes} minutes"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_count": self.page_count,
            "scene_count": self.scene_count,
            "character_count": self.character_count,
            "estimated_runtime": self.estimated_runtime,
        }


@dataclass
class Document:
    """A typed, paginated screenplay."""
    pages: List[Page]
    metadata: DocumentMetadata
    title: Optional[str] = None
    episode_number: Optional[int] = None

    def elements(self) -> Iterator[Element]:
        """Iterate every element in document order."""
        for page in self.pages:
            yield from page.elements

    def elements_with_pages(self) -> Iterator[tuple]:
        """Iterate (page_number, element) pairs in document order."""
        for page in self.pages:
            for element in page.elements:
                yield page.page_number, element

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "episode_number": self.episode_number,
            "pages": [p.to_dict() for p in self.pages],
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class SceneSpan:
    """A scene with its heading, flattened text and page range."""
    scene_index: int
    heading: str
    content: str
    start_page: int
    end_page: int

    @property
    def page_count(self) -> int:
        return self.end_page - self.start_page + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scene_index": self.scene_index,
            "heading": self.heading,
            "content": self.content,
            "start_page": self.start_page,
            "end_page": self.end_page,
        }
