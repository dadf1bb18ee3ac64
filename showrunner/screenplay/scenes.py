"""
Scene splitting for assembled documents.
"""

import logging
from typing import List, Optional

from showrunner.core.constants import ElementType
from showrunner.core.logging_config import get_logger
from showrunner.screenplay.models import Document, SceneSpan


def split_scenes(document: Document, logger: Optional[logging.Logger] = None) -> List[SceneSpan]:
    """
    Split a document into one SceneSpan per scene heading.

    Content gathers every non-empty element from the heading up to the next
    heading. Elements before the first heading belong to no scene.

    Args:
        document: Assembled document
        logger: Optional logger override

    Returns:
        Scene spans in document order
    """
    logger = logger or get_logger("screenplay.scenes")
    spans: List[SceneSpan] = []
    seen = set()

    heading = None
    scene_index = 0
    start_page = end_page = 0
    content: List[str] = []

    def close() -> None:
        spans.append(SceneSpan(
            scene_index=scene_index,
            heading=heading,
            content='\n'.join(content),
            start_page=start_page,
            end_page=end_page,
        ))

    for page_number, element in document.elements_with_pages():
        if element.element_type is ElementType.SCENE_HEADING:
            if heading is not None:
                close()
            if element.scene_index in seen:
                logger.warning(f"Duplicate scene number {element.scene_index} on page {page_number}")
            seen.add(element.scene_index)
            heading = element.content
            scene_index = element.scene_index
            start_page = end_page = page_number
            content = [element.content]
        elif heading is not None and element.content.strip():
            content.append(element.content)
            end_page = page_number

    if heading is not None:
        close()

    expected = document.metadata.scene_count
    if len(spans) < expected:
        found = {s.scene_index for s in spans}
        missing = [n for n in range(1, expected + 1) if n not in found]
        logger.warning(f"Missing scenes: expected {expected}, found {len(spans)}, missing {missing}")

    return spans
