"""
Section locator: finds a labeled content region ("Features", "Warnings", ...)
when no vendor-specific selector is available.

Vendor templates disagree on how a section title relates to its body, so the
locator resolves content through three layouts in order:

1. ARIA linkage (``aria-controls`` pointing at the content region)
2. Following siblings of the heading
3. The nearest accordion/section container, minus the heading itself
"""
from __future__ import annotations

import re
from typing import Any, List, Optional

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from ..config import Config
from ..logger import get_logger
from ..utils.text_cleaning import collapse_lines, normalize_label
from .page_scope import DomScope
from .sanitizer import sanitize
from .strategy import MISSING, Strategy

logger = get_logger(__name__)


class SectionLocator:
    """Locate a section by its human-readable label and return its text."""

    HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'summary', 'button', 'dt', 'label', 'span', 'div', 'a', 'strong']
    ALWAYS_HEADING_TAGS = {'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'summary', 'button'}

    # Class/attribute naming that implies a section title role
    TITLE_HINT = re.compile(
        r'(accordion|collaps|disclosure|expand|section|panel|tab|toggle)[\w-]*'
        r'(title|head|toggle|trigger|label|button|header)'
        r'|^(title|heading|accordion-title|section-title)$',
        re.IGNORECASE,
    )
    CONTAINER_HINT = re.compile(r'accordion|collaps|section|panel|details|tab-content', re.IGNORECASE)
    CONTAINER_TAGS = {'section', 'article', 'details'}

    # Headings longer than this are content, not titles
    MAX_HEADING_CHARS = 120
    MAX_CONTAINER_DEPTH = 2

    def __init__(self, sibling_limit: Optional[int] = None) -> None:
        self.sibling_limit = sibling_limit or Config.SECTION_SIBLING_SCAN_LIMIT

    def locate(self, scope: DomScope, label: str) -> str:
        """
        Find the section titled ``label`` and return its sanitized content.

        Returns:
            Section text, or "" when no heading matches or it governs nothing
        """
        heading = self.find_heading(scope, label)
        if heading is None:
            logger.debug("SECTION No heading matched label %r", label)
            return ""

        for method_name, resolver in (
            ('aria', self._content_from_aria),
            ('siblings', self._content_from_siblings),
            ('container', self._content_from_container),
        ):
            content = resolver(scope, heading)
            if content:
                logger.debug("SECTION %r resolved via %s (%d chars)", label, method_name, len(content))
                return content

        logger.debug("SECTION %r heading found but no content resolved", label)
        return ""

    def find_heading(self, scope: DomScope, label: str) -> Optional[Tag]:
        """Exact normalized match first, then first substring match."""
        target = normalize_label(label)
        if not target:
            return None

        candidates = self.heading_candidates(scope)
        for candidate, text in candidates:
            if text == target:
                return candidate
        for candidate, text in candidates:
            if target in text:
                return candidate
        return None

    def heading_candidates(self, scope: DomScope) -> List[tuple]:
        """Heading-like elements in document order, with normalized text."""
        candidates = []
        for element in scope.soup.find_all(self.HEADING_TAGS):
            if not self._is_heading_like(element):
                continue
            text = normalize_label(element.get_text(' ', strip=True))
            if not text or len(text) > self.MAX_HEADING_CHARS:
                continue
            candidates.append((element, text))
        return candidates

    def _is_heading_like(self, element: Tag) -> bool:
        if element.name in self.ALWAYS_HEADING_TAGS:
            return True
        if element.get('role') == 'button' or element.get('aria-controls') or element.get('aria-expanded'):
            return True
        hints = list(element.get('class') or [])
        hints.extend(
            str(value) for key, value in element.attrs.items()
            if key == 'id' or key.startswith('data-')
        )
        return any(self.TITLE_HINT.search(hint) for hint in hints if isinstance(hint, str))

    def _content_from_aria(self, scope: DomScope, heading: Tag) -> str:
        region_ids = (heading.get('aria-controls') or '').split()
        for region_id in region_ids:
            region = scope.find_by_id(region_id)
            if region is not None:
                content = sanitize(region)
                if content:
                    return content
        return ""

    def _content_from_siblings(self, scope: DomScope, heading: Tag) -> str:
        scanned = 0
        for sibling in heading.next_siblings:
            # Comments, doctypes and template markers are not content
            if isinstance(sibling, PreformattedString):
                continue
            if isinstance(sibling, NavigableString):
                if not sibling.strip():
                    continue
                scanned += 1
                text = collapse_lines(str(sibling))
            elif isinstance(sibling, Tag):
                scanned += 1
                text = sanitize(sibling) if sibling.get_text(strip=True) else ""
            else:
                continue

            if text:
                return text
            if scanned >= self.sibling_limit:
                break
        return ""

    def _content_from_container(self, scope: DomScope, heading: Tag) -> str:
        heading_text = normalize_label(heading.get_text(' ', strip=True))
        for container in self._containers(heading):
            duplicate = scope.clone(container)
            for element in duplicate.find_all(heading.name):
                if normalize_label(element.get_text(' ', strip=True)) == heading_text:
                    element.decompose()
                    break
            content = sanitize(duplicate)
            if content:
                return content
        return ""

    def _containers(self, heading: Tag) -> List[Tag]:
        """Section-like ancestors, nearest first (a title wrapper may hold only the title)."""
        containers = []
        for parent in heading.parents:
            if not isinstance(parent, Tag) or parent.name in ('body', 'html', '[document]'):
                break
            classes = ' '.join(parent.get('class') or [])
            if (
                parent.name in self.CONTAINER_TAGS
                or self.CONTAINER_HINT.search(classes)
                or parent.name == 'div'
            ):
                containers.append(parent)
                if len(containers) >= self.MAX_CONTAINER_DEPTH:
                    break
        return containers


class SectionHeadingStrategy(Strategy):
    """Strategy adapter: locate a section by label."""

    def __init__(self, label: str, locator: Optional[SectionLocator] = None) -> None:
        self.label = label
        self.locator = locator or SectionLocator()
        self.name = f"heading:{label}"

    def attempt(self, scope: DomScope) -> Any:
        return self.locator.locate(scope, self.label) or MISSING


__all__ = ["SectionLocator", "SectionHeadingStrategy"]
