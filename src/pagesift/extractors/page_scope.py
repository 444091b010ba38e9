"""
Page handle abstraction and the scoped evaluation context.

The engine never navigates. It borrows a rendered page, issues at most one
bounded wait, then reads the DOM exactly once into a BeautifulSoup snapshot
and runs every extractor against that snapshot.
"""
from __future__ import annotations

import copy
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Optional, List, Iterator, Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag

from ..models import UrlContext
from ..logger import get_logger

logger = get_logger(__name__)


class PageTimeoutError(TimeoutError):
    """Raised when a waited-for selector does not appear in time."""


@runtime_checkable
class PageHandle(Protocol):
    """
    What the engine needs from the browser-automation layer.

    A Playwright sync ``Page`` satisfies this protocol as-is.
    """

    def content(self) -> str:
        ...

    def wait_for_selector(self, selector: str, *, timeout: Optional[float] = None, state: Optional[str] = None):
        ...


class StaticPage:
    """
    In-memory page handle over pre-rendered HTML.

    Used for pre-fetched markup and in tests. ``wait_for_selector`` cannot
    wait for anything to appear, so a missing selector is an immediate timeout.
    """

    def __init__(self, html: str, url: Optional[str] = None) -> None:
        self.html = html or ""
        self.url = url
        self.wait_calls: List[str] = []
        self.content_calls = 0

    def content(self) -> str:
        self.content_calls += 1
        return self.html

    def wait_for_selector(self, selector: str, *, timeout: Optional[float] = None, state: Optional[str] = None):
        self.wait_calls.append(selector)
        soup = BeautifulSoup(self.html, "html.parser")
        try:
            match = soup.select_one(selector)
        finally:
            soup.decompose()
        if match is None:
            raise PageTimeoutError(f"Timeout {timeout}ms exceeded waiting for selector {selector!r}")
        return True


@dataclass(slots=True)
class EvaluationPayload:
    """Serializable input handed into one evaluation scope."""

    url_context: UrlContext
    product_name: Optional[str] = None
    enabled_fields: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "url_context": self.url_context.to_dict(),
            "product_name": self.product_name,
            "enabled_fields": list(self.enabled_fields),
        }


class DomScope:
    """
    One read-only DOM snapshot plus the payload it was evaluated with.

    Clones made through :meth:`clone` are torn down when the scope exits.
    """

    def __init__(self, soup: BeautifulSoup, payload: EvaluationPayload) -> None:
        self.soup = soup
        self.payload = payload
        self._clones: List[Tag] = []

    @property
    def base_url(self) -> Optional[str]:
        return self.payload.url_context.url or None

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def find_by_id(self, element_id: str) -> Optional[Tag]:
        if not element_id:
            return None
        return self.soup.find(id=element_id)

    def clone(self, node: Tag) -> Tag:
        """Detached deep copy of ``node`` that is released with the scope."""
        duplicate = copy.copy(node)
        self._clones.append(duplicate)
        return duplicate

    def release(self) -> None:
        for duplicate in self._clones:
            duplicate.decompose()
        released = len(self._clones)
        self._clones.clear()
        self.soup.decompose()
        if released:
            logger.debug("SCOPE Released %d cloned node(s)", released)


@contextmanager
def evaluation_scope(page: PageHandle, payload: EvaluationPayload) -> Iterator[DomScope]:
    """
    Read the page once and yield a :class:`DomScope` over the snapshot.

    Transient nodes are released whether or not the body raises.
    """
    html = page.content()
    scope = DomScope(BeautifulSoup(html or "", "html.parser"), payload)
    try:
        yield scope
    finally:
        scope.release()


__all__ = [
    "PageHandle",
    "PageTimeoutError",
    "StaticPage",
    "EvaluationPayload",
    "DomScope",
    "evaluation_scope",
]
