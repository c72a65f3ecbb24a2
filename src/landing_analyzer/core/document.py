"""Structured document access for feature extraction.

The extractor only needs a few query operations: select elements by CSS
selector (optionally inside another element), read text, and read
attributes. :class:`StructuredDocument` names that capability so any
parser that provides it can back the extractor; :class:`SoupDocument` is
the BeautifulSoup implementation.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from bs4 import BeautifulSoup, Tag


@runtime_checkable
class StructuredDocument(Protocol):
    """Query capability over a parsed page.

    Element handles returned by :meth:`select` are opaque to callers and are
    only passed back into the same document. Two selections that hit the
    same element return the same handle object.
    """

    def select(self, selector: str, scope: Any = None) -> Sequence[Any]:
        ...

    def count(self, selector: str, scope: Any = None) -> int:
        ...

    def text(self, scope: Any = None) -> str:
        ...

    def attribute(self, element: Any, name: str) -> Optional[str]:
        ...


class SoupDocument:
    """:class:`StructuredDocument` backed by BeautifulSoup and soupsieve selectors."""

    def __init__(self, markup: str, parser: str = "html.parser"):
        self._soup = BeautifulSoup(markup or "", parser)

    def select(self, selector: str, scope: Any = None) -> list[Tag]:
        root = scope if scope is not None else self._soup
        return root.select(selector)

    def count(self, selector: str, scope: Any = None) -> int:
        return len(self.select(selector, scope))

    def text(self, scope: Any = None) -> str:
        root = scope if scope is not None else self._soup
        return root.get_text()

    def attribute(self, element: Any, name: str) -> Optional[str]:
        value = element.get(name)
        if value is None:
            return None
        # class and rel come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value
