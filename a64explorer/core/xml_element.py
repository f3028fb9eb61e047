"""XPath extraction helpers shared by every node type.

Each node holds an ``XmlElement`` wrapping its raw lxml element and reads its
fields through it. Missing children or attributes resolve to None; nothing
here raises for a document that simply lacks an expected piece.
"""

from __future__ import annotations

from typing import Any, Iterator

from lxml import etree


class XmlElement:
    """Read-only view over one lxml element.

    Usage:
        xml = XmlElement(root)
        xml.attr("@id")                # "ADD_addsub_imm" or None
        xml.text("heading")            # first matching child's text or None
        for e in xml.iter("encoding"): # lazy, single pass
            ...
    """

    __slots__ = ("element",)

    def __init__(self, element: etree._Element | None):
        self.element = element

    def __bool__(self) -> bool:
        return self.element is not None

    def _first(self, xpath: str) -> Any:
        if self.element is None:
            return None
        results = self.element.xpath(xpath)
        if isinstance(results, list):
            return results[0] if results else None
        return results

    def iter(self, path: str) -> Iterator[etree._Element]:
        """Yield every element matching ``path`` in document order.

        ``path`` is an ElementPath selector (``classes/iclass``). Matches are
        found one at a time as the generator advances; it is forward-only, so
        call ``list()`` on it to keep them around.
        """
        if self.element is None:
            return
        yield from self.element.iterfind(path)

    def values(self, xpath: str) -> list[str]:
        """String results of an attribute or text XPath (``//iform/@iformfile``).

        Unlike ``iter`` the full result list is built before returning.
        """
        if self.element is None:
            return []
        return [str(value) for value in self.element.xpath(xpath)]

    def text(self, xpath: str) -> str | None:
        """Text content of the first node matching ``xpath``."""
        node = self._first(xpath)
        if node is None:
            return None
        if isinstance(node, etree._Element):
            return node.text
        return str(node)

    def attr(self, xpath: str) -> str | None:
        """Value of the first attribute matching ``xpath`` (e.g. ``@name``)."""
        value = self._first(xpath)
        if value is None or isinstance(value, etree._Element):
            return None
        return str(value)

    def docvars(self) -> dict[str, str | None]:
        """Collect ``docvars/docvar`` key/value pairs.

        Duplicate keys are not rejected; the last value wins.
        """
        docvars: dict[str, str | None] = {}
        for docvar in self.iter("docvars/docvar"):
            key = docvar.get("key")
            if key is None:
                continue
            docvars[key] = docvar.get("value")
        return docvars
