"""
Read-only query view over a parsed HTML document.

Extractors only talk to HtmlDocument, so the lxml tree behind it can be
swapped for another parser without touching any check.
"""

from typing import List, Optional

from lxml import etree
from lxml import html as lxml_html
from lxml.html import HtmlElement

from ..errors import ParseError

EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


class HtmlDocument:
    """A parsed page, queried with XPath expressions."""

    def __init__(self, root: HtmlElement):
        self._root = root

    @classmethod
    def parse(cls, raw_html: str, url: str = "") -> "HtmlDocument":
        """
        Parse raw markup. Raises ParseError if no document can be built.

        Input with no elements at all (empty, whitespace, only comments)
        yields an empty document so every extractor reports missing facts.
        """
        if raw_html is None or not raw_html.strip():
            return cls(lxml_html.document_fromstring(EMPTY_DOCUMENT))
        try:
            root = lxml_html.document_fromstring(raw_html)
        except ValueError:
            # str input with an XML encoding declaration; lxml wants bytes.
            try:
                root = lxml_html.document_fromstring(raw_html.encode("utf-8"))
            except etree.ParserError:
                root = lxml_html.document_fromstring(EMPTY_DOCUMENT)
            except ValueError as e:
                raise ParseError(url) from e
        except etree.ParserError:
            # "Document is empty"
            root = lxml_html.document_fromstring(EMPTY_DOCUMENT)
        return cls(root)

    def elements(self, xpath: str) -> List[HtmlElement]:
        return [el for el in self._root.xpath(xpath) if isinstance(el, HtmlElement)]

    def count(self, xpath: str) -> int:
        return len(self.elements(xpath))

    def exists(self, xpath: str) -> bool:
        return self.count(xpath) > 0

    def first_attr(self, xpath: str, attr: str) -> str:
        """Stripped attribute of the first match, or "" when absent."""
        for el in self.elements(xpath):
            return (el.get(attr) or "").strip()
        return ""

    def first_text(self, xpath: str) -> str:
        """Stripped text content of the first match, or "" when absent."""
        for el in self.elements(xpath):
            return text_of(el).strip()
        return ""

    def joined_text(self, xpath: str) -> str:
        """Text of every match concatenated in document order."""
        return "".join(text_of(el) for el in self.elements(xpath))

    def root_attr(self, attr: str) -> str:
        return self._root.get(attr) or ""

    def body(self) -> Optional[HtmlElement]:
        bodies = self.elements("//body")
        return bodies[0] if bodies else None


def text_of(el: HtmlElement) -> str:
    return el.text_content() or ""
