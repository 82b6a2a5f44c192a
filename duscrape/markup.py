"""
Read-only HTML querying on top of BeautifulSoup.

All lookups take CSS selectors. A selector that matches nothing is not an
error: text lookups return "", attribute lookups return None.
"""

from __future__ import annotations

from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

Node = Union[BeautifulSoup, Tag]


def parse_html(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def select_all(root: Node, selector: str) -> List[Tag]:
    return list(root.select(selector))


def select_first(root: Node, selector: str) -> Optional[Tag]:
    return root.select_one(selector)


def text_of(root: Node, selector: Optional[str] = None) -> str:
    """
    Return the trimmed text of every element matching selector, concatenated.

    Without a selector the text of root itself is returned.
    """
    if selector is None:
        return root.get_text().strip()
    return "".join(el.get_text() for el in root.select(selector)).strip()


def attr_of(root: Node, selector: str, name: str) -> Optional[str]:
    """
    Return attribute `name` of the first element matching selector.
    """
    el = root.select_one(selector)
    if el is None:
        return None
    value = el.get(name)
    if isinstance(value, list):
        # multi-valued attributes such as class come back as lists
        return " ".join(value)
    return value


def has_match(root: Node, selector: str) -> bool:
    return root.select_one(selector) is not None
