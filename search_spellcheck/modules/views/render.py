"""Render elements produced by area handlers and their HTML serialization."""

from __future__ import annotations

from html import escape
from typing import List, Literal, Sequence, Union

from pydantic import BaseModel


class HtmlTag(BaseModel):
    type: Literal["html_tag"] = "html_tag"
    tag: str = "span"
    value: str = ""


class Link(BaseModel):
    type: Literal["link"] = "link"
    title: str
    url: str


RenderElement = Union[HtmlTag, Link]


def render_html(elements: Sequence[RenderElement]) -> str:
    """Serialize render elements to escaped HTML."""
    parts: List[str] = []
    for element in elements:
        if isinstance(element, Link):
            parts.append(f'<a href="{escape(element.url)}">{escape(element.title)}</a>')
        else:
            parts.append(f"<{element.tag}>{escape(element.value)}</{element.tag}>")
    return "".join(parts)


__all__ = ["HtmlTag", "Link", "RenderElement", "render_html"]
