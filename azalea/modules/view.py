"""View capability: UI components as maps, rendered to HTML on demand."""

from __future__ import annotations

import html
from typing import Dict, List, Optional, Sequence

from ..lang.keywords import ELEMENT_NAMES
from ..runtime.modules import CapabilityModule
from ..runtime.values import VOID, Value, ValueKind

CONTAINER_METHODS = frozenset({"pane", "div", "box"})
RENDER_METHODS = frozenset({"show", "render"})
STYLE_METHODS = frozenset({"style", "css"})

# Element name to HTML tag, where they differ.
HTML_TAGS: Dict[str, str] = {
    "page": "html",
    "big": "h1",
    "text": "p",
    "box": "div",
    "pane": "div",
    "panel": "div",
    "grid": "div",
    "btn": "button",
    "link": "a",
    "image": "img",
    "field": "input",
    "list": "ul",
    "emoji": "span",
}

VOID_TAGS = frozenset({"img", "input"})

# Component keys that are not rendered as HTML attributes.
_CONTENT_KEYS = frozenset({"tag", "content", "text", "items"})


def _pairs(args: Sequence[Value]) -> Dict[str, Value]:
    """Read ``key value key value ...``; a trailing odd key is ignored."""
    props: Dict[str, Value] = {}
    for index in range(0, len(args) - 1, 2):
        props[args[index].to_string()] = args[index + 1]
    return props


def _component(tag: str, props: Dict[str, Value]) -> Value:
    return Value.map_of({"tag": Value.text(tag), **props})


def render_html(value: Value) -> str:
    """Render a component map, a list of components or a plain value as HTML."""
    if value.kind is ValueKind.LIST:
        return "".join(render_html(item) for item in value.data)
    if value.kind is ValueKind.MAP and "tag" in value.data:
        return _render_element(value.data)
    if value.is_void:
        return ""
    return html.escape(value.to_string())


def _render_element(props: Dict[str, Value]) -> str:
    element = props["tag"].to_string()
    tag = HTML_TAGS.get(element, element)

    inner: List[str] = []
    for key in ("content", "text"):
        if key in props:
            inner.append(render_html(props[key]))
    items = props.get("items")
    if items is not None and items.kind is ValueKind.LIST:
        inner.extend(f"<li>{render_html(item)}</li>" for item in items.data)
    body = "".join(inner)

    if tag == "html":
        title = props.get("title")
        head = f"<title>{html.escape(title.to_string())}</title>" if title is not None else ""
        return (
            '<!DOCTYPE html><html><head><meta charset="UTF-8">'
            f"{head}</head><body>{body}</body></html>"
        )

    attrs = "".join(
        f' {html.escape(key, quote=True)}="{html.escape(item.to_string(), quote=True)}"'
        for key, item in props.items()
        if key not in _CONTENT_KEYS
    )
    if tag in VOID_TAGS:
        return f"<{tag}{attrs}>"
    return f"<{tag}{attrs}>{body}</{tag}>"


class ViewModule(CapabilityModule):
    """
    Build UI components.

    Every component is a map with a ``tag`` entry plus its properties.
    Markup element names reach this module without ``call``, so
    ``button "Go" href "/go"`` is ``call view button "Go" href "/go"``.
    ``show`` and ``render`` turn a component into an HTML string.
    """

    name = "view"

    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        if method is None:
            return VOID

        if method in CONTAINER_METHODS or method in ("input", "field"):
            return _component(method, _pairs(args))

        if method in ("button", "btn"):
            props = {"text": args[0]} if args else {}
            props.update(_pairs(args[1:]))
            return _component(method, props)

        if method in ("text", "label"):
            if not args:
                return VOID
            return _component(method, {"content": args[0]})

        if method in ("image", "img"):
            if not args:
                return VOID
            return _component(method, {"src": args[0]})

        if method in ("list", "ul"):
            props = {}
            if args and args[0].kind is ValueKind.LIST:
                props["items"] = args[0]
            return _component(method, props)

        if method in RENDER_METHODS:
            if not args:
                return VOID
            return Value.text(render_html(args[0]))

        if method in STYLE_METHODS:
            return Value.map_of(_pairs(args))

        if method in ELEMENT_NAMES:
            props = {"content": args[0]} if args else {}
            props.update(_pairs(args[1:]))
            return _component(method, props)

        return VOID
