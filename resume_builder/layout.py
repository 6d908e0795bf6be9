from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Tuple

from markupsafe import escape

# Elements that never carry children when serialized
_VOID_TAGS = {"hr", "br"}


@dataclass(frozen=True)
class Node:
    """One element of a rendered visual tree.

    Frozen with tuple members so equal inputs give equal (==) trees.
    """

    tag: str
    classes: Tuple[str, ...] = ()
    text: str = ""
    attrs: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["Node", ...] = field(default_factory=tuple)

    def attr(self, name: str) -> Optional[str]:
        for k, v in self.attrs:
            if k == name:
                return v
        return None

    def has_class(self, name: str) -> bool:
        return name in self.classes


def el(tag: str, *children: Optional[Node], cls: str = "", text: str = "", **attrs: str) -> Node:
    """Build a Node. `None` children are dropped; `data_x` kwargs become `data-x`."""
    kept = tuple(c for c in children if c is not None)
    pairs = tuple(sorted((k.replace("_", "-"), str(v)) for k, v in attrs.items()))
    return Node(tag=tag, classes=tuple(cls.split()), text=text, attrs=pairs, children=kept)


# ---------------------------
# Queries
# ---------------------------


def iter_nodes(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from iter_nodes(child)


def find_all(node: Node, predicate: Callable[[Node], bool]) -> list:
    return [n for n in iter_nodes(node) if predicate(n)]


def find_by_id(node: Optional[Node], element_id: str) -> Optional[Node]:
    if node is None:
        return None
    for n in iter_nodes(node):
        if n.attr("id") == element_id:
            return n
    return None


def text_content(node: Node) -> str:
    parts = [n.text for n in iter_nodes(node) if n.text]
    return " ".join(parts)


# ---------------------------
# HTML
# ---------------------------


def to_html(node: Node) -> str:
    attrs = ""
    if node.classes:
        attrs += f' class="{escape(" ".join(node.classes))}"'
    for k, v in node.attrs:
        attrs += f' {k}="{escape(v)}"'
    if node.tag in _VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    inner = str(escape(node.text)) + "".join(to_html(c) for c in node.children)
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"
