from __future__ import annotations

import copy
from typing import Iterator, Mapping, Optional, TypeAlias
import xml.etree.ElementTree as ET


SVG_NS = "http://www.w3.org/2000/svg"

AttrValue: TypeAlias = str | float | int | None


class SvgElement:
    """Chainable builder over an ElementTree node.

    ElementTree nodes do not know their parent, so every wrapper carries the
    document root and resolves parents by walking down from it.
    """

    def __init__(self, node: ET.Element, root: ET.Element | None = None) -> None:
        self._node = node
        self._root = root if root is not None else node

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SvgElement) and other._node is self._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"SvgElement(<{self.tag} class={self.get_attr('class')!r}>)"

    @property
    def node(self) -> ET.Element:
        return self._node

    @property
    def root(self) -> "SvgElement":
        return SvgElement(self._root, self._root)

    @property
    def tag(self) -> str:
        return _strip_namespace(self._node.tag)

    def elem(
        self,
        name: str | ET.Element,
        attributes: Mapping[str, AttrValue] | None = None,
        class_names: str | None = None,
        insert_first: bool = False,
    ) -> "SvgElement":
        """Create (or adopt) a child node and return its wrapper."""
        node = name if isinstance(name, ET.Element) else ET.Element(name)
        if insert_first:
            self._node.insert(0, node)
        else:
            self._node.append(node)
        child = SvgElement(node, self._root)
        if attributes:
            child.attr(attributes)
        if class_names:
            child.add_class(class_names)
        return child

    def attr(self, attributes: Mapping[str, AttrValue]) -> "SvgElement":
        for key, value in attributes.items():
            if value is None:
                self._node.attrib.pop(key, None)
                continue
            self._node.set(key, format_attr_value(value))
        return self

    def get_attr(self, name: str) -> Optional[str]:
        return self._node.get(name)

    def classes(self) -> list[str]:
        return (self._node.get("class") or "").split()

    def add_class(self, names: str) -> "SvgElement":
        current = self.classes()
        for name in names.split():
            if name not in current:
                current.append(name)
        if current:
            self._node.set("class", " ".join(current))
        return self

    def remove_class(self, names: str) -> "SvgElement":
        drop = set(names.split())
        remaining = [name for name in self.classes() if name not in drop]
        if remaining:
            self._node.set("class", " ".join(remaining))
        else:
            self._node.attrib.pop("class", None)
        return self

    def has_class(self, name: str) -> bool:
        return name in self.classes()

    def text(self, content: object) -> "SvgElement":
        self._node.text = str(content)
        return self

    def text_content(self) -> str:
        return "".join(self._node.itertext())

    def parent(self) -> Optional["SvgElement"]:
        if self._node is self._root:
            return None
        for candidate in self._root.iter():
            for child in candidate:
                if child is self._node:
                    return SvgElement(candidate, self._root)
        return None

    def children(self) -> list["SvgElement"]:
        return [SvgElement(child, self._root) for child in self._node]

    def query_selector(self, selector: str) -> Optional["SvgElement"]:
        for match in self._iter_matches(selector):
            return match
        return None

    def query_selector_all(self, selector: str) -> list["SvgElement"]:
        return list(self._iter_matches(selector))

    def remove(self) -> Optional["SvgElement"]:
        parent = self.parent()
        if parent is not None:
            parent.node.remove(self._node)
        return parent

    def empty(self) -> "SvgElement":
        for child in list(self._node):
            self._node.remove(child)
        self._node.text = None
        return self

    def clone_node(self) -> ET.Element:
        return copy.deepcopy(self._node)

    def width(self) -> float:
        return _parse_length(self._node.get("width")) or 0.0

    def height(self) -> float:
        return _parse_length(self._node.get("height")) or 0.0

    def to_markup(self) -> str:
        return ET.tostring(self._node, encoding="unicode")

    def _iter_matches(self, selector: str) -> Iterator["SvgElement"]:
        tag, wanted = _parse_selector(selector)
        for node in self._node.iter():
            if node is self._node:
                continue
            if tag and _strip_namespace(node.tag) != tag:
                continue
            if wanted and not wanted.issubset((node.get("class") or "").split()):
                continue
            yield SvgElement(node, self._root)


def create_svg(width: float, height: float, class_names: str | None = None) -> SvgElement:
    if width < 0 or height < 0:
        raise ValueError("svg width/height must be >= 0")
    root = ET.Element("svg")
    svg = SvgElement(root)
    svg.attr(
        {
            "xmlns": SVG_NS,
            "width": width,
            "height": height,
            "viewBox": f"0 0 {format_attr_value(width)} {format_attr_value(height)}",
        }
    )
    if class_names:
        svg.add_class(class_names)
    return svg


def format_attr_value(value: AttrValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        out = f"{value:.4f}".rstrip("0").rstrip(".")
        return "0" if out == "-0" else out
    return str(value)


def _parse_selector(selector: str) -> tuple[str, frozenset[str]]:
    raw = selector.strip()
    if not raw or " " in raw:
        raise ValueError(f"unsupported selector: {selector!r}")
    tag, *class_parts = raw.split(".")
    return tag, frozenset(part for part in class_parts if part)


def _strip_namespace(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _parse_length(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    value = value.strip()
    if value.endswith("px"):
        value = value[:-2]
    try:
        return float(value)
    except ValueError:
        return None
