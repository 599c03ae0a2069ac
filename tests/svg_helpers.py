from typing import List, Tuple
from xml.etree import ElementTree

SVG_NS = "{http://www.w3.org/2000/svg}"


def parse_svg(markup: str) -> ElementTree.Element:
    return ElementTree.fromstring(markup)


def find_all(root: ElementTree.Element, tag: str) -> List[ElementTree.Element]:
    return list(root.iter(f"{SVG_NS}{tag}"))


def texts(root: ElementTree.Element) -> List[str]:
    """Text content of every <text> element, joining tspans with spaces."""
    out = []
    for el in find_all(root, "text"):
        parts = [el.text or ""] + [t.text or "" for t in el.iter(f"{SVG_NS}tspan")]
        out.append(" ".join(p for p in parts if p))
    return out


def view_box(root: ElementTree.Element) -> Tuple[float, float, float, float]:
    return tuple(float(v) for v in root.get("viewBox").split())


def clipped_groups(root: ElementTree.Element) -> List[ElementTree.Element]:
    return [g for g in find_all(root, "g") if g.get("clip-path")]
