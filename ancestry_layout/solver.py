"""Tidy tree layout.

Buchheim, Juenger & Leipert's linear time variant of Walker's algorithm
("Improving Walker's Algorithm to Run in Linear Time", 2002), written without
recursion so deep chains do not hit the interpreter's recursion limit.

Breadth is the axis along which siblings and cousins are separated, depth is
the generation index. Breadth values are in px; the root ends up at 0.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import DEFAULT_CONFIG, LayoutConfig
from .hierarchy import HierarchyNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    breadth: float
    depth: int
    width: float


@dataclass(eq=False)
class _TidyNode:
    node: HierarchyNode
    width: float
    parent: Optional["_TidyNode"] = None
    number: int = 1  # 1-based position among siblings
    children: List["_TidyNode"] = field(default_factory=list)
    prelim: float = 0.0
    mod: float = 0.0
    change: float = 0.0
    shift: float = 0.0
    midpoint: float = 0.0
    thread: Optional["_TidyNode"] = None
    ancestor: Optional["_TidyNode"] = None

    def __post_init__(self):
        self.ancestor = self


def is_family_root(node: HierarchyNode) -> bool:
    """Top of the whole family rather than of a branch: drawn as the large root card."""
    return node.depth == 0 and node.record.father_id is None


def node_width(
    node: HierarchyNode, config: LayoutConfig, is_root: bool = False
) -> float:
    record = node.record
    if record.node_width:
        return record.node_width
    if is_root:
        return config.root_node_width
    if config.show_photos and record.has_photo:
        return config.photo_node_width
    return config.text_node_width


def node_height(
    node: HierarchyNode, config: LayoutConfig, is_root: bool = False
) -> float:
    """Card size along the generation axis."""
    if is_root:
        return config.root_node_height
    if config.show_photos and node.record.has_photo:
        return config.photo_node_height
    return config.text_node_height


def depth_spacing(
    max_depth: int, viewport_width: float, widening_factor: float = 1.0
) -> float:
    """Distance between generations so that all of them fit the viewport."""
    return viewport_width / (max_depth + 1) * widening_factor


def _wrap(root: HierarchyNode, config: LayoutConfig) -> List[_TidyNode]:
    """Mirror the hierarchy into layout nodes, returned in pre-order."""
    top = _TidyNode(root, node_width(root, config, is_root=is_family_root(root)))
    order = []
    stack = [top]
    while stack:
        t = stack.pop()
        order.append(t)
        for i, child in enumerate(t.node.children, start=1):
            width = node_width(child, config)
            t.children.append(_TidyNode(child, width, parent=t, number=i))
        stack.extend(reversed(t.children))
    return order


def _next_left(v: _TidyNode) -> Optional[_TidyNode]:
    return v.children[0] if v.children else v.thread


def _next_right(v: _TidyNode) -> Optional[_TidyNode]:
    return v.children[-1] if v.children else v.thread


def _ancestor(vil: _TidyNode, v: _TidyNode, default_ancestor: _TidyNode) -> _TidyNode:
    if vil.ancestor.parent is v.parent:
        return vil.ancestor
    return default_ancestor


def _move_subtree(wl: _TidyNode, wr: _TidyNode, shift: float):
    subtrees = wr.number - wl.number
    wr.change -= shift / subtrees
    wr.shift += shift
    wl.change += shift / subtrees
    wr.prelim += shift
    wr.mod += shift


def _execute_shifts(v: _TidyNode):
    shift = change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


class _Separation:
    def __init__(self, config: LayoutConfig):
        self.config = config

    def __call__(self, a: _TidyNode, b: _TidyNode) -> float:
        return self.config.separation(a.width, b.width, siblings=a.parent is b.parent)


def _apportion(v: _TidyNode, default_ancestor: _TidyNode, distance) -> _TidyNode:
    if v.number == 1:
        return default_ancestor

    # i/o: inner/outer contour, l/r: left forest / new subtree v
    vir = vor = v
    vil = v.parent.children[v.number - 2]
    vol = v.parent.children[0]
    sir = sor = v.mod
    sil = vil.mod
    sol = vol.mod
    while _next_right(vil) is not None and _next_left(vir) is not None:
        vil = _next_right(vil)
        vir = _next_left(vir)
        vol = _next_left(vol)
        vor = _next_right(vor)
        vor.ancestor = v
        shift = (vil.prelim + sil) - (vir.prelim + sir) + distance(vil, vir)
        if shift > 0:
            _move_subtree(_ancestor(vil, v, default_ancestor), v, shift)
            sir += shift
            sor += shift
        sil += vil.mod
        sir += vir.mod
        sol += vol.mod
        sor += vor.mod

    if _next_right(vil) is not None and _next_right(vor) is None:
        vor.thread = _next_right(vil)
        vor.mod += sil - sor
    if _next_left(vir) is not None and _next_left(vol) is None:
        vol.thread = _next_left(vir)
        vol.mod += sir - sol
        default_ancestor = v
    return default_ancestor


def _first_walk(order: List[_TidyNode], distance):
    # reversed pre-order visits every node after all of its descendants
    for v in reversed(order):
        if not v.children:
            continue
        default_ancestor = v.children[0]
        previous = None
        for child in v.children:
            own = child.midpoint if child.children else 0.0
            if previous is None:
                child.prelim = own
            else:
                child.prelim = previous.prelim + distance(previous, child)
                if child.children:
                    child.mod = child.prelim - own
            default_ancestor = _apportion(child, default_ancestor, distance)
            previous = child
        _execute_shifts(v)
        v.midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2

    top = order[0]
    top.prelim = top.midpoint if top.children else 0.0


def _second_walk(top: _TidyNode) -> Dict[Hashable, Placement]:
    placements = {}
    origin = top.prelim
    stack = [(top, 0.0)]
    while stack:
        v, m = stack.pop()
        placements[v.node.id] = Placement(v.prelim + m - origin, v.node.depth, v.width)
        for child in v.children:
            stack.append((child, m + v.mod))
    return placements


def solve_layout(
    root: HierarchyNode, config: LayoutConfig = DEFAULT_CONFIG
) -> Dict[Hashable, Placement]:
    """Breadth and depth for every node below ``root``.

    Neighbours on a generation are ``(w1 + w2) / 2`` apart plus a gap that
    grows with their average width (``LayoutConfig.gap``), wider between
    cousins than between siblings; parents sit centered over their first and
    last child.
    """
    order = _wrap(root, config)
    _first_walk(order, _Separation(config))
    placements = _second_walk(order[0])
    logger.debug("solved %d nodes", len(placements))
    return placements
