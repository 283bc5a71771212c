from collections.abc import Hashable
from typing import Dict, List, Tuple

from .config import DEFAULT_CONFIG, Direction, LayoutConfig
from .hierarchy import HierarchyNode
from .result import LayoutExtent, LayoutNode
from .solver import Placement, depth_spacing, is_family_root, node_height


def _pre_order(root: HierarchyNode) -> List[HierarchyNode]:
    order = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(reversed(node.children))
    return order


def map_coordinates(
    root: HierarchyNode,
    placements: Dict[Hashable, Placement],
    viewport_width: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Tuple[List[LayoutNode], LayoutExtent]:
    """Put depth on the horizontal axis and breadth on the vertical one.

    Generations run left to right (LTR) or right to left (RTL), one
    ``depth_spacing`` apart; siblings are stacked top to bottom. Within a
    generation, cards of different heights are shifted so that the edges
    facing their parents line up, and the family root is pulled back by
    ``root_offset``. Nodes come back in pre-order, root first.
    """
    max_depth = max(p.depth for p in placements.values())
    spacing = depth_spacing(max_depth, viewport_width, config.widening_factor)
    rtl = config.direction is Direction.RTL
    # +1: away from the parent generation
    outward = -1 if rtl else 1

    order = _pre_order(root)
    heights = {
        node.id: node_height(node, config, is_root=is_family_root(node))
        for node in order
    }
    shortest: Dict[int, float] = {}
    for node in order:
        depth = placements[node.id].depth
        shortest[depth] = min(shortest.get(depth, heights[node.id]), heights[node.id])

    nodes = []
    for node in order:
        p = placements[node.id]
        height = heights[node.id]
        generation = max_depth - p.depth if rtl else p.depth
        x = generation * spacing + outward * (height - shortest[p.depth]) / 2
        if is_family_root(node):
            x -= outward * config.root_offset
        nodes.append(
            LayoutNode(node.record, p.depth, x, p.breadth, p.breadth, p.width, height)
        )

    breadths = [p.breadth for p in placements.values()]
    xs = [node.x for node in nodes]
    extent = LayoutExtent(
        min_breadth=min(breadths),
        max_breadth=max(breadths),
        min_x=min(xs),
        max_x=max(xs),
        min_y=min(breadths),
        max_y=max(breadths),
        max_depth=max_depth,
        depth_spacing=spacing,
    )
    return nodes, extent
