from collections.abc import Hashable
from typing import Dict, List

from .result import ConnectionEdge, Endpoint, LayoutNode


def derive_connections(
    nodes: List[LayoutNode], parent_of: Dict[Hashable, Hashable]
) -> List[ConnectionEdge]:
    """One edge per parent with at least one laid out child.

    Edges follow the order of the parents in ``nodes``, children keep their
    display order.
    """
    by_id = {node.id: node for node in nodes}
    groups: Dict[Hashable, List[Endpoint]] = {}
    for node in nodes:
        parent_id = parent_of.get(node.id)
        if parent_id is None or parent_id not in by_id:
            continue
        groups.setdefault(parent_id, []).append(Endpoint.of(node))

    return [
        ConnectionEdge(Endpoint.of(node), tuple(groups[node.id]))
        for node in nodes
        if node.id in groups
    ]
