"""Turn flat person records into a single rooted tree.

Parent links (parent -> child) go into a directed igraph graph indexed by
input position. The graph answers the two structural questions: is there a
cycle (``is_dag``) and which records hang below the root
(``subcomponent``). The tree itself is then attached breadth-first from the
root, with a visited set, so malformed input cannot make it loop.
"""

import logging
from collections import deque
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import igraph as ig

from .errors import (
    CyclicReferenceDetected,
    Diagnostic,
    DiagnosticKind,
    MultipleRootsFound,
    NoRootFound,
)
from .records import PersonRecord

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class HierarchyNode:
    record: PersonRecord
    index: int  # position in the input
    depth: int = 0
    children: List["HierarchyNode"] = field(default_factory=list)

    @property
    def id(self) -> Hashable:
        return self.record.id

    def __repr__(self):
        return (
            f"HierarchyNode({self.id!r}, depth={self.depth}, "
            f"children={len(self.children)})"
        )


@dataclass
class Hierarchy:
    root: HierarchyNode
    # reachable nodes in breadth-first order, root first
    nodes: Dict[Hashable, HierarchyNode]
    parent_of: Dict[Hashable, Hashable]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def max_depth(self) -> int:
        return max(node.depth for node in self.nodes.values())


def resolve_parent(
    record: PersonRecord, index: Dict[Hashable, int]
) -> Optional[Hashable]:
    """father_id if it is a known record, mother_id otherwise."""
    for ref in record.parent_refs:
        if ref in index:
            return ref
    return None


def _index_records(records: List[PersonRecord], diagnostics: List[Diagnostic]):
    index: Dict[Hashable, int] = {}
    unique: List[PersonRecord] = []
    duplicates = []
    for record in records:
        if record.id in index:
            duplicates.append(record.id)
            continue
        index[record.id] = len(unique)
        unique.append(record)

    if duplicates:
        logger.warning("duplicate ids, keeping first occurrence: %s", duplicates)
        diagnostics.append(
            Diagnostic(
                DiagnosticKind.DUPLICATE_ID,
                f"{len(duplicates)} record(s) share an id with an earlier record "
                "and were skipped",
                tuple(duplicates),
            )
        )
    return index, unique


def _create_graph(records: List[PersonRecord], index: Dict[Hashable, int]):
    parent_idx: List[Optional[int]] = []
    edges = []
    for i, record in enumerate(records):
        parent_id = resolve_parent(record, index)
        if parent_id is None:
            parent_idx.append(None)
            continue
        parent_idx.append(index[parent_id])
        edges.append((index[parent_id], i))

    g = ig.Graph(n=len(records), edges=edges, directed=True)
    return g, parent_idx


def _cycle_members(g: ig.Graph, parent_idx: List[Optional[int]]) -> List[int]:
    if g.is_dag():
        return []
    members = []
    for component in g.connected_components(mode="strong"):
        if len(component) > 1:
            members.extend(component)
        elif parent_idx[component[0]] == component[0]:
            members.append(component[0])
    return sorted(members)


def build_hierarchy(
    records: List[PersonRecord], root_id: Optional[Hashable] = None
) -> Hierarchy:
    """Attach every record under its resolved parent and pick the single root.

    Raises NoRootFound, MultipleRootsFound or CyclicReferenceDetected when no
    single root can be determined; diagnostics collected up to that point
    travel on the exception.
    """
    diagnostics: List[Diagnostic] = []
    index, records = _index_records(records, diagnostics)
    g, parent_idx = _create_graph(records, index)

    # an explicitly chosen root may point at a parent outside the input
    pinned = index.get(root_id) if root_id is not None else None
    orphans = [
        i for i, record in enumerate(records)
        if record.parent_refs and parent_idx[i] is None and i != pinned
    ]
    for i in orphans:
        logger.warning(
            "parent not found: %r -> %r", records[i].id, records[i].parent_refs
        )
    if orphans:
        diagnostics.append(
            Diagnostic(
                DiagnosticKind.ORPHANED_RECORD,
                f"{len(orphans)} record(s) reference a parent that is not in the input",
                tuple(records[i].id for i in orphans),
            )
        )

    cyclic = _cycle_members(g, parent_idx)
    cycle_ids = tuple(records[i].id for i in cyclic)
    if cyclic:
        logger.warning("cyclic parent references: %s", list(cycle_ids))

    root = _find_root(records, index, cyclic, cycle_ids, root_id, diagnostics)

    if cyclic:
        diagnostics.append(
            Diagnostic(
                DiagnosticKind.CYCLIC_REFERENCE_DETECTED,
                f"{len(cyclic)} record(s) are their own ancestors and were excluded",
                cycle_ids,
            )
        )

    reachable = set(g.subcomponent(root, mode="out"))
    reported = set(orphans) | set(cyclic)
    unreachable = [
        i for i in range(len(records)) if i not in reachable and i not in reported
    ]
    if unreachable:
        logger.warning("%d record(s) not connected to the root", len(unreachable))
        diagnostics.append(
            Diagnostic(
                DiagnosticKind.UNREACHABLE_RECORD,
                f"{len(unreachable)} record(s) are not descendants of root "
                f"{records[root].id!r}",
                tuple(records[i].id for i in unreachable),
            )
        )

    return _attach(records, g, root, diagnostics)


def _find_root(records, index, cyclic, cycle_ids, root_id, diagnostics) -> int:
    if root_id is not None:
        if root_id not in index:
            raise NoRootFound(
                f"root {root_id!r} is not in the input", (root_id,), diagnostics
            )
        root = index[root_id]
        if root in cyclic:
            raise CyclicReferenceDetected(
                f"root {root_id!r} is part of a parent cycle", cycle_ids, diagnostics
            )
        return root

    if not records:
        raise NoRootFound("no records to lay out", (), diagnostics)

    candidates = [i for i, record in enumerate(records) if not record.parent_refs]
    if not candidates:
        if cyclic:
            raise CyclicReferenceDetected(
                "no record without a parent reference; the parent links form a cycle",
                cycle_ids,
                diagnostics,
            )
        raise NoRootFound("no record without a parent reference", (), diagnostics)
    if len(candidates) > 1:
        ids = tuple(records[i].id for i in candidates)
        raise MultipleRootsFound(
            f"{len(candidates)} records have no parent reference", ids, diagnostics
        )
    return candidates[0]


def _attach(records, g: ig.Graph, root: int, diagnostics) -> Hierarchy:
    root_node = HierarchyNode(records[root], root)
    nodes = {root_node.id: root_node}
    parent_of = {}
    seen = {root}
    queue = deque([root_node])
    while queue:
        node = queue.popleft()
        # vertex ids are input positions: sorting keeps the input order
        for child in sorted(g.successors(node.index)):
            if child in seen:
                continue
            seen.add(child)
            child_node = HierarchyNode(records[child], child, node.depth + 1)
            node.children.append(child_node)
            nodes[child_node.id] = child_node
            parent_of[child_node.id] = node.id
            queue.append(child_node)

    logger.debug(
        "hierarchy: %d of %d records attached below %r",
        len(nodes),
        len(records),
        root_node.id,
    )
    return Hierarchy(root_node, nodes, parent_of, diagnostics)
