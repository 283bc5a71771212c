from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from .errors import Diagnostic, DiagnosticKind
from .records import PersonRecord


@dataclass(frozen=True)
class LayoutNode:
    """A person with its final screen position."""

    record: PersonRecord
    depth: int
    x: float
    y: float
    breadth: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def id(self) -> Hashable:
        return self.record.id

    @property
    def father_id(self):
        return self.record.father_id

    @property
    def mother_id(self):
        return self.record.mother_id

    @property
    def sibling_order(self) -> Optional[int]:
        return self.record.sibling_order

    @property
    def photo_url(self) -> Optional[str]:
        return self.record.photo_url

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data.update(depth=self.depth, x=self.x, y=self.y)
        return data


@dataclass(frozen=True)
class Endpoint:
    """One end of a connector, with what a renderer needs to pick its style."""

    id: Hashable
    x: float
    y: float
    depth: int
    photo_url: Optional[str] = None
    father_id: Optional[Hashable] = None

    @classmethod
    def of(cls, node: LayoutNode) -> "Endpoint":
        return cls(node.id, node.x, node.y, node.depth, node.photo_url, node.father_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "depth": self.depth,
            "photo_url": self.photo_url,
            "father_id": self.father_id,
        }


@dataclass(frozen=True)
class ConnectionEdge:
    parent: Endpoint
    children: Tuple[Endpoint, ...]

    def to_dict(self) -> dict:
        return {
            "parent": self.parent.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class LayoutExtent:
    min_breadth: float = 0.0
    max_breadth: float = 0.0
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0
    max_depth: int = 0
    depth_spacing: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> dict:
        return {
            "min_breadth": self.min_breadth,
            "max_breadth": self.max_breadth,
            "min_x": self.min_x,
            "max_x": self.max_x,
            "min_y": self.min_y,
            "max_y": self.max_y,
            "max_depth": self.max_depth,
            "depth_spacing": self.depth_spacing,
        }


@dataclass(frozen=True)
class LayoutResult:
    nodes: List[LayoutNode] = field(default_factory=list)
    connections: List[ConnectionEdge] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    extent: LayoutExtent = field(default_factory=LayoutExtent)

    @property
    def ok(self) -> bool:
        return not any(d.fatal for d in self.diagnostics)

    @property
    def excluded_ids(self) -> Set[Hashable]:
        placed = {node.id for node in self.nodes}
        named = {rid for d in self.diagnostics for rid in d.record_ids}
        return named - placed

    def has(self, kind: DiagnosticKind) -> bool:
        return any(d.kind == kind for d in self.diagnostics)

    def node(self, node_id) -> LayoutNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def to_dict(self) -> dict:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "connections": [edge.to_dict() for edge in self.connections],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "extent": self.extent.to_dict(),
        }
