"""Family tree layout: flat person records in, positioned nodes and connectors out."""

import logging

from .config import DEFAULT_CONFIG, Direction, LayoutConfig
from .errors import (
    CyclicReferenceDetected,
    Diagnostic,
    DiagnosticKind,
    HierarchyError,
    InvalidInputShape,
    LayoutError,
    MultipleRootsFound,
    NoRootFound,
)
from .pipeline import calculate_tree_layout
from .records import PersonRecord, read_records_csv, records_from_frame
from .result import ConnectionEdge, Endpoint, LayoutExtent, LayoutNode, LayoutResult

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_CONFIG",
    "ConnectionEdge",
    "CyclicReferenceDetected",
    "Diagnostic",
    "DiagnosticKind",
    "Direction",
    "Endpoint",
    "HierarchyError",
    "InvalidInputShape",
    "LayoutConfig",
    "LayoutError",
    "LayoutExtent",
    "LayoutNode",
    "LayoutResult",
    "MultipleRootsFound",
    "NoRootFound",
    "PersonRecord",
    "calculate_tree_layout",
    "read_records_csv",
    "records_from_frame",
]
