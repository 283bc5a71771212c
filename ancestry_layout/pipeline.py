import logging
import numbers
import time
from collections.abc import Hashable
from typing import Optional

from .config import DEFAULT_CONFIG, LayoutConfig
from .connections import derive_connections
from .errors import HierarchyError, InvalidInputShape
from .hierarchy import build_hierarchy
from .mapper import map_coordinates
from .ordering import order_siblings
from .records import coerce_records
from .result import LayoutResult
from .solver import solve_layout

logger = logging.getLogger(__name__)


def _check_viewport(viewport_width) -> float:
    if isinstance(viewport_width, bool) or not isinstance(viewport_width, numbers.Real):
        kind = type(viewport_width).__name__
        raise InvalidInputShape(f"viewport_width must be a number, got {kind}")
    if not viewport_width > 0:
        raise InvalidInputShape(
            f"viewport_width must be positive, got {viewport_width!r}"
        )
    return float(viewport_width)


def calculate_tree_layout(
    records,
    viewport_width: float,
    config: Optional[LayoutConfig] = None,
    root_id: Optional[Hashable] = None,
) -> LayoutResult:
    """Lay out a family from its flat person records.

    Returns positioned nodes, parent -> children connections and diagnostics
    for every record that was left out. Raises InvalidInputShape for input
    that is not a sequence of well-formed records; every other problem
    (no root, several roots, cycles, orphans) ends up in ``diagnostics``.
    ``root_id`` lays out only the branch below that person.
    """
    config = config or DEFAULT_CONFIG
    viewport_width = _check_viewport(viewport_width)
    records = coerce_records(records)

    started = time.perf_counter()
    try:
        hierarchy = build_hierarchy(records, root_id=root_id)
    except HierarchyError as exc:
        logger.warning("cannot lay out family tree: %s", exc.message)
        return LayoutResult(diagnostics=[*exc.collected, exc.diagnostic()])

    order_siblings(hierarchy.root, config.direction)
    placements = solve_layout(hierarchy.root, config)
    nodes, extent = map_coordinates(hierarchy.root, placements, viewport_width, config)
    connections = derive_connections(nodes, hierarchy.parent_of)

    logger.debug(
        "laid out %d of %d records, %d connections, %d generations in %.1f ms",
        len(nodes),
        len(records),
        len(connections),
        extent.max_depth + 1,
        (time.perf_counter() - started) * 1000,
    )
    return LayoutResult(nodes, connections, hierarchy.diagnostics, extent)
