from .config import Direction
from .hierarchy import HierarchyNode


def sibling_key(direction: Direction):
    """Sort key: explicit sibling_order first (ascending for LTR, descending
    for RTL), records without one after them. Ties are left to the stable sort."""
    sign = -1 if Direction(direction) is Direction.RTL else 1

    def key(node: HierarchyNode):
        order = node.record.sibling_order
        if order is None:
            return (1, 0)
        return (0, sign * order)

    return key


def order_siblings(
    root: HierarchyNode, direction: Direction = Direction.LTR
) -> HierarchyNode:
    """Sort the children of every node, root to leaves, in place."""
    key = sibling_key(direction)
    stack = [root]
    while stack:
        node = stack.pop()
        # children were attached in input order, so equal keys keep it
        node.children.sort(key=key)
        stack.extend(node.children)
    return root
