from ancestry_layout import Direction
from ancestry_layout.hierarchy import build_hierarchy
from ancestry_layout.ordering import order_siblings
from ancestry_layout.records import coerce_records

from conftest import person

SIBLINGS = [
    person("p"),
    person("c", "p", order=2),
    person("a", "p", order=0),
    person("b", "p", order=1),
]


def ordered(records, direction=Direction.LTR):
    hierarchy = build_hierarchy(coerce_records(records))
    order_siblings(hierarchy.root, direction)
    return hierarchy


def child_ids(node):
    return [c.id for c in node.children]


class TestOrderSiblings:

    def test_ascending(self):
        h = ordered(SIBLINGS)
        assert child_ids(h.root) == ["a", "b", "c"]

    def test_descending_for_rtl(self):
        h = ordered(SIBLINGS, Direction.RTL)
        assert child_ids(h.root) == ["c", "b", "a"]

    def test_missing_order_goes_last(self):
        records = [
            person("p"),
            person("x", "p"),
            person("b", "p", order=5),
            person("y", "p"),
            person("a", "p", order=1),
        ]
        assert child_ids(ordered(records).root) == ["a", "b", "x", "y"]
        assert child_ids(ordered(records, Direction.RTL).root) == ["b", "a", "x", "y"]

    def test_ties_keep_input_order(self):
        records = [person("p")] + [person(f"c{i}", "p", order=1) for i in range(6)]
        assert child_ids(ordered(records).root) == [f"c{i}" for i in range(6)]
        assert child_ids(ordered(records, "rtl").root) == [f"c{i}" for i in range(6)]

    def test_applies_to_every_level(self):
        h = ordered(
            [
                person("p"),
                person("b", "p", order=1),
                person("a", "p", order=0),
                person("b2", "b", order=9),
                person("b1", "b", order=3),
            ]
        )
        assert child_ids(h.root) == ["a", "b"]
        assert child_ids(h.nodes["b"]) == ["b1", "b2"]

    def test_negative_orders(self):
        h = ordered(
            [person("p"), person("z", "p", order=0), person("y", "p", order=-1)]
        )
        assert child_ids(h.root) == ["y", "z"]
