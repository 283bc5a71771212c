import random

import pytest

from ancestry_layout import LayoutConfig


def person(pid, father=None, mother=None, order=None, **extra):
    record = {
        "id": pid,
        "father_id": father,
        "mother_id": mother,
        "sibling_order": order,
    }
    record.update(extra)
    return record


def random_family(seed, size):
    """Acyclic family of `size` people below person 0, ids are ints."""
    rng = random.Random(seed)
    records = [person(0)]
    for pid in range(1, size):
        # bias towards recent records to get deep, uneven branches
        if rng.random() < 0.7:
            parent = rng.randrange(max(0, pid - 8), pid)
        else:
            parent = rng.randrange(pid)
        records.append(person(pid, parent, order=rng.choice([None, 0, 1, 2, 3])))
    return records


def mixed_family(seed, size):
    """Like random_family, with photo, text-only and explicitly sized cards."""
    rng = random.Random(seed)
    records = random_family(seed, size)
    for record in records[1:]:
        card = rng.choice(["text", "photo", "sized", "narrow"])
        if card == "photo":
            record["photo_url"] = f"{record['id']}.jpg"
        elif card == "sized":
            record["node_width"] = rng.choice([75, 100, 140])
        elif card == "narrow":
            record["node_width"] = 40
    return records


def children_of(result, parent_id):
    for edge in result.connections:
        if edge.parent.id == parent_id:
            return [child.id for child in edge.children]
    return []


@pytest.fixture
def config():
    return LayoutConfig()


@pytest.fixture
def three_generations():
    # grandpa -> (father, uncle), father -> (kid1, kid2, kid3), uncle -> cousin
    return [
        person("grandpa", photo_url="gp.jpg"),
        person("father", "grandpa", order=0),
        person("uncle", "grandpa", order=1),
        person("kid1", "father", order=0),
        person("kid2", "father", order=1),
        person("kid3", "father", order=2),
        person("cousin", "uncle", order=0),
    ]
