"""
Shared fixtures: a small network with one link per junction type and a
motorway detour.

    A --tl--> B --prio--> C --rbl--> F
    |
    mw
    v
    D --mw--> E
"""

import pytest

from freespeed.calibration import Calibrator, ModelRegistry, NetworkMutator
from freespeed.network import (
    FeatureEntry,
    FeatureTable,
    NetworkGraph,
    Node,
    ValidationSample,
    ValidationSet,
)
from tests.helpers import RAW_FEATURES, make_link


@pytest.fixture
def graph():
    g = NetworkGraph()
    for node_id, x, y in [
        ("A", 0, 0), ("B", 1000, 0), ("C", 2000, 0),
        ("F", 3000, 0), ("D", 0, 1000), ("E", 1000, 1000),
    ]:
        g.add_node(Node(node_id, float(x), float(y)))

    g.add_link(make_link("tl", "A", "B", 10.0, "primary"))
    g.add_link(make_link("prio", "B", "C", 10.0, "residential"))
    g.add_link(make_link("rbl", "C", "F", 10.0, "residential"))
    g.add_link(make_link("mw1", "A", "D", 30.0, "motorway"))
    g.add_link(make_link("mw2", "D", "E", 30.0, "motorway_link"))
    return g


@pytest.fixture
def features(graph):
    table = FeatureTable({
        "tl": FeatureEntry("traffic_light", RAW_FEATURES),
        "prio": FeatureEntry("priority", RAW_FEATURES),
        "rbl": FeatureEntry("right_before_left", RAW_FEATURES),
    })
    table.attach(graph)
    return table


@pytest.fixture
def validation():
    """Targets equal to the speeds of the network as loaded."""
    return ValidationSet([
        ValidationSample("A", "C", 10.0),
        ValidationSample("C", "F", 10.0),
        ValidationSample("A", "E", 30.0),
    ])


@pytest.fixture
def registry():
    return ModelRegistry.default()


@pytest.fixture
def mutator(features, registry):
    return NetworkMutator(features, registry)


@pytest.fixture
def calibrator(graph, validation, mutator, registry, tmp_path):
    return Calibrator(graph, validation, mutator, registry, output_dir=tmp_path)
