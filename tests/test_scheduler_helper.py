from dataclasses import dataclass

import pytest

from batchsched.scheduler_helper import (
    FitErrors,
    HostPriority,
    get_node_list,
    predicate_nodes,
    prioritize_nodes,
    select_best_node,
    sort_nodes,
)


@dataclass(frozen=True)
class Node:
    name: str


@pytest.mark.parametrize(
    "node_scores, expected",
    [
        (
            {1.0: [Node("node1"), Node("node2")], 2.0: [Node("node3"), Node("node4")]},
            [Node("node3"), Node("node4")],
        ),
        (
            {
                1.0: [Node("node1"), Node("node2")],
                3.0: [Node("node3")],
                2.0: [Node("node4"), Node("node5")],
            },
            [Node("node3")],
        ),
    ],
)
def test_select_best_node(node_scores, expected):
    for _ in range(10):
        assert select_best_node(node_scores) in expected


def test_select_best_node_empty_raises():
    with pytest.raises(ValueError):
        select_best_node({})


def test_sort_nodes_descending():
    scores = {1.0: [Node("a")], 3.0: [Node("b"), Node("c")], 2.0: [Node("d")]}
    assert sort_nodes(scores) == [Node("b"), Node("c"), Node("d"), Node("a")]


def test_get_node_list():
    nodes = {"x": Node("x"), "y": Node("y")}
    assert sorted(get_node_list(nodes), key=lambda n: n.name) == [Node("x"), Node("y")]


def test_predicate_nodes_splits_fit_and_errors():
    nodes = [Node(f"n{i}") for i in range(20)]

    def fn(task, node):
        if int(node.name[1:]) % 2:
            raise RuntimeError(f"{node.name} busy")

    passed, fit = predicate_nodes("task", nodes, fn)
    assert passed == [n for n in nodes if int(n.name[1:]) % 2 == 0]
    assert set(fit.nodes) == {n.name for n in nodes if int(n.name[1:]) % 2}
    assert str(fit.nodes["n1"]) == "n1 busy"


def test_fit_errors_set_node_error():
    fit = FitErrors()
    err = ValueError("nope")
    fit.set_node_error("node1", err)
    assert fit.nodes == {"node1": err}


def test_prioritize_nodes_sums_scores():
    nodes = [Node("a"), Node("b"), Node("c")]
    seen = {}

    def map_fn(task, node):
        return {"plugin": 1.7}, 2.0

    def reduce_fn(task, plugin_scores):
        seen.update(plugin_scores)
        return {"a": 10.0, "b": 5.0}

    def batch_fn(task, all_nodes):
        return {"b": 5.0}

    scores = prioritize_nodes("task", nodes, batch_fn, map_fn, reduce_fn)
    assert scores == {12.0: [Node("a"), Node("b")], 2.0: [Node("c")]}
    assert seen["plugin"] == [HostPriority("a", 1), HostPriority("b", 1), HostPriority("c", 1)]


def test_prioritize_nodes_reduce_failure_returns_empty():
    def reduce_fn(task, plugin_scores):
        raise RuntimeError("boom")

    scores = prioritize_nodes(
        "task", [Node("a")], lambda t, n: {}, lambda t, n: ({}, 0.0), reduce_fn
    )
    assert scores == {}


def test_prioritize_nodes_batch_failure_returns_empty():
    def batch_fn(task, nodes):
        raise RuntimeError("boom")

    scores = prioritize_nodes(
        "task", [Node("a")], batch_fn, lambda t, n: ({}, 0.0), lambda t, m: {}
    )
    assert scores == {}


def test_prioritize_nodes_map_failure_skips_order_score():
    def map_fn(task, node):
        if node.name == "bad":
            raise RuntimeError("boom")
        return {}, 4.0

    scores = prioritize_nodes(
        "task", [Node("ok"), Node("bad")], lambda t, n: {}, map_fn, lambda t, m: {}
    )
    assert scores == {4.0: [Node("ok")], 0.0: [Node("bad")]}