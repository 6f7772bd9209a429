"""Helpers that filter, score and pick nodes for a task."""

from __future__ import annotations

import logging
import math
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

log = logging.getLogger(__name__)

_WORKERS = 16

PredicateFn = Callable[[Any, Any], None]
NodeOrderMapFn = Callable[[Any, Any], "tuple[Mapping[str, float], float]"]
NodeOrderReduceFn = Callable[[Any, "dict[str, list[HostPriority]]"], Mapping[str, float]]
BatchNodeOrderFn = Callable[[Any, Sequence[Any]], Mapping[str, float]]


@dataclass
class FitErrors:
    """Per-node reasons a task did not fit."""

    nodes: dict[str, BaseException] = field(default_factory=dict)

    def set_node_error(self, node_name: str, error: BaseException) -> None:
        """Record why the task does not fit on ``node_name``."""
        self.nodes[node_name] = error


@dataclass
class HostPriority:
    """A node's integer score from one plugin."""

    host: str
    score: int


def _run_parallel(fn: Callable[[Any], None], nodes: Sequence[Any]) -> None:
    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        for future in [pool.submit(fn, node) for node in nodes]:
            future.result()


def predicate_nodes(task: Any, nodes: Sequence[Any], fn: PredicateFn) -> tuple[list[Any], FitErrors]:
    """Return the nodes on which ``fn`` accepts the task, and why the others failed.

    ``fn`` rejects a node by raising an exception.
    """
    fit = FitErrors()
    passed: dict[int, Any] = {}
    lock = threading.Lock()

    def check(indexed: tuple[int, Any]) -> None:
        index, node = indexed
        try:
            fn(task, node)
        except Exception as exc:  # noqa: BLE001 - any rejection is recorded
            log.debug("Predicates failed for task %r on node <%s>: %s", task, node.name, exc)
            with lock:
                fit.set_node_error(node.name, exc)
            return
        with lock:
            passed[index] = node

    _run_parallel(check, list(enumerate(nodes)))
    return [passed[i] for i in sorted(passed)], fit


def prioritize_nodes(
    task: Any,
    nodes: Sequence[Any],
    batch_fn: BatchNodeOrderFn,
    map_fn: NodeOrderMapFn,
    reduce_fn: NodeOrderReduceFn,
) -> dict[float, list[Any]]:
    """Score each node and group the nodes by their total score."""
    plugin_scores: dict[str, list[HostPriority]] = {}
    order_scores: dict[str, float] = {}
    node_scores: dict[float, list[Any]] = {}
    lock = threading.Lock()
    results: dict[int, tuple[Any, Mapping[str, float], float]] = {}

    def score(indexed: tuple[int, Any]) -> None:
        index, node = indexed
        try:
            map_scores, order_score = map_fn(task, node)
        except Exception as exc:  # noqa: BLE001
            log.error("Error in Calculating Priority for the node:%s", exc)
            return
        with lock:
            results[index] = (node, map_scores, order_score)

    _run_parallel(score, list(enumerate(nodes)))
    for index in sorted(results):
        node, map_scores, order_score = results[index]
        for plugin, value in map_scores.items():
            plugin_scores.setdefault(plugin, []).append(
                HostPriority(host=node.name, score=int(math.floor(value)))
            )
        order_scores[node.name] = order_score

    try:
        reduce_scores = reduce_fn(task, plugin_scores)
    except Exception as exc:  # noqa: BLE001
        log.error("Error in Calculating Priority for the node:%s", exc)
        return node_scores

    try:
        batch_scores = batch_fn(task, nodes)
    except Exception as exc:  # noqa: BLE001
        log.error("Error in Calculating batch Priority for the node, err %s", exc)
        return node_scores

    for node in nodes:
        total = reduce_scores.get(node.name, 0.0)
        total += order_scores.get(node.name, 0.0)
        total += batch_scores.get(node.name, 0.0)
        node_scores.setdefault(total, []).append(node)
    return node_scores


def sort_nodes(node_scores: Mapping[float, Sequence[Any]]) -> list[Any]:
    """Return all nodes, highest score first."""
    return [node for key in sorted(node_scores, reverse=True) for node in node_scores[key]]


def select_best_node(node_scores: Mapping[float, Sequence[Any]]) -> Any:
    """Return a node with the highest score, chosen at random among ties.

    Raises ValueError when no score exceeds -1 or the best group is empty.
    """
    candidates = [score for score in node_scores if score > -1.0]
    if not candidates:
        raise ValueError("no node with a score above -1")
    best = node_scores[max(candidates)]
    if not best:
        raise ValueError("best score has no nodes")
    return random.choice(list(best))


def get_node_list(nodes: Mapping[str, Any]) -> list[Any]:
    """Return the values of a name-to-node mapping."""
    return list(nodes.values())