# batchsched

Small, dependency-free helpers for writing a batch job scheduler in Python.

## Installation

    pip install batchsched

For running the test suite:

    pip install "batchsched[test]"
    pytest

## What is inside

### `batchsched.scheduler_helper`

Functions that filter, score and pick nodes for a task. Nodes may be any
objects with a `name` attribute; tasks are passed through to your callbacks
unchanged. Callbacks run on a pool of up to 16 threads.

- `predicate_nodes(task, nodes, fn)` calls `fn(task, node)` for every node.
  A node is rejected when `fn` raises. Returns a pair: the accepted nodes, in
  their input order, and a `FitErrors` whose `nodes` dict maps each rejected
  node's name to the exception raised (`FitErrors.set_node_error` records one).
- `prioritize_nodes(task, nodes, batch_fn, map_fn, reduce_fn)` scores nodes:
  - `map_fn(task, node)` returns `(plugin_scores, order_score)`, where
    `plugin_scores` maps plugin names to floats. Each plugin score is floored
    to an int and collected as a `HostPriority(host, score)` entry per plugin.
    A node whose `map_fn` raises is left out of this step.
  - `reduce_fn(task, plugin_scores)` receives `dict[str, list[HostPriority]]`
    and returns a mapping of node name to score.
  - `batch_fn(task, nodes)` returns a mapping of node name to score.

  A node's total is the sum of its reduce, order and batch scores (missing
  ones count as 0.0). The result maps each total to the list of nodes with
  that total. If `reduce_fn` or `batch_fn` raises, the error is logged and an
  empty dict is returned.
- `sort_nodes(node_scores)` lists all nodes from highest to lowest score.
- `select_best_node(node_scores)` returns one of the nodes with the highest
  score, chosen at random among ties. Raises `ValueError` when no score is
  above -1 or the best score has no nodes.
- `get_node_list(nodes)` returns the values of a name-to-node mapping.

### `batchsched.priority_queue`

`PriorityQueue(less_fn)` is a binary heap whose top is the item for which
`less_fn(a, b)` holds against the others. `push(item)` adds an item, `pop()`
removes and returns the top item (or `None` when empty), `empty()` tells
whether it holds nothing, and `len()` gives its size. With `less_fn=None`
items are ordered by their position in the heap rather than by value.

### `batchsched.version`

- `info(api_version)` returns lines describing the API version, the package's
  version, git SHA and build time (each `"Not provided."` unless set through
  `VERSION`, `GIT_SHA` and `BUILT`), the Python version and the platform.
- `print_version_and_exit(api_version)` prints those lines and raises
  `SystemExit(0)`.

## Example

    from batchsched.priority_queue import PriorityQueue
    from batchsched.scheduler_helper import select_best_node, sort_nodes

    queue = PriorityQueue(lambda a, b: a > b)
    for value in (3, 1, 2):
        queue.push(value)
    assert queue.pop() == 3

    scores = {1.0: ["node1", "node2"], 2.0: ["node3"]}
    assert select_best_node(scores) == "node3"
    assert sort_nodes(scores) == ["node3", "node1", "node2"]

## What this package does not do

It is a set of building blocks, not a scheduler. There is no command to run,
no scheduling loop or session, no configuration file loading, no connection
to a cluster or cache of its state, and no binding or eviction of workloads.
The scoring and filtering policies themselves are the callbacks you supply.