"""Treapviz CLI
---

Command line application for building treaps and inspecting their structure,
operation history, and layout.
"""
import sys
from typing import List, Optional, Tuple

import click
import numpy as np
import srsly
from wasabi import msg

from .about import __version__
from .config import LayoutConfig, TreapConfig
from .core.colors import get_priority_color, get_priority_glow
from .core.layout import calculate_tree_layout
from .core.treap import OP_DELETE, OP_INSERT, OP_SEARCH, Treap
from .validators import validate_node_value, validate_priority

Operation = Tuple[str, int, Optional[int]]


def parse_operation(text: str) -> Operation:
    """Parse `insert:KEY[:PRIORITY]`, `delete:KEY` or `search:KEY`.

    Raises click.BadParameter with a readable message on bad input."""
    parts = text.split(":")
    kind = parts[0].strip().lower()
    if kind not in (OP_INSERT, OP_DELETE, OP_SEARCH):
        raise click.BadParameter(f"unknown operation '{parts[0]}' in '{text}'")
    max_parts = 3 if kind == OP_INSERT else 2
    if len(parts) < 2 or len(parts) > max_parts:
        raise click.BadParameter(f"malformed operation '{text}'")
    key = validate_node_value(parts[1])
    if not key.success:
        raise click.BadParameter(f"{key.error} (in '{text}')")
    priority = None
    if len(parts) == 3:
        checked = validate_priority(parts[2])
        if not checked.success:
            raise click.BadParameter(f"{checked.error} (in '{text}')")
        priority = checked.value
    return kind, key.value, priority


def apply_operation(treap: Treap, operation: Operation) -> None:
    kind, key, priority = operation
    if kind == OP_INSERT:
        existed = treap.find(key) is not None
        node = treap.insert(key, priority)
        if existed:
            msg.warn(f"Key {key} already present (priority {node.priority})")
        else:
            msg.good(f"Inserted {key} with priority {node.priority}")
    elif kind == OP_DELETE:
        if treap.delete(key):
            msg.good(f"Deleted {key}")
        else:
            msg.warn(f"Key {key} not found, nothing to delete")
    else:
        if treap.search(key):
            msg.good(f"Found {key}")
        else:
            msg.warn(f"Key {key} not found")


def print_treap(treap: Treap, recent: int = 10) -> None:
    msg.divider("Treap")
    msg.info(f"Size: {treap.size()}  Height: {treap.get_height()}")
    msg.text(f"Inorder:    {treap.inorder()}")
    msg.text(f"Preorder:   {treap.preorder()}")
    msg.text(f"Levelorder: {treap.levelorder()}")
    operations = treap.get_recent_operations(recent)
    if not operations:
        return
    msg.divider(f"Recent operations ({len(operations)})")
    header = ("#", "Type", "Key", "Priority", "Found")
    data = [
        (
            op.sequence,
            op.type,
            op.key,
            "" if op.priority is None else op.priority,
            "" if op.found is None else ("✔" if op.found else "✘"),
        )
        for op in operations
    ]
    msg.table(data, header=header, divider=True, aligns=("r", "l", "r", "r", "c"))


def print_layout(treap: Treap, width: float, height: float) -> None:
    result = calculate_tree_layout(treap.root, width, height, LayoutConfig())
    msg.divider("Layout")
    if not result.nodes:
        msg.info("The tree is empty")
        return
    header = ("Key", "Priority", "Band", "Glow", "Level", "X", "Y")
    data = [
        (
            item.node.key,
            item.node.priority,
            get_priority_color(item.node.priority).band,
            f"{get_priority_glow(item.node.priority):.2f}",
            item.level,
            f"{item.x:.1f}",
            f"{item.y:.1f}",
        )
        for item in result.nodes
    ]
    msg.table(data, header=header, divider=True)
    m = result.measurement
    msg.text(f"Bounds: {m.width:.1f} x {m.height:.1f} centered at ({m.centerX:.1f}, {m.centerY:.1f})")


def export_treap(treap: Treap, path: str) -> None:
    srsly.write_json(path, treap.to_dict())
    msg.good(f"Exported treap to {path}")


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Treapviz

    Command line app for building randomized binary search trees (treaps) and
    watching how rotations keep them balanced.
    """


@cli.command("run")
@click.argument("operations", nargs=-1)
@click.option("seed", "--seed", type=int, default=None, help="Seed for random priorities")
@click.option("recent", "--recent", default=10, help="How many log entries to print")
@click.option("layout", "--layout", is_flag=True, help="Print node coordinates")
@click.option("width", "--width", default=800.0, help="Viewport width for --layout")
@click.option("height", "--height", default=600.0, help="Viewport height for --layout")
@click.option("export", "--export", default=None, help="Write the tree as JSON here")
@click.option("load", "--load", default=None, help="Start from a JSON export")
def cli_run(
    operations: List[str],
    seed: Optional[int],
    recent: int,
    layout: bool,
    width: float,
    height: float,
    export: Optional[str],
    load: Optional[str],
):
    """Apply OPERATIONS in order and print the resulting tree.

    Operations look like `insert:50`, `insert:50:90`, `delete:50` or `search:50`.
    """
    try:
        parsed = [parse_operation(text) for text in operations]
    except click.BadParameter as error:
        msg.fail("Invalid operation", error.message)
        sys.exit(1)

    config = TreapConfig(seed=seed)
    if load is not None:
        try:
            treap = Treap.from_dict(srsly.read_json(load), config=config)
        except ValueError as error:
            msg.fail(f"Could not load {load}", str(error))
            sys.exit(1)
        msg.good(f"Loaded {treap.size()} nodes from {load}")
    else:
        treap = Treap(config=config)

    for operation in parsed:
        apply_operation(treap, operation)
    print_treap(treap, recent)
    if layout:
        print_layout(treap, width, height)
    if export is not None:
        export_treap(treap, export)


@cli.command("random")
@click.option("count", "--count", default=10, help="The number of keys to insert")
@click.option("seed", "--seed", type=int, default=None, help="Seed for keys and priorities")
@click.option("export", "--export", default=None, help="Write the tree as JSON here")
def cli_random(count: int, seed: Optional[int], export: Optional[str]):
    """Insert random keys with random priorities."""
    rng = np.random.RandomState(seed)
    treap = Treap(rng=rng)
    for _ in range(count):
        key = int(rng.randint(0, 100))
        priority = int(rng.randint(0, 100))
        apply_operation(treap, (OP_INSERT, key, priority))
    print_treap(treap, recent=count)
    if export is not None:
        export_treap(treap, export)


@cli.command("scenario")
@click.option("seed", "--seed", type=int, default=None, help="Seed for random priorities")
def cli_scenario(seed: Optional[int]):
    """Run the task scheduler demo: queue tasks by id, process them by urgency."""
    from .scenarios import TaskScheduler, load_sample_tasks

    scheduler = load_sample_tasks(TaskScheduler(Treap(config=TreapConfig(seed=seed))))
    msg.divider("Task Scheduler")
    msg.info(f"Queued {len(scheduler.tasks)} tasks")
    print_treap(scheduler.treap, recent=0)
    for task in scheduler.drain():
        msg.good(
            f"Completed: {task.name}",
            f"priority {task.priority} | {task.deadline} | {task.duration}",
        )
    msg.good("All tasks processed!")


if __name__ == "__main__":
    cli()
