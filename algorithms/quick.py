"""
quick.py — Quick Sort (Lomuto partition)
=========================================
Generator-based quick sort driven by an explicit work stack of
(low, high, depth) ranges instead of recursion, so emission order is
explicit and deep inputs never hit the interpreter's recursion limit.

Per partition:
  1. Announce the chosen pivot       →  PARTITION_PIVOT
  2. Pivot not already at `high`     →  SWAP it there
  3. For each j in low .. high-1     →  PARTITION (one comparison)
     a[j] ≤ pivot                    →  SWAP into the "≤ pivot" zone
  4. Place the pivot                 →  SWAP a[i+1] ↔ a[high]
Then push the right range and the left range (left is processed first).

Pivot strategies: first | last | middle | random. "random" draws from
the rng handed in by the caller; an unseeded rng reproduces the
original non-deterministic behaviour.

The trace is flat. `recursion_tree()` rebuilds the partition tree from
the PARTITION_PIVOT steps for views that want to draw it.
"""

import random
from dataclasses import dataclass, field
from typing import Generator, List, Optional

from algorithms.step import NO_FOCUS, Number, QuickPayload, Step, StepKind, Trace, TraceBuilder


VARIANTS: List[str] = ["first", "last", "middle", "random"]


PSEUDOCODE: List[str] = [
    "def quick_sort(a, low, high):",            # 0
    "    if low < high:",                       # 1
    "        p ← choose_pivot(low, high)",      # 2
    "        swap(a[p], a[high])",              # 3
    "        pivot ← a[high];  i ← low - 1",    # 4
    "        for j in low .. high-1:",          # 5
    "            if a[j] ≤ pivot:",             # 6
    "                i ← i + 1",                # 7
    "                swap(a[i], a[j])",         # 8
    "        swap(a[i+1], a[high])",            # 9
    "        quick_sort(a, low, i)",            # 10
    "        quick_sort(a, i+2, high)",         # 11
]


_STRATEGY_INSIGHT = {
    "first":  "First element pivot: sorted input is the worst case",
    "last":   "Last element pivot: the classic Lomuto choice",
    "middle": "Middle element pivot: sorted input splits evenly",
    "random": "Random pivot helps avoid worst-case O(n²) on sorted arrays",
}


def choose_pivot(strategy: str, low: int, high: int, rng: Optional[random.Random] = None) -> int:
    if strategy == "first":
        return low
    if strategy == "middle":
        return (low + high) // 2
    if strategy == "random":
        return (rng or random.Random()).randint(low, high)
    return high


def quick_sort(
    tb: TraceBuilder,
    variant: str = "last",
    rng: Optional[random.Random] = None,
) -> Generator[Step, None, None]:
    a = tb.array
    n = len(a)
    if rng is None:
        rng = random.Random()

    pending = [(0, n - 1, 0)]
    while pending:
        low, high, depth = pending.pop()
        if low >= high:
            continue

        tb.partitions += 1
        tb.max_depth = max(tb.max_depth, depth)

        p = choose_pivot(variant, low, high, rng)
        pivot = a[p]
        yield tb.emit(
            StepKind.PARTITION_PIVOT,
            f"Selected pivot: {pivot} at position {p} (partition {low}..{high})",
            insight=_STRATEGY_INSIGHT.get(variant, ""),
            focus=(p, p),
            payload=QuickPayload(low=low, high=high, pivot_index=p, pivot_value=pivot, store_index=low - 1, depth=depth),
            pseudocode_line=2,
        )

        if p != high:
            tb.swap(p, high)
            yield tb.emit(
                StepKind.SWAP,
                f"Moved pivot {pivot} from position {p} to the end of the range",
                insight=f"Lomuto partitioning expects the pivot at index {high}",
                focus=(p, high),
                payload=QuickPayload(low=low, high=high, pivot_index=high, pivot_value=pivot, store_index=low - 1, depth=depth),
                pseudocode_line=3,
            )

        i = low - 1
        for j in range(low, high):
            goes_left = a[j] <= pivot
            yield tb.emit(
                StepKind.PARTITION,
                f"Comparing {a[j]} with pivot {pivot}",
                insight=(
                    f"{a[j]} is ≤ pivot, will move to left partition"
                    if goes_left else
                    f"{a[j]} is > pivot, stays in right partition"
                ),
                focus=(j, high),
                payload=QuickPayload(low=low, high=high, pivot_index=high, pivot_value=pivot, store_index=i, depth=depth),
                pseudocode_line=6,
                compared=True,
            )
            if goes_left:
                i += 1
                tb.swap(i, j)
                yield tb.emit(
                    StepKind.SWAP,
                    f"Swapped {a[i]} and {a[j]}",
                    insight="Elements smaller than pivot move to the left",
                    focus=(i, j),
                    payload=QuickPayload(low=low, high=high, pivot_index=high, pivot_value=pivot, store_index=i, depth=depth),
                    pseudocode_line=8,
                )

        placed = i + 1
        tb.swap(placed, high)
        yield tb.emit(
            StepKind.SWAP,
            f"Pivot placed at position {placed}",
            insight="All elements left of pivot are ≤ it, right are larger",
            focus=(placed, high),
            payload=QuickPayload(low=low, high=high, pivot_index=placed, pivot_value=pivot, store_index=placed, depth=depth),
            pseudocode_line=9,
        )

        # right first so the left range is popped next
        pending.append((placed + 1, high, depth + 1))
        pending.append((low, placed - 1, depth + 1))

    yield tb.emit(
        StepKind.COMPLETE,
        "✨ Quick Sort complete! The array is now fully sorted.",
        insight="Average time complexity: O(n log n) | Space complexity: O(log n)",
        focus=NO_FOCUS,
        payload=QuickPayload(depth=0),
        pseudocode_line=0,
    )


# ---------------------------------------------------------------------------
# Derived recursion tree (view helper, not part of the trace)
# ---------------------------------------------------------------------------
@dataclass
class PartitionNode:
    low:         int
    high:        int
    depth:       int
    pivot_value: Optional[Number]
    step_number: int
    children:    List["PartitionNode"] = field(default_factory=list)


def recursion_tree(trace: Trace) -> List[PartitionNode]:
    """
    Rebuild the partition call tree from PARTITION_PIVOT steps.
    Returns the root nodes (one for any input that needed partitioning,
    none for single-element input).
    """
    roots: List[PartitionNode] = []
    open_nodes: List[PartitionNode] = []     # open_nodes[d] = latest node at depth d

    for step in trace.steps:
        if step.kind is not StepKind.PARTITION_PIVOT:
            continue
        p = step.payload
        node = PartitionNode(
            low=p.low, high=p.high, depth=p.depth,
            pivot_value=p.pivot_value, step_number=step.step_number,
        )
        del open_nodes[p.depth:]
        if p.depth == 0:
            roots.append(node)
        else:
            open_nodes[p.depth - 1].children.append(node)
        open_nodes.append(node)

    return roots
