"""
selection.py — Selection Sort
==============================
Generator-based selection sort. For every boundary i in 0 .. n-2:
  1. Announce the boundary                       →  SELECT  (action "boundary")
  2. Compare each a[j] with the running minimum  →  SELECT  (action "scan")
  3. A smaller element was found                 →  SELECT  (action "new_min")
  4. Exactly one terminal step per boundary:
       minimum elsewhere  →  SWAP    (action "swap")
       minimum already at i  →  SELECT (action "in_place")
Then COMPLETE.

`sorted_count` on every payload is the length of the finished prefix;
it never decreases over the trace.
"""

from typing import Generator, List

from algorithms.step import NO_FOCUS, SelectionPayload, Step, StepKind, TraceBuilder


VARIANTS: List[str] = ["standard"]


PSEUDOCODE: List[str] = [
    "def selection_sort(a):",                   # 0
    "    n ← len(a)",                           # 1
    "    for i in 0 .. n-2:",                   # 2
    "        min_idx ← i",                      # 3
    "        for j in i+1 .. n-1:",             # 4
    "            if a[j] < a[min_idx]:",        # 5
    "                min_idx ← j",              # 6
    "        if min_idx ≠ i:",                  # 7
    "            swap(a[i], a[min_idx])",       # 8
    "    return a",                             # 9
]


def selection_sort(tb: TraceBuilder, variant: str = "standard") -> Generator[Step, None, None]:
    a = tb.array
    n = len(a)

    for i in range(n - 1):
        tb.passes += 1
        min_idx = i

        yield tb.emit(
            StepKind.SELECT,
            f"Pass {tb.passes}: starting new pass at index {i}",
            insight=f"Current minimum is {a[min_idx]} at position {min_idx}",
            payload=SelectionPayload(boundary=i, min_index=min_idx, sorted_count=i, action="boundary"),
            pseudocode_line=3,
        )

        pass_comparisons = 0
        for j in range(i + 1, n):
            smaller = a[j] < a[min_idx]
            pass_comparisons += 1
            yield tb.emit(
                StepKind.SELECT,
                f"Comparing current minimum {a[min_idx]} with {a[j]}",
                insight=(
                    f"✅ {a[j]} is smaller, updating minimum" if smaller
                    else f"❌ {a[min_idx]} is still smaller"
                ),
                focus=(min_idx, j),
                payload=SelectionPayload(boundary=i, min_index=min_idx, scan_index=j, sorted_count=i, action="scan"),
                pseudocode_line=5,
                compared=True,
            )

            if smaller:
                min_idx = j
                yield tb.emit(
                    StepKind.SELECT,
                    f"Found new minimum: {a[min_idx]} at position {min_idx}",
                    insight="This will be swapped into its correct position",
                    focus=(i, min_idx),
                    payload=SelectionPayload(boundary=i, min_index=min_idx, scan_index=j, sorted_count=i, action="new_min"),
                    pseudocode_line=6,
                )

        if min_idx != i:
            tb.swap(i, min_idx)
            tb.record_pass(tb.passes, "forward", pass_comparisons, 1)
            yield tb.emit(
                StepKind.SWAP,
                f"Swapped {a[i]} and {a[min_idx]}",
                insight=f"Element {a[i]} is now in its correct sorted position",
                focus=(i, min_idx),
                payload=SelectionPayload(boundary=i, min_index=i, sorted_count=i + 1, action="swap"),
                pseudocode_line=8,
            )
        else:
            tb.record_pass(tb.passes, "forward", pass_comparisons, 0)
            yield tb.emit(
                StepKind.SELECT,
                f"Element {a[i]} is already in correct position",
                insight="No swap needed - it's already the minimum",
                focus=(i, i),
                payload=SelectionPayload(boundary=i, min_index=i, sorted_count=i + 1, action="in_place"),
                pseudocode_line=7,
            )

    yield tb.emit(
        StepKind.COMPLETE,
        "✨ Selection Sort complete! The array is now fully sorted.",
        insight="Time complexity: O(n²) | Space: O(1) | Makes O(n) swaps",
        focus=NO_FOCUS,
        payload=SelectionPayload(sorted_count=n, action="done"),
        pseudocode_line=9,
    )
