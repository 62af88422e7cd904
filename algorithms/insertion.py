"""
insertion.py — Insertion Sort
==============================
Generator-based insertion sort. The key sinks left through adjacent
swaps instead of the textbook "shift then write", so every frame still
differs from the previous one by at most one swap.

For every i in 1 .. n-1:
  1. Pick the key a[i]                 →  SELECT   (action "select")
  2. Compare with its left neighbour   →  COMPARE
  3. Neighbour is greater              →  SWAP     (key moves one left)
  4. Key stops                         →  SELECT   (action "placed")
Then COMPLETE.
"""

from typing import Generator, List

from algorithms.step import InsertionPayload, Step, StepKind, TraceBuilder


VARIANTS: List[str] = ["standard"]


PSEUDOCODE: List[str] = [
    "def insertion_sort(a):",                   # 0
    "    for i in 1 .. n-1:",                   # 1
    "        j ← i",                            # 2
    "        while j > 0 and a[j-1] > a[j]:",   # 3
    "            swap(a[j-1], a[j])",           # 4
    "            j ← j - 1",                    # 5
    "    return a",                             # 6
]


def insertion_sort(tb: TraceBuilder, variant: str = "standard") -> Generator[Step, None, None]:
    a = tb.array
    n = len(a)

    for i in range(1, n):
        tb.passes += 1
        key = a[i]
        j   = i
        yield tb.emit(
            StepKind.SELECT,
            f"Selected element {key} at position {i} to insert into sorted portion",
            insight="We take one unsorted element and insert it into its correct position in the sorted portion.",
            focus=(i, i),
            payload=InsertionPayload(boundary=i, key_index=i, key_value=key, sorted_count=i, action="select"),
            pseudocode_line=2,
        )

        comparisons = swaps = 0
        while j > 0:
            comparisons += 1
            greater = a[j - 1] > key
            yield tb.emit(
                StepKind.COMPARE,
                f"Comparing {a[j - 1]} with key {key}",
                insight=(
                    f"{a[j - 1]} is greater than {key}, it moves right"
                    if greater else
                    f"{a[j - 1]} ≤ {key}, the key has found its place"
                ),
                focus=(j - 1, j),
                payload=InsertionPayload(boundary=i, key_index=j, key_value=key, sorted_count=i, action="compare"),
                pseudocode_line=3,
                compared=True,
            )
            if not greater:
                break

            tb.swap(j - 1, j)
            swaps += 1
            j -= 1
            yield tb.emit(
                StepKind.SWAP,
                f"Shifted {a[j + 1]} to position {j + 1}",
                insight="Larger elements are shifted to make room for the smaller element.",
                focus=(j, j + 1),
                payload=InsertionPayload(boundary=i, key_index=j, key_value=key, sorted_count=i, action="shift"),
                pseudocode_line=4,
            )

        tb.record_pass(tb.passes, "backward", comparisons, swaps)
        yield tb.emit(
            StepKind.SELECT,
            f"Inserted {key} at position {j}",
            insight=f"The first {i + 1} elements are now sorted relative to each other.",
            focus=(j, j),
            payload=InsertionPayload(boundary=i, key_index=j, key_value=key, sorted_count=i + 1, action="placed"),
            pseudocode_line=5,
        )

    yield tb.emit(
        StepKind.COMPLETE,
        "✨ Insertion Sort complete! The array is now fully sorted.",
        insight="Time complexity: O(n²) average/worst, O(n) best | Space: O(1)",
        payload=InsertionPayload(sorted_count=n, action="done"),
        pseudocode_line=6,
    )
