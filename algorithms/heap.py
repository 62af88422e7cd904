"""
heap.py — Heap Sort (max heap / min heap)
==========================================
Generator-based heap sort in two instrumented phases.

Build phase:
  BUILD_HEAP announcement, then heapify every internal node from
  n//2 - 1 down to 0, then a BUILD_HEAP "heap ready" step.

Extract phase (i from n-1 down to 1):
  EXTRACT naming the root, SWAP root ↔ end of the unsorted region,
  heapify the shrunken heap.

Each heapify call yields:
  HEAPIFY  – which node is being sifted
  COMPARE  – one per child that exists
  SWAP     – when a child outranks the parent; the sift continues at
             that child (explicit work stack, no recursion)

Polarity only flips the comparison. The max heap is rooted at index 0
and grows the sorted suffix from the right; the min heap is mirrored
(logical node k lives at index n-1-k) and grows the sorted prefix from
the left. Either way the final array is non-decreasing.

Every step carries heap_size and heap_range, so a view can split the
bars into "in heap" and "sorted" without re-running anything.
"""

from typing import Callable, Generator, List

from algorithms.step import HeapPayload, NO_FOCUS, Number, Step, StepKind, TraceBuilder


VARIANTS: List[str] = ["max", "min"]


PSEUDOCODE: List[str] = [
    "def heap_sort(a):",                                # 0
    "    n ← len(a)",                                   # 1
    "    for i in n//2 - 1 down to 0:",                 # 2
    "        heapify(a, n, i)",                         # 3
    "    for i in n-1 down to 1:",                      # 4
    "        swap(a[0], a[i])",                         # 5
    "        heapify(a, i, 0)",                         # 6
    "",                                                 # 7
    "def heapify(a, size, i):",                         # 8
    "    best ← i;  l ← 2i+1;  r ← 2i+2",              # 9
    "    if l < size and a[l] outranks a[best]:",       # 10
    "        best ← l",                                 # 11
    "    if r < size and a[r] outranks a[best]:",       # 12
    "        best ← r",                                 # 13
    "    if best ≠ i:",                                 # 14
    "        swap(a[i], a[best]);  heapify(a, size, best)",  # 15
]


def heap_sort(tb: TraceBuilder, variant: str = "max") -> Generator[Step, None, None]:
    a      = tb.array
    n      = len(a)
    is_max = variant == "max"
    word   = "largest" if is_max else "smallest"
    title  = "Max" if is_max else "Min"

    def pos(k: int) -> int:
        return k if is_max else n - 1 - k

    def outranks(x: Number, y: Number) -> bool:
        return x > y if is_max else x < y

    def payload(size: int, phase: str, node: int = -1) -> HeapPayload:
        heap_range = (0, size) if is_max else (n - size, n)
        return HeapPayload(heap_type=variant, heap_size=size, heap_range=heap_range, phase=phase, node=node)

    tb.heap_levels = n.bit_length()

    # --- build phase ---
    yield tb.emit(
        StepKind.BUILD_HEAP,
        f"Building a {variant} heap from the array",
        insight=f"Heap property: {'Parent ≥ Children' if is_max else 'Parent ≤ Children'}",
        payload=payload(n, "build"),
        pseudocode_line=2,
    )

    for k in range(n // 2 - 1, -1, -1):
        yield from _heapify(tb, k, n, "build", pos, outranks, payload, word)

    yield tb.emit(
        StepKind.BUILD_HEAP,
        f"✨ {title} heap built successfully!",
        insight=f"Root contains the {word} element: {a[pos(0)]}",
        payload=payload(n, "build", node=pos(0)),
        pseudocode_line=3,
    )

    # --- extract phase ---
    for i in range(n - 1, 0, -1):
        root, end = pos(0), pos(i)
        yield tb.emit(
            StepKind.EXTRACT,
            f"Extracting {'maximum' if is_max else 'minimum'} element {a[root]}",
            insight=f"Moving root to position {end} (sorted portion)",
            focus=(root, end),
            payload=payload(i + 1, "extract", node=root),
            pseudocode_line=4,
        )

        tb.swap(root, end)
        yield tb.emit(
            StepKind.SWAP,
            "Swapped root with last element",
            insight=f"Element {a[end]} is now in its final sorted position",
            focus=(root, end),
            payload=payload(i, "extract", node=root),
            pseudocode_line=5,
        )

        yield from _heapify(tb, 0, i, "extract", pos, outranks, payload, word)

    yield tb.emit(
        StepKind.COMPLETE,
        "✨ Heap Sort complete! The array is now fully sorted.",
        insight="Time complexity: O(n log n) | Space complexity: O(1)",
        focus=NO_FOCUS,
        payload=payload(0, "done"),
        pseudocode_line=0,
    )


def _heapify(
    tb: TraceBuilder,
    root: int,
    size: int,
    phase: str,
    pos: Callable[[int], int],
    outranks: Callable[[Number, Number], bool],
    payload: Callable[..., HeapPayload],
    word: str,
) -> Generator[Step, None, None]:
    """Sift logical node `root` down inside a heap of `size` nodes."""
    a = tb.array
    pending = [root]

    while pending:
        k = pending.pop()
        tb.heapify_calls += 1
        yield tb.emit(
            StepKind.HEAPIFY,
            f"Heapify at index {pos(k)} (value {a[pos(k)]})",
            insight=f"Make sure {a[pos(k)]} is the {word} among itself and its children",
            payload=payload(size, phase, node=pos(k)),
            pseudocode_line=8,
        )

        best = k
        for side, child, line in (("left", 2 * k + 1, 10), ("right", 2 * k + 2, 12)):
            if child >= size:
                continue
            parent_label = "parent" if best == k else f"{word} so far"
            yield tb.emit(
                StepKind.COMPARE,
                f"Comparing {parent_label} {a[pos(best)]} with {side} child {a[pos(child)]}",
                insight=f"{side.capitalize()} child exists at index {pos(child)}",
                focus=(pos(best), pos(child)),
                payload=payload(size, phase, node=pos(k)),
                pseudocode_line=line,
                compared=True,
            )
            if outranks(a[pos(child)], a[pos(best)]):
                best = child

        if best != k:
            tb.swap(pos(k), pos(best))
            yield tb.emit(
                StepKind.SWAP,
                f"Swapped {a[pos(k)]} and {a[pos(best)]} to maintain heap property",
                insight=f"{'Larger' if word == 'largest' else 'Smaller'} element moves up",
                focus=(pos(k), pos(best)),
                payload=payload(size, phase, node=pos(best)),
                pseudocode_line=15,
            )
            pending.append(best)
