"""
bubble.py — Bubble Sort (standard / optimized / cocktail)
==========================================================
Generator-based bubble sort. Yields a Step at every meaningful event:
  1. Compare a[j] with a[j+1]           →  COMPARE (focus = (j, j+1))
  2. a[j] > a[j+1]                      →  SWAP
  3. End of a pass                      →  COMPARE with focus (-1, -1),
                                           summarising swaps this pass
  4. Done                               →  COMPLETE

Variants:
  • standard  – always runs n-1 passes, even on sorted input.
  • optimized – stops after the first pass with no swaps, so the trace
                length depends on the input order, not only on n.
  • cocktail  – alternates a forward pass (max drifts right) and a
                backward pass (min drifts left). Each direction is its
                own pass number.

`stats.passes` counts passes actually executed.
"""

from typing import Generator, List

from algorithms.step import BubblePayload, NO_FOCUS, Step, StepKind, TraceBuilder


VARIANTS: List[str] = ["standard", "optimized", "cocktail"]


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                      # 0
    "    n ← len(a)",                           # 1
    "    for i in 0 .. n-2:",                   # 2
    "        swapped ← False",                  # 3
    "        for j in 0 .. n-i-2:",             # 4
    "            if a[j] > a[j+1]:",            # 5
    "                swap(a[j], a[j+1])",       # 6
    "                swapped ← True",           # 7
    "        if not swapped: break",            # 8  (optimized only)
    "    return a",                             # 9
]

COCKTAIL_PSEUDOCODE: List[str] = [
    "def cocktail_sort(a):",                    # 0
    "    start, end ← 0, len(a) - 1",           # 1
    "    while start < end:",                   # 2
    "        for j in start .. end-1:",         # 3  forward
    "            if a[j] > a[j+1]: swap",       # 4
    "        end ← end - 1",                    # 5
    "        if no swaps: break",               # 6
    "        for j in end-1 down to start:",    # 7  backward
    "            if a[j] > a[j+1]: swap",       # 8
    "        start ← start + 1",                # 9
    "        if no swaps: break",               # 10
    "    return a",                             # 11
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bubble_sort(tb: TraceBuilder, variant: str = "standard") -> Generator[Step, None, None]:
    """
    Yields Step snapshots for one bubble-sort run over `tb.array`.

    Args:
        tb      : TraceBuilder owning a private copy of the input.
        variant : "standard" | "optimized" | "cocktail".
    """
    if variant == "cocktail":
        yield from _cocktail(tb)
    else:
        yield from _classic(tb, optimized=(variant == "optimized"))

    a = tb.array
    yield tb.emit(
        StepKind.COMPLETE,
        "✨ Bubble Sort complete! The array is now fully sorted.",
        insight=_summary(variant, tb.passes, len(a)),
        payload=BubblePayload(pass_number=tb.passes),
        pseudocode_line=11 if variant == "cocktail" else 9,
    )


def _classic(tb: TraceBuilder, optimized: bool) -> Generator[Step, None, None]:
    a = tb.array
    n = len(a)

    for i in range(n - 1):
        tb.passes += 1
        pass_no     = i + 1
        pass_swaps  = 0

        for j in range(n - i - 1):
            will_swap = a[j] > a[j + 1]
            if optimized:
                insight = "Optimized version stops early if a pass makes no swaps"
            elif will_swap:
                insight = f"{a[j]} is greater than {a[j + 1]}, they will swap"
            else:
                insight = f"{a[j]} is less than or equal to {a[j + 1]}, they stay in place"
            yield tb.emit(
                StepKind.COMPARE,
                f"Comparing {a[j]} and {a[j + 1]}",
                insight=insight,
                focus=(j, j + 1),
                payload=BubblePayload(pass_number=pass_no, swapped=pass_swaps > 0),
                pseudocode_line=5,
                compared=True,
            )

            if will_swap:
                tb.swap(j, j + 1)
                pass_swaps += 1
                yield tb.emit(
                    StepKind.SWAP,
                    f"Swapped {a[j + 1]} and {a[j]}",
                    insight="Larger element bubbles up to the right",
                    focus=(j, j + 1),
                    payload=BubblePayload(pass_number=pass_no, swapped=True),
                    pseudocode_line=6,
                )

        tb.record_pass(pass_no, "forward", n - i - 1, pass_swaps)

        if pass_swaps == 0:
            insight = (
                "✨ Early termination: no swaps means the array is sorted!"
                if optimized else
                "No swaps in this pass - array is sorted!"
            )
        else:
            insight = f"Largest element {max(a[:n - i])} is now in place"
        yield tb.emit(
            StepKind.COMPARE,
            f"Pass {pass_no} complete. {pass_swaps} swaps performed.",
            insight=insight,
            focus=NO_FOCUS,
            payload=BubblePayload(pass_number=pass_no, swapped=pass_swaps > 0),
            pseudocode_line=8 if optimized else 2,
        )

        if optimized and pass_swaps == 0:
            break


def _cocktail(tb: TraceBuilder) -> Generator[Step, None, None]:
    a = tb.array
    start, end = 0, len(a) - 1

    while start < end:
        # -- forward pass: the max drifts to `end` --
        tb.passes += 1
        pass_no = tb.passes
        swaps   = 0
        for j in range(start, end):
            yield tb.emit(
                StepKind.COMPARE,
                f"Forward pass: comparing {a[j]} and {a[j + 1]}",
                insight="Moving the largest element to the end",
                focus=(j, j + 1),
                payload=BubblePayload(pass_number=pass_no, direction="forward", swapped=swaps > 0),
                pseudocode_line=4,
                compared=True,
            )
            if a[j] > a[j + 1]:
                tb.swap(j, j + 1)
                swaps += 1
                yield tb.emit(
                    StepKind.SWAP,
                    f"Swapped {a[j + 1]} and {a[j]}",
                    insight="Largest element bubbles to the right",
                    focus=(j, j + 1),
                    payload=BubblePayload(pass_number=pass_no, direction="forward", swapped=True),
                    pseudocode_line=4,
                )
        tb.record_pass(pass_no, "forward", end - start, swaps)
        end -= 1
        yield tb.emit(
            StepKind.COMPARE,
            f"Forward pass {pass_no} complete. {swaps} swaps performed.",
            insight="No swaps - array is sorted!" if swaps == 0 else f"{a[end + 1]} is now in place at the end",
            focus=NO_FOCUS,
            payload=BubblePayload(pass_number=pass_no, direction="forward", swapped=swaps > 0),
            pseudocode_line=6,
        )
        if swaps == 0 or start >= end:
            break

        # -- backward pass: the min drifts to `start` --
        tb.passes += 1
        pass_no = tb.passes
        swaps   = 0
        for j in range(end - 1, start - 1, -1):
            yield tb.emit(
                StepKind.COMPARE,
                f"Backward pass: comparing {a[j]} and {a[j + 1]}",
                insight="Moving the smallest element to the beginning",
                focus=(j, j + 1),
                payload=BubblePayload(pass_number=pass_no, direction="backward", swapped=swaps > 0),
                pseudocode_line=8,
                compared=True,
            )
            if a[j] > a[j + 1]:
                tb.swap(j, j + 1)
                swaps += 1
                yield tb.emit(
                    StepKind.SWAP,
                    f"Swapped {a[j + 1]} and {a[j]}",
                    insight="Smallest element bubbles to the left",
                    focus=(j, j + 1),
                    payload=BubblePayload(pass_number=pass_no, direction="backward", swapped=True),
                    pseudocode_line=8,
                )
        tb.record_pass(pass_no, "backward", end - start, swaps)
        start += 1
        yield tb.emit(
            StepKind.COMPARE,
            f"Backward pass {pass_no} complete. {swaps} swaps performed.",
            insight="No swaps - array is sorted!" if swaps == 0 else f"{a[start - 1]} is now in place at the front",
            focus=NO_FOCUS,
            payload=BubblePayload(pass_number=pass_no, direction="backward", swapped=swaps > 0),
            pseudocode_line=10,
        )
        if swaps == 0:
            break


def _summary(variant: str, passes: int, n: int) -> str:
    if variant == "optimized":
        return f"Array sorted in {passes} passes with early optimization"
    if variant == "cocktail":
        return f"Cocktail shaker sort completed in {passes} passes (bidirectional)"
    return f"Standard bubble sort completed in {max(n - 1, 0)} passes"
