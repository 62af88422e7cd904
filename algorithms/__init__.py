"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every sorting algorithm the visualizer knows.

    from algorithms import REGISTRY, get_algorithm, generate

REGISTRY is a dict:
    {
        "bubble": AlgoInfo(key, label, fn, pseudocode, variants, …),
        …
    }

`generate()` is the one entry point a view needs: validate the input
and the variant, run the generator to completion, return a Trace.
Validation happens before the generator is created, so a bad request
never yields a single step.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from algorithms.errors import InvalidInputError, SortVisualizerError, UnsupportedVariantError
from algorithms.inputs import make_rng, parse_input, random_input, validate_seed, validate_size, validate_values
from algorithms.step import Number, SortStats, Step, StepKind, Trace, TraceBuilder

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms.bubble    import bubble_sort    as _bubble,    PSEUDOCODE as _bub_pc, COCKTAIL_PSEUDOCODE as _cocktail_pc, VARIANTS as _bub_v
from algorithms.selection import selection_sort as _selection, PSEUDOCODE as _sel_pc, VARIANTS as _sel_v
from algorithms.insertion import insertion_sort as _insertion, PSEUDOCODE as _ins_pc, VARIANTS as _ins_v
from algorithms.heap      import heap_sort      as _heap,      PSEUDOCODE as _heap_pc, VARIANTS as _heap_v
from algorithms.quick     import quick_sort     as _quick,     PSEUDOCODE as _quick_pc, VARIANTS as _quick_v


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "heap"
    label:             str                    # human label, e.g. "Heap Sort"
    fn:                Callable               # the generator function
    pseudocode:        List[str]              # lines for the side-panel
    variants:          List[str]              # accepted variant names
    default_variant:   str                    # used when the caller passes None
    variant_pseudocode: Dict[str, List[str]] = field(default_factory=dict)
    tags:              List[str] = field(default_factory=list)
    uses_rng:          bool     = False       # quick sort — thread the rng through?
    stable:            bool     = False
    complexity_time:   str      = ""          # e.g. "O(n log n)"
    complexity_space:  str      = ""
    description:       str      = ""          # one-liner for the UI card

    def pseudocode_for(self, variant: Optional[str] = None) -> List[str]:
        return self.variant_pseudocode.get(variant or self.default_variant, self.pseudocode)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bubble": AlgoInfo(
        key="bubble", label="Bubble Sort", fn=_bubble, pseudocode=_bub_pc,
        variants=_bub_v, default_variant="standard",
        variant_pseudocode={"cocktail": _cocktail_pc},
        tags=["comparison", "in-place", "exchange"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Adjacent pairs swap until the largest values bubble to the end.",
    ),

    "selection": AlgoInfo(
        key="selection", label="Selection Sort", fn=_selection, pseudocode=_sel_pc,
        variants=_sel_v, default_variant="standard",
        tags=["comparison", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly selects the minimum of the unsorted part. At most n-1 swaps.",
    ),

    "insertion": AlgoInfo(
        key="insertion", label="Insertion Sort", fn=_insertion, pseudocode=_ins_pc,
        variants=_ins_v, default_variant="standard",
        tags=["comparison", "in-place", "adaptive"], stable=True,
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by sinking each new element into place.",
    ),

    "heap": AlgoInfo(
        key="heap", label="Heap Sort", fn=_heap, pseudocode=_heap_pc,
        variants=_heap_v, default_variant="max",
        tags=["comparison", "in-place", "heap"],
        complexity_time="O(n log n)", complexity_space="O(1)",
        description="Builds a heap, then repeatedly moves the root into the sorted region.",
    ),

    "quick": AlgoInfo(
        key="quick", label="Quick Sort", fn=_quick, pseudocode=_quick_pc,
        variants=_quick_v, default_variant="last",
        tags=["comparison", "in-place", "divide-and-conquer"],
        uses_rng=True,
        complexity_time="O(n log n) avg, O(n²) worst", complexity_space="O(log n)",
        description="Partitions around a pivot, then sorts both sides. Pivot choice matters!",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def resolve(algo_key: str, variant: Optional[str] = None) -> AlgoInfo:
    """Return AlgoInfo for `algo_key` after checking `variant`, or raise."""
    info = get_algorithm(algo_key)
    if info is None:
        raise UnsupportedVariantError(f"Unknown algorithm: {algo_key!r}")
    if variant is not None and variant not in info.variants:
        raise UnsupportedVariantError(
            f"{info.label} has no variant {variant!r} (choose from {', '.join(info.variants)})"
        )
    return info


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------
def generate(
    algo_key: str,
    values: Iterable[Number],
    variant: Optional[str] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Trace:
    """
    Run `algo_key` over a copy of `values` and return the full Trace.

    Raises:
        UnsupportedVariantError – unknown algorithm or variant.
        InvalidInputError       – empty, non-numeric or non-finite input.
    """
    info    = resolve(algo_key, variant)
    variant = variant or info.default_variant
    data    = validate_values(values)

    tb = TraceBuilder(data, algorithm=info.key, variant=variant)
    kwargs = {"variant": variant}
    if info.uses_rng:
        kwargs["rng"] = make_rng(seed, rng)

    steps = tuple(info.fn(tb, **kwargs))
    trace = Trace(input=tuple(data), steps=steps, stats=tb.stats())
    logger.debug(
        "generated %s/%s trace: n=%d steps=%d comparisons=%d swaps=%d",
        info.key, variant, len(data), len(steps), trace.stats.comparisons, trace.stats.swaps,
    )
    return trace


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "resolve",
    "generate",
    "parse_input",
    "validate_values",
    "validate_seed",
    "validate_size",
    "random_input",
    "InvalidInputError",
    "UnsupportedVariantError",
    "SortVisualizerError",
    "SortStats",
    "Step",
    "StepKind",
    "Trace",
]
