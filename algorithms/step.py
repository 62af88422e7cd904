"""
step.py — Sort Step Snapshot
==============================
Every sorting algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything a view needs to
render one frame:

    • The whole array as it looks right now (a private copy)
    • Which two indices are being compared / swapped
    • Family-specific scalars (pass number, heap size, pivot, depth, …)
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened
      (Learning Mode reads this)

Design decisions:
  - Step is a frozen dataclass. It is a SNAPSHOT. The generator owns
    the working array; every Step gets its own list, so rewinding never
    shows values from a later instant.
  - `kind` is a closed enum and `payload` is one small frozen dataclass
    per algorithm family, so a consumer can match on both without
    guessing which optional fields are present.
  - Statistics are accumulated by TraceBuilder while steps are emitted:
    a SWAP step is one swap, a step with `compared=True` is one
    comparison. Nothing is re-derived from the trace later.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union


Number = Union[int, float]

NO_FOCUS: Tuple[int, int] = (-1, -1)


class StepKind(Enum):
    COMPARE         = "compare"
    SELECT          = "select"
    SWAP            = "swap"
    PARTITION_PIVOT = "partition_pivot"
    PARTITION       = "partition"
    HEAPIFY         = "heapify"
    EXTRACT         = "extract"
    BUILD_HEAP      = "build_heap"
    COMPLETE        = "complete"


# ---------------------------------------------------------------------------
# Family payloads
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BubblePayload:
    pass_number: int = 0
    direction:   str = "forward"        # "forward" | "backward"
    swapped:     bool = False           # any swap so far in this pass


@dataclass(frozen=True)
class SelectionPayload:
    boundary:     int = -1              # first index of the unsorted region
    min_index:    int = -1              # running minimum
    scan_index:   int = -1              # element being compared (-1 when none)
    sorted_count: int = 0               # leading elements in final position
    action:       str = ""              # "boundary" | "scan" | "new_min" | "swap" | "in_place" | "done"


@dataclass(frozen=True)
class InsertionPayload:
    boundary:     int = -1              # index the current key was taken from
    key_index:    int = -1              # where the key sits right now
    key_value:    Optional[Number] = None
    sorted_count: int = 0               # length of the sorted prefix
    action:       str = ""              # "select" | "compare" | "shift" | "placed" | "done"


@dataclass(frozen=True)
class HeapPayload:
    heap_type:  str = "max"
    heap_size:  int = 0
    heap_range: Tuple[int, int] = (0, 0)   # half-open array range still in the heap
    phase:      str = "build"              # "build" | "extract" | "done"
    node:       int = -1                   # array index heapify is working on

    def in_heap(self, index: int) -> bool:
        lo, hi = self.heap_range
        return lo <= index < hi


@dataclass(frozen=True)
class QuickPayload:
    low:         int = -1
    high:        int = -1
    pivot_index: int = -1
    pivot_value: Optional[Number] = None
    store_index: int = -1               # last index of the "<= pivot" zone
    depth:       int = 0


Payload = Union[BubblePayload, SelectionPayload, InsertionPayload, HeapPayload, QuickPayload, None]


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the trace.
        kind            : StepKind tag.
        array           : Full copy of the array AFTER this step's mutation.
        focus           : (i, j) indices compared / swapped, or (-1, -1).
        payload         : Family-specific scalars (see *Payload classes).
        explanation     : Human-readable "what happened" text.
        insight         : Pedagogical aside for Learning Mode.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        compared        : True if this step performed one element comparison.
        is_final        : True on the COMPLETE step.
    """

    step_number:     int                 = 0
    kind:            StepKind            = StepKind.COMPARE
    array:           List[Number]        = field(default_factory=list)
    focus:           Tuple[int, int]     = NO_FOCUS
    payload:         Payload             = None
    explanation:     str                 = ""
    insight:         str                 = ""
    pseudocode_line: int                 = 0
    compared:        bool                = False
    is_final:        bool                = False


# ---------------------------------------------------------------------------
# Stats — computed once, alongside the trace
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PassRecord:
    pass_number: int
    direction:   str
    comparisons: int
    swaps:       int


@dataclass(frozen=True)
class SortStats:
    algorithm:     str   = ""
    variant:       str   = ""
    comparisons:   int   = 0
    swaps:         int   = 0
    passes:        int   = 0            # bubble / selection / insertion outer iterations
    partitions:    int   = 0            # quick sort
    heapify_calls: int   = 0            # heap sort, continuations included
    max_depth:     int   = 0            # quick sort recursion depth
    heap_levels:   int   = 0            # heap sort tree height
    total_steps:   int   = 0
    pass_history:  Tuple[PassRecord, ...] = ()


@dataclass(frozen=True)
class Trace:
    input: Tuple[Number, ...]
    steps: Tuple[Step, ...]
    stats: SortStats

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, idx: int) -> Step:
        return self.steps[idx]

    def __iter__(self):
        return iter(self.steps)

    @property
    def final_array(self) -> List[Number]:
        return list(self.steps[-1].array)

    def index_of(self, kind: StepKind, start: int = 0) -> int:
        """Index of the first step of `kind` at or after `start`, or -1."""
        for i in range(start, len(self.steps)):
            if self.steps[i].kind is kind:
                return i
        return -1


# ---------------------------------------------------------------------------
# Builder — owns the working array, stamps out Steps, keeps the tally
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Mutable scratch-pad that generators use to produce Steps.

    Usage inside an algorithm generator:
        tb.swap(j, j + 1)
        yield tb.emit(StepKind.SWAP, f"Swapped {a} and {b}", focus=(j, j + 1))

    The working array is private to the builder; every Step receives a
    copy of it.
    """

    def __init__(self, values: Sequence[Number], algorithm: str = "", variant: str = ""):
        self.array:     List[Number] = list(values)
        self.algorithm: str          = algorithm
        self.variant:   str          = variant
        self.reset_counters()

    def reset_counters(self):
        self.step_count:    int = 0
        self.comparisons:   int = 0
        self.swaps:         int = 0
        self.passes:        int = 0
        self.partitions:    int = 0
        self.heapify_calls: int = 0
        self.max_depth:     int = 0
        self.heap_levels:   int = 0
        self.pass_history:  List[PassRecord] = []

    # -- mutation --
    def swap(self, i: int, j: int) -> None:
        self.array[i], self.array[j] = self.array[j], self.array[i]

    def record_pass(self, pass_number: int, direction: str, comparisons: int, swaps: int) -> None:
        self.pass_history.append(PassRecord(pass_number, direction, comparisons, swaps))

    # -- emission --
    def emit(
        self,
        kind: StepKind,
        explanation: str,
        insight: str = "",
        focus: Tuple[int, int] = NO_FOCUS,
        payload: Payload = None,
        pseudocode_line: int = 0,
        compared: bool = False,
    ) -> Step:
        if kind is StepKind.SWAP:
            self.swaps += 1
        if compared:
            self.comparisons += 1
        step = Step(
            step_number=self.step_count,
            kind=kind,
            array=list(self.array),
            focus=(focus[0], focus[1]),
            payload=payload,
            explanation=explanation,
            insight=insight,
            pseudocode_line=pseudocode_line,
            compared=compared,
            is_final=kind is StepKind.COMPLETE,
        )
        self.step_count += 1
        return step

    def stats(self) -> SortStats:
        return SortStats(
            algorithm=self.algorithm,
            variant=self.variant,
            comparisons=self.comparisons,
            swaps=self.swaps,
            passes=self.passes,
            partitions=self.partitions,
            heapify_calls=self.heapify_calls,
            max_depth=self.max_depth,
            heap_levels=self.heap_levels,
            total_steps=self.step_count,
            pass_history=tuple(self.pass_history),
        )
