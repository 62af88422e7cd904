"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete sorting run (the whole Trace), then computes the
analytics metrics the UI needs for the Analytics panel and Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start(algo_key="quick", values=[38, 27, 43, 3], variant="random", seed=7)
    rec.run_to_completion()          # generates the trace
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    The UI holds two Recorders (one per algo / variant), runs both to
    completion on the SAME input, then calls compare(rec1, rec2).
"""

import sys
import time
from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, generate, resolve, validate_seed, validate_values
from algorithms.step import Number, SortStats, Step, Trace


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:       str   = ""
    algo_label:     str   = ""
    variant:        str   = ""
    input_size:     int   = 0
    comparisons:    int   = 0
    swaps:          int   = 0
    passes:         int   = 0
    partitions:     int   = 0
    heapify_calls:  int   = 0
    max_depth:      int   = 0
    total_steps:    int   = 0          # number of Steps in the trace
    wall_time_ms:   float = 0.0        # wall-clock time to generate
    memory_bytes:   int   = 0          # approx size of the step buffer
    seed:           Optional[int] = None


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which run compared less
    winner_swaps:       str = ""
    winner_steps:       str = ""


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : The generated Trace (available after run_to_completion).
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo] = None
        self._values:    List[Number]       = []
        self._variant:   str                = ""
        self._seed:      Optional[int]      = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        values: Any,
        variant: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Validate the run configuration. Raises before anything is generated."""
        info   = resolve(algo_key, variant)
        values = validate_values(values)
        seed   = validate_seed(seed)
        self._values    = values
        self._algo_info = info
        self._variant   = variant or info.default_variant
        self._seed      = seed
        self.trace      = None
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Generate the full trace and compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started    = time.monotonic()
        self.trace = generate(self._algo_info.key, self._values, self._variant, seed=self._seed)
        wall_ms    = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def steps(self) -> List[Step]:
        return list(self.trace.steps) if self.trace else []

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        info = self._algo_info
        return {
            "algo_key": info.key if info else "",
            "variant":  self._variant,
            "seed":     self._seed,
            "input":    list(self._values),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "stats":    stats_to_dict(self.trace.stats) if self.trace else {},
            "steps":    [step_to_dict(s) for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info  = self._algo_info
        stats = self.trace.stats

        # approximate memory: sizeof the steps buffer and each snapshot
        mem = sys.getsizeof(self.trace.steps)
        for s in self.trace.steps:
            mem += sys.getsizeof(s) + sys.getsizeof(s.array)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            variant=self._variant,
            input_size=len(self._values),
            comparisons=stats.comparisons,
            swaps=stats.swaps,
            passes=stats.passes,
            partitions=stats.partitions,
            heapify_calls=stats.heapify_calls,
            max_depth=stats.max_depth,
            total_steps=stats.total_steps,
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            seed=self._seed,
        )


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------
def step_to_dict(step: Step) -> Dict[str, Any]:
    return {
        "step_number":     step.step_number,
        "kind":            step.kind.value,
        "array":           list(step.array),
        "focus":           list(step.focus),
        "payload":         asdict(step.payload) if is_dataclass(step.payload) else None,
        "explanation":     step.explanation,
        "insight":         step.insight,
        "pseudocode_line": step.pseudocode_line,
        "compared":        step.compared,
        "is_final":        step.is_final,
    }


def stats_to_dict(stats: SortStats) -> Dict[str, Any]:
    data = asdict(stats)
    data["pass_history"] = list(data["pass_history"])     # asdict keeps the tuple
    return data


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def label(m: RunMetrics) -> str:
        return f"{m.algo_label} ({m.variant})" if m.variant else m.algo_label

    # fewer is better for every counter we rank
    def winner(l_val: int, r_val: int) -> str:
        if l_val == r_val:
            return "tie"
        return label(l) if l_val < r_val else label(r)

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons),
        winner_swaps=winner(l.swaps, r.swaps),
        winner_steps=winner(l.total_steps, r.total_steps),
    )
