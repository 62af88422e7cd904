import pytest

from algorithms import generate
from algorithms.step import StepKind


def _build_done(trace):
    builds = [i for i, s in enumerate(trace.steps) if s.kind is StepKind.BUILD_HEAP]
    assert len(builds) == 2
    return trace.steps[builds[1]]


class TestMaxHeap:
    def test_root_is_maximum_after_build(self):
        trace = generate("heap", [4, 10, 3, 5, 1], "max")
        done = _build_done(trace)
        assert done.array == [10, 5, 3, 4, 1]
        assert done.array[0] == 10
        assert trace.final_array == [1, 3, 4, 5, 10]

    def test_heap_property_after_build(self):
        values = [9, 2, 7, 4, 8, 1, 3, 6]
        a = _build_done(generate("heap", values, "max")).array
        for k in range(len(a)):
            for c in (2 * k + 1, 2 * k + 2):
                if c < len(a):
                    assert a[k] >= a[c]

    def test_extract_then_swap(self):
        trace = generate("heap", [3, 1, 2], "max")
        i = trace.index_of(StepKind.EXTRACT)
        extract, swap = trace.steps[i], trace.steps[i + 1]
        assert extract.payload.heap_size == 3
        assert swap.kind is StepKind.SWAP
        assert swap.payload.heap_size == 2
        assert swap.focus == (0, 2)
        assert swap.array[2] == 3

    def test_levels(self):
        assert generate("heap", [5, 4, 3, 2, 1]).stats.heap_levels == 3
        assert generate("heap", [1]).stats.heap_levels == 1
        assert generate("heap", list(range(8))).stats.heap_levels == 4

    def test_heapify_calls_include_continuations(self):
        trace = generate("heap", [1, 2, 3, 4, 5, 6, 7], "max")
        heapify_steps = [s for s in trace.steps if s.kind is StepKind.HEAPIFY]
        assert trace.stats.heapify_calls == len(heapify_steps)
        # n//2 build calls plus n-1 extract calls, before continuations
        assert trace.stats.heapify_calls > 7 // 2 + 6


class TestMinHeap:
    def test_final_array_is_ascending(self):
        trace = generate("heap", [4, 10, 3, 5, 1], "min")
        assert trace.final_array == [1, 3, 4, 5, 10]

    def test_root_is_minimum_after_build(self):
        values = [4, 10, 3, 5, 1]
        done = _build_done(generate("heap", values, "min"))
        # mirrored layout: logical root lives at the last index
        assert done.array[-1] == min(values)
        assert done.payload.node == len(values) - 1

    def test_heap_range_is_a_suffix(self):
        trace = generate("heap", [6, 2, 8, 1], "min")
        for s in trace.steps:
            lo, hi = s.payload.heap_range
            assert hi == 4
            assert hi - lo == s.payload.heap_size


@pytest.mark.parametrize("variant", ["max", "min"])
class TestConvergence:
    VALUES = [7, 3, 9, 1, 5, 8, 2, 6, 4]

    def test_heap_size_never_grows(self, variant):
        trace = generate("heap", self.VALUES, variant)
        sizes = [s.payload.heap_size for s in trace.steps]
        assert sizes == sorted(sizes, reverse=True)
        assert sizes[0] == len(self.VALUES)
        assert sizes[-1] == 0

    def test_positions_outside_heap_are_final(self, variant):
        final = sorted(self.VALUES)
        trace = generate("heap", self.VALUES, variant)
        for s in trace.steps:
            for idx in range(len(final)):
                if not s.payload.in_heap(idx):
                    assert s.array[idx] == final[idx]

    def test_single_element(self, variant):
        trace = generate("heap", [9], variant)
        assert [s.kind for s in trace.steps] == [
            StepKind.BUILD_HEAP, StepKind.BUILD_HEAP, StepKind.COMPLETE,
        ]

    def test_phases_in_order(self, variant):
        trace = generate("heap", self.VALUES, variant)
        order = {"build": 0, "extract": 1, "done": 2}
        phases = [order[s.payload.phase] for s in trace.steps]
        assert phases == sorted(phases)
