from algorithms import generate
from algorithms.step import NO_FOCUS, StepKind


def _kinds(trace, kind):
    return [s for s in trace.steps if s.kind is kind]


class TestStandard:
    def test_classic_example(self):
        trace = generate("bubble", [5, 1, 4, 2, 8])
        assert trace.final_array == [1, 2, 4, 5, 8]
        assert trace.stats.passes == 4
        assert trace.stats.swaps == 4
        assert trace.stats.comparisons == 10
        # 10 compares + 4 swaps + 4 end-of-pass summaries + complete
        assert len(trace) == 19

    def test_pass_history(self):
        trace = generate("bubble", [5, 1, 4, 2, 8], "standard")
        history = trace.stats.pass_history
        assert [p.swaps for p in history] == [3, 1, 0, 0]
        assert [p.comparisons for p in history] == [4, 3, 2, 1]
        assert all(p.direction == "forward" for p in history)

    def test_runs_every_pass_on_sorted_input(self):
        trace = generate("bubble", [1, 2, 3, 4, 5], "standard")
        assert trace.stats.passes == 4
        assert trace.stats.swaps == 0
        assert len(trace) == 15

    def test_pass_summary_steps_have_no_focus(self):
        trace = generate("bubble", [3, 1, 2])
        summaries = [s for s in trace.steps if s.kind is StepKind.COMPARE and not s.compared]
        assert len(summaries) == 2
        for s in summaries:
            assert s.focus == NO_FOCUS
            assert s.pseudocode_line == 2

    def test_compare_then_swap_share_focus(self):
        trace = generate("bubble", [2, 1])
        first, second = trace.steps[0], trace.steps[1]
        assert first.kind is StepKind.COMPARE and first.compared
        assert first.array == [2, 1]
        assert second.kind is StepKind.SWAP
        assert second.focus == first.focus == (0, 1)
        assert second.array == [1, 2]


class TestOptimized:
    def test_stops_after_clean_pass(self):
        trace = generate("bubble", [1, 2, 3, 4, 5], "optimized")
        assert trace.stats.passes == 1
        assert trace.stats.swaps == 0
        assert trace.stats.comparisons == 4
        assert len(trace) == 6

    def test_early_exit_on_nearly_sorted(self):
        trace = generate("bubble", [5, 1, 4, 2, 8], "optimized")
        assert trace.stats.passes == 3
        assert trace.stats.comparisons == 9
        assert trace.stats.swaps == 4
        assert len(trace) == 17

    def test_never_longer_than_standard(self):
        for values in ([4, 3, 2, 1], [2, 1, 3, 4], [1, 1, 2, 2]):
            std = generate("bubble", values, "standard")
            opt = generate("bubble", values, "optimized")
            assert len(opt) <= len(std)
            assert opt.stats.swaps == std.stats.swaps


class TestCocktail:
    def test_alternates_direction(self):
        trace = generate("bubble", [5, 1, 4, 2, 8], "cocktail")
        assert trace.final_array == [1, 2, 4, 5, 8]
        assert trace.stats.passes == 3
        assert trace.stats.swaps == 4
        assert trace.stats.comparisons == 9
        assert [p.direction for p in trace.stats.pass_history] == ["forward", "backward", "forward"]

    def test_backward_pass_moves_minimum_left(self):
        trace = generate("bubble", [2, 3, 4, 5, 1], "cocktail")
        backward = [s for s in _kinds(trace, StepKind.SWAP) if s.payload.direction == "backward"]
        assert backward
        first_backward_pass = backward[0].payload.pass_number
        last = [s for s in backward if s.payload.pass_number == first_backward_pass][-1]
        assert last.array[0] == 1

    def test_sorted_input_is_one_pass(self):
        trace = generate("bubble", [1, 2, 3], "cocktail")
        assert trace.stats.passes == 1
        assert trace.stats.swaps == 0

    def test_two_elements(self):
        trace = generate("bubble", [2, 1], "cocktail")
        assert trace.stats.passes == 1
        assert trace.stats.swaps == 1
        assert trace.final_array == [1, 2]

    def test_uses_cocktail_pseudocode(self):
        from algorithms import get_algorithm

        info = get_algorithm("bubble")
        assert info.pseudocode_for("cocktail")[0].startswith("def cocktail_sort")
        assert info.pseudocode_for("standard")[0].startswith("def bubble_sort")
        trace = generate("bubble", [3, 2, 1], "cocktail")
        assert trace.steps[-1].pseudocode_line == 11
