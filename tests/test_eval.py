"""Tests for value propagation and constraint re-derivation."""

import pytest

import arithgraph as ag
from arithgraph._eval import ConstraintReport, ConstraintViolation, propagate
from arithgraph._graph import Graph


class TestConstraintReport:
    """Tests for ConstraintReport dataclass."""

    def test_success_when_no_violations(self) -> None:
        report = ConstraintReport(violations=[], unresolved=[])
        assert report.success is True
        assert report.complete is True

    def test_not_success_when_violations(self) -> None:
        report = ConstraintReport(violations=[ConstraintViolation(node_id=2, expected=3, actual=4)])
        assert report.success is False

    def test_incomplete_when_unresolved(self) -> None:
        report = ConstraintReport(unresolved=[3])
        assert report.success is True
        assert report.complete is False


class TestPropagate:
    """Tests for the propagate pass."""

    def test_resolves_in_index_order(self) -> None:
        g = Graph()
        g.append(ag.Constant(2), 2)
        g.append(ag.Constant(3), 3)
        g.append(ag.Add(0, 1))
        g.append(ag.Mul(2, 2))
        assert propagate(g) == [2, 3]
        assert g.output(3) == 25

    def test_leaves_unresolvable_nodes_absent(self) -> None:
        g = Graph()
        g.append(ag.Input())
        g.append(ag.Constant(3), 3)
        g.append(ag.Add(0, 1))
        assert propagate(g) == []
        assert g.output(2) is None

    def test_second_pass_resolves_nothing(self) -> None:
        g = Graph()
        g.append(ag.Constant(3), 3)
        g.append(ag.Mul(0, 0))
        propagate(g)
        assert propagate(g) == []


class TestFillNodes:
    """Tests for fill_nodes."""

    def test_fills_input_and_propagates(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        c = builder.constant(3)
        s = builder.add(x, c)
        p = builder.mul(s, x)
        builder.fill_nodes(x, 4)
        assert builder.get(x).output == 4
        assert builder.get(s).output == 7
        assert builder.get(p).output == 28

    def test_add_wraps(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        c = builder.constant(ag.U32_MAX)
        s = builder.add(x, c)
        builder.fill_nodes(x, 3)
        assert builder.get(s).output == (3 + ag.U32_MAX) % 2**32

    def test_mul_wraps(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        sq = builder.mul(x, x)
        builder.fill_nodes(x, 100_000)
        assert builder.get(sq).output == (100_000 * 100_000) % 2**32

    def test_saturate_policy(self) -> None:
        builder = ag.Builder(overflow=ag.OverflowPolicy.SATURATE)
        x = builder.init()
        sq = builder.mul(x, x)
        builder.fill_nodes(x, 100_000)
        assert builder.get(sq).output == ag.U32_MAX

    def test_checked_policy_raises(self) -> None:
        builder = ag.Builder(overflow=ag.OverflowPolicy.CHECKED)
        x = builder.init()
        builder.mul(x, x)
        with pytest.raises(ag.ArithmeticOverflowError):
            builder.fill_nodes(x, 100_000)

    def test_checked_overflow_does_not_block_other_nodes(self) -> None:
        builder = ag.Builder(overflow=ag.OverflowPolicy.CHECKED)
        a = builder.init()
        b = builder.init()
        a_sq = builder.mul(a, a)
        one = builder.constant(1)
        b_plus_1 = builder.add(b, one)
        a_sq_plus_b = builder.add(a_sq, b)

        with pytest.raises(ag.ArithmeticOverflowError) as exc_info:
            builder.fill_nodes(a, 100_000)
        assert exc_info.value.node_ids == (a_sq,)
        assert builder.get(a).output == 100_000
        assert builder.get(a_sq).output is None

        # The overflowing node is reported again, but independent nodes resolve
        with pytest.raises(ag.ArithmeticOverflowError):
            builder.fill_nodes(b, 1)
        assert builder.get(b_plus_1).output == 2
        assert builder.get(a_sq).output is None
        assert builder.get(a_sq_plus_b).output is None

    def test_checked_overflow_lists_every_node(self) -> None:
        builder = ag.Builder(overflow=ag.OverflowPolicy.CHECKED)
        x = builder.init()
        sq = builder.mul(x, x)
        big = builder.constant(ag.U32_MAX)
        total = builder.add(x, big)
        with pytest.raises(ag.ArithmeticOverflowError, match=f"node {sq}.*node {total}") as exc_info:
            builder.fill_nodes(x, 100_000)
        assert exc_info.value.node_ids == (sq, total)

    def test_multiple_inputs(self) -> None:
        builder = ag.Builder()
        a = builder.init()
        b = builder.init()
        a_sq = builder.mul(a, a)
        total = builder.add(a_sq, b)

        builder.fill_nodes(a, 3)
        assert builder.get(a_sq).output == 9
        assert builder.get(total).output is None

        builder.fill_nodes(b, 1)
        assert builder.get(total).output == 10

    def test_monotonic(self) -> None:
        builder = ag.Builder()
        a = builder.init()
        b = builder.init()
        builder.add(a, a)
        builder.mul(a, b)

        before = builder.resolved()
        builder.fill_nodes(a, 2)
        after_a = builder.resolved()
        builder.fill_nodes(b, 5)
        after_b = builder.resolved()

        assert before <= after_a <= after_b
        assert after_b == frozenset(range(len(builder)))

    def test_refill_same_value_is_idempotent(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        s = builder.add(x, x)
        builder.fill_nodes(x, 6)
        nodes = builder.nodes
        builder.fill_nodes(x, 6)
        assert builder.nodes == nodes
        assert builder.get(s).output == 12

    def test_refill_different_value_raises(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        s = builder.add(x, x)
        builder.fill_nodes(x, 6)
        with pytest.raises(ag.InputAlreadyFilledError, match="already filled"):
            builder.fill_nodes(x, 7)
        assert builder.get(x).output == 6
        assert builder.get(s).output == 12

    def test_hint_is_not_recomputed(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        h = builder.hint(4, x)
        builder.fill_nodes(x, 100)
        assert builder.get(h).output == 4

    @pytest.mark.parametrize("kind", ["constant", "hint", "add", "mul"])
    def test_non_input_raises(self, kind: str) -> None:
        builder = ag.Builder()
        x = builder.init()
        targets = {
            "constant": builder.constant(1),
            "hint": builder.hint(1, x),
            "add": builder.add(x, x),
            "mul": builder.mul(x, x),
        }
        with pytest.raises(ag.NotAnInputNodeError, match=kind):
            builder.fill_nodes(targets[kind], 1)

    def test_invalid_index_raises(self) -> None:
        builder = ag.Builder()
        builder.init()
        with pytest.raises(ag.InvalidIndexError):
            builder.fill_nodes(1, 1)

    def test_invalid_value_raises(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        with pytest.raises(ag.ValueRangeError):
            builder.fill_nodes(x, -1)
        assert builder.get(x).output is None


class TestCheckConstraints:
    """Tests for check_constraints."""

    def test_consistent_graph(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        builder.add(builder.mul(x, x), builder.constant(5))
        builder.fill_nodes(x, 6)
        report = builder.check_constraints()
        assert report.success
        assert report.complete

    def test_reports_unresolved(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        sq = builder.mul(x, x)
        report = builder.check_constraints()
        assert report.success
        assert report.unresolved == [sq]

    def test_reports_stale_nodes_after_set_hint(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        h = builder.hint(4, x)
        sq = builder.mul(h, h)
        builder.fill_nodes(x, 16)
        builder.set_hint(h, 5)

        # Propagation never overwrites; the stale square stays
        assert builder.get(sq).output == 16
        report = builder.check_constraints()
        assert report.violations == [ConstraintViolation(node_id=sq, expected=25, actual=16)]

    def test_checked_overflow_is_reported_without_expected(self) -> None:
        builder = ag.Builder(overflow=ag.OverflowPolicy.CHECKED)
        x = builder.init()
        h = builder.hint(2, x)
        sq = builder.mul(h, h)
        builder.fill_nodes(x, 4)
        builder.set_hint(h, 2**20)
        report = builder.check_constraints()
        assert report.violations == [ConstraintViolation(node_id=sq, expected=None, actual=4)]

    def test_does_not_modify_graph(self) -> None:
        builder = ag.Builder()
        x = builder.init()
        builder.add(x, x)
        nodes = builder.nodes
        builder.check_constraints()
        assert builder.nodes == nodes
