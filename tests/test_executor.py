import logging

import pytest

import lazyfuse
from lazyfuse import LazyContainer, LengthMismatchError, materialize
from lazyfuse.runtime.executor import check_lengths


class TestSinglePass:
    """Test that materialization reads each leaf once per index"""

    def test_each_leaf_read_once_per_index(self, counting_list):
        a = counting_list([1, 2, 3])
        b = counting_list([10, 20, 30])
        c = counting_list([100, 200, 300])
        d = LazyContainer([0, 0, 0])
        d += LazyContainer(a) + LazyContainer(b) + LazyContainer(c)
        assert d.data == [111, 222, 333]
        for leaf in (a, b, c):
            assert leaf.reads == {0: 1, 1: 1, 2: 1}

    def test_repeated_leaf_read_once_per_occurrence(self, counting_list):
        a = counting_list([1, 2])
        wrapped = LazyContainer(a)
        LazyContainer([0, 0], wrapped * wrapped)
        assert a.reads == {0: 2, 1: 2}

    def test_one_temporary_per_index(self, tracked):
        a = [tracked(i) for i in range(4)]
        b = [tracked(10 * i) for i in range(4)]
        c = [tracked(100 * i) for i in range(4)]
        d = [None] * 4
        tracked.constructed = 0
        LazyContainer(d, LazyContainer(a) + LazyContainer(b) + LazyContainer(c))
        assert tracked.constructed == 4
        assert [x.value for x in d] == [0, 111, 222, 333]

    def test_compound_assignment_constructs_one_temporary_per_index(self, tracked):
        a = [tracked(1), tracked(2)]
        b = [tracked(10), tracked(20)]
        c = [tracked(100), tracked(200)]
        d = [tracked(0), tracked(0)]
        tracked.constructed = 0
        lazy_d = LazyContainer(d)
        lazy_d += LazyContainer(a) + LazyContainer(b) + LazyContainer(c)
        assert tracked.constructed == 2
        assert [x.value for x in d] == [111, 222]


class TestLengthPolicy:
    """Test operand length validation"""

    def test_strict_rejects_shorter_operand_before_writing(self):
        d = LazyContainer([0, 0, 0])
        a = LazyContainer([1, 2, 3])
        short = LazyContainer([1, 2], name="short")
        with pytest.raises(LengthMismatchError) as excinfo:
            d += a + short
        assert excinfo.value.name == "short"
        assert excinfo.value.expected == 3
        assert excinfo.value.actual == 2
        assert d.data == [0, 0, 0]

    def test_strict_rejects_longer_operand(self):
        d = LazyContainer([0, 0])
        with pytest.raises(LengthMismatchError):
            d.assign(LazyContainer([1, 2, 3]) + 1)

    def test_prefix_accepts_longer_operand(self):
        d = LazyContainer([0, 0])
        with lazyfuse.options(length_policy="prefix"):
            d.assign(LazyContainer([1, 2, 3]) + 1)
        assert d.data == [2, 3]

    def test_prefix_still_rejects_shorter_operand(self):
        d = LazyContainer([0, 0, 0])
        with lazyfuse.options(length_policy="prefix"):
            with pytest.raises(LengthMismatchError) as excinfo:
                d.assign(LazyContainer([1, 2]) + 1)
        assert excinfo.value.policy == "prefix"
        assert "at least 3" in str(excinfo.value)

    def test_length_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            LazyContainer([0]).assign(LazyContainer([1, 2]) + 0)

    def test_check_lengths_ignores_literals(self):
        check_lengths(LazyContainer([1, 2]) + 5, 2)


class TestMaterialize:
    """Test the free-standing materialize helper"""

    def test_allocates_a_list(self):
        a = LazyContainer([1, 2, 3])
        result = materialize(a * 2)
        assert result == [2, 4, 6]

    def test_sizes_after_shortest_operand_under_prefix(self):
        with lazyfuse.options(length_policy="prefix"):
            result = materialize(LazyContainer([1, 2, 3]) + LazyContainer([1, 1]))
        assert result == [2, 3]

    def test_writes_into_given_destination(self):
        out = [0, 0]
        assert materialize(LazyContainer([1, 2]) - 1, out) is out
        assert out == [0, 1]

    def test_literal_only_expression_needs_a_destination(self):
        expression = lazyfuse.LiteralNode(1) + 2
        with pytest.raises(ValueError):
            materialize(expression)
        assert materialize(expression, [None, None]) == [3, 3]

    def test_empty_collections(self):
        assert materialize(LazyContainer([]) + LazyContainer([])) == []


class TestFailures:
    """Test that element errors propagate unchanged"""

    def test_element_error_propagates(self):
        d = LazyContainer([0, 0, 0])
        a = LazyContainer([1, 1, 1])
        b = LazyContainer([1, 0, 1])
        with pytest.raises(ZeroDivisionError):
            d.assign(a / b)
        assert d.data == [1.0, 0, 0]

    def test_unsupported_element_type(self):
        d = LazyContainer([None])
        with pytest.raises(TypeError):
            d.assign(LazyContainer(["a"]) - LazyContainer(["b"]))


class TestLogging:
    """Test debug logging of materializations"""

    def test_materialization_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="lazyfuse"):
            LazyContainer([0], LazyContainer([1]) + 1)
        messages = [record.getMessage() for record in caplog.records]
        assert any(m.startswith("Compiled fused kernel") for m in messages)
        assert any(m.startswith("Materializing assign over 1 element(s)") for m in messages)
