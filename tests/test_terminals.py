"""Tests for Sequence terminal operations and failure propagation."""

from collections.abc import Iterator

import pytest

import lazyseq as ls


def test_reduce_empty_returns_initial() -> None:
    assert ls.stream([]).reduce(lambda a, b: a + b, 0) == 0


def test_reduce_is_a_left_fold() -> None:
    result = ls.stream([1, 2, 3]).reduce(lambda acc, x: f"({acc}+{x})", "0")
    assert result == "(((0+1)+2)+3)"


def test_reduce_accumulator_type_can_differ() -> None:
    result = ls.stream(["a", "bb", "ccc"]).reduce(lambda acc, s: acc + len(s), 0)
    assert result == 6


def test_to_array_returns_a_new_list() -> None:
    data = [1, 2, 3]
    result = ls.stream(data).to_array()
    assert result == data
    assert result is not data
    assert ls.Sequence.toArray is ls.Sequence.to_array


def test_for_each_visits_in_order() -> None:
    visited: list[int] = []
    assert ls.stream([3, 1, 2]).for_each(visited.append) is None
    assert visited == [3, 1, 2]


def test_for_each_alias() -> None:
    visited: list[str] = []
    ls.stream("ab").forEach(visited.append)
    assert visited == ["a", "b"]


class TestFind:
    """Tests for find."""

    def test_first_match(self) -> None:
        assert ls.stream([1, 4, 6]).find(lambda x: x % 2 == 0).unwrap() == 4

    def test_no_match_is_none(self) -> None:
        result = ls.stream([1, 3]).find(lambda x: x % 2 == 0)
        assert result is ls.NONE
        assert result.is_none()

    def test_empty(self) -> None:
        assert ls.stream([]).find(lambda _: True).is_none()

    def test_matching_none_element_is_some(self) -> None:
        """A matching element equal to None is still reported as found."""
        result = ls.stream([1, None, 2]).find(lambda x: x is None)
        assert result.is_some()
        assert result.unwrap() is None


class TestBooleans:
    """Tests for some and every."""

    def test_every_on_empty_is_true(self) -> None:
        assert ls.stream([]).every(lambda _: False) is True

    def test_some_on_empty_is_false(self) -> None:
        assert ls.stream([]).some(lambda _: True) is False

    def test_every(self) -> None:
        assert ls.stream([2, 4]).every(lambda x: x % 2 == 0) is True
        assert ls.stream([2, 3]).every(lambda x: x % 2 == 0) is False

    def test_some(self) -> None:
        assert ls.stream([1, 2]).some(lambda x: x % 2 == 0) is True
        assert ls.stream([1, 3]).some(lambda x: x % 2 == 0) is False


class TestCount:
    """Tests for count."""

    @pytest.mark.parametrize(
        "data",
        [[], [1], [1, 1, 2, 3, 3], list(range(50))],
    )
    def test_consistent_with_to_array(self, data: list[int]) -> None:
        seq = ls.stream(data).distinct().filter(lambda x: x != 2)
        assert seq.count() == len(seq.to_array())

    def test_counts_generator(self) -> None:
        assert ls.stream(x for x in range(7)).count() == 7

    def test_counts_after_limit(self) -> None:
        assert ls.stream(range(100)).limit(5).count() == 5

    def test_iterates_instead_of_trusting_len(self) -> None:
        """count walks the elements even when the source reports another length."""

        class _Misreported:
            def __iter__(self) -> Iterator[int]:
                return iter([1, 2, 3])

            def __len__(self) -> int:
                return 99

        assert ls.stream(_Misreported()).count() == 3

    def test_drains_single_pass_source(self) -> None:
        """count reads an iterator source to the end."""
        source = iter([1, 2, 3, 4])
        seq = ls.stream(source).skip(1)
        assert seq.count() == 3
        assert list(source) == []


class TestFailurePropagation:
    """Callback failures surface unchanged at the terminal operation."""

    def test_mapper_failure(self) -> None:
        seq = ls.stream([1, 0, 2]).map(lambda x: 1 / x)
        with pytest.raises(ZeroDivisionError):
            seq.to_array()

    def test_failure_stops_at_failing_element(self) -> None:
        visited: list[int] = []

        def check(x: int) -> bool:
            visited.append(x)
            if x == 2:
                msg = "bad element"
                raise ValueError(msg)
            return True

        with pytest.raises(ValueError, match="bad element"):
            ls.stream([1, 2, 3]).filter(check).for_each(lambda _: None)
        assert visited == [1, 2]

    def test_reducer_failure(self) -> None:
        with pytest.raises(KeyError):
            ls.stream(["a"]).reduce(lambda acc, k: acc[k], {})

    def test_flat_mapper_returning_non_iterable(self) -> None:
        seq = ls.stream([1]).flat_map(lambda x: x)  # type: ignore[arg-type, return-value]
        with pytest.raises(TypeError):
            seq.to_array()

    def test_predicate_failure_in_find(self) -> None:
        with pytest.raises(AttributeError):
            ls.stream([1]).find(lambda x: x.missing)  # type: ignore[attr-defined]

    def test_callback_failure_in_for_each(self) -> None:
        def boom(_: int) -> None:
            raise RuntimeError

        with pytest.raises(RuntimeError):
            ls.stream([1]).for_each(boom)
