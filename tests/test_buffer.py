from __future__ import annotations

import random

import pytest

from poe.buffer import (
    EmptyBufferError,
    LineBuffer,
    NotFoundError,
    OutOfRangeError,
)


def make_buffer(*lines: str, cursor: int = 0) -> LineBuffer:
    buffer = LineBuffer.from_lines(lines)
    if lines:
        buffer.set_cursor(cursor)
    return buffer


def test_empty_buffer_defaults() -> None:
    buffer = LineBuffer()

    assert buffer.length() == 0
    assert buffer.cursor == 0
    assert buffer.is_empty()
    assert buffer.context() == []
    assert list(buffer.all_lines()) == []


def test_set_cursor_rejects_out_of_range_without_moving() -> None:
    buffer = make_buffer("a", "b", "c", cursor=1)

    with pytest.raises(OutOfRangeError) as excinfo:
        buffer.set_cursor(3)
    with pytest.raises(OutOfRangeError):
        buffer.set_cursor(-1)

    assert excinfo.value.index == 3
    assert excinfo.value.length == 3
    assert buffer.cursor == 1


def test_set_cursor_on_empty_buffer_is_out_of_range() -> None:
    with pytest.raises(OutOfRangeError):
        LineBuffer().set_cursor(0)


def test_current_line_requires_lines() -> None:
    with pytest.raises(EmptyBufferError):
        LineBuffer().current_line()

    assert make_buffer("x", "y", cursor=1).current_line() == "y"


def test_context_clamps_to_buffer_edges() -> None:
    buffer = make_buffer("l0", "l1", "l2", "l3", "l4", "l5", cursor=1)

    assert buffer.context() == [(0, "l0"), (1, "l1"), (2, "l2"), (3, "l3")]
    assert buffer.context(1) == [(0, "l0"), (1, "l1"), (2, "l2")]
    assert buffer.context(0) == [(1, "l1")]
    assert buffer.context(-4) == [(1, "l1")]
    assert buffer.context(100) == list(enumerate(buffer.lines()))


def test_insert_after_on_empty_buffer_lands_at_zero() -> None:
    buffer = LineBuffer()

    assert buffer.insert_after("first") == 0
    assert buffer.lines() == ("first",)
    assert buffer.cursor == 0
    assert buffer.modified is True


def test_insert_after_moves_cursor_to_new_line() -> None:
    buffer = make_buffer("alpha", "beta", "gamma")

    index = buffer.insert_after("beta2")

    assert index == 1
    assert buffer.cursor == 1
    assert buffer.lines() == ("alpha", "beta2", "beta", "gamma")


def test_insert_before_shifts_current_line_down() -> None:
    buffer = make_buffer("alpha", "beta", "gamma", cursor=1)

    index = buffer.insert_before("between")

    assert index == 1
    assert buffer.cursor == 1
    assert buffer.lines() == ("alpha", "between", "beta", "gamma")


def test_replace_current() -> None:
    buffer = make_buffer("a", "b", cursor=1)

    buffer.replace_current("B")

    assert buffer.lines() == ("a", "B")
    with pytest.raises(EmptyBufferError):
        LineBuffer().replace_current("x")


def test_delete_current_clamps_cursor_at_end() -> None:
    buffer = make_buffer("a", "b", "c", cursor=2)

    assert buffer.delete_current() == "c"
    assert buffer.lines() == ("a", "b")
    assert buffer.cursor == 1


def test_delete_current_keeps_index_in_middle() -> None:
    buffer = make_buffer("a", "b", "c", cursor=1)

    buffer.delete_current()

    assert buffer.lines() == ("a", "c")
    assert buffer.cursor == 1


def test_delete_last_line_leaves_empty_buffer() -> None:
    buffer = make_buffer("only")

    buffer.delete_current()

    assert buffer.length() == 0
    assert buffer.cursor == 0
    with pytest.raises(EmptyBufferError):
        buffer.delete_current()
    assert buffer.length() == 0


def test_failed_mutation_does_not_mark_modified() -> None:
    buffer = LineBuffer()

    with pytest.raises(EmptyBufferError):
        buffer.delete_current()

    assert buffer.modified is False


def test_find_forward_does_not_wrap() -> None:
    buffer = make_buffer("x", "y", "z")

    assert buffer.find_forward("y") == 1
    assert buffer.cursor == 1
    with pytest.raises(NotFoundError) as excinfo:
        buffer.find_forward("y")
    assert excinfo.value.direction == "forward"
    assert buffer.cursor == 1


def test_find_forward_skips_current_line() -> None:
    buffer = make_buffer("needle", "hay", "more needle")

    assert buffer.find_forward("needle") == 2


def test_find_backward_does_not_wrap() -> None:
    buffer = make_buffer("apple", "pear", "apple pie", "plum", cursor=3)

    assert buffer.find_backward("apple") == 2
    assert buffer.find_backward("apple") == 0
    with pytest.raises(NotFoundError):
        buffer.find_backward("apple")
    assert buffer.cursor == 0


def test_find_forward_then_backward_returns_to_start() -> None:
    buffer = make_buffer("begin", "middle", "unique", "end", cursor=1)

    assert buffer.find_forward("unique") == 2
    assert buffer.find_backward("middle") == 1
    assert buffer.cursor == 1


def test_find_backward_from_match_stops_at_boundary() -> None:
    buffer = make_buffer("start", "one", "target", "two")

    assert buffer.find_forward("target") == 2
    with pytest.raises(NotFoundError):
        buffer.find_backward("target")
    assert buffer.cursor == 2


def test_all_lines_is_restartable_and_read_only() -> None:
    buffer = make_buffer("a", "b", "c", cursor=2)

    first = list(buffer.all_lines())
    second = list(buffer.all_lines())

    assert first == second == [(0, "a"), (1, "b"), (2, "c")]
    assert buffer.cursor == 2


def test_random_operations_keep_cursor_in_bounds() -> None:
    rng = random.Random(1234)
    buffer = LineBuffer()

    for step in range(2000):
        length_before = len(buffer)
        choice = rng.choice(("after", "before", "delete", "goto", "find"))
        if choice == "after":
            index = buffer.insert_after(f"line {step}")
            assert len(buffer) == length_before + 1
            assert buffer.cursor == index
        elif choice == "before":
            index = buffer.insert_before(f"line {step}")
            assert len(buffer) == length_before + 1
            assert buffer.cursor == index
        elif choice == "delete":
            if length_before:
                buffer.delete_current()
                assert len(buffer) == length_before - 1
            else:
                with pytest.raises(EmptyBufferError):
                    buffer.delete_current()
        elif choice == "goto":
            target = rng.randint(-2, length_before + 2)
            try:
                buffer.set_cursor(target)
            except OutOfRangeError:
                pass
        else:
            try:
                buffer.find_forward(str(rng.randint(0, 9)))
            except NotFoundError:
                pass

        if len(buffer):
            assert 0 <= buffer.cursor < len(buffer)
        else:
            assert buffer.cursor == 0


def test_insert_at_accepts_end_position_and_rejects_beyond() -> None:
    buffer = make_buffer("a", "b")

    assert buffer.insert_at(2, "c") == 2
    assert buffer.lines() == ("a", "b", "c")
    assert buffer.cursor == 2

    with pytest.raises(OutOfRangeError):
        buffer.insert_at(4, "x")
    with pytest.raises(OutOfRangeError):
        buffer.insert_at(-1, "x")
    assert buffer.lines() == ("a", "b", "c")
