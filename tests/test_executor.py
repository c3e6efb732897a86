#!/usr/bin/env python3
"""
Executor tests: cell and cursor wrap-around, I/O and loop control.
"""

import sys
import os
import io
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from archbtw.errors import InvalidTokenError, UnbalancedLoopError
from archbtw.executor import Executor, IntegerReader
from archbtw.lexer import TokenType, tokenize
from archbtw.state import CELLS_END, MAX_CELL_SIZE, MachineState

T = TokenType


def run(src, input_data=""):
    out = io.BytesIO()
    ex = Executor(tokenize(src), stdin=io.StringIO(input_data), stdout=out)
    ex.run()
    return ex, out.getvalue()


def test_tape_shape():
    st = MachineState()
    assert len(st.tape) == CELLS_END + 1 == 30001
    assert st.cursor == 0
    assert not st.tape.any()


def test_add_cell_wraps_after_256():
    ex, _ = run("use " * 256)
    assert ex.state.cell == 256
    ex, _ = run("use " * 257)
    assert ex.state.cell == 0


def test_sub_cell_wraps_to_256():
    ex, _ = run("not")
    assert ex.state.cell == MAX_CELL_SIZE


def test_cell_add_sub_identity():
    for start in (0, 1, 255, 256):
        for prog in ("use not", "not use"):
            st = MachineState()
            st.cell = start
            Executor(tokenize(prog), stdout=io.BytesIO(), state=st).run()
            assert st.cell == start


def test_cursor_wraps_both_ways():
    ex, _ = run("notarch")
    assert ex.state.cursor == 30000
    st = MachineState(cursor=CELLS_END)
    Executor(tokenize("arch"), stdout=io.BytesIO(), state=st).run()
    assert st.cursor == 0


def test_cursor_add_sub_identity():
    for start in (0, 1, 29999, 30000):
        for prog in ("arch notarch", "notarch arch"):
            st = MachineState(cursor=start)
            Executor(tokenize(prog), stdout=io.BytesIO(), state=st).run()
            assert st.cursor == start


def test_output_raw_bytes():
    _, out = run("use " * 65 + "btw")
    assert out == b"A"
    _, out = run("btw")
    assert out == b"\x00"


def test_output_of_256_is_nul():
    _, out = run("not btw")
    assert out == b"\x00"


def test_input_normalisation():
    ex, _ = run("i", "42")
    assert ex.state.cell == 42
    ex, _ = run("i", "-1")
    assert ex.state.cell == 256
    ex, _ = run("i", "257")
    assert ex.state.cell == 0
    ex, _ = run("i", "256")
    assert ex.state.cell == 256


def test_input_several_values():
    ex, out = run("i btw arch i btw arch i btw", " 72\n 105\t\t33 ")
    assert out == b"Hi!"
    assert [int(v) for v in ex.state.tape[:3]] == [72, 105, 33]


def test_input_end_of_stream_reads_zero():
    ex, _ = run("use use i", "")
    assert ex.state.cell == 0


def test_integer_reader_failure_is_sticky():
    r = IntegerReader(io.StringIO("12abc 7"))
    assert r.read_int() == 12
    assert r.read_int() == 0
    assert r.failed
    assert r.read_int() == 0


def test_integer_reader_signs():
    r = IntegerReader(io.StringIO("+5 -3 - 4"))
    assert r.read_int() == 5
    assert r.read_int() == -3
    assert r.read_int() == 0
    assert r.failed


def test_loop_counts_down_to_zero():
    ex, _ = run("use use use [ not ]")
    assert ex.state.cell == 0


def test_loop_skipped_on_zero():
    """A zero cell jumps past the matching bracket, nested ones included."""
    ex, out = run("[ use [ btw ] btw ] use btw")
    assert out == b"\x01"
    assert ex.state.cell == 1


def test_skip_lands_after_matching_bracket():
    ex = Executor(tokenize("[ [ ] ] use"), stdout=io.BytesIO())
    assert ex.step()
    assert ex.pc == 4
    assert ex.tokens[ex.pc] == T.ADD_CELL


def test_loop_entered_on_nonzero():
    ex = Executor(tokenize("use [ not ]"), stdout=io.BytesIO())
    ex.step()
    ex.step()
    assert ex.pc == 2


def test_rewind_resumes_after_matching_bracket():
    ex = Executor(tokenize("use use [ arch use use [ not ] notarch not ]"), stdout=io.BytesIO())
    ex.run()
    assert ex.state.cursor == 0
    assert int(ex.state.tape[0]) == 0
    assert int(ex.state.tape[1]) == 0


def test_nested_loops_copy_value():
    # move cell 0 into cell 1 and cell 2
    src = "use use use use [ not arch use arch use notarch notarch ] arch arch btw"
    ex, out = run(src)
    assert out == b"\x04"
    assert int(ex.state.tape[0]) == 0


def test_end_loop_on_zero_falls_through():
    ex, out = run("] use btw")
    assert out == b"\x01"


def test_unbalanced_forward():
    with pytest.raises(UnbalancedLoopError) as info:
        run("[ use")
    assert str(info.value) == "Loop went out of scope."


def test_unbalanced_backward():
    with pytest.raises(UnbalancedLoopError):
        run("use ]")


def test_unbalanced_only_when_reached():
    """A dangling "]" reached on a zero cell just falls through."""
    ex, out = run("use btw not [ ] ] ")
    assert out == b"\x01"


def test_invalid_token_is_fatal_at_execution():
    out = io.BytesIO()
    ex = Executor(tokenize("use btw nope btw"), stdout=out)
    with pytest.raises(InvalidTokenError) as info:
        ex.run()
    assert out.getvalue() == b"\x01"
    assert info.value.index == 2
    assert "Invalid Token" in str(info.value)


def test_invalid_token_inside_skipped_loop_is_harmless():
    _, out = run("[ nope ] use btw")
    assert out == b"\x01"


def test_steps_and_finished():
    ex, _ = run("use use btw")
    assert ex.steps == 3
    assert ex.finished
    assert not ex.step()


def test_integer_reader_overflow_saturates():
    """Numbers too long for an int fold like any out-of-range input."""
    ex, _ = run("i", "9" * 5000)
    assert ex.state.cell == 0
    ex, _ = run("i", "-" + "9" * 5000)
    assert ex.state.cell == 256
    r = IntegerReader(io.StringIO("12345678901 5"))
    assert r.read_int() > 256
    assert r.failed
    assert r.read_int() == 0


def test_integer_reader_leading_zeros():
    r = IntegerReader(io.StringIO("000000000000000042 -0"))
    assert r.read_int() == 42
    assert r.read_int() == 0
    assert not r.failed


def test_integer_reader_ascii_whitespace_only():
    r = IntegerReader(io.StringIO("\v\f 7\u00a08"))
    assert r.read_int() == 7
    assert r.read_int() == 0
    assert r.failed
