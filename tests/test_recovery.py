import os
from datetime import datetime

from gintonic import recovery
from gintonic.recovery import function_name, source, stack, time_format


def _inner():
    return stack(1)


def _same_file(a, b):
    return os.path.normcase(os.path.abspath(a)) == os.path.normcase(os.path.abspath(b))


def test_source_trims_line():
    lines = ["  first  ", "\tsecond\n"]
    assert source(lines, 1) == "first"
    assert source(lines, 2) == "second"


def test_source_out_of_range():
    lines = ["only"]
    assert source(lines, 0) == "???"
    assert source(lines, 2) == "???"
    assert source([], 1) == "???"


def test_function_name_strips_package():
    assert function_name("runtime/debug.*T·ptrmethod") == "*T.ptrmethod"
    assert function_name("pkg/sub/mod.Class.method") == "Class.method"
    assert function_name("") == "???"


def test_time_format():
    assert time_format(datetime(2018, 12, 7, 9, 11, 42)) == "2018/12/07 - 09:11:42"


def test_stack_starts_at_caller():
    lines = _inner().splitlines()
    assert _same_file(lines[0].rsplit(":", 1)[0], __file__)
    assert lines[1] == "\t_inner: return stack(1)"


def test_stack_frame_zero_is_stack_itself():
    lines = stack(0).splitlines()
    assert _same_file(lines[0].rsplit(":", 1)[0], recovery.__file__)
    assert lines[1].startswith("\tstack: ")


def test_stack_skipping_everything_is_empty():
    assert stack(100_000) == ""