from datetime import datetime, timedelta, timezone

import pytest

from gintonic.logger import (
    BLUE,
    CYAN,
    GREEN,
    MAGENTA,
    RED,
    RESET,
    WHITE,
    YELLOW,
    ColorMode,
    LogFormatterParams,
    console_color_mode,
    default_log_formatter,
    disable_console_color,
    force_console_color,
    format_duration,
    set_console_color_mode,
)


@pytest.fixture(autouse=True)
def restore_color_mode():
    saved = console_color_mode()
    set_console_color_mode(ColorMode.AUTO)
    yield
    set_console_color_mode(saved)


TIMESTAMP = datetime.fromtimestamp(1544173902, tz=timezone.utc)


def _params(latency, is_term, **kwargs):
    return LogFormatterParams(
        timestamp=TIMESTAMP,
        status_code=200,
        latency=latency,
        client_ip="20.20.20.20",
        method="GET",
        path="/",
        error_message="",
        is_term=is_term,
        **kwargs,
    )


def test_default_log_formatter():
    short = timedelta(seconds=5)
    long = timedelta(milliseconds=9876543210)
    assert default_log_formatter(_params(short, False)) == (
        '[GIN] 2018/12/07 - 09:11:42 | 200 |            5s |     20.20.20.20 | GET      "/"\n'
    )
    assert default_log_formatter(_params(long, False)) == (
        '[GIN] 2018/12/07 - 09:11:42 | 200 |    2743h29m3s |     20.20.20.20 | GET      "/"\n'
    )
    assert default_log_formatter(_params(short, True)) == (
        "[GIN] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|            5s |"
        '     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'
    )
    assert default_log_formatter(_params(long, True)) == (
        "[GIN] 2018/12/07 - 09:11:42 |\x1b[97;42m 200 \x1b[0m|    2743h29m3s |"
        '     20.20.20.20 |\x1b[97;44m GET     \x1b[0m "/"\n'
    )


def test_default_log_formatter_quotes_path_and_appends_error():
    params = _params(timedelta(seconds=5), False)
    params.path = '/a"b'
    params.error_message = "boom"
    assert default_log_formatter(params).endswith('"/a\\"b"\nboom')


@pytest.mark.parametrize(
    "method, color",
    [
        ("GET", BLUE),
        ("POST", CYAN),
        ("PUT", YELLOW),
        ("DELETE", RED),
        ("PATCH", GREEN),
        ("HEAD", MAGENTA),
        ("OPTIONS", WHITE),
        ("TRACE", RESET),
    ],
)
def test_color_for_method(method, color):
    assert LogFormatterParams(method=method).method_color() == color


@pytest.mark.parametrize(
    "code, color",
    [(200, GREEN), (301, WHITE), (404, YELLOW), (2, RED)],
)
def test_color_for_status(code, color):
    assert LogFormatterParams(status_code=code).status_code_color() == color


def test_reset_color():
    assert LogFormatterParams().reset_color() == bytes([27, 91, 48, 109]).decode()


def test_is_output_color():
    p = LogFormatterParams(is_term=True)
    assert p.is_output_color() is True
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False

    p = LogFormatterParams(is_term=False)
    set_console_color_mode(ColorMode.AUTO)
    assert p.is_output_color() is False
    force_console_color()
    assert p.is_output_color() is True
    disable_console_color()
    assert p.is_output_color() is False


def test_disable_console_color():
    assert console_color_mode() is ColorMode.AUTO
    disable_console_color()
    assert console_color_mode() is ColorMode.DISABLE


def test_force_console_color():
    assert console_color_mode() is ColorMode.AUTO
    force_console_color()
    assert console_color_mode() is ColorMode.FORCE


@pytest.mark.parametrize(
    "latency, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(seconds=5), "5s"),
        (timedelta(milliseconds=1500), "1.5s"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(microseconds=1), "1µs"),
        (timedelta(hours=1), "1h0m0s"),
        (timedelta(seconds=9876543), "2743h29m3s"),
    ],
)
def test_format_duration(latency, expected):
    assert format_duration(latency) == expected