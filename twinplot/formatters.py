from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from twinplot.scales import format_tick


ValueFormatter = Callable[[float], str]

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def default_value_formatter(value: float) -> str:
    return format_tick(float(value))


def float_value_formatter(value: float) -> str:
    return f"{float(value):.2f}"


def int_value_formatter(value: float) -> str:
    return f"{int(round(float(value)))}"


def percent_value_formatter(value: float) -> str:
    return f"{float(value) * 100.0:.2f}%"


def time_value_formatter(fmt: str = DEFAULT_DATE_FORMAT) -> ValueFormatter:
    """Formatter for x values holding POSIX timestamps in seconds, rendered in UTC."""

    def _format(value: float) -> str:
        return datetime.fromtimestamp(float(value), tz=timezone.utc).strftime(fmt)

    return _format
