"""ANSI styling and line formatting for runner output."""

from __future__ import annotations

SUCCESS_SYMBOL = "✔"
ERROR_SYMBOL = "✘"

RESET = "\x1b[0m"
GRAY = "\x1b[90m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
CYAN = "\x1b[36m"


def paint(text: str, color: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


def format_time(elapsed_ms: float, precision: int = 4) -> str:
    return f"{elapsed_ms:.{precision}f}"


def status_line(
    description: str,
    elapsed_ms: float,
    passed: bool,
    *,
    precision: int = 4,
    color: bool = True,
) -> str:
    """Build the report line for one test, e.g. ``✔ [0.0123ms] adds - Passed``."""
    symbol = SUCCESS_SYMBOL if passed else ERROR_SYMBOL
    tint = GREEN if passed else RED
    label = "Passed" if passed else "Failed"
    timing = f"[{format_time(elapsed_ms, precision)}ms]"

    if not color:
        return f"{symbol} {timing} {description} - {label}"
    return f"{tint}{symbol} {CYAN}{timing}{RESET}{tint} {description} - {label}{RESET}"
