"""
checkhealth Console Manager

Provides a singleton Rich Console for report output.

Usage:
    from checkhealth.utils.console import print_report
    print_report(report.lines)

Or for explicit access:
    from checkhealth.utils.console import get_console
    c = get_console()
"""

from rich.console import Console
from rich.text import Text
from rich.theme import Theme
from typing import Iterable, Optional
import re
import threading

# Thread-safe singleton
_console: Optional[Console] = None
_lock = threading.Lock()

CHECKHEALTH_THEME = Theme({
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red bold",
    "heading": "bold magenta",
    "section": "bold",
    "rule": "dim",
    "advice": "dim white",
})

_STATUS_RE = re.compile(r'^- (?:\S+ )?(OK|WARNING|ERROR)\b')
_STATUS_STYLES = {"OK": "success", "WARNING": "warning", "ERROR": "error"}


def get_console(force_terminal: bool = None,
                no_color: bool = None,
                width: int = None) -> Console:
    """
    Get the singleton Console instance.

    Args:
        force_terminal: Force terminal mode (for testing)
        no_color: Disable color output
        width: Override console width

    Returns:
        The shared Console instance
    """
    global _console

    if _console is None:
        with _lock:
            # Double-check locking
            if _console is None:
                _console = Console(
                    theme=CHECKHEALTH_THEME,
                    force_terminal=force_terminal,
                    no_color=no_color,
                    width=width,
                    highlight=False,
                    emoji=False,
                )

    return _console


def reset_console():
    """
    Reset the console singleton (useful for testing).
    """
    global _console
    with _lock:
        _console = None


def style_for(line: str) -> str:
    """Pick a theme style for one report line."""
    if line.startswith('=' * 10):
        return "rule"
    if line.endswith(' ~'):
        return "section"
    if line.startswith('ERROR:'):
        return "error"
    if line.lstrip().startswith('- ADVICE:'):
        return "advice"
    match = _STATUS_RE.match(line)
    if match:
        return _STATUS_STYLES[match.group(1)]
    return ""


def print_report(lines: Iterable[str], console: Optional[Console] = None):
    """Print report lines, styled by kind, without markup interpretation."""
    console = console or get_console()
    previous_rule = False
    for line in lines:
        style = "heading" if previous_rule else style_for(line)
        console.print(Text(line, style=style), soft_wrap=True)
        previous_rule = line.startswith('=' * 10)


def print_names(names: Iterable[str], console: Optional[Console] = None):
    """Print one name per line (completion output)."""
    console = console or get_console()
    for name in names:
        console.print(Text(name), soft_wrap=True)
