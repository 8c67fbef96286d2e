"""
Report formatting and the per-check report sink.

A check writes through a Report:

    def check(report):
        report.start("foo report")
        if setup_ok():
            report.ok("Setup is correct")
        else:
            report.error("Setup is incorrect", "Run :help foo-setup")

Every call appends formatted lines; warn() and error() also bump the
check's RunSummary, which the runner turns into the section banner.
"""

import contextlib
import contextvars
import re
import textwrap
from typing import Iterator, List, Optional, Sequence, Union

from rich.cells import cell_len

from ..utils.emoji import EmojiHelper
from .errors import ReportNotActiveError
from .models import RunSummary, Status

RULE_WIDTH = 78

Advice = Union[str, Sequence[str]]

# ":h foo", ":he foo", ":hel foo", ":help foo"
_HELP_RE = re.compile(r':h(?:e(?:l(?:p)?)?)? ([^|][^"\r\n ]+)')

_GLYPHS = {
    Status.OK: '✅',
    Status.WARN: '⚠️',
    Status.ERROR: '❌',
}


def indent_after_line1(s: str, columns: int) -> str:
    """Indents lines *except* line 1 of a multiline string."""
    return textwrap.indent(textwrap.dedent(s), ' ' * columns).lstrip()


def help_to_link(s: str) -> str:
    """Changes ':h clipboard' to ':help |clipboard|'."""
    return _HELP_RE.sub(r':help |\1|', s)


def flatten_advice(advice: Sequence[Advice]) -> List[str]:
    items: List[str] = []
    for item in advice:
        if isinstance(item, str):
            items.append(item)
        elif item:
            items.extend(item)
    return items


class ReportFormatter:
    """Renders report lines and section banners."""

    def __init__(self, emoji: Optional[EmojiHelper] = None):
        self.emoji = emoji if emoji is not None else EmojiHelper(enabled=True)

    def label(self, status: Status) -> str:
        if status == Status.NONE:
            return ''
        glyph = self.emoji.get(_GLYPHS[status], '')
        return f'{glyph} {status.value}' if glyph else status.value

    def format_line(self, status: Status, msg: str, advice: Optional[Sequence[str]] = None) -> str:
        """
        Format a message for a specific report item.

        Args:
            status: Line status; NONE renders a bare bullet
            msg: Message text, may span several lines
            advice: Optional advice items; passing a sequence (even an
                empty one) adds the ADVICE sub-heading

        Returns:
            The formatted (possibly multi-line) string
        """
        label = self.label(status)
        output = '- ' + label
        if label:
            output += ' '

        output += indent_after_line1(msg, 2)

        if advice is not None:
            output += '\n  - ADVICE:'
            for item in advice:
                if item:
                    output += '\n    - ' + indent_after_line1(item, 6)

        return help_to_link(output)

    def summary(self, tally: RunSummary) -> str:
        """Results heading for one report section, e.g. '  1 ⚠️  5 ❌'."""
        s = ''
        if tally.warn > 0:
            s += ' %2d %s' % (tally.warn, self.emoji.get('⚠️', 'W'))
        if tally.error > 0:
            s += ' %2d %s' % (tally.error, self.emoji.get('❌', 'E'))
        if tally.is_clean():
            s += self.emoji.get('✅', 'OK')
        return s

    def header(self, name: str, tally: RunSummary) -> List[str]:
        """Banner placed above a check's report section."""
        report = self.summary(tally)
        padding = ' ' * (RULE_WIDTH - 2 - cell_len(name) - cell_len(report))
        return [
            '=' * RULE_WIDTH,
            f'{name}: {padding}{report}',
            '',
        ]


class Report:
    """
    Line buffer and warn/error tally for a single check invocation.

    The runner hands a fresh Report to every check, so nothing written by
    one check can leak into the next one's section.
    """

    def __init__(self, formatter: Optional[ReportFormatter] = None):
        self.formatter = formatter or ReportFormatter()
        self.lines: List[str] = []
        self.summary = RunSummary()

    def __len__(self) -> int:
        return len(self.lines)

    def _collect(self, output: str) -> None:
        self.lines.extend(output.split('\n'))

    def _advice(self, advice: Sequence[Optional[Advice]]) -> Optional[List[str]]:
        # None arguments mean "no advice", so they never add the heading
        given = [item for item in advice if item is not None]
        return flatten_advice(given) if given else None

    def start(self, name: str) -> None:
        """
        Starts a new report section. Most checks call this once; call it
        again for every extra section.
        """
        self._collect(f'\n{name} ~')

    def info(self, msg: str) -> None:
        """Reports an informational message."""
        self._collect(self.formatter.format_line(Status.NONE, msg))

    def ok(self, msg: str) -> None:
        """Reports a "success" message."""
        self._collect(self.formatter.format_line(Status.OK, msg))

    def warn(self, msg: str, *advice: Optional[Advice]) -> None:
        """Reports a warning, with optional advice."""
        self._collect(self.formatter.format_line(Status.WARN, msg, self._advice(advice)))
        self.summary.warn += 1

    def error(self, msg: str, *advice: Optional[Advice]) -> None:
        """Reports an error, with optional advice."""
        self._collect(self.formatter.format_line(Status.ERROR, msg, self._advice(advice)))
        self.summary.error += 1

    def reset(self) -> None:
        self.lines = []
        self.summary.reset()

    def drain(self) -> List[str]:
        """
        Take the accumulated lines, leaving the buffer empty.

        The blank line start() puts before the first section title is
        dropped, since the banner already ends with one.
        """
        lines = self.lines
        if lines and lines[0] == '':
            lines = lines[1:]
        self.lines = []
        return lines


_active_report: contextvars.ContextVar = contextvars.ContextVar('checkhealth_active_report', default=None)


def current_report() -> Report:
    """The report of the check currently running."""
    report = _active_report.get()
    if report is None:
        raise ReportNotActiveError('no healthcheck is running; report functions need an active report')
    return report


@contextlib.contextmanager
def activate(report: Report) -> Iterator[Report]:
    """Bind the module-level report functions to a report for one invocation."""
    token = _active_report.set(report)
    try:
        yield report
    finally:
        _active_report.reset(token)


def is_active() -> bool:
    return _active_report.get() is not None
