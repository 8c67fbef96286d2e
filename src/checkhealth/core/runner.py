"""
Healthcheck runner.

Resolves the catalog, then runs each check in name order, one at a time:

    Reset  -> fresh Report for the check
    Invoke -> call check() inside the fault boundary
    Drain  -> take the report lines
    Format -> banner + lines appended to the document

A missing, crashing or silent check becomes an ERROR line in its own
section; the rest of the run carries on.

Usage:
    runner = Runner(["~/.config/checkhealth"])
    report = runner.run("vim.lsp foo*")
    print(report.text)
"""

import functools
import logging
import traceback
from typing import Iterable, List, Optional, Tuple

from ..utils.emoji import EmojiHelper
from .catalog import CheckCatalog, Patterns, invoke_entry
from .models import CheckEntry, HealthReport, InvokeResult, ProgressCallback, RunSummary
from .report import Report, ReportFormatter, activate

logger = logging.getLogger(__name__)

NO_CHECKS_MESSAGE = 'ERROR: No healthchecks found.'


class Runner:
    """Runs healthchecks sequentially and assembles the report document."""

    def __init__(self, roots: Optional[Iterable] = None,
                 catalog: Optional[CheckCatalog] = None,
                 formatter: Optional[ReportFormatter] = None,
                 emoji: Optional[bool] = True,
                 progress: Optional[ProgressCallback] = None):
        if catalog is None:
            catalog = CheckCatalog(roots or [])
        self.catalog = catalog
        self.formatter = formatter or ReportFormatter(EmojiHelper(enabled=emoji))
        self._progress_callbacks: List[ProgressCallback] = []
        if progress is not None:
            self._progress_callbacks.append(progress)

    # === Callback Registration ===

    def register_progress_callback(self, callback: ProgressCallback):
        """Register callback for per-check progress updates."""
        self._progress_callbacks.append(callback)

    def _notify_progress(self, name: str, current: int, total: int):
        for cb in list(self._progress_callbacks):
            try:
                cb(name, current, total)
            except Exception as e:
                logger.error(f"Progress callback error: {e}")

    # === Execution ===

    def run(self, patterns: Patterns = None) -> HealthReport:
        """
        Run the healthchecks matching patterns (all of them if empty).

        Args:
            patterns: Whitespace-separated string or list of name patterns

        Returns:
            HealthReport with the document lines and per-check tallies
        """
        checks = self.catalog.build(patterns)
        result = HealthReport()

        if not checks:
            logger.warning("No healthchecks found")
            result.lines.append(NO_CHECKS_MESSAGE)
            return result

        names = sorted(checks)
        logger.info(f"Running {len(names)} healthcheck(s)...")

        for current, name in enumerate(names, 1):
            self._notify_progress(name, current, len(names))
            lines, tally = self.run_check(checks[name])
            result.summaries[name] = tally
            result.lines.extend(lines)

        logger.info(
            f"Healthchecks complete: {result.total_warnings} warning(s), "
            f"{result.total_errors} error(s)"
        )
        return result

    def run_check(self, entry: CheckEntry) -> Tuple[List[str], RunSummary]:
        """Run one entry and return its formatted section and tally."""
        name = entry.name
        report = Report(self.formatter)

        if entry.is_missing():
            report.error(f'No healthcheck found for "{name}" plugin.')
        else:
            outcome = self._invoke(entry, report)
            if not outcome:
                report.error(
                    f'Failed to run healthcheck for "{name}" plugin. Exception:\n{outcome.error}\n'
                )

        # The check ran but wrote nothing
        if not len(report):
            report.error(f'The healthcheck report for "{name}" plugin is empty.')

        body = report.drain()
        body.append('')
        return self.formatter.header(name, report.summary) + body, report.summary

    def _invoke(self, entry: CheckEntry, report: Report) -> InvokeResult:
        """Call a check's entry point; faults come back as a failed result."""
        invoke = entry.invoke or functools.partial(invoke_entry, self.catalog.loader, entry)
        logger.debug(f"Invoking {entry.kind.value} healthcheck {entry.name} ({entry.location})")
        try:
            with activate(report):
                invoke(report)
        except (Exception, SystemExit) as e:
            logger.warning(f"Healthcheck {entry.name} raised {type(e).__name__}: {e}")
            return InvokeResult.fail(traceback.format_exc().rstrip())
        return InvokeResult.ok()


def run_healthchecks(roots: Iterable, patterns: Patterns = None, **kwargs) -> HealthReport:
    """Convenience wrapper: build a Runner for roots and run patterns."""
    return Runner(roots, **kwargs).run(patterns)
