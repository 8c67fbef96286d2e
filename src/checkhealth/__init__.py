"""
checkhealth - pluggable health check runner

Discovers health modules contributed by independently developed plugins,
runs each in isolation and renders one report with a pass/warn/error
summary per check.

Usage:
    from checkhealth import Runner

    report = Runner(["~/.config/checkhealth"]).run("foo*")
    print(report.text)
"""

from .__version__ import __version__
from .core import (
    CheckCatalog,
    CheckEntry,
    CheckKind,
    HealthReport,
    Report,
    ReportFormatter,
    Runner,
    RunSummary,
    Status,
    run_healthchecks,
)

__all__ = [
    '__version__',
    'CheckCatalog',
    'CheckEntry',
    'CheckKind',
    'HealthReport',
    'Report',
    'ReportFormatter',
    'Runner',
    'RunSummary',
    'Status',
    'run_healthchecks',
]
