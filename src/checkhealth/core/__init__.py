"""
Healthcheck engine: discovery, execution and report formatting.

Usage:
    from checkhealth.core import Runner, CheckCatalog

    catalog = CheckCatalog(roots)
    print(catalog.complete())
    report = Runner(catalog=catalog).run()
"""

from .models import (
    CheckKind,
    Status,
    CheckEntry,
    RunSummary,
    InvokeResult,
    HealthReport,
)
from .errors import HealthError, CheckLoadError, ReportNotActiveError
from .resolver import PathResolver, NameNormalizer
from .loader import ModuleLoader
from .catalog import CheckCatalog, SELF_NAME
from .report import Report, ReportFormatter
from .runner import Runner, run_healthchecks

__all__ = [
    'CheckKind',
    'Status',
    'CheckEntry',
    'RunSummary',
    'InvokeResult',
    'HealthReport',
    'HealthError',
    'CheckLoadError',
    'ReportNotActiveError',
    'PathResolver',
    'NameNormalizer',
    'ModuleLoader',
    'CheckCatalog',
    'SELF_NAME',
    'Report',
    'ReportFormatter',
    'Runner',
    'run_healthchecks',
]
