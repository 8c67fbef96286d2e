"""
Check catalog: user patterns -> canonical name -> CheckEntry.

    catalog = CheckCatalog(["~/.config/checkhealth", "/usr/share/checkhealth"])
    entries = catalog.build("vim.lsp foo*")
    for name in sorted(entries):
        ...
"""

import dataclasses
import functools
import inspect
import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from .loader import ModuleLoader
from .models import CheckEntry
from .resolver import NameNormalizer, PathResolver

logger = logging.getLogger(__name__)

# checkhealth/health.py is the report API, not a healthcheck
SELF_NAME = 'checkhealth'

ALL_PATTERN = '*'

Patterns = Union[str, Sequence[str], None]


def split_patterns(patterns: Patterns) -> List[str]:
    """Split raw input on whitespace; no patterns means "all"."""
    if patterns is None:
        items: Iterable[str] = []
    elif isinstance(patterns, str):
        items = [patterns]
    else:
        items = patterns

    result: List[str] = []
    for item in items:
        result.extend(item.split())
    return result or [ALL_PATTERN]


def _call_entry_point(func: Callable, report):
    # Entry points take no arguments or the report sink as the only one
    if _takes_no_arguments(func):
        return func()
    return func(report)


def _takes_no_arguments(func: Callable) -> bool:
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    return not any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in params
    )


def invoke_entry(loader: ModuleLoader, entry: CheckEntry, report) -> None:
    """Load an entry's module and call its check() with the report."""
    func = loader.entry_point(entry)
    _call_entry_point(func, report)


class CheckCatalog:
    """
    Builds the per-run mapping of canonical names to check entries.

    Entries are created fresh on every build(); nothing is loaded until the
    runner invokes an entry.
    """

    def __init__(self, roots: Iterable, loader: Optional[ModuleLoader] = None,
                 self_name: str = SELF_NAME):
        self.roots = list(roots)
        self.resolver = PathResolver(self.roots)
        self.normalizer = NameNormalizer(self.roots)
        self.loader = loader or ModuleLoader()
        self.self_name = self_name

    def _entries_for(self, pattern: str) -> List[CheckEntry]:
        entries = []
        for candidate in self.resolver.locate(pattern):
            name = self.normalizer.to_name(candidate.location, candidate.kind)
            entry = CheckEntry(
                name=name,
                kind=candidate.kind,
                location=candidate.location,
                root=candidate.root,
            )
            invoke = functools.partial(invoke_entry, self.loader, entry)
            entries.append(dataclasses.replace(entry, invoke=invoke))
        return entries

    def build(self, patterns: Patterns = None) -> Dict[str, CheckEntry]:
        """
        Resolve patterns into entries keyed by canonical name.

        A pattern matching nothing yields one MISSING entry keyed by the
        pattern itself. When two patterns produce the same name the later
        entry wins. Iterate with sorted() for report order.
        """
        checks: Dict[str, CheckEntry] = {}

        for pattern in split_patterns(patterns):
            found = self._entries_for(pattern)
            if not found:
                logger.info(f"No healthcheck found for {pattern!r}")
                checks[pattern] = CheckEntry.missing(pattern)
                continue
            for entry in found:
                checks[entry.name] = entry

        checks.pop(self.self_name, None)
        logger.debug(f"Catalog has {len(checks)} check(s): {', '.join(sorted(checks))}")
        return checks

    def complete(self) -> List[str]:
        """Sorted unique names of every discoverable healthcheck."""
        names = {
            self.normalizer.to_name(c.location, c.kind)
            for c in self.resolver.locate(ALL_PATTERN)
        }
        names.discard(self.self_name)
        return sorted(names)

    names = complete
