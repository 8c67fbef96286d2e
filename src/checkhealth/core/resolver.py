"""
Health module discovery on the search path.

Every search root may hold health modules in three layouts:

    <root>/autoload/health/<name>.py              native, name = file stem
    <root>/python/**/<a>/<b>/health.py            scripted, name = "a.b"
    <root>/python/**/<a>/<b>/health/__init__.py   scripted, name = "a.b"

PathResolver turns a dotted pattern ("vim.lsp", "vim*", "*") into the
concrete files; NameNormalizer maps a file back to its canonical name.
"""

import logging
import os
import re
from typing import Iterable, List, NamedTuple, Optional, Sequence

from .models import CheckKind

logger = logging.getLogger(__name__)

NATIVE_DIR = os.path.join('autoload', 'health')
SCRIPTED_DIR = 'python'

_SKIP_DIRS = {'__pycache__'}


def normalize_path(path) -> str:
    """Absolute, normalized, user-expanded form of a path (module identity)."""
    return os.path.abspath(os.path.normpath(os.path.expanduser(str(path))))


def expand_pattern(pattern: str) -> str:
    """
    Convert a dotted name pattern into its path form.

    "vim.lsp" -> "vim/lsp", "vim*" -> "vim**" ("**" spans directories).
    """
    return pattern.replace('.', '/').replace('*', '**')


def _pattern_regex(path_pattern: str) -> str:
    # Any run of '*' matches any characters, including '/'
    parts = re.split(r'(\*+)', path_pattern)
    return ''.join('.*' if part.startswith('*') else re.escape(part) for part in parts)


def _walk_py(base: str) -> List[str]:
    """All .py files below base, as paths relative to base using '/'."""
    found = []
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS and not d.startswith('.'))
        for filename in sorted(filenames):
            if filename.endswith('.py'):
                rel = os.path.relpath(os.path.join(dirpath, filename), base)
                found.append(rel.replace(os.sep, '/'))
    return found


class Candidate(NamedTuple):
    """A resolved health module file."""
    location: str
    kind: CheckKind
    root: str


class PathResolver:
    """
    Resolves name patterns to health module files under the search roots.

    Roots are scanned in order; a file reachable from two roots (or from a
    root listed twice) is reported once, at its first position.
    """

    def __init__(self, roots: Iterable):
        self.roots: List[str] = [normalize_path(r) for r in roots]

    def _globs(self, path_pattern: str):
        body = _pattern_regex(path_pattern)
        # Order matters only for tie-breaking; names are sorted later
        return [
            (CheckKind.NATIVE, NATIVE_DIR, re.compile(body + r'\.py')),
            (CheckKind.SCRIPTED, SCRIPTED_DIR, re.compile(r'(?:.*/)?' + body + r'/health/__init__\.py')),
            (CheckKind.SCRIPTED, SCRIPTED_DIR, re.compile(r'(?:.*/)?' + body + r'/health\.py')),
        ]

    def locate(self, pattern: str) -> List[Candidate]:
        """Resolve a pattern to candidates carrying their kind and root."""
        path_pattern = expand_pattern(pattern)
        seen = set()
        results: List[Candidate] = []
        listings = {}

        for kind, subdir, regex in self._globs(path_pattern):
            for root in self.roots:
                base = os.path.join(root, subdir)
                if base not in listings:
                    listings[base] = _walk_py(base) if os.path.isdir(base) else []
                for rel in listings[base]:
                    if not regex.fullmatch(rel):
                        continue
                    location = normalize_path(os.path.join(base, rel))
                    if location in seen:
                        continue
                    seen.add(location)
                    results.append(Candidate(location, kind, root))

        logger.debug(f"Pattern {pattern!r} resolved to {len(results)} module(s)")
        return results

    def resolve(self, pattern: str) -> List[str]:
        """Resolve a pattern to module locations. No match returns []."""
        return [c.location for c in self.locate(pattern)]


class NameNormalizer:
    """Maps a health module location back to its canonical dotted name."""

    def __init__(self, roots: Iterable):
        self.roots: List[str] = [normalize_path(r) for r in roots]

    def _owning_root(self, path: str, subdir: str) -> Optional[str]:
        for root in self.roots:
            base = os.path.join(root, subdir)
            if path.startswith(base + os.sep):
                return base
        return None

    def is_native(self, location: str) -> bool:
        path = normalize_path(location)
        if self._owning_root(path, NATIVE_DIR) is not None:
            return True
        if self._owning_root(path, SCRIPTED_DIR) is not None:
            return False
        return '/autoload/health/' in path.replace(os.sep, '/')

    def to_name(self, location: str, kind: Optional[CheckKind] = None) -> str:
        """Canonical name of a location; kind skips guessing the layout from the path."""
        path = normalize_path(location)
        native = kind == CheckKind.NATIVE if kind is not None else self.is_native(path)

        if native:
            # "<root>/autoload/health/provider.py" -> "provider"
            return os.path.splitext(os.path.basename(path))[0]

        base = self._owning_root(path, SCRIPTED_DIR)
        if base is not None:
            rel = os.path.relpath(path, base).replace(os.sep, '/')
        else:
            # Drop everything up to the last /python/ directory
            rel = re.sub(r'^.*/python/', '', path.replace(os.sep, '/'))

        # "foo/bar/health/__init__.py" or "foo/bar/health.py" -> "foo/bar"
        for suffix in ('/health/__init__.py', '/health.py'):
            if rel.endswith(suffix):
                rel = rel[:-len(suffix)]
                break

        return rel.replace('/', '.')

    def to_names(self, locations: Sequence[str]) -> List[str]:
        return [self.to_name(loc) for loc in locations]
