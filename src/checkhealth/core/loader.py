"""
Loading health modules and resolving their entry points.

Modules are loaded straight from their discovered file; nothing is added to
sys.path. Scripted modules are registered as "<name>.health" before they
execute, so a package-style check (health/__init__.py) can import its own
submodules relatively.
"""

import importlib.util
import logging
import os
import re
import sys
from types import ModuleType
from typing import Callable

from .errors import CheckLoadError
from .models import CheckEntry, CheckKind

logger = logging.getLogger(__name__)

ENTRY_POINT = 'check'


def module_name_for(entry: CheckEntry) -> str:
    """sys.modules key used for a check's module."""
    if entry.kind == CheckKind.NATIVE:
        return 'autoload_health_' + re.sub(r'\W', '_', entry.name)
    return f'{entry.name}.health'


class ModuleLoader:
    """Loads health modules by file location and returns their entry point."""

    def __init__(self, entry_point: str = ENTRY_POINT):
        self.entry_point_name = entry_point

    @staticmethod
    def _evict(module_name: str) -> None:
        # Drop a previous load of this check and the submodules it imported
        stale = [key for key in sys.modules
                 if key == module_name or key.startswith(module_name + '.')]
        for key in stale:
            del sys.modules[key]
        if stale:
            logger.debug(f"Evicted {len(stale)} cached module(s) for {module_name}")

    def load(self, entry: CheckEntry) -> ModuleType:
        """Execute the module behind an entry and return it."""
        if entry.kind == CheckKind.MISSING or not entry.location:
            raise CheckLoadError(entry.name, 'no module to load')

        module_name = module_name_for(entry)
        search_locations = None
        if os.path.basename(entry.location) == '__init__.py':
            search_locations = [os.path.dirname(entry.location)]

        spec = importlib.util.spec_from_file_location(
            module_name, entry.location,
            submodule_search_locations=search_locations,
        )
        if spec is None or spec.loader is None:
            raise CheckLoadError(entry.name, f'cannot load {entry.location}')

        module = importlib.util.module_from_spec(spec)
        self._evict(module_name)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise

        logger.debug(f"Loaded {entry.kind.value} health module {module_name} from {entry.location}")
        return module

    def entry_point(self, entry: CheckEntry) -> Callable:
        """Load the module and return its check callable."""
        module = self.load(entry)
        func = getattr(module, self.entry_point_name, None)
        if func is None:
            raise CheckLoadError(entry.name, f'module has no {self.entry_point_name}() function')
        if not callable(func):
            raise CheckLoadError(entry.name, f'{self.entry_point_name} is not callable')
        return func
