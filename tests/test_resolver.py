"""
Tests for healthcheck discovery (PathResolver / NameNormalizer).

Run: python3 -m pytest tests/test_resolver.py -v
"""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from checkhealth.core.models import CheckKind
from checkhealth.core.resolver import (
    NameNormalizer,
    PathResolver,
    expand_pattern,
    normalize_path,
)


def write(path: Path, text: str = "def check(report):\n    report.ok('fine')\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def runtime(tmp_path):
    """A search root holding every module convention"""
    root = tmp_path / 'runtime'
    write(root / 'autoload' / 'health' / 'provider.py')
    write(root / 'python' / 'foo' / 'health.py')
    write(root / 'python' / 'foo' / 'bar' / 'health.py')
    write(root / 'python' / 'foobar' / 'health' / '__init__.py')
    write(root / 'python' / 'foobar' / 'health' / 'util.py', "X = 1\n")
    write(root / 'python' / 'vim' / 'lsp' / 'health.py')
    write(root / 'python' / 'vim' / 'health' / 'health.py')
    return root


class TestExpandPattern:
    """Dotted name patterns -> path patterns"""

    def test_dots_become_slashes(self):
        assert expand_pattern('vim.lsp') == 'vim/lsp'

    def test_star_becomes_double_star(self):
        assert expand_pattern('vim*') == 'vim**'
        assert expand_pattern('*') == '**'


class TestPathResolver:
    """Tests for pattern resolution"""

    def test_flat_scripted_module(self, runtime):
        resolver = PathResolver([runtime])
        result = resolver.resolve('foo')
        assert result == [normalize_path(runtime / 'python' / 'foo' / 'health.py')]

    def test_index_scripted_module(self, runtime):
        resolver = PathResolver([runtime])
        result = resolver.resolve('foobar')
        assert result == [normalize_path(runtime / 'python' / 'foobar' / 'health' / '__init__.py')]

    def test_native_module(self, runtime):
        resolver = PathResolver([runtime])
        candidates = resolver.locate('provider')
        assert len(candidates) == 1
        assert candidates[0].kind == CheckKind.NATIVE
        assert candidates[0].root == normalize_path(runtime)

    def test_dotted_submodule(self, runtime):
        resolver = PathResolver([runtime])
        result = resolver.resolve('foo.bar')
        assert result == [normalize_path(runtime / 'python' / 'foo' / 'bar' / 'health.py')]

    def test_leading_directories_match_any_depth(self, runtime):
        """'lsp' also finds vim/lsp/health.py"""
        resolver = PathResolver([runtime])
        result = resolver.resolve('lsp')
        assert result == [normalize_path(runtime / 'python' / 'vim' / 'lsp' / 'health.py')]

    def test_trailing_star_matches_any_suffix(self, runtime):
        resolver = PathResolver([runtime])
        names = NameNormalizer([runtime]).to_names(resolver.resolve('foo*'))
        assert sorted(names) == ['foo', 'foo.bar', 'foobar']

    def test_universal_pattern(self, runtime):
        resolver = PathResolver([runtime])
        names = NameNormalizer([runtime]).to_names(resolver.resolve('*'))
        assert sorted(names) == ['foo', 'foo.bar', 'foobar', 'provider', 'vim.health', 'vim.lsp']

    def test_helper_submodules_are_not_checks(self, runtime):
        resolver = PathResolver([runtime])
        assert not any(p.endswith('util.py') for p in resolver.resolve('*'))

    def test_no_match_returns_empty(self, runtime):
        resolver = PathResolver([runtime])
        assert resolver.resolve('nothing.here') == []

    def test_missing_root_is_skipped(self, tmp_path, runtime):
        resolver = PathResolver([tmp_path / 'does-not-exist', runtime])
        assert len(resolver.resolve('foo')) == 1

    def test_duplicate_roots_collapse(self, runtime):
        """The same file reached from two roots is reported once"""
        alias = str(runtime) + os.sep + '.'
        resolver = PathResolver([runtime, alias, runtime])
        assert len(resolver.resolve('foo')) == 1
        assert len(resolver.resolve('*')) == len(PathResolver([runtime]).resolve('*'))

    def test_same_name_in_two_roots(self, tmp_path):
        first = tmp_path / 'first'
        second = tmp_path / 'second'
        write(first / 'python' / 'foo' / 'health.py')
        write(second / 'python' / 'foo' / 'health.py')
        candidates = PathResolver([first, second]).locate('foo')
        assert [c.root for c in candidates] == [normalize_path(first), normalize_path(second)]

    def test_native_candidates_come_first(self, tmp_path):
        root = tmp_path / 'rt'
        write(root / 'python' / 'foo' / 'health.py')
        write(root / 'python' / 'foo' / 'health' / '__init__.py')
        write(root / 'autoload' / 'health' / 'foo.py')
        kinds = [c.kind for c in PathResolver([root]).locate('foo')]
        assert kinds == [CheckKind.NATIVE, CheckKind.SCRIPTED, CheckKind.SCRIPTED]

    def test_pycache_is_ignored(self, runtime):
        write(runtime / 'python' / 'foo' / '__pycache__' / 'health.py')
        resolver = PathResolver([runtime])
        assert all('__pycache__' not in p for p in resolver.resolve('*'))

    def test_regex_characters_are_literal(self, tmp_path):
        root = tmp_path / 'rt'
        write(root / 'python' / 'a+b' / 'health.py')
        write(root / 'python' / 'aab' / 'health.py')
        names = NameNormalizer([root]).to_names(PathResolver([root]).resolve('a+b'))
        assert names == ['a+b']


class TestNameNormalizer:
    """Tests for location -> canonical name"""

    def test_flat_file(self, runtime):
        normalizer = NameNormalizer([runtime])
        path = runtime / 'python' / 'foo' / 'bar' / 'health.py'
        assert normalizer.to_name(str(path)) == 'foo.bar'

    def test_index_file(self, runtime):
        normalizer = NameNormalizer([runtime])
        path = runtime / 'python' / 'foobar' / 'health' / '__init__.py'
        assert normalizer.to_name(str(path)) == 'foobar'

    def test_native_file(self, runtime):
        normalizer = NameNormalizer([runtime])
        path = runtime / 'autoload' / 'health' / 'provider.py'
        assert normalizer.to_name(str(path)) == 'provider'
        assert normalizer.is_native(str(path)) is True

    def test_health_module_inside_health_package(self, runtime):
        normalizer = NameNormalizer([runtime])
        path = runtime / 'python' / 'vim' / 'health' / 'health.py'
        assert normalizer.to_name(str(path)) == 'vim.health'

    def test_unknown_root_uses_last_python_dir(self):
        normalizer = NameNormalizer([])
        assert normalizer.to_name('/opt/x/python/vim/lsp/health.py') == 'vim.lsp'
        assert normalizer.to_name('/opt/x/autoload/health/clipboard.py') == 'clipboard'

    def test_kind_overrides_path_guess(self, tmp_path):
        root = tmp_path / 'autoload' / 'health' / 'rt'
        path = root / 'python' / 'foo' / 'health.py'
        normalizer = NameNormalizer([root])
        assert normalizer.is_native(str(path)) is False
        assert normalizer.to_name(str(path), CheckKind.SCRIPTED) == 'foo'
        assert NameNormalizer([]).to_name(str(path), CheckKind.SCRIPTED) == 'foo'

    def test_round_trip(self, runtime):
        """Every resolved location is found again through its own name"""
        resolver = PathResolver([runtime])
        normalizer = NameNormalizer([runtime])
        for location in resolver.resolve('*'):
            name = normalizer.to_name(location)
            assert location in resolver.resolve(name), name
