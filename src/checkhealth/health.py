"""
checkhealth report API for health module authors.

Checks are functions that inspect the user's environment, configuration or
any other prerequisite a plugin cares about. To add one for a plugin named
"foo", create a "health" module on a search root:

    <root>/python/foo/health.py
    <root>/python/foo/health/__init__.py

and for a submodule "foo.bar":

    <root>/python/foo/bar/health.py

The module must define a check() function. It may take the report as its
only argument, or take none and use the functions in this module, which
write to whichever report the runner has made active:

    from checkhealth import health

    def check():
        health.start("foo report")
        if setup_ok():
            health.ok("Setup is correct")
        else:
            health.error("Setup is incorrect", "See :help foo-setup")

Run it with `checkhealth foo`, or every discovered check with `checkhealth`.
"""

from .core.report import Advice, activate, current_report, is_active  # noqa: F401


def start(name: str) -> None:
    """
    Starts a new report section. Most plugins call this only once, but
    different sections may each get their own start().
    """
    current_report().start(name)


def info(msg: str) -> None:
    """Reports an informational message."""
    current_report().info(msg)


def ok(msg: str) -> None:
    """Reports a "success" message."""
    current_report().ok(msg)


def warn(msg: str, *advice: Advice) -> None:
    """Reports a warning, with optional advice."""
    current_report().warn(msg, *advice)


def error(msg: str, *advice: Advice) -> None:
    """Reports an error, with optional advice."""
    current_report().error(msg, *advice)
