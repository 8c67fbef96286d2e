"""Healthcheck for "demo.env" (package layout with a helper submodule)."""

from .probes import missing_variables

REQUIRED = ("HOME", "PATH")


def check(report):
    report.start("demo.env: environment")
    missing = missing_variables(REQUIRED)
    if missing:
        report.error(
            "Missing environment variables: " + ", ".join(missing),
            [f"export {name}=..." for name in missing],
        )
    else:
        report.ok("Required environment variables are set")
