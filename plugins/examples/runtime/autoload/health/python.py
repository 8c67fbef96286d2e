"""Native healthcheck: Python interpreter sanity.

Run with: checkhealth -r plugins/examples/runtime python
"""

import sys


def check(report):
    report.start("Python interpreter")
    report.info(f"Executable: {sys.executable}")

    if sys.version_info < (3, 8):
        report.error(
            f"Python {sys.version.split()[0]} is too old",
            "Install Python 3.8 or newer",
        )
    else:
        report.ok(f"Python {sys.version.split()[0]}")
