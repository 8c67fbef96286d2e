"""Healthcheck for the "demo" plugin, using the module-level report API."""

import shutil

from checkhealth import health


def check():
    health.start("demo report")

    if shutil.which("git"):
        health.ok("git is installed")
    else:
        health.warn("git was not found on PATH", "Install git, see :help demo-git")
