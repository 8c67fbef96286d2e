"""Exceptions raised by the health check engine."""


class HealthError(Exception):
    """Base class for checkhealth errors."""


class CheckLoadError(HealthError):
    """A health module could not be loaded or has no usable entry point."""

    def __init__(self, name: str, message: str):
        super().__init__(f'{name}: {message}')
        self.name = name


class ReportNotActiveError(HealthError, RuntimeError):
    """A report function was called while no check is running."""
