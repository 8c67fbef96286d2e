"""Shared utilities: logging, configuration, paths and terminal output."""
