"""Prepare release branches across the repositories of a project catalog."""

__version__ = "0.1.0"
