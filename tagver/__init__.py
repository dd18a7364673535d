"""Semantic version identity of a build, resolved from git tags."""

__version__ = "0.3.0"
