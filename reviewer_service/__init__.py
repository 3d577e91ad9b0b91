# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Reviewer assignment service: teams, pull requests, and reviewer selection."""

__version__ = "1.0.0"
