# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Configuration, logging, errors, and dependency wiring."""
