# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Service layer — business rules and reviewer selection policies."""
