# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Domain models shared by services and repositories."""
