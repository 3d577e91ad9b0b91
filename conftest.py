# type: ignore
"""Shared pytest setup: run every test against the in-memory backend."""
import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("LOG_LEVEL", "WARNING")
