"""Shared utilities for the backend."""
from utils.log_setup import create_json_formatter, setup_logging

__all__ = [
    "create_json_formatter",
    "setup_logging",
]
