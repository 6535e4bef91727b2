"""
Command-line interface for kubecharter.
"""

from .main import main_cli

__all__ = ["main_cli"]
