"""
cargojni CLI module.

This module provides the command-line interface for cargojni.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
