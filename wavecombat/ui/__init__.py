"""
User interface module for the wave combat engine.

This module provides the command-line interface used to drive a battle from
the terminal, including menus, prompts, and display formatting.
"""

from .cli_interface import PlayerInterface

__all__ = ["PlayerInterface"]
