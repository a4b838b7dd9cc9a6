"""
Utility modules for core functionality.

Modules:
- decorators: Timing helpers (timer)
"""

from .decorators import Timer, timer

__all__ = ["Timer", "timer"]
