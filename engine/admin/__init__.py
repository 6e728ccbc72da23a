"""
ADMIN - Operator Controls

Gates every other component: pause, quorum tuning, round resets.
"""

from .control import AdminControl

__all__ = ["AdminControl"]
