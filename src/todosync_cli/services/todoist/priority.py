"""Conversion between the local priority scale and Todoist's.

Locally 1 is the lowest priority and 4 the most urgent. The two scales run
in opposite directions, so the conversion is its own inverse. Priorities are
converted here and nowhere else.
"""

from __future__ import annotations


def to_remote(priority: int) -> int:
    """Local 1-4 priority to the Todoist value."""
    return 5 - priority


def to_local(priority: int) -> int:
    """Todoist priority value to the local 1-4 scale."""
    return 5 - priority
