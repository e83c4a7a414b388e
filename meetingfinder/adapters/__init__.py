"""
Adapters layer - External calendar data sources.
"""

from .calendar_file import CalendarFileSource

__all__ = ["CalendarFileSource"]
