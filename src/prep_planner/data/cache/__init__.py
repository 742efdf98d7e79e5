from .timeline_cache import DayCell, SlotTimeline, start_of_week

__all__ = ["DayCell", "SlotTimeline", "start_of_week"]
