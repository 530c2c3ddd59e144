"""Progress engine for trackl."""

from trackl.engine.progress import days_left, percent_done, sort_by_days_left, utcnow, whole_days

__all__ = [
    "days_left",
    "percent_done",
    "sort_by_days_left",
    "utcnow",
    "whole_days",
]
