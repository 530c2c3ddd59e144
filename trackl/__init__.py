"""trackl: a minimal personal task and event tracker."""

__version__ = "0.1.0"
