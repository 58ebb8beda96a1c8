"""Default-props collection for component classes and function components."""

from .lib import collect_assigned_defaults, collect_defaults, find_static_property

__all__ = ["collect_assigned_defaults", "collect_defaults", "find_static_property"]
