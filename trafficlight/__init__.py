"""Traffic light controller with phase cycles, activity cycles, defect detection and events."""

__version__ = "0.1.0"
__all__ = ["activity_cycle", "cycle", "events", "traffic_light"]