"""QueueDesk: appointment booking and staff queue manager."""

__version__ = "1.0.0"
