"""board-triage: periodic triage of a single-owner task board backlog."""

__version__ = "0.1.0"
