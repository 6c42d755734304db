"""farmops: irrigation status and escalation back office."""

__version__ = "1.0.0"
