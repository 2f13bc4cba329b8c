"""Version information for IncidentFlow."""

__version__ = "0.1.0"
