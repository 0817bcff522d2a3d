"""Per-application, per-context preferences persisted as JSON."""

__version__ = "0.1.0"
