"""Context-aware Grafana launcher."""

__version__ = "0.3.0"
