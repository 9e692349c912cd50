"""Prometheus exporter for the Mobyt SMS gateway."""

__version__ = "1.0.0"
