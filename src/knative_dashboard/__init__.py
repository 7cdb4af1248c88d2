"""Knative Serving plugin for the Octant dashboard."""

__version__ = "0.1.0"
