"""
Application Layer Package

Use cases that drive deployments, health sweeps, alerting and metrics,
plus the DTOs exchanged with the presentation layer.
"""

from fleetops.application import dtos, models, use_cases

__all__ = ["dtos", "use_cases", "models"]
