"""
Presentation Layer Package

FastAPI routers exposing deployments, health, metrics and system
management over HTTP.
"""

from fleetops.presentation import controllers

__all__ = ["controllers"]
