"""
Domain Layer Package

Deployment jobs, health snapshots, alerts and metric samples, plus the pure
rules that classify them. No framework or infrastructure dependencies.
"""

from fleetops.domain import entities, ports, repositories, services

__all__ = ["entities", "ports", "repositories", "services"]
