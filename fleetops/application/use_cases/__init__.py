"""
Use Cases Package - Application Layer

Deployment orchestration, health sweeps, alerting, metrics collection and
system management.
"""

from .alerting_use_case import AlertingEngine, DispatchReport
from .deployment_use_case import DeploymentOrchestrator, DeploymentStatusUseCase
from .health_use_cases import (
    GetDetailedHealthUseCase,
    GetSystemHealthUseCase,
    GetTargetsHealthUseCase,
    HealthMonitor,
)
from .metrics_use_cases import GetPerformanceMetricsUseCase, MetricsCollector
from .system_use_cases import RestartServiceUseCase

__all__ = [
    "AlertingEngine",
    "DispatchReport",
    "DeploymentOrchestrator",
    "DeploymentStatusUseCase",
    "GetDetailedHealthUseCase",
    "GetSystemHealthUseCase",
    "GetTargetsHealthUseCase",
    "HealthMonitor",
    "GetPerformanceMetricsUseCase",
    "MetricsCollector",
    "RestartServiceUseCase",
]
