"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application and presentation
layers.
"""

from .deployment_dto import (
    DeploymentJobDTO,
    DeploymentJobSummaryDTO,
    DeploymentRequestDTO,
    DeploymentStepDTO,
    StartDeploymentResponseDTO,
)
from .health_dto import (
    AlertDTO,
    DetailedHealthDTO,
    HealthCheckResultDTO,
    PingSummaryDTO,
    ProbeResultDTO,
    SystemHealthDTO,
    TargetsHealthDTO,
)
from .metrics_dto import MetricSampleDTO, PerformanceMetricsDTO
from .system_dto import RestartRequestDTO, RestartResponseDTO

__all__ = [
    "DeploymentJobDTO",
    "DeploymentJobSummaryDTO",
    "DeploymentRequestDTO",
    "DeploymentStepDTO",
    "StartDeploymentResponseDTO",
    "AlertDTO",
    "DetailedHealthDTO",
    "HealthCheckResultDTO",
    "PingSummaryDTO",
    "ProbeResultDTO",
    "SystemHealthDTO",
    "TargetsHealthDTO",
    "MetricSampleDTO",
    "PerformanceMetricsDTO",
    "RestartRequestDTO",
    "RestartResponseDTO",
]
