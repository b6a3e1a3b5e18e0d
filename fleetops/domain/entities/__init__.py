"""
Domain Entities Package

Deployment jobs, health snapshots, alerts and metric samples.
"""

from .alert import Alert, AlertSeverity, AlertThreshold, AlertType, ThresholdResource
from .deployment import (
    FULL_SYSTEM_SCOPE,
    DeploymentJob,
    DeploymentScope,
    DeploymentScopeKind,
    DeploymentStage,
    DeploymentStatus,
    DeploymentStep,
    StepStatus,
)
from .errors import (
    AlertDispatchError,
    DeploymentNotFoundError,
    DeploymentStateError,
    DomainError,
    InvalidTimeframeError,
    PreconditionError,
    ProbeError,
    ScheduledTaskError,
    StageExecutionError,
    UnknownDeploymentScopeError,
    UnknownServiceError,
)
from .health import (
    HealthCheckResult,
    HealthObservation,
    InfrastructureSnapshot,
    OverallStatus,
    PingSnapshot,
    ProbeResult,
    ProbeTarget,
    TargetKind,
    TargetStatus,
)
from .metrics import MetricSample

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertThreshold",
    "AlertType",
    "ThresholdResource",
    "FULL_SYSTEM_SCOPE",
    "DeploymentJob",
    "DeploymentScope",
    "DeploymentScopeKind",
    "DeploymentStage",
    "DeploymentStatus",
    "DeploymentStep",
    "StepStatus",
    "AlertDispatchError",
    "DeploymentNotFoundError",
    "DeploymentStateError",
    "DomainError",
    "InvalidTimeframeError",
    "PreconditionError",
    "ProbeError",
    "ScheduledTaskError",
    "StageExecutionError",
    "UnknownDeploymentScopeError",
    "UnknownServiceError",
    "HealthCheckResult",
    "HealthObservation",
    "InfrastructureSnapshot",
    "OverallStatus",
    "PingSnapshot",
    "ProbeResult",
    "ProbeTarget",
    "TargetKind",
    "TargetStatus",
    "MetricSample",
]
