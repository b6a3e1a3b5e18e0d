"""
Application DTOs - Deployment

API contracts for starting and tracking deployments.
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from fleetops.domain.entities.deployment import (
    DeploymentJob,
    DeploymentStatus,
    DeploymentStep,
    StepStatus,
)

_CONFIG_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DeploymentRequestDTO(BaseModel):
    """DTO for a deployment request."""

    environment: str = Field(
        default="production",
        min_length=1,
        max_length=64,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Environment label the rollout targets",
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Configuration overrides; also satisfies required credential keys",
    )

    @field_validator("config")
    @classmethod
    def validate_config(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in config.items():
            if not _CONFIG_KEY.match(key):
                raise ValueError(f"Invalid configuration key: {key!r}")
            if any(ch in str(value) for ch in "\r\n"):
                raise ValueError(
                    f"Configuration value for {key} contains a line break"
                )
        return config


class DeploymentStepDTO(BaseModel):
    name: str
    status: StepStatus
    timestamp: datetime

    @classmethod
    def from_domain(cls, step: DeploymentStep) -> "DeploymentStepDTO":
        return cls(name=step.name, status=step.status, timestamp=step.timestamp)


class DeploymentJobDTO(BaseModel):
    """DTO for deployment status and step log."""

    id: str
    scope: str
    environment: str
    status: DeploymentStatus
    steps: List[DeploymentStepDTO]
    started_at: datetime
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    error: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_domain(cls, job: DeploymentJob) -> "DeploymentJobDTO":
        return cls(
            id=job.id,
            scope=job.scope.label,
            environment=job.environment,
            status=job.status,
            steps=[DeploymentStepDTO.from_domain(step) for step in job.steps],
            started_at=job.started_at,
            completed_at=job.completed_at,
            duration_seconds=job.get_duration(),
            error=job.error,
            error_details=job.error_details,
        )


class DeploymentJobSummaryDTO(BaseModel):
    """DTO for deployment listings."""

    id: str
    scope: str
    environment: str
    status: DeploymentStatus
    current_stage: Optional[str] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    error: Optional[str] = None

    @classmethod
    def from_domain(cls, job: DeploymentJob) -> "DeploymentJobSummaryDTO":
        return cls(
            id=job.id,
            scope=job.scope.label,
            environment=job.environment,
            status=job.status,
            current_stage=job.steps[-1].name if job.steps else None,
            started_at=job.started_at,
            completed_at=job.completed_at,
            error=job.error,
        )


class StartDeploymentResponseDTO(BaseModel):
    """DTO for deployment start response."""

    success: bool = True
    deployment_id: str
    status: str = "initiated"
    scope: str
    estimated_duration: str
    tracking_url: str
