"""
Domain Entities - Deployment

A deployment job is an append-only log of stage transitions plus an overall
status. The orchestrator is the only writer; readers receive snapshots.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fleetops.domain.entities.errors import DeploymentStateError


class DeploymentStatus(str, Enum):
    """Overall status of a deployment job."""

    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StepStatus(str, Enum):
    """Status recorded for one pipeline stage transition."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class DeploymentStage(str, Enum):
    """Named stages of the rollout pipeline, in execution order."""

    ENVIRONMENT_SETUP = "Environment Setup"
    DATABASE_MIGRATION = "Database Migration"
    CORE_SERVICES = "Core Services"
    AGENT_ROLLOUT = "AI Agents"
    INTEGRATION_TESTING = "Integration Testing"
    HEALTH_VERIFICATION = "Health Verification"
    ACTIVATION = "Production Activation"


class DeploymentScopeKind(str, Enum):
    FULL_SYSTEM = "full_system"
    AGENT = "agent"


FULL_SYSTEM_SCOPE = "full-system"

_ALLOWED_TRANSITIONS = {
    None: {StepStatus.PENDING, StepStatus.RUNNING},
    StepStatus.PENDING: {StepStatus.RUNNING},
    StepStatus.RUNNING: {StepStatus.COMPLETED, StepStatus.FAILED},
    StepStatus.COMPLETED: set(),
    StepStatus.FAILED: set(),
}


@dataclass(frozen=True)
class DeploymentScope:
    """Target of a deployment: the whole platform or a single agent."""

    kind: DeploymentScopeKind
    agent_id: Optional[str] = None

    @classmethod
    def full_system(cls) -> "DeploymentScope":
        return cls(kind=DeploymentScopeKind.FULL_SYSTEM)

    @classmethod
    def for_agent(cls, agent_id: str) -> "DeploymentScope":
        return cls(kind=DeploymentScopeKind.AGENT, agent_id=agent_id)

    @property
    def is_full_system(self) -> bool:
        return self.kind is DeploymentScopeKind.FULL_SYSTEM

    @property
    def label(self) -> str:
        return FULL_SYSTEM_SCOPE if self.is_full_system else f"agent:{self.agent_id}"


@dataclass(frozen=True)
class DeploymentStep:
    """One entry of a job's step log. Never mutated once written."""

    name: str
    status: StepStatus
    timestamp: datetime


def new_deployment_id() -> str:
    return f"deploy_{uuid4().hex[:12]}"


@dataclass
class DeploymentJob:
    """Represents one rollout attempt."""

    scope: DeploymentScope
    environment: str = "production"
    id: str = field(default_factory=new_deployment_id)
    config: Dict[str, Any] = field(default_factory=dict)
    status: DeploymentStatus = DeploymentStatus.INITIALIZING
    steps: List[DeploymentStep] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
    error: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (DeploymentStatus.COMPLETED, DeploymentStatus.FAILED)

    def stage_status(self, name: str) -> Optional[StepStatus]:
        """Latest recorded status for a stage, or None if it never ran."""
        for step in reversed(self.steps):
            if step.name == name:
                return step.status
        return None

    def record_step(self, name: str, status: StepStatus) -> DeploymentStep:
        """
        Append a stage transition.

        Raises:
            DeploymentStateError: If the job is terminal or the transition
                would regress the stage.
        """
        if self.is_terminal:
            raise DeploymentStateError(
                f"Deployment {self.id} is {self.status.value}; no further steps"
            )

        current = self.stage_status(name)
        if status not in _ALLOWED_TRANSITIONS[current]:
            raise DeploymentStateError(
                f"Stage '{name}' cannot move from "
                f"{current.value if current else 'none'} to {status.value}",
                details={"deployment_id": self.id, "stage": name},
            )

        now = datetime.now(timezone.utc)
        if self.steps and now < self.steps[-1].timestamp:
            now = self.steps[-1].timestamp

        step = DeploymentStep(name=name, status=status, timestamp=now)
        self.steps.append(step)
        return step

    def mark_running(self) -> None:
        if self.status is not DeploymentStatus.INITIALIZING:
            raise DeploymentStateError(
                f"Deployment {self.id} cannot start from {self.status.value}"
            )
        self.status = DeploymentStatus.RUNNING

    def mark_completed(self) -> None:
        if self.is_terminal:
            raise DeploymentStateError(f"Deployment {self.id} is already terminal")
        self.status = DeploymentStatus.COMPLETED
        self.completed_at = datetime.now(timezone.utc)

    def mark_failed(
        self, error: str, error_details: Optional[Dict[str, Any]] = None
    ) -> None:
        if self.is_terminal:
            raise DeploymentStateError(f"Deployment {self.id} is already terminal")
        self.status = DeploymentStatus.FAILED
        self.error = error
        self.error_details = error_details
        self.completed_at = datetime.now(timezone.utc)

    def get_duration(self) -> Optional[float]:
        """Total duration in seconds, once terminal."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def format_duration(self) -> str:
        seconds = int(self.get_duration() or 0)
        return f"{seconds // 60}m {seconds % 60}s"

    def snapshot(self) -> "DeploymentJob":
        """Detached copy safe to hand to readers."""
        return copy.deepcopy(self)
