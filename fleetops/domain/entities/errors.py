"""
Domain Errors

Failure taxonomy shared by the orchestrator, the health sweep, the alerting
engine and the scheduler.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PreconditionError(DomainError):
    """Raised when configuration required by a deployment stage is missing."""


class StageExecutionError(DomainError):
    """Raised when a deployment stage fails."""

    def __init__(
        self, stage: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        self.stage = stage
        super().__init__(message, details)


class ProbeError(DomainError):
    """Raised when a single health probe cannot produce a result."""

    def __init__(
        self, target: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        self.target = target
        super().__init__(message, details)


class AlertDispatchError(DomainError):
    """Raised when a notification channel fails to deliver an alert."""

    def __init__(
        self, channel: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        self.channel = channel
        super().__init__(message, details)


class ScheduledTaskError(DomainError):
    """Raised when one run of a periodic task fails."""

    def __init__(
        self, task: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        self.task = task
        super().__init__(message, details)


class DeploymentStateError(DomainError):
    """Raised when a deployment job would violate its step ordering rules."""


class DeploymentNotFoundError(DomainError):
    """Raised when a deployment job cannot be found."""

    def __init__(self, deployment_id: str, details: Optional[Dict[str, Any]] = None):
        self.deployment_id = deployment_id
        super().__init__(f"Deployment {deployment_id} not found", details)


class UnknownDeploymentScopeError(DomainError):
    """Raised when a deployment scope is neither the full system nor an agent."""

    def __init__(self, scope: str, details: Optional[Dict[str, Any]] = None):
        self.scope = scope
        super().__init__(f"Unknown deployment scope: {scope}", details)


class UnknownServiceError(DomainError):
    """Raised when a service name is not part of the managed platform."""

    def __init__(self, service: str, details: Optional[Dict[str, Any]] = None):
        self.service = service
        super().__init__(f"Unknown service: {service}", details)


class InvalidTimeframeError(DomainError):
    """Raised when a metrics timeframe cannot be parsed."""

    def __init__(self, timeframe: str, details: Optional[Dict[str, Any]] = None):
        self.timeframe = timeframe
        super().__init__(
            f"Invalid timeframe '{timeframe}'. Use <number><s|m|h|d>, e.g. 1h.",
            details,
        )
