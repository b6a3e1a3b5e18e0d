"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Dict, List, Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fleetops.domain.entities.alert import ThresholdResource
from fleetops.shared import EnumEnvironment, EnumLogLevel
from fleetops.shared.consts import (
    DEFAULT_AGENT_ROSTER,
    DEFAULT_CORE_SERVICES,
    DEFAULT_REQUIRED_DEPLOYMENT_KEYS,
)
from fleetops.shared.env import load_secret_file_variables  # noqa: F401

DEFAULT_MONITORED_SERVICES = (
    "database",
    "voice_engine",
    "email_system",
    "payment_system",
    "whatsapp_api",
    "knowledge_base",
    "legal_services",
)


class GESettings(BaseSettings):
    """Service identity and server settings."""

    title: str = Field(default="FleetOps", description="Service title")
    description: str = Field(
        default="Deployment orchestration and health monitoring "
        "for the AI agent fleet",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("APP_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("APP_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class MonitoringSettings(BaseSettings):
    """Health sweeps, probes and the metrics store."""

    comprehensive_interval_seconds: float = Field(
        default=300, gt=0, description="Interval of the full health sweep"
    )
    quick_interval_seconds: float = Field(
        default=30, gt=0, description="Interval of the quick ping sweep"
    )
    metrics_interval_seconds: float = Field(
        default=60, gt=0, description="Interval of metrics collection"
    )
    run_on_startup: bool = Field(
        default=True,
        description="Run one health sweep and metrics collection at startup",
    )
    probe_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Upper bound for a single probe"
    )
    metrics_capacity: int = Field(
        default=1000, ge=1, description="Samples retained by the metrics store"
    )
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the platform API hosting agent health endpoints",
    )
    service_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MONITORED_SERVICES),
        description="Services probed at the platform API when no URL is given",
    )
    services: Dict[str, str] = Field(
        default_factory=dict,
        description="Service name to probe URL (http, redis or mongodb scheme)",
    )
    agents: List[str] = Field(
        default_factory=lambda: list(DEFAULT_AGENT_ROSTER),
        description="Fixed roster of deployable agents",
    )
    disk_path: str = Field(default="/", description="Mount point for disk usage")

    model_config = SettingsConfigDict(
        env_prefix="MONITORING_", case_sensitive=False, extra="ignore"
    )


class AlertSettings(BaseSettings):
    """Alert thresholds and notification channels."""

    response_time_warning: float = Field(default=2000, description="Milliseconds")
    response_time_critical: float = Field(default=5000, description="Milliseconds")
    error_rate_warning: float = Field(default=0.05, description="Fraction of requests")
    error_rate_critical: float = Field(default=0.1, description="Fraction of requests")
    cpu_usage_warning: float = Field(default=70, description="Percent")
    cpu_usage_critical: float = Field(default=85, description="Percent")
    memory_usage_warning: float = Field(default=80, description="Percent")
    memory_usage_critical: float = Field(default=90, description="Percent")
    disk_usage_warning: float = Field(default=85, description="Percent")
    disk_usage_critical: float = Field(default=95, description="Percent")

    primary_webhook_url: Optional[str] = Field(
        default=None, description="Webhook receiving every alert"
    )
    urgent_webhook_url: Optional[str] = Field(
        default=None, description="Webhook additionally receiving critical alerts"
    )
    webhook_timeout_seconds: float = Field(default=10.0, gt=0)
    subject_prefix: str = Field(default="FleetOps alert")

    model_config = SettingsConfigDict(
        env_prefix="ALERT_", case_sensitive=False, extra="ignore"
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "AlertSettings":
        for resource in ThresholdResource:
            self._check_pair(resource.value)
        return self

    def _check_pair(self, resource: str) -> None:
        warning = getattr(self, f"{resource}_warning")
        critical = getattr(self, f"{resource}_critical")
        if warning > critical:
            raise ValueError(
                f"{resource}: warning bound {warning} exceeds critical bound {critical}"
            )


class DeploymentSettings(BaseSettings):
    """Rollout pipeline settings."""

    required_keys: List[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_DEPLOYMENT_KEYS),
        description="Credential keys validated by environment setup",
    )
    core_services: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CORE_SERVICES),
        description="Core services deployed in order",
    )
    commands: Dict[str, str] = Field(
        default_factory=dict,
        description="Pipeline action to shell command template; missing is a no-op",
    )
    command_timeout_seconds: float = Field(default=600.0, gt=0)
    env_file_path: Optional[str] = Field(
        default=None, description="Where environment setup renders the env file"
    )
    version: str = Field(default="1.0.0", description="Version being rolled out")
    estimated_duration: str = Field(default="15-20 minutes")

    model_config = SettingsConfigDict(
        env_prefix="DEPLOY_", case_sensitive=False, extra="ignore"
    )


class SystemSettings(BaseSettings):
    """Process control settings."""

    restart_command: Optional[str] = Field(
        default=None,
        description="Restart command template with {service} and {force} placeholders",
    )
    restart_timeout_seconds: float = Field(default=120.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="SYSTEM_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    ge: GESettings = Field(default_factory=GESettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    alerts: AlertSettings = Field(default_factory=AlertSettings)
    deployment: DeploymentSettings = Field(default_factory=DeploymentSettings)
    system: SystemSettings = Field(default_factory=SystemSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
