"""
Application Use Cases - Alerting

Turns a health observation into classified alerts and delivers them through
the configured notification channels.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from fleetops.domain.entities.alert import (
    Alert,
    AlertSeverity,
    AlertThreshold,
    AlertType,
    ThresholdResource,
)
from fleetops.domain.entities.errors import AlertDispatchError
from fleetops.domain.entities.health import HealthObservation
from fleetops.domain.ports.notification_channel import INotificationChannel
from fleetops.shared import get_logger

logger = get_logger(__name__)

INFRASTRUCTURE_RESOURCES: Tuple[Tuple[ThresholdResource, str, str], ...] = (
    (ThresholdResource.CPU_USAGE, "cpu_usage", "CPU"),
    (ThresholdResource.MEMORY_USAGE, "memory_usage", "Memory"),
    (ThresholdResource.DISK_USAGE, "disk_usage", "Disk"),
)


@dataclass
class DispatchReport:
    """Outcome of one dispatch call."""

    delivered: List[Tuple[Alert, str]] = field(default_factory=list)
    failures: List[AlertDispatchError] = field(default_factory=list)

    @property
    def delivered_count(self) -> int:
        return len(self.delivered)


class AlertingEngine:
    """Evaluates thresholds and dispatches alerts.

    Every sweep re-raises alerts for conditions that still hold; there is no
    suppression window.
    """

    def __init__(
        self,
        thresholds: Mapping[ThresholdResource, AlertThreshold],
        primary_channel: INotificationChannel,
        urgent_channel: Optional[INotificationChannel] = None,
        subject_prefix: str = "fleetops alert",
    ):
        self.thresholds = dict(thresholds)
        self.primary_channel = primary_channel
        self.urgent_channel = urgent_channel
        self.subject_prefix = subject_prefix
        self.dispatched_total = 0
        self.failed_total = 0

    def threshold(self, resource: ThresholdResource) -> Optional[AlertThreshold]:
        return self.thresholds.get(resource)

    def evaluate(self, observation: HealthObservation) -> List[Alert]:
        """Classify every condition of the observation that warrants an alert."""

        alerts: List[Alert] = []
        now = observation.timestamp

        for service, result in observation.services.items():
            if not result.is_healthy:
                alerts.append(
                    Alert(
                        type=AlertType.SERVICE_DOWN,
                        severity=AlertSeverity.CRITICAL,
                        subject=service,
                        message=f"Service {service} is unhealthy: {result.error}",
                        timestamp=now,
                    )
                )

        response_time = self.threshold(ThresholdResource.RESPONSE_TIME)
        for agent_id, result in observation.agents.items():
            if not result.is_healthy:
                alerts.append(
                    Alert(
                        type=AlertType.AGENT_DOWN,
                        severity=AlertSeverity.HIGH,
                        subject=agent_id,
                        message=f"Agent {agent_id} is not responding: {result.error}",
                        timestamp=now,
                    )
                )
            if response_time and response_time.exceeds_critical(
                result.response_time_ms
            ):
                alerts.append(
                    Alert(
                        type=AlertType.PERFORMANCE_DEGRADATION,
                        severity=AlertSeverity.HIGH,
                        subject=agent_id,
                        message=(
                            f"Agent {agent_id} response time is "
                            f"{result.response_time_ms:.0f}ms (critical threshold: "
                            f"{response_time.critical:.0f}ms)"
                        ),
                        timestamp=now,
                    )
                )

        infrastructure = observation.infrastructure
        for resource, attribute, label in INFRASTRUCTURE_RESOURCES:
            bound = self.threshold(resource)
            value = getattr(infrastructure, attribute)
            if bound and bound.exceeds_critical(value):
                alerts.append(
                    Alert(
                        type=AlertType.RESOURCE_CRITICAL,
                        severity=AlertSeverity.CRITICAL,
                        subject=attribute,
                        message=(
                            f"{label} usage is {value:.1f}% "
                            f"(critical threshold: {bound.critical:.0f}%)"
                        ),
                        timestamp=now,
                    )
                )

        return alerts

    def _subject(self, alert: Alert) -> str:
        return f"{self.subject_prefix}: {alert.type.value} - {alert.severity.value}"

    def _body(self, alert: Alert) -> str:
        return (
            f"Type: {alert.type.value}\n"
            f"Severity: {alert.severity.value}\n"
            f"Subject: {alert.subject}\n"
            f"Message: {alert.message}\n"
            f"Timestamp: {alert.timestamp.isoformat()}"
        )

    async def _deliver(
        self, channel: INotificationChannel, alert: Alert, report: DispatchReport
    ) -> None:
        try:
            await channel.send(self._subject(alert), self._body(alert))
        except Exception as exc:
            error = AlertDispatchError(
                channel.name,
                f"Failed to deliver {alert.type.value} alert "
                f"for {alert.subject}: {exc}",
                details={"alert_type": alert.type.value, "subject": alert.subject},
            )
            report.failures.append(error)
            self.failed_total += 1
            logger.error(
                "alert.dispatch.failed",
                channel=channel.name,
                alert_type=alert.type.value,
                subject=alert.subject,
                error=str(exc),
            )
            return

        report.delivered.append((alert, channel.name))
        self.dispatched_total += 1

    async def dispatch(self, alerts: Sequence[Alert]) -> DispatchReport:
        """Send each alert on the primary channel, critical ones also on urgent.

        A failure on one alert or channel never stops the remaining deliveries.
        """

        report = DispatchReport()
        for alert in alerts:
            logger.warning(
                "alert.raised",
                alert_type=alert.type.value,
                severity=alert.severity.value,
                subject=alert.subject,
                message=alert.message,
            )
            await self._deliver(self.primary_channel, alert, report)
            if alert.is_critical and self.urgent_channel is not None:
                await self._deliver(self.urgent_channel, alert, report)
        return report

    async def notify(self, subject: str, message: str, *, urgent: bool = False) -> bool:
        """Send a free-form notice such as a deployment outcome."""

        channels = [self.primary_channel]
        if urgent and self.urgent_channel is not None:
            channels.append(self.urgent_channel)

        delivered = True
        for channel in channels:
            try:
                await channel.send(subject, message)
            except Exception as exc:
                delivered = False
                logger.error(
                    "notification.failed",
                    channel=channel.name,
                    subject=subject,
                    error=str(exc),
                )
        return delivered
