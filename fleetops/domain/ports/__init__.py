"""Domain ports package."""

from .deployment_runtime import IDeploymentRuntime
from .health_probe import IHealthProbe
from .notification_channel import INotificationChannel
from .service_control import IServiceController
from .system_metrics import ISystemMetricsProvider

__all__ = [
    "IDeploymentRuntime",
    "IHealthProbe",
    "INotificationChannel",
    "IServiceController",
    "ISystemMetricsProvider",
]
