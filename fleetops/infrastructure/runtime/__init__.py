"""Shell-backed deployment runtime and service control."""

from .shell import CommandFailedError, CommandResult, run_shell_command
from .shell_deployment_runtime import ShellDeploymentRuntime
from .shell_service_controller import ShellServiceController

__all__ = [
    "CommandFailedError",
    "CommandResult",
    "run_shell_command",
    "ShellDeploymentRuntime",
    "ShellServiceController",
]
