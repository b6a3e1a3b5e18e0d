"""Restart managed services through a shell command template."""

from __future__ import annotations

import shlex
from typing import Any, Dict, Optional

from fleetops.domain.ports.service_control import IServiceController
from fleetops.shared import get_logger

from .shell import run_shell_command

logger = get_logger(__name__)


class ShellServiceController(IServiceController):
    """``{service}`` and ``{force}`` are shell-quoted into the template."""

    def __init__(
        self, *, restart_command: Optional[str] = None, timeout: float = 120.0
    ) -> None:
        self._restart_command = restart_command
        self._timeout = timeout

    async def restart(self, service: str, force: bool = False) -> Dict[str, Any]:
        if not self._restart_command:
            logger.warning("service_control.restart.noop", service=service)
            return {"executed": False, "reason": "No restart command configured"}

        command = self._restart_command.format(
            service=shlex.quote(service), force="true" if force else "false"
        )
        logger.info("service_control.restart", service=service, force=force)
        result = await run_shell_command(command, timeout=self._timeout)
        return {
            "executed": True,
            "command": result.command,
            "returncode": result.returncode,
            "output": result.stdout[-1000:],
        }
