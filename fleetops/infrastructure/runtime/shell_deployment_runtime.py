"""
Shell-driven deployment runtime - Infrastructure layer.

Each pipeline action maps to an optional shell command template. Templates
may reference ``{environment}``, ``{service}``, ``{agent_id}`` and
``{scope}``; substituted values are shell-quoted. An action without a
command is logged and treated as done.
"""

from __future__ import annotations

import asyncio
import re
import shlex
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from fleetops.domain.entities.deployment import DeploymentScope
from fleetops.domain.ports.deployment_runtime import IDeploymentRuntime
from fleetops.shared import get_logger

from .shell import run_shell_command

logger = get_logger(__name__)

ACTIONS = (
    "setup_environment",
    "run_migrations",
    "seed_data",
    "deploy_service",
    "provision_agent",
    "configure_agent_endpoints",
    "self_test_agent",
    "mark_agent_deployed",
    "run_integration_tests",
    "activate",
)

ENV_KEY_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def render_env_line(key: str, value: Any) -> str:
    """Render one ``KEY=value`` line, refusing names or values that break it."""
    if not ENV_KEY_PATTERN.match(key):
        raise ValueError(f"Invalid environment variable name: {key!r}")
    text = str(value)
    if "\n" in text or "\r" in text:
        raise ValueError(f"Environment variable {key} contains a line break")
    return f"{key}={text}"


class ShellDeploymentRuntime(IDeploymentRuntime):
    def __init__(
        self,
        *,
        commands: Optional[Mapping[str, str]] = None,
        command_timeout: float = 600.0,
        env_file_path: Optional[str] = None,
        version: str = "1.0.0",
        agent_configs: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        unknown = set(commands or {}) - set(ACTIONS)
        if unknown:
            raise ValueError(f"Unknown deployment actions: {sorted(unknown)}")
        self._commands = dict(commands or {})
        self._timeout = command_timeout
        self._env_file_path = env_file_path
        self._version = version
        self._agent_configs = {k: dict(v) for k, v in (agent_configs or {}).items()}

    async def _execute(self, action: str, **context: str) -> None:
        template = self._commands.get(action)
        if not template:
            logger.info("deployment.runtime.noop", action=action, **context)
            return

        command = template.format(
            **{name: shlex.quote(value) for name, value in context.items()}
        )
        logger.info("deployment.runtime.command", action=action, command=command)
        result = await run_shell_command(command, timeout=self._timeout)
        logger.debug(
            "deployment.runtime.command_output",
            action=action,
            stdout=result.stdout[-2000:],
        )

    async def setup_environment(
        self, environment: str, config: Mapping[str, Any]
    ) -> None:
        if self._env_file_path:
            rendered = {
                "NODE_ENV": environment,
                "FLEETOPS_VERSION": self._version,
                "DEPLOYMENT_TIME": datetime.now(timezone.utc).isoformat(),
                **config,
            }
            body = "\n".join(
                render_env_line(key, value) for key, value in rendered.items()
            )
            await asyncio.to_thread(
                Path(self._env_file_path).write_text, body + "\n", encoding="utf-8"
            )
            logger.info("deployment.runtime.env_written", path=self._env_file_path)
        await self._execute("setup_environment", environment=environment)

    async def run_migrations(self) -> None:
        await self._execute("run_migrations")
        await self._execute("seed_data")

    async def deploy_service(self, service: str) -> None:
        await self._execute("deploy_service", service=service)

    async def load_agent_config(self, agent_id: str) -> Dict[str, Any]:
        config: Dict[str, Any] = {"id": agent_id, "name": f"Agent {agent_id}"}
        config.update(self._agent_configs.get(agent_id, {}))
        return config

    async def provision_agent(self, agent_id: str, config: Mapping[str, Any]) -> None:
        await self._execute("provision_agent", agent_id=agent_id)

    async def configure_agent_endpoints(
        self, agent_id: str, config: Mapping[str, Any]
    ) -> None:
        await self._execute("configure_agent_endpoints", agent_id=agent_id)

    async def self_test_agent(self, agent_id: str) -> None:
        await self._execute("self_test_agent", agent_id=agent_id)

    async def mark_agent_deployed(self, agent_id: str) -> None:
        await self._execute("mark_agent_deployed", agent_id=agent_id)

    async def run_integration_tests(self, scope: DeploymentScope) -> None:
        await self._execute("run_integration_tests", scope=scope.label)

    async def activate(self, environment: str) -> None:
        await self._execute("activate", environment=environment)
