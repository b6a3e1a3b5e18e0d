"""Domain port for the side effects of each deployment stage."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Protocol

from fleetops.domain.entities.deployment import DeploymentScope


class IDeploymentRuntime(Protocol):
    """Executes the work behind the rollout pipeline.

    Every method raises on failure; the orchestrator turns the exception into
    a failed step.
    """

    async def setup_environment(
        self, environment: str, config: Mapping[str, Any]
    ) -> None: ...

    async def run_migrations(self) -> None: ...

    async def deploy_service(self, service: str) -> None: ...

    async def load_agent_config(self, agent_id: str) -> Dict[str, Any]: ...

    async def provision_agent(
        self, agent_id: str, config: Mapping[str, Any]
    ) -> None: ...

    async def configure_agent_endpoints(
        self, agent_id: str, config: Mapping[str, Any]
    ) -> None: ...

    async def self_test_agent(self, agent_id: str) -> None: ...

    async def mark_agent_deployed(self, agent_id: str) -> None: ...

    async def run_integration_tests(self, scope: DeploymentScope) -> None: ...

    async def activate(self, environment: str) -> None: ...
