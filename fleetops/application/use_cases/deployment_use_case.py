"""
Application Use Cases - Deployment Orchestration

Runs the rollout pipeline for the whole platform or a single agent as a
background task and tracks every stage transition on the job.
"""

import asyncio
from typing import (
    Any,
    Awaitable,
    Callable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
)

import structlog

from fleetops.application.dtos.deployment_dto import (
    DeploymentJobDTO,
    DeploymentJobSummaryDTO,
    StartDeploymentResponseDTO,
)
from fleetops.application.use_cases.alerting_use_case import AlertingEngine
from fleetops.application.use_cases.health_use_cases import HealthMonitor
from fleetops.domain.entities.deployment import (
    FULL_SYSTEM_SCOPE,
    DeploymentJob,
    DeploymentScope,
    DeploymentStage,
    StepStatus,
)
from fleetops.domain.entities.errors import (
    DeploymentNotFoundError,
    DomainError,
    PreconditionError,
    StageExecutionError,
    UnknownDeploymentScopeError,
)
from fleetops.domain.ports.deployment_runtime import IDeploymentRuntime
from fleetops.domain.repositories.deployment_job_repository import (
    IDeploymentJobRepository,
)
from fleetops.shared.env import missing_keys

logger = structlog.get_logger(__name__)

StageAction = Callable[[DeploymentJob], Awaitable[None]]

FULL_SYSTEM_STAGES: Tuple[DeploymentStage, ...] = (
    DeploymentStage.ENVIRONMENT_SETUP,
    DeploymentStage.DATABASE_MIGRATION,
    DeploymentStage.CORE_SERVICES,
    DeploymentStage.AGENT_ROLLOUT,
    DeploymentStage.INTEGRATION_TESTING,
    DeploymentStage.HEALTH_VERIFICATION,
    DeploymentStage.ACTIVATION,
)

AGENT_STAGES: Tuple[DeploymentStage, ...] = (
    DeploymentStage.ENVIRONMENT_SETUP,
    DeploymentStage.AGENT_ROLLOUT,
    DeploymentStage.HEALTH_VERIFICATION,
    DeploymentStage.ACTIVATION,
)


class DeploymentOrchestrator:
    """Starts deployments and executes their pipelines.

    A failed stage is terminal for its job: later stages never run and there
    is no retry or rollback. A new deployment is the only way forward.
    """

    def __init__(
        self,
        job_repository: IDeploymentJobRepository,
        runtime: IDeploymentRuntime,
        health_monitor: HealthMonitor,
        alerting_engine: AlertingEngine,
        agent_roster: Sequence[str],
        core_services: Sequence[str],
        required_keys: Sequence[str],
        environ: Optional[Mapping[str, str]] = None,
        estimated_duration: str = "15-20 minutes",
    ):
        """
        Initialize the orchestrator.

        Args:
            job_repository: Storage for deployment jobs
            runtime: Executes the side effects of each stage
            health_monitor: Probe layer used by health verification
            alerting_engine: Sends completion and failure notices
            agent_roster: Fixed list of deployable agents
            core_services: Services rolled out by the core-services stage
            required_keys: Credentials environment setup insists on
            environ: Source of configuration keys, ``os.environ`` by default
        """
        self.job_repository = job_repository
        self.runtime = runtime
        self.health_monitor = health_monitor
        self.alerting_engine = alerting_engine
        self.agent_roster = tuple(agent_roster)
        self.core_services = tuple(core_services)
        self.required_keys = tuple(required_keys)
        self.environ = environ
        self.estimated_duration = estimated_duration
        self._tasks: Set[asyncio.Task] = set()
        self._actions: Mapping[DeploymentStage, StageAction] = {
            DeploymentStage.ENVIRONMENT_SETUP: self._setup_environment,
            DeploymentStage.DATABASE_MIGRATION: self._run_migrations,
            DeploymentStage.CORE_SERVICES: self._deploy_core_services,
            DeploymentStage.AGENT_ROLLOUT: self._deploy_agents,
            DeploymentStage.INTEGRATION_TESTING: self._run_integration_tests,
            DeploymentStage.HEALTH_VERIFICATION: self._verify_health,
            DeploymentStage.ACTIVATION: self._activate,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_scope(self, scope: str) -> DeploymentScope:
        """Map a path segment to a deployment scope.

        Raises:
            UnknownDeploymentScopeError: If it is neither the full system nor
                an agent of the roster.
        """
        if scope == FULL_SYSTEM_SCOPE:
            return DeploymentScope.full_system()
        if scope in self.agent_roster:
            return DeploymentScope.for_agent(scope)
        raise UnknownDeploymentScopeError(
            scope, details={"agents": list(self.agent_roster)}
        )

    async def start_deployment(
        self,
        scope: DeploymentScope,
        environment: str = "production",
        config: Optional[Mapping[str, Any]] = None,
    ) -> DeploymentJob:
        """Create a job and run its pipeline in the background.

        Returns immediately with a snapshot of the new job.
        """
        job = DeploymentJob(
            scope=scope, environment=environment, config=dict(config or {})
        )
        await self.job_repository.create(job)

        task = asyncio.create_task(self._execute(job), name=f"deployment:{job.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.info(
            "deployment.started",
            deployment_id=job.id,
            scope=scope.label,
            environment=environment,
        )
        return job.snapshot()

    async def get_status(self, job_id: str) -> DeploymentJob:
        job = await self.job_repository.get_by_id(job_id)
        if job is None:
            raise DeploymentNotFoundError(job_id)
        return job

    async def list_jobs(self, limit: int = 100) -> List[DeploymentJob]:
        return await self.job_repository.list(limit=limit)

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    async def wait_for_pending(self) -> None:
        """Wait until every background deployment has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def stages_for(self, scope: DeploymentScope) -> Tuple[DeploymentStage, ...]:
        return FULL_SYSTEM_STAGES if scope.is_full_system else AGENT_STAGES

    # ------------------------------------------------------------------
    # Pipeline execution
    # ------------------------------------------------------------------

    async def _record(self, job: DeploymentJob, stage: str, status: StepStatus) -> None:
        job.record_step(stage, status)
        await self.job_repository.update(job)

    async def _execute(self, job: DeploymentJob) -> None:
        log = logger.bind(deployment_id=job.id, scope=job.scope.label)
        try:
            job.mark_running()
            await self.job_repository.update(job)

            for stage in self.stages_for(job.scope):
                await self._record(job, stage.value, StepStatus.RUNNING)
                log.info("deployment.stage.running", stage=stage.value)
                try:
                    await self._actions[stage](job)
                except Exception as exc:
                    error = self._classify(stage, exc)
                    await self._record(job, stage.value, StepStatus.FAILED)
                    job.mark_failed(
                        error.message,
                        {
                            "stage": stage.value,
                            "error_type": type(error).__name__,
                            **error.details,
                        },
                    )
                    await self.job_repository.update(job)
                    log.error(
                        "deployment.stage.failed",
                        stage=stage.value,
                        error=error.message,
                        error_type=type(error).__name__,
                    )
                    await self._notify(job)
                    return
                await self._record(job, stage.value, StepStatus.COMPLETED)
                log.info("deployment.stage.completed", stage=stage.value)

            job.mark_completed()
            await self.job_repository.update(job)
            log.info("deployment.completed", duration=job.format_duration())
            await self._notify(job)

        except Exception as exc:
            # Bookkeeping itself failed; the job cannot be advanced any further.
            log.exception("deployment.execution.crashed", error=str(exc))
            if not job.is_terminal:
                job.mark_failed(f"Deployment execution error: {exc}")
                try:
                    await self.job_repository.update(job)
                except Exception:
                    log.exception("deployment.execution.persist_failed")

    def _classify(self, stage: DeploymentStage, exc: Exception) -> DomainError:
        if isinstance(exc, (PreconditionError, StageExecutionError)):
            return exc
        return StageExecutionError(
            stage.value,
            f"{stage.value} failed: {exc}",
            details={"cause": type(exc).__name__},
        )

    async def _notify(self, job: DeploymentJob) -> None:
        if job.error is None:
            subject = f"Deployment {job.id} completed"
            message = (
                "Deployment completed successfully!\n\n"
                f"Deployment ID: {job.id}\n"
                f"Scope: {job.scope.label}\n"
                f"Environment: {job.environment}\n"
                f"Duration: {job.format_duration()}"
            )
            urgent = False
        else:
            subject = f"Deployment {job.id} failed"
            message = (
                "Deployment failed!\n\n"
                f"Deployment ID: {job.id}\n"
                f"Scope: {job.scope.label}\n"
                f"Environment: {job.environment}\n"
                f"Error: {job.error}"
            )
            urgent = True
        await self.alerting_engine.notify(subject, message, urgent=urgent)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _setup_environment(self, job: DeploymentJob) -> None:
        missing = missing_keys(self.required_keys, job.config, self.environ)
        if missing:
            raise PreconditionError(
                f"Missing required environment variable: {missing[0]}",
                details={"missing_keys": missing},
            )
        await self.runtime.setup_environment(job.environment, job.config)

    async def _run_migrations(self, job: DeploymentJob) -> None:
        await self.runtime.run_migrations()

    async def _deploy_core_services(self, job: DeploymentJob) -> None:
        for service in self.core_services:
            await self.runtime.deploy_service(service)

    def _agents_in_scope(self, job: DeploymentJob) -> Tuple[str, ...]:
        if job.scope.is_full_system:
            return self.agent_roster
        return (job.scope.agent_id,)

    async def _deploy_agents(self, job: DeploymentJob) -> None:
        for agent_id in self._agents_in_scope(job):
            try:
                await self._deploy_agent(agent_id)
            except Exception as exc:
                raise StageExecutionError(
                    DeploymentStage.AGENT_ROLLOUT.value,
                    f"Failed to deploy agent {agent_id}: {exc}",
                    details={"agent_id": agent_id},
                ) from exc

    async def _deploy_agent(self, agent_id: str) -> None:
        config = await self.runtime.load_agent_config(agent_id)
        await self.runtime.provision_agent(agent_id, config)
        await self.runtime.configure_agent_endpoints(agent_id, config)
        await self.runtime.self_test_agent(agent_id)
        await self.runtime.mark_agent_deployed(agent_id)
        logger.info("deployment.agent.deployed", agent_id=agent_id)

    async def _run_integration_tests(self, job: DeploymentJob) -> None:
        await self.runtime.run_integration_tests(job.scope)

    async def _verify_health(self, job: DeploymentJob) -> None:
        unhealthy = await self.health_monitor.verify(
            self._agents_in_scope(job), include_services=job.scope.is_full_system
        )
        if unhealthy:
            names = sorted(unhealthy)
            raise StageExecutionError(
                DeploymentStage.HEALTH_VERIFICATION.value,
                f"Health verification failed for: {', '.join(names)}",
                details={
                    "unhealthy_targets": {
                        name: unhealthy[name].error for name in names
                    }
                },
            )

    async def _activate(self, job: DeploymentJob) -> None:
        await self.runtime.activate(job.environment)


class DeploymentStatusUseCase:
    """Read side of deployments for the API layer."""

    def __init__(self, orchestrator: DeploymentOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def start(
        self, scope: str, environment: str, config: Mapping[str, Any]
    ) -> StartDeploymentResponseDTO:
        resolved = self._orchestrator.resolve_scope(scope)
        job = await self._orchestrator.start_deployment(resolved, environment, config)
        return StartDeploymentResponseDTO(
            deployment_id=job.id,
            scope=resolved.label,
            estimated_duration=self._orchestrator.estimated_duration,
            tracking_url=f"/deploy/status?id={job.id}",
        )

    async def get(self, job_id: str) -> DeploymentJobDTO:
        return DeploymentJobDTO.from_domain(await self._orchestrator.get_status(job_id))

    async def list(self, limit: int = 100) -> List[DeploymentJobSummaryDTO]:
        jobs = await self._orchestrator.list_jobs(limit=limit)
        return [DeploymentJobSummaryDTO.from_domain(job) for job in jobs]
