"""
fleetops - deployment orchestration and health monitoring control plane.

Layer Structure:
- Domain: Deployment jobs, health snapshots, alerts and metric samples
- Application: Orchestrator, health sweeps, alerting and metrics use cases
- Infrastructure: Probes, notification channels, stores and the scheduler
- Presentation: FastAPI controllers for the operations API
- Shared: Logging, environment helpers and cross-layer enums
- Main: Composition root, settings and process entry points
"""
