from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi import HTTPException

from fleetops.application.dtos.system_dto import RestartRequestDTO
from fleetops.application.use_cases.system_use_cases import RestartServiceUseCase
from fleetops.presentation.controllers import system_controller


class _Controller:
    def __init__(self):
        self.forced = None

    async def restart(self, service: str, force: bool = False) -> Dict[str, Any]:
        self.forced = force
        return {"returncode": 0}


@pytest.mark.asyncio
async def test_restart_known_service_with_force():
    controller = _Controller()
    use_case = RestartServiceUseCase(controller, ["database"])

    result = await system_controller.restart_service(
        service="database",
        request=RestartRequestDTO(force=True),
        use_case=use_case,
    )

    assert result.success is True
    assert controller.forced is True


@pytest.mark.asyncio
async def test_restart_unknown_service_returns_404():
    use_case = RestartServiceUseCase(_Controller(), ["database"])

    with pytest.raises(HTTPException) as exc:
        await system_controller.restart_service(
            service="mainframe", request=None, use_case=use_case
        )

    assert exc.value.status_code == 404
    assert exc.value.detail["known_services"] == ["database"]
