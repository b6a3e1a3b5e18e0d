"""DTOs for system management endpoints."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class RestartRequestDTO(BaseModel):
    force: bool = Field(default=False, description="Restart even if busy")


class RestartResponseDTO(BaseModel):
    success: bool
    service: str
    message: str
    restart_result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    timestamp: datetime
