"""DTOs for performance metrics."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from fleetops.domain.entities.metrics import MetricSample

Reading = Optional[Union[int, float]]


class MetricSampleDTO(BaseModel):
    timestamp: datetime
    system: Dict[str, Reading] = Field(default_factory=dict)
    agents: Dict[str, Reading] = Field(default_factory=dict)
    api: Dict[str, Reading] = Field(default_factory=dict)
    business: Dict[str, Reading] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, sample: MetricSample) -> "MetricSampleDTO":
        return cls(
            timestamp=sample.timestamp,
            system=dict(sample.system),
            agents=dict(sample.agents),
            api=dict(sample.api),
            business=dict(sample.business),
        )


class PerformanceMetricsDTO(BaseModel):
    """DTO representing the /metrics/performance response payload."""

    timeframe: str
    window_start: datetime
    window_end: datetime
    metrics_count: int
    performance_data: List[MetricSampleDTO] = Field(default_factory=list)
    summary: Dict[str, Any] = Field(default_factory=dict)
    trends: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
