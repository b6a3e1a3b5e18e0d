"""Metric samples kept by the metrics store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional, Union

Reading = Optional[Union[int, float]]


@dataclass(frozen=True)
class MetricSample:
    """Readings taken at one collection time, grouped by source."""

    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    system: Mapping[str, Reading] = field(default_factory=dict)
    agents: Mapping[str, Reading] = field(default_factory=dict)
    api: Mapping[str, Reading] = field(default_factory=dict)
    business: Mapping[str, Reading] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for group in ("system", "agents", "api", "business"):
            frozen = MappingProxyType(dict(getattr(self, group)))
            object.__setattr__(self, group, frozen)

    def reading(self, group: str, name: str) -> Reading:
        return getattr(self, group).get(name)
