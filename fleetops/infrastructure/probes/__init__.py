"""Health probe implementations."""

from .http_probe import HttpHealthProbe
from .mongo_probe import MongoHealthProbe
from .redis_probe import RedisHealthProbe
from .scheme_routing_probe import SchemeRoutingHealthProbe

__all__ = [
    "HttpHealthProbe",
    "MongoHealthProbe",
    "RedisHealthProbe",
    "SchemeRoutingHealthProbe",
]
