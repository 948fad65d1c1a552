"""Seoul bus information API adapters."""

from blindroute.adapters.seoul_bus_api.http_client import SeoulBusHttpClient
from blindroute.adapters.seoul_bus_api.seoul_bus_registry import SeoulBusRegistry

__all__ = ["SeoulBusHttpClient", "SeoulBusRegistry"]
