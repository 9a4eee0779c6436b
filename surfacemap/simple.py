"""A system that manages exactly one data source."""

from __future__ import annotations

import gc
import sys
import tracemalloc
from dataclasses import dataclass
from typing import Any

from .asncache import ASNCache
from .system import Service


@dataclass
class SimpleSystem:
    """A minimal system holding one service, one graph and the shared resources."""

    cfg: Any = None
    pool: Any = None
    trusted: Any = None
    graph: Any = None
    asn_cache: ASNCache | None = None
    service: Service | None = None

    def config(self) -> Any:
        return self.cfg

    def resolvers(self) -> Any:
        return self.pool

    def trusted_resolvers(self) -> Any:
        return self.trusted

    def cache(self) -> ASNCache | None:
        return self.asn_cache

    def add_source(self, src: Service) -> None:
        """Make src the system's data source."""
        self.service = src

    def add_and_start(self, srv: Service) -> None:
        """Start srv and, if it starts, make it the data source."""
        srv.start()
        self.add_source(srv)

    def data_sources(self) -> list[Service]:
        return [] if self.service is None else [self.service]

    def set_data_sources(self, sources: list[Service]) -> None:
        """Use the first of sources as the data source."""
        if not sources:
            raise ValueError("at least one data source is required")
        self.service = sources[0]

    def graph_databases(self) -> list[Any]:
        return [] if self.graph is None else [self.graph]

    def shutdown(self) -> None:
        """Stop the service and resolvers, close the graph and drop the cache."""
        if self.service is not None:
            self.service.stop()
        if self.graph is not None:
            self.graph.close()
        if self.pool is not None:
            self.pool.stop()
        self.asn_cache = None

    def get_memory_usage(self) -> int:
        """Return the number of bytes allocated to live objects."""
        if tracemalloc.is_tracing():
            current, _ = tracemalloc.get_traced_memory()
            return current
        return sum(sys.getsizeof(obj) for obj in gc.get_objects())