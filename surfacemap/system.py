"""The interface shared by systems that manage reconnaissance services."""

from __future__ import annotations

import queue
import threading
import time
from typing import Any, Protocol, runtime_checkable

from .asncache import ASNCache
from .requests import ASNRequest

_QUERY_DELAY = 1.0


@runtime_checkable
class Service(Protocol):
    """A data source that takes requests on one queue and answers on another."""

    input: queue.Queue
    output: queue.Queue

    def start(self) -> None:
        """Start the service; raise when it cannot run."""

    def stop(self) -> None:
        """Stop the service."""


@runtime_checkable
class System(Protocol):
    """Manages the services, resolvers, cache and graphs of an enumeration."""

    def config(self) -> Any:
        """Return the configuration for the enumeration."""

    def resolvers(self) -> Any:
        """Return the pool of untrusted DNS resolvers."""

    def trusted_resolvers(self) -> Any:
        """Return the pool of trusted DNS resolvers."""

    def cache(self) -> ASNCache | None:
        """Return the ASN cache populated by the system."""

    def add_source(self, src: Service) -> None:
        """Add a data source to those managed by the system."""

    def add_and_start(self, srv: Service) -> None:
        """Start a data source, then add it to the system."""

    def data_sources(self) -> list[Service]:
        """Return the data sources managed by the system."""

    def set_data_sources(self, sources: list[Service]) -> None:
        """Assign the data sources the system will use."""

    def graph_databases(self) -> list[Any]:
        """Return the graphs used by the system."""

    def get_memory_usage(self) -> int:
        """Return the number of bytes allocated to live objects."""

    def shutdown(self) -> None:
        """Shut the system down."""


def populate_cache(
    asn: int, system: System, stop_event: threading.Event | None = None
) -> None:
    """Ask every data source about asn and store any ASN answers in the system cache.

    Each source is given a second to answer. Once stop_event is set, answers
    are no longer collected.
    """
    for src in system.data_sources():
        src.input.put(ASNRequest(asn=asn))
        if stop_event is None:
            time.sleep(_QUERY_DELAY)
        else:
            stop_event.wait(_QUERY_DELAY)

        if stop_event is not None and stop_event.is_set():
            continue
        try:
            answer = src.output.get_nowait()
        except queue.Empty:
            continue
        if isinstance(answer, ASNRequest):
            cache = system.cache()
            if cache is not None:
                cache.update(answer)