from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from engine.config import ConnectorConfig


@runtime_checkable
class ClusterMetadataClient(Protocol):
    """
    Read-only view of a partitioned log cluster.

    Both calls raise InfrastructureError when the cluster cannot be reached;
    a missing topic is reported through topic_exists, never as an error.
    """

    def topic_exists(self, brokers: Sequence[str], topic: str) -> bool:
        ...

    def partition_count(self, brokers: Sequence[str], topic: str) -> int:
        ...


MetadataClientFactory = Callable[[Sequence[str], "ConnectorConfig"], ClusterMetadataClient]
