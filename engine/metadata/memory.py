from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, Optional, Sequence, Tuple

from ..errors import InfrastructureError

# Lookups kept in InMemoryCluster.calls; older entries are dropped.
MAX_RECORDED_CALLS = 1000


class InMemoryCluster:
    """Topic -> partition count table standing in for a real cluster."""

    def __init__(self, topics: Optional[Dict[str, int]] = None, max_calls: int = MAX_RECORDED_CALLS) -> None:
        self._topics: Dict[str, int] = dict(topics or {})
        self._lock = threading.Lock()
        self.reachable: bool = True
        self.calls: Deque[Tuple[str, Tuple[str, ...], str]] = deque(maxlen=max_calls)

    def create_topic(self, topic: str, partitions: int = 1) -> None:
        if partitions < 1:
            raise ValueError("partitions must be >= 1")
        with self._lock:
            self._topics[topic] = partitions

    def delete_topic(self, topic: str) -> None:
        with self._lock:
            self._topics.pop(topic, None)

    def lookup(self, op: str, brokers: Sequence[str], topic: str) -> Optional[int]:
        with self._lock:
            self.calls.append((op, tuple(brokers), topic))
            if not self.reachable:
                raise InfrastructureError(f"Cluster {','.join(brokers)} is unreachable")
            return self._topics.get(topic)

    def reset_calls(self) -> None:
        with self._lock:
            self.calls.clear()


class InMemoryMetadataClient:
    def __init__(self, cluster: InMemoryCluster) -> None:
        self.cluster = cluster

    def topic_exists(self, brokers: Sequence[str], topic: str) -> bool:
        return self.cluster.lookup("topic_exists", brokers, topic) is not None

    def partition_count(self, brokers: Sequence[str], topic: str) -> int:
        return self.cluster.lookup("partition_count", brokers, topic) or 0


# Backs the "memory" factory identifier.
default_cluster = InMemoryCluster()
