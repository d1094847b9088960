"""
Metadata client factory registry.

ConnectorConfig names a factory by identifier; each factory is called once per
binding call with the broker list and the connector config.
"""
from __future__ import annotations

from typing import Sequence

from engine.metadata.base import ClusterMetadataClient, MetadataClientFactory
from engine.metadata.kafka import KafkaAdminMetadataClient
from engine.metadata.memory import InMemoryMetadataClient, default_cluster


def _kafka_factory(brokers: Sequence[str], config) -> ClusterMetadataClient:
  return KafkaAdminMetadataClient(
    timeout_sec=config.metadata_timeout_sec,
    properties=config.client_properties,
  )


def _memory_factory(brokers: Sequence[str], config) -> ClusterMetadataClient:
  return InMemoryMetadataClient(default_cluster)


METADATA_CLIENT_REGISTRY: dict[str, MetadataClientFactory] = {
  "kafka": _kafka_factory,
  "memory": _memory_factory,
}


def register_metadata_client_factory(name: str, factory: MetadataClientFactory) -> None:
  METADATA_CLIENT_REGISTRY[name.lower()] = factory


def get_metadata_client_factory(name: str) -> MetadataClientFactory:
  factory = METADATA_CLIENT_REGISTRY.get(name.lower())
  if not factory:
    raise ValueError(f"No metadata client factory registered as '{name}'")
  return factory


__all__ = [
  "METADATA_CLIENT_REGISTRY",
  "register_metadata_client_factory",
  "get_metadata_client_factory",
]
