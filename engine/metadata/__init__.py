from .base import ClusterMetadataClient, MetadataClientFactory
from .kafka import KafkaAdminMetadataClient
from .memory import InMemoryCluster, InMemoryMetadataClient, default_cluster
from .registry import (
    METADATA_CLIENT_REGISTRY,
    get_metadata_client_factory,
    register_metadata_client_factory,
)

__all__ = [
    "ClusterMetadataClient",
    "MetadataClientFactory",
    "KafkaAdminMetadataClient",
    "InMemoryCluster",
    "InMemoryMetadataClient",
    "default_cluster",
    "METADATA_CLIENT_REGISTRY",
    "get_metadata_client_factory",
    "register_metadata_client_factory",
]
