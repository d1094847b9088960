"""Datastream binding engine."""
from .config import ConnectorConfig
from .connectors import DatastreamConnector, KafkaConnector
from .errors import (
  ConfigError,
  ConnectorMismatchError,
  DatastreamValidationError,
  DisallowedClusterError,
  InfrastructureError,
  InvalidOffsetError,
  InvalidPartitionError,
  MalformedSourceError,
  MalformedStartPositionError,
  StreamBindError,
  TopicNotFoundError,
)
from .schemas import (
  START_POSITION_KEY,
  BindingState,
  StreamDefinition,
  StreamDestination,
  StreamSource,
)

__all__ = [
  "ConnectorConfig",
  "DatastreamConnector",
  "KafkaConnector",
  "ConfigError",
  "ConnectorMismatchError",
  "DatastreamValidationError",
  "DisallowedClusterError",
  "InfrastructureError",
  "InvalidOffsetError",
  "InvalidPartitionError",
  "MalformedSourceError",
  "MalformedStartPositionError",
  "StreamBindError",
  "TopicNotFoundError",
  "START_POSITION_KEY",
  "BindingState",
  "StreamDefinition",
  "StreamDestination",
  "StreamSource",
]
