"""
Error taxonomy for datastream binding.

Everything raised by the binding engine derives from StreamBindError.
DatastreamValidationError and its subclasses are permanent failures caused by
the content of a stream definition; InfrastructureError means the cluster
could not be asked and the caller may retry later.
"""
from __future__ import annotations

from typing import Any, Optional


class StreamBindError(Exception):
  """Base exception for streambind."""

  kind: str = "stream_bind_error"

  def __init__(self, message: str, *, datastream: Optional[str] = None, step: Any = None):
    super().__init__(message)
    self.message = message
    self.datastream = datastream
    self.step = step

  def annotate(self, datastream: str, step: Any) -> "StreamBindError":
    """Attach the definition name and failing binding step."""
    self.datastream = datastream
    self.step = step
    return self

  def to_dict(self) -> dict[str, Any]:
    return {
      "kind": self.kind,
      "message": self.message,
      "datastream": self.datastream,
      "step": getattr(self.step, "value", self.step),
    }

  def __str__(self) -> str:
    if self.datastream:
      return f"datastream '{self.datastream}': {self.message}"
    return self.message


class ConfigError(StreamBindError, ValueError):
  """Raised when connector configuration cannot be parsed."""

  kind = "config_error"


class DatastreamValidationError(StreamBindError):
  """Raised when a stream definition fails validation."""

  kind = "validation_failed"


class ConnectorMismatchError(DatastreamValidationError):
  kind = "connector_mismatch"


class MalformedSourceError(DatastreamValidationError):
  kind = "malformed_source"


class DisallowedClusterError(DatastreamValidationError):
  kind = "disallowed_cluster"


class TopicNotFoundError(DatastreamValidationError):
  kind = "topic_not_found"


class MalformedStartPositionError(DatastreamValidationError):
  kind = "malformed_start_position"


class InvalidPartitionError(DatastreamValidationError):
  kind = "invalid_partition"


class InvalidOffsetError(DatastreamValidationError):
  kind = "invalid_offset"


class InfrastructureError(StreamBindError):
  """Raised when the log cluster cannot be reached. Retryable."""

  kind = "infrastructure_error"


__all__ = [
  "StreamBindError",
  "ConfigError",
  "DatastreamValidationError",
  "ConnectorMismatchError",
  "MalformedSourceError",
  "DisallowedClusterError",
  "TopicNotFoundError",
  "MalformedStartPositionError",
  "InvalidPartitionError",
  "InvalidOffsetError",
  "InfrastructureError",
]
