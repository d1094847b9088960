from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

# Metadata key carrying a JSON object of partition -> starting offset.
START_POSITION_KEY = "system.start.position"


class BindingState(str, Enum):
  PARSING = "parsing"
  WHITELIST_CHECK = "whitelist_check"
  METADATA_LOOKUP = "metadata_lookup"
  TOPIC_CHECK = "topic_check"
  SERDE_DEFAULTING = "serde_defaulting"
  START_POSITION_CHECK = "start_position_check"
  VALID = "valid"
  INVALID = "invalid"


# ---------------------------------------------------------------------
# Stream definition
# ---------------------------------------------------------------------


class StreamSource(BaseModel):
  connection_string: str = Field(description="scheme://broker1,broker2/topicName")
  partition_count: Optional[int] = Field(
    None,
    description="Discovered partition count; populated during binding",
  )


class StreamDestination(BaseModel):
  connection_string: str
  key_serde: Optional[str] = None
  value_serde: Optional[str] = None


class StreamDefinition(BaseModel):
  """
  Logical request to move data from a source topic to a destination.

  The registry owns persistence and name uniqueness; the binding engine only
  validates and enriches a definition in place.
  """

  name: str = Field(..., min_length=1)
  connector_type: str
  source: StreamSource
  destination: StreamDestination
  metadata: dict[str, str] = Field(default_factory=dict)

  def adopt(self, other: "StreamDefinition") -> None:
    """Replace this definition's contents with a validated copy."""
    self.source = other.source
    self.destination = other.destination
    self.metadata = other.metadata


__all__ = [
  "START_POSITION_KEY",
  "BindingState",
  "StreamSource",
  "StreamDestination",
  "StreamDefinition",
]
