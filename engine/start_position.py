"""
Start position validation.

A start position is carried in definition metadata under START_POSITION_KEY as a
JSON object mapping partition index to starting offset, e.g. '{"0": 100}'.
"""
from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional

from engine.errors import (
  InvalidOffsetError,
  InvalidPartitionError,
  MalformedStartPositionError,
)
from engine.schemas import START_POSITION_KEY

_PARTITION_RE = re.compile(r"^-?[0-9]+$")


def parse_start_position(raw: str) -> dict[int, int]:
  """Decode a start position value into {partition: offset}."""
  try:
    decoded: Any = json.loads(raw)
  except (TypeError, ValueError, RecursionError) as exc:
    raise MalformedStartPositionError(f"Start position '{raw:.80}' is not valid JSON") from exc

  if not isinstance(decoded, dict):
    raise MalformedStartPositionError(
      f"Start position must be a JSON object of partition -> offset, got {type(decoded).__name__}"
    )

  offsets: dict[int, int] = {}
  for key, value in decoded.items():
    if not _PARTITION_RE.match(key.strip()):
      raise MalformedStartPositionError(f"Start position partition '{key}' is not an integer")
    # bool is an int subclass; JSON true/false is not an offset
    if isinstance(value, bool) or not isinstance(value, int):
      raise MalformedStartPositionError(
        f"Start position offset for partition {key} is not an integer: {value!r}"
      )
    try:
      partition = int(key)
    except ValueError as exc:
      # past the interpreter's int conversion digit limit
      raise MalformedStartPositionError(f"Start position partition '{key:.80}' is out of range") from exc
    if partition in offsets:
      raise MalformedStartPositionError(f"Start position lists partition {partition} more than once")
    offsets[partition] = value
  return offsets


def validate_start_position(metadata: Mapping[str, str], partition_count: int) -> Optional[dict[int, int]]:
  """
  Check a requested start position against the discovered partitions.

  Args:
    metadata: Stream definition metadata
    partition_count: Partition count reported by the cluster

  Returns:
    Parsed {partition: offset}, or None when no start position was requested

  Raises:
    MalformedStartPositionError: value is not a partition -> offset mapping
    InvalidPartitionError: a partition is negative or >= partition_count
    InvalidOffsetError: an offset is negative
  """
  if START_POSITION_KEY not in metadata:
    return None

  offsets = parse_start_position(metadata[START_POSITION_KEY])

  # All partitions first so a bad partition is reported whatever the offsets say.
  for partition in sorted(offsets):
    if partition < 0 or partition >= partition_count:
      raise InvalidPartitionError(
        f"Start position partition {partition} is out of range "
        f"(topic has {partition_count} partition{'s' if partition_count != 1 else ''})"
      )

  for partition, offset in sorted(offsets.items()):
    if offset < 0:
      raise InvalidOffsetError(f"Start position offset {offset} for partition {partition} is negative")

  return offsets


__all__ = ["parse_start_position", "validate_start_position"]
