"""Default serde population for stream destinations."""
from __future__ import annotations

from engine.schemas import StreamDestination


def populate_serde_defaults(
  destination: StreamDestination,
  key_serde: str,
  value_serde: str,
) -> StreamDestination:
  """Fill unset key/value serdes with the configured defaults. Caller values win."""
  if not destination.key_serde:
    destination.key_serde = key_serde
  if not destination.value_serde:
    destination.value_serde = value_serde
  return destination


__all__ = ["populate_serde_defaults"]
