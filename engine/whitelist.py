"""
Broker whitelist enforcement.

Runs before any cluster access so that unauthorized clusters are never contacted.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from engine.connection_string import BrokerAddress
from engine.errors import DisallowedClusterError


class BrokerWhitelist:
  """Exact, case-sensitive host:port allow-list. Empty means unrestricted."""

  def __init__(self, entries: Iterable[str] = ()):
    self.entries = frozenset(entry for entry in entries if entry)

  @property
  def unrestricted(self) -> bool:
    return not self.entries

  def allows(self, address: str) -> bool:
    return self.unrestricted or address in self.entries

  def check(self, brokers: Sequence[BrokerAddress]) -> None:
    """
    Succeed if any broker matches the whitelist.

    Raises:
      DisallowedClusterError: naming the rejected broker addresses
    """
    if self.unrestricted:
      return
    addresses = [broker.address for broker in brokers]
    if any(self.allows(address) for address in addresses):
      return
    raise DisallowedClusterError(
      f"Cluster {', '.join(addresses)} is not whitelisted "
      f"(allowed: {', '.join(sorted(self.entries))})"
    )


__all__ = ["BrokerWhitelist"]
