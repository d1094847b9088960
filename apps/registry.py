"""
In-memory datastream registry.

Owns name uniqueness and storage of bound definitions. Each create call hands
the definition to the connector of its type for validation and stores the
validated copy.

Future: back this with a persistent store shared between API replicas.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable

from engine.connectors import DatastreamConnector
from engine.schemas import StreamDefinition

LOGGER = logging.getLogger("streambind.registry")


class RegistryError(Exception):
  pass


class DatastreamExistsError(RegistryError):
  pass


class DatastreamNotFoundError(RegistryError):
  pass


class UnknownConnectorError(RegistryError):
  pass


class DatastreamRegistry:
  """Registers stream definitions after their connector has bound them."""

  def __init__(self, connectors: Iterable[DatastreamConnector] = ()):
    self._connectors: dict[str, DatastreamConnector] = {}
    self._datastreams: dict[str, StreamDefinition] = {}
    self._lock = threading.Lock()
    for connector in connectors:
      self.add_connector(connector)

  def add_connector(self, connector: DatastreamConnector) -> None:
    self._connectors[connector.connector_type] = connector

  def connector_for(self, definition: StreamDefinition) -> DatastreamConnector:
    connector = self._connectors.get(definition.connector_type)
    if not connector:
      raise UnknownConnectorError(
        f"No connector registered for type '{definition.connector_type}'"
      )
    return connector

  def validate(self, definition: StreamDefinition) -> StreamDefinition:
    """Dry run: bind a copy of `definition` without registering it."""
    connector = self.connector_for(definition)
    candidate = definition.model_copy(deep=True)
    return connector.initialize_datastream(candidate, self.list())

  def create(self, definition: StreamDefinition) -> StreamDefinition:
    connector = self.connector_for(definition)
    with self._lock:
      if definition.name in self._datastreams:
        raise DatastreamExistsError(f"Datastream '{definition.name}' already exists")
      existing = list(self._datastreams.values())

    # Binding may block on cluster I/O, so it runs outside the lock.
    validated = connector.initialize_datastream(definition, existing)

    with self._lock:
      if definition.name in self._datastreams:
        raise DatastreamExistsError(f"Datastream '{definition.name}' already exists")
      self._datastreams[definition.name] = validated
    LOGGER.info("Registered datastream %s", definition.name)
    return validated

  def get(self, name: str) -> StreamDefinition:
    with self._lock:
      definition = self._datastreams.get(name)
    if definition is None:
      raise DatastreamNotFoundError(f"Datastream '{name}' not found")
    return definition

  def list(self) -> list[StreamDefinition]:
    with self._lock:
      return list(self._datastreams.values())

  def delete(self, name: str) -> None:
    with self._lock:
      if self._datastreams.pop(name, None) is None:
        raise DatastreamNotFoundError(f"Datastream '{name}' not found")
    LOGGER.info("Deleted datastream %s", name)


__all__ = [
  "DatastreamRegistry",
  "RegistryError",
  "DatastreamExistsError",
  "DatastreamNotFoundError",
  "UnknownConnectorError",
]
