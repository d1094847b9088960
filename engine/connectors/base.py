from __future__ import annotations

import abc
from typing import Sequence

from ..errors import ConnectorMismatchError
from ..schemas import StreamDefinition


class DatastreamConnector(abc.ABC):
    """A connector binds stream definitions of its own type to a source system."""

    connector_type: str

    def __init__(self, name: str) -> None:
        self.name = name

    @abc.abstractmethod
    def initialize_datastream(
        self,
        definition: StreamDefinition,
        existing_definitions: Sequence[StreamDefinition] = (),
    ) -> StreamDefinition:
        """
        Validate and enrich a stream definition at registration time.

        Returns the validated definition on success. Raises a
        DatastreamValidationError subclass for permanent failures and
        InfrastructureError when the source system cannot be reached.
        """
        raise NotImplementedError

    def _check_connector_type(self, definition: StreamDefinition) -> None:
        if definition.connector_type != self.connector_type:
            raise ConnectorMismatchError(
                f"connector type '{definition.connector_type}' does not match "
                f"connector '{self.name}' of type '{self.connector_type}'",
                datastream=definition.name,
            )
