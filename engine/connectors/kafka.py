"""
Kafka connector: binds stream definitions to Kafka topics.

Binding runs a fixed sequence of steps against a private copy of the
definition:

  PARSING -> WHITELIST_CHECK -> METADATA_LOOKUP -> TOPIC_CHECK
    -> SERDE_DEFAULTING -> START_POSITION_CHECK -> VALID

The first failing step moves the binding to INVALID and its error is raised,
annotated with the definition name and the step. The caller's definition is
only touched once every step has passed.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .base import DatastreamConnector
from ..config import ConnectorConfig
from ..connection_string import KafkaConnectionString, parse_connection_string
from ..errors import (
    InfrastructureError,
    MalformedSourceError,
    StreamBindError,
    TopicNotFoundError,
)
from ..metadata import MetadataClientFactory, get_metadata_client_factory
from ..schemas import BindingState, StreamDefinition
from ..serde import populate_serde_defaults
from ..start_position import validate_start_position
from ..whitelist import BrokerWhitelist

LOGGER = logging.getLogger("streambind.binding")

SUPPORTED_SCHEMES = frozenset({"kafka", "kafkassl"})


class KafkaConnector(DatastreamConnector):
    connector_type = "Kafka"

    def __init__(
        self,
        name: str,
        config: ConnectorConfig,
        *,
        metadata_client_factory: Optional[MetadataClientFactory] = None,
    ) -> None:
        super().__init__(name)
        self.config = config
        self._whitelist = BrokerWhitelist(config.whitelisted_clusters)
        self._client_factory = metadata_client_factory or get_metadata_client_factory(
            config.metadata_client_factory
        )

    @property
    def commit_interval_ms(self) -> int:
        return self.config.commit_interval_ms

    def initialize_datastream(
        self,
        definition: StreamDefinition,
        existing_definitions: Sequence[StreamDefinition] = (),
    ) -> StreamDefinition:
        self._check_connector_type(definition)
        LOGGER.debug(
            "Binding datastream %s (%d existing definitions)",
            definition.name,
            len(existing_definitions),
        )
        validated = self.validate(definition)
        definition.adopt(validated)
        LOGGER.info(
            "Datastream %s bound to %s (%d partitions)",
            definition.name,
            definition.source.connection_string,
            definition.source.partition_count,
        )
        return validated

    def validate(self, definition: StreamDefinition) -> StreamDefinition:
        """Run every binding step on a copy of `definition` and return the copy."""
        working = definition.model_copy(deep=True)
        state = BindingState.PARSING
        try:
            connection = self._parse_source(working)

            state = self._advance(working, state, BindingState.WHITELIST_CHECK)
            self._whitelist.check(connection.brokers)

            state = self._advance(working, state, BindingState.METADATA_LOOKUP)
            client = self._client_factory(connection.broker_list, self.config)
            exists = self._lookup(client.topic_exists, connection)
            partition_count = self._lookup(client.partition_count, connection) if exists else 0

            state = self._advance(working, state, BindingState.TOPIC_CHECK)
            self._check_topic(connection, exists, partition_count)
            working.source.partition_count = partition_count

            state = self._advance(working, state, BindingState.SERDE_DEFAULTING)
            populate_serde_defaults(
                working.destination,
                self.config.default_key_serde,
                self.config.default_value_serde,
            )

            state = self._advance(working, state, BindingState.START_POSITION_CHECK)
            validate_start_position(working.metadata, partition_count)
        except StreamBindError as exc:
            self._advance(working, state, BindingState.INVALID)
            LOGGER.warning("Rejected datastream %s at %s: %s", definition.name, state.value, exc.message)
            raise exc.annotate(definition.name, state)

        self._advance(working, state, BindingState.VALID)
        return working

    @staticmethod
    def _advance(working: StreamDefinition, current: BindingState, nxt: BindingState) -> BindingState:
        LOGGER.debug("Datastream %s: %s -> %s", working.name, current.value, nxt.value)
        return nxt

    @staticmethod
    def _parse_source(working: StreamDefinition) -> KafkaConnectionString:
        connection = parse_connection_string(working.source.connection_string)
        if connection.scheme.lower() not in SUPPORTED_SCHEMES:
            raise MalformedSourceError(
                f"Unsupported scheme '{connection.scheme}' in source "
                f"'{working.source.connection_string}' (expected one of {', '.join(sorted(SUPPORTED_SCHEMES))})"
            )
        return connection

    @staticmethod
    def _lookup(call, connection: KafkaConnectionString):
        try:
            return call(connection.broker_list, connection.topic)
        except OSError as exc:
            raise InfrastructureError(
                f"Metadata lookup for '{connection.topic}' failed: {exc}"
            ) from exc

    @staticmethod
    def _check_topic(connection: KafkaConnectionString, exists: bool, partition_count: int) -> None:
        brokers = ",".join(connection.broker_list)
        if not exists:
            raise TopicNotFoundError(f"Topic '{connection.topic}' does not exist on {brokers}")
        if partition_count < 1:
            raise TopicNotFoundError(f"Topic '{connection.topic}' reports no partitions on {brokers}")
