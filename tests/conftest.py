import pytest

from engine.config import ConnectorConfig
from engine.connectors import KafkaConnector
from engine.metadata import InMemoryCluster, InMemoryMetadataClient
from engine.schemas import StreamDefinition, StreamDestination, StreamSource

BROKER = "localhost:9092"


def make_definition(name: str, topic: str, broker: str = BROKER, **metadata: str) -> StreamDefinition:
  return StreamDefinition(
    name=name,
    connector_type="Kafka",
    source=StreamSource(connection_string=f"kafka://{broker}/{topic}"),
    destination=StreamDestination(connection_string="whatever://bob"),
    metadata=dict(metadata),
  )


def make_config(**overrides) -> ConnectorConfig:
  props = {
    "defaultKeySerde": "keySerde",
    "defaultValueSerde": "valueSerde",
    "commitIntervalMs": "10000",
    "metadataClientFactory": "memory",
  }
  props.update(overrides)
  return ConnectorConfig.from_properties(props)


@pytest.fixture
def cluster() -> InMemoryCluster:
  return InMemoryCluster()


@pytest.fixture
def connector_factory(cluster):
  def build(**overrides) -> KafkaConnector:
    return KafkaConnector(
      "test",
      make_config(**overrides),
      metadata_client_factory=lambda brokers, config: InMemoryMetadataClient(cluster),
    )
  return build


@pytest.fixture
def connector(connector_factory) -> KafkaConnector:
  return connector_factory()
