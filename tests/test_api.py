"""
Tests for the REST control plane.
"""
import json

import pytest
from fastapi.testclient import TestClient

from apps.api.main import create_app
from apps.registry import DatastreamRegistry
from conftest import make_config
from engine.connectors import KafkaConnector
from engine.errors import ConfigError
from engine.schemas import START_POSITION_KEY


def _body(name: str, topic: str, **metadata) -> dict:
  return {
    "name": name,
    "connector_type": "Kafka",
    "source": {"connection_string": f"kafka://localhost:9092/{topic}"},
    "destination": {"connection_string": "whatever://bob"},
    "metadata": metadata,
  }


@pytest.fixture
def client(connector):
  return TestClient(create_app(DatastreamRegistry([connector])))


def test_create_datastream(cluster, client):
  """Test that a valid definition is registered and returned enriched."""
  cluster.create_topic("orders", partitions=3)

  response = client.post("/datastreams", json=_body("orders", "orders"))

  assert response.status_code == 201
  data = response.json()
  assert data["source"]["partition_count"] == 3
  assert data["destination"]["key_serde"] == "keySerde"
  assert client.get("/datastreams/orders").json() == data
  assert [d["name"] for d in client.get("/datastreams").json()] == ["orders"]


def test_missing_topic_is_400(client):
  """Test that validation failures map to 400 with the error kind."""
  response = client.post("/datastreams", json=_body("ghost", "ghost"))

  assert response.status_code == 400
  assert response.json()["kind"] == "topic_not_found"
  assert response.json()["datastream"] == "ghost"


def test_invalid_partition_is_400(cluster, client):
  """Test that start position errors carry their own kind."""
  cluster.create_topic("T", partitions=1)
  body = _body("T", "T", **{START_POSITION_KEY: json.dumps({"5": 0})})

  response = client.post("/datastreams/validate", json=body)

  assert response.status_code == 400
  assert response.json()["kind"] == "invalid_partition"


def test_unreachable_cluster_is_503(cluster, client):
  """Test that infrastructure failures map to 503."""
  cluster.reachable = False

  response = client.post("/datastreams", json=_body("orders", "orders"))

  assert response.status_code == 503
  assert response.json()["kind"] == "infrastructure_error"


def test_duplicate_is_409_and_delete(cluster, client):
  """Test conflict on duplicate names and removal via DELETE."""
  cluster.create_topic("orders", partitions=1)
  client.post("/datastreams", json=_body("orders", "orders"))

  assert client.post("/datastreams", json=_body("orders", "orders")).status_code == 409
  assert client.delete("/datastreams/orders").status_code == 204
  assert client.get("/datastreams/orders").status_code == 404


def test_malformed_body_is_422(client):
  """Test that structurally invalid requests are rejected by FastAPI."""
  response = client.post("/datastreams", json={"name": "x"})

  assert response.status_code == 422


def test_client_misconfiguration_is_500():
  """Test that a rejected client configuration is a server-side error, not a retryable 503."""
  class MisconfiguredClient:
    def topic_exists(self, brokers, topic):
      raise ConfigError("Invalid Kafka client configuration: No such configuration property")

    def partition_count(self, brokers, topic):
      raise AssertionError("not reached")

  connector = KafkaConnector("kafka", make_config(), metadata_client_factory=lambda b, c: MisconfiguredClient())
  client = TestClient(create_app(DatastreamRegistry([connector])))

  response = client.post("/datastreams", json=_body("orders", "orders"))

  assert response.status_code == 500
  assert response.json()["kind"] == "config_error"
  assert response.json()["datastream"] == "orders"
