"""
Tests for the streambind CLI.
"""
import json

import pytest

import streambind_cli
from engine.errors import ConfigError
from engine.metadata import default_cluster
from engine.schemas import START_POSITION_KEY


@pytest.fixture(autouse=True)
def clean_cluster():
  default_cluster.delete_topic("orders")
  default_cluster.reachable = True
  yield
  default_cluster.delete_topic("orders")
  default_cluster.reachable = True


@pytest.fixture
def files(tmp_path):
  definition = tmp_path / "ds.json"
  definition.write_text(json.dumps({
    "name": "orders",
    "connector_type": "Kafka",
    "source": {"connection_string": "kafka://localhost:9092/orders"},
    "destination": {"connection_string": "whatever://bob"},
  }))
  config = tmp_path / "connector.json"
  config.write_text(json.dumps({
    "defaultKeySerde": "keySerde",
    "defaultValueSerde": "valueSerde",
    "commitIntervalMs": 10000,
  }))
  return definition, config


def test_validate_success(files, capsys):
  """Test that a valid definition exits 0 and prints the enriched JSON."""
  definition, config = files

  code = streambind_cli.main([
    "validate", str(definition), "--config", str(config), "--topic", "orders=2", "--json",
  ])

  assert code == streambind_cli.EXIT_OK
  out = json.loads(capsys.readouterr().out)
  assert out["source"]["partition_count"] == 2
  assert out["destination"]["value_serde"] == "valueSerde"


def test_validate_missing_topic(files):
  """Test that validation failures exit 1."""
  definition, config = files

  code = streambind_cli.main([
    "validate", str(definition), "--config", str(config), "--topic", "other=1",
  ])

  assert code == streambind_cli.EXIT_INVALID


def test_validate_bad_start_position(files, tmp_path):
  """Test that an out-of-range start position exits 1."""
  definition, config = files
  data = json.loads(definition.read_text())
  data["metadata"] = {START_POSITION_KEY: json.dumps({"3": 0})}
  definition.write_text(json.dumps(data))

  code = streambind_cli.main([
    "validate", str(definition), "--config", str(config), "--topic", "orders=1",
  ])

  assert code == streambind_cli.EXIT_INVALID


def test_validate_unreachable_cluster(files):
  """Test that infrastructure failures exit 2."""
  definition, config = files
  default_cluster.reachable = False

  code = streambind_cli.main([
    "validate", str(definition), "--config", str(config), "--topic", "orders=1",
  ])

  assert code == streambind_cli.EXIT_INFRASTRUCTURE


def test_bad_config_exits_3(files, tmp_path):
  """Test that configuration errors exit 3."""
  definition, _ = files
  config = tmp_path / "bad.json"
  config.write_text(json.dumps({"defaultKeySerde": "k", "defaultValueSerde": "v", "commitIntervalMs": "x"}))

  code = streambind_cli.main(["validate", str(definition), "--config", str(config)])

  assert code == streambind_cli.EXIT_CONFIG


def test_bad_topic_option_exits_3(files):
  """Test that a malformed --topic value is a configuration error."""
  definition, config = files

  code = streambind_cli.main(["validate", str(definition), "--config", str(config), "--topic", "orders"])

  assert code == streambind_cli.EXIT_CONFIG


def test_client_misconfiguration_exits_3(files, monkeypatch):
  """Test that a configuration rejected at lookup time exits 3 rather than 2."""
  definition, config = files

  def reject(op, brokers, topic):
    raise ConfigError("Invalid Kafka client configuration: No such configuration property")

  monkeypatch.setattr(default_cluster, "lookup", reject)

  code = streambind_cli.main([
    "validate", str(definition), "--config", str(config), "--topic", "orders=1",
  ])

  assert code == streambind_cli.EXIT_CONFIG
