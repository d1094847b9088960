"""
Connector configuration.

Built once per connector instance from a flat properties bag (or the
environment) and immutable afterwards. All parsing happens here, eagerly.
"""
from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from engine.errors import ConfigError
from engine.metadata.registry import get_metadata_client_factory

# Property keys
CONFIG_DEFAULT_KEY_SERDE = "defaultKeySerde"
CONFIG_DEFAULT_VALUE_SERDE = "defaultValueSerde"
CONFIG_COMMIT_INTERVAL_MS = "commitIntervalMs"
CONFIG_WHITELISTED_CLUSTERS = "whiteListedClusters"
CONFIG_METADATA_CLIENT_FACTORY = "metadataClientFactory"
CONFIG_METADATA_TIMEOUT_SEC = "metadataTimeoutSec"
CONFIG_CLIENT_PREFIX = "client."

ENV_PREFIX = "STREAMBIND_"

DEFAULT_COMMIT_INTERVAL_MS = 60_000
DEFAULT_METADATA_CLIENT_FACTORY = "kafka"
DEFAULT_METADATA_TIMEOUT_SEC = 10.0

_ENV_KEYS = {
  CONFIG_DEFAULT_KEY_SERDE: "DEFAULT_KEY_SERDE",
  CONFIG_DEFAULT_VALUE_SERDE: "DEFAULT_VALUE_SERDE",
  CONFIG_COMMIT_INTERVAL_MS: "COMMIT_INTERVAL_MS",
  CONFIG_WHITELISTED_CLUSTERS: "WHITELISTED_CLUSTERS",
  CONFIG_METADATA_CLIENT_FACTORY: "METADATA_CLIENT_FACTORY",
  CONFIG_METADATA_TIMEOUT_SEC: "METADATA_TIMEOUT_SEC",
}


def _split_csv(value: str) -> list[str]:
  return [item.strip() for item in value.split(",") if item.strip()]


class ConnectorConfig(BaseModel):
  model_config = ConfigDict(frozen=True)

  default_key_serde: str = Field(..., min_length=1)
  default_value_serde: str = Field(..., min_length=1)
  whitelisted_clusters: frozenset[str] = Field(
    default_factory=frozenset,
    description="Exact host:port allow-list; empty means unrestricted",
  )
  commit_interval_ms: int = Field(DEFAULT_COMMIT_INTERVAL_MS, gt=0)
  metadata_client_factory: str = DEFAULT_METADATA_CLIENT_FACTORY
  metadata_timeout_sec: float = Field(DEFAULT_METADATA_TIMEOUT_SEC, gt=0)
  client_properties: dict[str, str] = Field(default_factory=dict)

  @field_validator("metadata_client_factory")
  @classmethod
  def _known_factory(cls, value: str) -> str:
    get_metadata_client_factory(value)
    return value

  @classmethod
  def from_properties(cls, props: Mapping[str, str]) -> "ConnectorConfig":
    """
    Build a config from a flat string properties bag.

    Raises:
      ConfigError: a required key is missing or a value does not parse
    """
    values: dict[str, object] = {
      "default_key_serde": props.get(CONFIG_DEFAULT_KEY_SERDE),
      "default_value_serde": props.get(CONFIG_DEFAULT_VALUE_SERDE),
      "whitelisted_clusters": frozenset(_split_csv(props.get(CONFIG_WHITELISTED_CLUSTERS, ""))),
      "client_properties": {
        key[len(CONFIG_CLIENT_PREFIX):]: str(value)
        for key, value in props.items()
        if key.startswith(CONFIG_CLIENT_PREFIX)
      },
    }
    if props.get(CONFIG_COMMIT_INTERVAL_MS) is not None:
      values["commit_interval_ms"] = props[CONFIG_COMMIT_INTERVAL_MS]
    if props.get(CONFIG_METADATA_CLIENT_FACTORY):
      values["metadata_client_factory"] = props[CONFIG_METADATA_CLIENT_FACTORY]
    if props.get(CONFIG_METADATA_TIMEOUT_SEC) is not None:
      values["metadata_timeout_sec"] = props[CONFIG_METADATA_TIMEOUT_SEC]

    try:
      return cls(**values)
    except ValidationError as exc:
      raise ConfigError(f"Invalid connector configuration: {exc}") from exc

  @classmethod
  def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ConnectorConfig":
    """Build a config from STREAMBIND_* environment variables."""
    return cls.from_properties(env_properties(environ))


def env_properties(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
  """Properties bag read from STREAMBIND_* environment variables."""
  environ = os.environ if environ is None else environ
  return {
    key: environ[ENV_PREFIX + suffix]
    for key, suffix in _ENV_KEYS.items()
    if ENV_PREFIX + suffix in environ
  }


__all__ = [
  "ConnectorConfig",
  "env_properties",
  "CONFIG_DEFAULT_KEY_SERDE",
  "CONFIG_DEFAULT_VALUE_SERDE",
  "CONFIG_COMMIT_INTERVAL_MS",
  "CONFIG_WHITELISTED_CLUSTERS",
  "CONFIG_METADATA_CLIENT_FACTORY",
  "CONFIG_METADATA_TIMEOUT_SEC",
  "CONFIG_CLIENT_PREFIX",
]
