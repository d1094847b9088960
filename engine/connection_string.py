"""
Source connection string grammar.

  scheme://host1[:port1][,host2[:port2]...]/topicName

This string is persisted with every stream definition, so str() on a parsed
value must give back exactly the canonical form.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from engine.errors import MalformedSourceError

DEFAULT_BROKER_PORT = 9092
MAX_TOPIC_LENGTH = 249

_CONNECTION_RE = re.compile(r"^(?P<scheme>[a-zA-Z][a-zA-Z0-9+.-]*)://(?P<authority>[^/]*)(?:/(?P<path>.*))?$")
_BROKER_RE = re.compile(r"^(?P<host>[^:\s]+)(?::(?P<port>[^:]*))?$")
_TOPIC_RE = re.compile(r"^[a-zA-Z0-9._-]+$")
_PORT_RE = re.compile(r"[0-9]{1,5}")


@dataclass(frozen=True)
class BrokerAddress:
  host: str
  port: Optional[int] = None

  @property
  def address(self) -> str:
    """host:port, with the default broker port filled in."""
    return f"{self.host}:{self.port or DEFAULT_BROKER_PORT}"

  def __str__(self) -> str:
    if self.port is None:
      return self.host
    return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class KafkaConnectionString:
  scheme: str
  brokers: tuple[BrokerAddress, ...]
  topic: str

  @property
  def broker_list(self) -> list[str]:
    return [broker.address for broker in self.brokers]

  def __str__(self) -> str:
    brokers = ",".join(str(broker) for broker in self.brokers)
    return f"{self.scheme}://{brokers}/{self.topic}"


def _parse_broker(raw: str, value: str) -> BrokerAddress:
  entry = raw.strip()
  if not entry:
    raise MalformedSourceError(f"Empty broker entry in connection string '{value}'")

  match = _BROKER_RE.match(entry)
  if not match:
    raise MalformedSourceError(f"Invalid broker address '{entry}' in connection string '{value}'")

  port_text = match.group("port")
  if port_text is None:
    return BrokerAddress(host=match.group("host"))
  if not _PORT_RE.fullmatch(port_text) or not 0 < int(port_text) <= 65535:
    raise MalformedSourceError(f"Invalid port '{port_text:.20}' for broker '{entry}'")
  return BrokerAddress(host=match.group("host"), port=int(port_text))


def parse_connection_string(value: str) -> KafkaConnectionString:
  """
  Parse a source connection string into brokers and topic.

  Args:
    value: Connection string, e.g. "kafka://host1:9092,host2:9092/events"

  Returns:
    KafkaConnectionString with an ordered, non-empty broker tuple

  Raises:
    MalformedSourceError: missing authority or path, empty topic, bad broker
  """
  if not isinstance(value, str) or not value.strip():
    raise MalformedSourceError("Source connection string is empty")

  match = _CONNECTION_RE.match(value.strip())
  if not match:
    raise MalformedSourceError(f"Connection string '{value}' is not of the form scheme://brokers/topic")

  authority = match.group("authority")
  if not authority.strip():
    raise MalformedSourceError(f"Connection string '{value}' has no broker list")

  topic = match.group("path")
  if topic is None:
    raise MalformedSourceError(f"Connection string '{value}' has no topic path")
  if not topic:
    raise MalformedSourceError(f"Connection string '{value}' has an empty topic name")
  if len(topic) > MAX_TOPIC_LENGTH or not _TOPIC_RE.match(topic):
    raise MalformedSourceError(f"Illegal topic name '{topic}' in connection string '{value}'")

  brokers = tuple(_parse_broker(raw, value) for raw in authority.split(","))
  return KafkaConnectionString(
    scheme=match.group("scheme"),
    brokers=brokers,
    topic=topic,
  )


__all__ = [
  "DEFAULT_BROKER_PORT",
  "BrokerAddress",
  "KafkaConnectionString",
  "parse_connection_string",
]
