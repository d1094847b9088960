#!/usr/bin/env python3
"""
streambind CLI - validate a datastream definition against its cluster.

Usage:
  streambind validate definition.json [--config connector.json]
  streambind validate definition.json --topic events=3   # in-memory cluster
"""
import argparse
import json
import logging
import sys
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from engine.config import CONFIG_METADATA_CLIENT_FACTORY, ConnectorConfig, env_properties
from engine.connectors import KafkaConnector
from engine.errors import ConfigError, DatastreamValidationError, InfrastructureError
from engine.metadata import default_cluster
from engine.schemas import StreamDefinition

console = Console()

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_INFRASTRUCTURE = 2
EXIT_CONFIG = 3


def _load_json(path: str) -> Any:
  if path == "-":
    return json.load(sys.stdin)
  with open(path, "r", encoding="utf-8") as fh:
    return json.load(fh)


def load_config(path: Optional[str], in_memory: bool) -> ConnectorConfig:
  """Connector config from a JSON properties file, falling back to the environment."""
  if path:
    try:
      props = {key: str(value) for key, value in _load_json(path).items()}
    except (OSError, ValueError, AttributeError) as e:
      raise ConfigError(f"Could not read connector config {path}: {e}") from e
  else:
    props = env_properties()
  if in_memory:
    props[CONFIG_METADATA_CLIENT_FACTORY] = "memory"
  return ConnectorConfig.from_properties(props)


def seed_topics(topics: list[str]) -> None:
  for entry in topics:
    name, _, partitions = entry.partition("=")
    if not name or not partitions.isdigit():
      raise ConfigError(f"--topic expects NAME=PARTITIONS, got '{entry}'")
    default_cluster.create_topic(name, int(partitions))


def render_definition(definition: StreamDefinition) -> Table:
  table = Table(title=f"Datastream {definition.name}", show_header=False)
  table.add_column("Field", style="cyan")
  table.add_column("Value")
  table.add_row("connector", definition.connector_type)
  table.add_row("source", definition.source.connection_string)
  table.add_row("partitions", str(definition.source.partition_count))
  table.add_row("destination", definition.destination.connection_string)
  table.add_row("key serde", definition.destination.key_serde or "")
  table.add_row("value serde", definition.destination.value_serde or "")
  for key, value in sorted(definition.metadata.items()):
    table.add_row(f"metadata[{key}]", value)
  return table


def cmd_validate(args: argparse.Namespace) -> int:
  try:
    seed_topics(args.topic)
    config = load_config(args.config, bool(args.topic))
  except ConfigError as e:
    console.print(f"[red]Configuration error:[/] {e.message}")
    return EXIT_CONFIG

  try:
    definition = StreamDefinition.model_validate(_load_json(args.definition))
  except (OSError, ValueError, ValidationError) as e:
    console.print(f"[red]Could not read definition {args.definition}:[/] {e}")
    return EXIT_INVALID

  connector = KafkaConnector(args.connector_name, config)
  try:
    connector.initialize_datastream(definition, [])
  except DatastreamValidationError as e:
    console.print(Panel(str(e), title=f"[red]invalid: {e.kind}[/]", subtitle=getattr(e.step, "value", None)))
    return EXIT_INVALID
  except InfrastructureError as e:
    console.print(Panel(str(e), title="[yellow]cluster unavailable (retry later)[/]"))
    return EXIT_INFRASTRUCTURE
  except ConfigError as e:
    console.print(f"[red]Configuration error:[/] {e}")
    return EXIT_CONFIG

  if args.json:
    console.out(definition.model_dump_json(indent=2), highlight=False)
  else:
    console.print(render_definition(definition))
  return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(description="streambind - datastream binding validator")
  parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
  sub = parser.add_subparsers(dest="command", required=True)

  validate = sub.add_parser("validate", help="Validate and enrich a datastream definition")
  validate.add_argument("definition", help="Definition JSON file ('-' for stdin)")
  validate.add_argument("--config", help="Connector properties JSON file (default: STREAMBIND_* env)")
  validate.add_argument("--connector-name", default="kafka", help="Connector instance name")
  validate.add_argument(
    "--topic",
    action="append",
    default=[],
    help="NAME=PARTITIONS; validate against an in-memory cluster holding these topics",
  )
  validate.add_argument("--json", action="store_true", help="Print the enriched definition as JSON")
  validate.set_defaults(func=cmd_validate)
  return parser


def main(argv: Optional[list[str]] = None) -> int:
  args = build_parser().parse_args(argv)
  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.WARNING,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
  )
  return args.func(args)


if __name__ == "__main__":
  sys.exit(main())
