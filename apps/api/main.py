"""
FastAPI control plane for streambind.
REST endpoints to register, validate and manage datastreams.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apps.registry import (
  DatastreamExistsError,
  DatastreamNotFoundError,
  DatastreamRegistry,
  UnknownConnectorError,
)
from engine.config import ConnectorConfig
from engine.connectors import KafkaConnector
from engine.errors import ConfigError, DatastreamValidationError, InfrastructureError
from engine.schemas import StreamDefinition

LOGGER = logging.getLogger("streambind.api")


def build_registry() -> DatastreamRegistry:
  """Build the default registry from STREAMBIND_* environment variables."""
  config = ConnectorConfig.from_env()
  return DatastreamRegistry([KafkaConnector("kafka", config)])


def _error_response(status_code: int, kind: str, exc: Exception, datastream: Optional[str] = None) -> JSONResponse:
  return JSONResponse(
    status_code=status_code,
    content={
      "kind": kind,
      "message": getattr(exc, "message", str(exc)),
      "datastream": datastream,
    },
  )


def create_app(registry: Optional[DatastreamRegistry] = None) -> FastAPI:
  @asynccontextmanager
  async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    if getattr(app.state, "registry", None) is None:
      app.state.registry = build_registry()
    yield

  app = FastAPI(
    title="streambind API",
    description="Datastream registration and binding validation",
    version="0.1.0",
    lifespan=lifespan,
  )
  app.state.registry = registry

  @app.exception_handler(DatastreamValidationError)
  async def _validation_failed(request: Request, exc: DatastreamValidationError):
    return _error_response(400, exc.kind, exc, exc.datastream)

  @app.exception_handler(InfrastructureError)
  async def _infrastructure_unavailable(request: Request, exc: InfrastructureError):
    LOGGER.warning("Cluster unavailable while binding %s: %s", exc.datastream, exc.message)
    return _error_response(503, exc.kind, exc, exc.datastream)

  @app.exception_handler(ConfigError)
  async def _misconfigured(request: Request, exc: ConfigError):
    LOGGER.error("Connector misconfigured while binding %s: %s", exc.datastream, exc.message)
    return _error_response(500, exc.kind, exc, exc.datastream)

  @app.exception_handler(DatastreamExistsError)
  async def _exists(request: Request, exc: DatastreamExistsError):
    return _error_response(409, "datastream_exists", exc)

  @app.exception_handler(DatastreamNotFoundError)
  async def _not_found(request: Request, exc: DatastreamNotFoundError):
    return _error_response(404, "datastream_not_found", exc)

  @app.exception_handler(UnknownConnectorError)
  async def _unknown_connector(request: Request, exc: UnknownConnectorError):
    return _error_response(400, "unknown_connector", exc)

  # Sync handlers run in FastAPI's worker threadpool, so cluster lookups
  # never block the event loop.

  @app.get("/health")
  def health():
    return {"status": "ok"}

  @app.post("/datastreams", status_code=201)
  def create_datastream(definition: StreamDefinition, request: Request) -> StreamDefinition:
    return request.app.state.registry.create(definition)

  @app.post("/datastreams/validate")
  def validate_datastream(definition: StreamDefinition, request: Request) -> StreamDefinition:
    return request.app.state.registry.validate(definition)

  @app.get("/datastreams")
  def list_datastreams(request: Request) -> list[StreamDefinition]:
    return request.app.state.registry.list()

  @app.get("/datastreams/{name}")
  def get_datastream(name: str, request: Request) -> StreamDefinition:
    return request.app.state.registry.get(name)

  @app.delete("/datastreams/{name}", status_code=204)
  def delete_datastream(name: str, request: Request) -> None:
    request.app.state.registry.delete(name)

  return app


app = create_app()
