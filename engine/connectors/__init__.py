from .base import DatastreamConnector
from .kafka import KafkaConnector

__all__ = [
    "DatastreamConnector",
    "KafkaConnector",
]
