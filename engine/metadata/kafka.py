from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, TopicMetadata

from ..errors import ConfigError, InfrastructureError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 10.0


class KafkaAdminMetadataClient:
    """
    Topic metadata lookups through confluent-kafka's AdminClient.

    One instance serves one binding call; lookups for the same topic are
    answered from the first metadata response.
    """

    def __init__(
        self,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        properties: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._timeout_sec = timeout_sec
        self._properties: Dict[str, Any] = dict(properties or {})
        self._topics: Dict[tuple[str, str], Optional[TopicMetadata]] = {}

    def _admin(self, brokers: Sequence[str]) -> AdminClient:
        conf: Dict[str, Any] = dict(self._properties)
        conf["bootstrap.servers"] = ",".join(brokers)
        try:
            return AdminClient(conf)
        except KafkaException as exc:
            # librdkafka rejects unknown or invalid client.* properties here
            raise ConfigError(f"Invalid Kafka client configuration: {exc}") from exc

    def _describe(self, brokers: Sequence[str], topic: str) -> Optional[TopicMetadata]:
        key = (",".join(brokers), topic)
        if key in self._topics:
            return self._topics[key]

        admin = self._admin(brokers)
        try:
            cluster_metadata = admin.list_topics(topic=topic, timeout=self._timeout_sec)
        except KafkaException as exc:
            raise InfrastructureError(
                f"Unable to fetch metadata for topic '{topic}' from {key[0]}: {exc}"
            ) from exc

        topic_metadata = cluster_metadata.topics.get(topic)
        if topic_metadata is not None and topic_metadata.error is not None:
            if topic_metadata.error.code() != KafkaError.UNKNOWN_TOPIC_OR_PART:
                raise InfrastructureError(
                    f"Broker returned an error for topic '{topic}': {topic_metadata.error}"
                )
            topic_metadata = None

        logger.debug(
            "Kafka metadata for %s on %s: %s",
            topic,
            key[0],
            "missing" if topic_metadata is None else f"{len(topic_metadata.partitions)} partitions",
        )
        self._topics[key] = topic_metadata
        return topic_metadata

    def topic_exists(self, brokers: Sequence[str], topic: str) -> bool:
        return self._describe(brokers, topic) is not None

    def partition_count(self, brokers: Sequence[str], topic: str) -> int:
        topic_metadata = self._describe(brokers, topic)
        if topic_metadata is None:
            return 0
        return len(topic_metadata.partitions)
