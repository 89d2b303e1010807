"""Pipeline publisher module for pub/sub event publishing."""

import logging
from pubsub import pub

from ..models.pipeline import PipelineState
from ..models.transcription import TranscriptionRecord

logger = logging.getLogger(__name__)


class PipelinePublisher:
    """Publishes record and state events using pubsub.pub.

    Listeners are notified synchronously; an exception raised by a listener
    is logged and does not reach the batch.
    """

    def __init__(self, topic_root: str = "filescribe"):
        """Initialize pipeline publisher.

        Args:
            topic_root: Root topic name; events go to its subtopics
        """
        self.topic_root = topic_root
        self.created_topic = f"{topic_root}.transcription_created"
        self.completed_topic = f"{topic_root}.transcription_completed"
        self.state_topic = f"{topic_root}.state"
        logger.info(f"PipelinePublisher initialized with topic root: {topic_root}")

    def publish_record_created(self, record: TranscriptionRecord) -> None:
        self._send(self.created_topic, record=record)
        logger.debug(f"Published record created: {record.id}")

    def publish_transcription_completed(self, record: TranscriptionRecord) -> None:
        self._send(self.completed_topic, record=record)
        logger.debug(f"Published transcription completed: {record.id}")

    def publish_state(self, state: PipelineState) -> None:
        self._send(self.state_topic, state=state)

    def _send(self, topic: str, **data) -> None:
        try:
            pub.sendMessage(topic, **data)
        except Exception as e:
            logger.warning(f"Listener error on {topic}: {e}")
