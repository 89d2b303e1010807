"""Pytest configuration and fixtures for filescribe tests."""

import asyncio
import logging
import tempfile
import uuid

import numpy as np
import pytest
from pubsub import pub

from filescribe.models.audio import SampleBuffer
from filescribe.models.transcription import EnhancementOutcome
from filescribe.pipeline.errors import BatchCancelled
from filescribe.storage import FileManager, JsonRecordStore
from filescribe.transcription.base import (
    AbstractAudioDecoder,
    AbstractEnhancementService,
    AbstractTranscriptionServiceRegistry,
)
from filescribe.transcription.publisher import PipelinePublisher


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


def make_sample_buffer(duration_seconds: float = 0.5, sample_rate: int = 16000) -> SampleBuffer:
    """Generate a 440 Hz sine wave buffer."""
    samples = int(duration_seconds * sample_rate)
    t = np.linspace(0, duration_seconds, samples, False)
    return SampleBuffer(samples=0.5 * np.sin(2 * np.pi * 440 * t), sample_rate=sample_rate)


@pytest.fixture
def sample_buffer():
    return make_sample_buffer()


class FakeDecoder(AbstractAudioDecoder):
    """Decoder that remembers which input produced each canonical file."""

    def __init__(self, fail_on=(), duration_seconds: float = 0.5):
        self.fail_on = set(fail_on)
        self.duration_seconds = duration_seconds
        self.decoded = []
        self.sources = {}
        self._pending = {}

    async def decode(self, file_path):
        self.decoded.append(file_path)
        if file_path in self.fail_on:
            raise OSError(f"unreadable media: {file_path}")
        buffer = make_sample_buffer(self.duration_seconds)
        self._pending[id(buffer)] = file_path
        return buffer

    def save_as_canonical_audio(self, buffer, destination):
        source = self._pending.pop(id(buffer))
        self.sources[destination] = source
        with open(destination, 'wb') as f:
            f.write(b'RIFF')


class FakeRegistry(AbstractTranscriptionServiceRegistry):
    """Registry returning 'text of <input>' for each canonical file."""

    def __init__(self, factory):
        self.factory = factory
        self.cleanup_count = 0

    async def transcribe(self, audio_path, model, cancellation=None):
        source = self.factory.decoder.sources[audio_path]
        self.factory.transcribed.append(source)
        self.factory.started(source).set()
        if source in self.factory.gates:
            await self.factory.gates[source].wait()
        delay = self.factory.delays.get(source)
        if delay:
            await asyncio.sleep(delay)
        if source in self.factory.fail_on:
            raise RuntimeError(f"backend crashed on {source}")
        return self.factory.texts.get(source, f"  text of {source}  ")

    def cleanup(self):
        self.cleanup_count += 1


class FakeRegistryFactory:
    """Creates one FakeRegistry per batch and keeps them for inspection."""

    def __init__(self, decoder, fail_on=(), delays=None, texts=None):
        self.decoder = decoder
        self.fail_on = set(fail_on)
        self.delays = delays or {}
        self.texts = texts or {}
        self.gates = {}
        self.transcribed = []
        self.registries = []
        self._started = {}

    def started(self, source) -> asyncio.Event:
        if source not in self._started:
            self._started[source] = asyncio.Event()
        return self._started[source]

    def gate(self, source) -> asyncio.Event:
        self.gates[source] = asyncio.Event()
        return self.gates[source]

    def __call__(self):
        registry = FakeRegistry(self)
        self.registries.append(registry)
        return registry


class FakeEnhancementService(AbstractEnhancementService):
    """Enhancement service that upper-cases text."""

    model_name = "fake-gpt"

    def __init__(self, enabled=True, configured=True, fail_when=(), cancel_when=()):
        self.enabled = enabled
        self.configured = configured
        self.fail_when = set(fail_when)
        self.cancel_when = set(cancel_when)
        self.calls = []

    @property
    def is_enhancement_enabled(self):
        return self.enabled

    @property
    def is_configured(self):
        return self.configured

    async def enhance(self, text, cancellation=None):
        self.calls.append(text)
        self.last_system_message_sent = "Clean up this transcript."
        self.last_user_message_sent = text
        if any(marker in text for marker in self.cancel_when):
            raise BatchCancelled()
        if any(marker in text for marker in self.fail_when):
            raise ConnectionError("enhancement service unavailable")
        return EnhancementOutcome(text=text.upper(), duration=0.01, prompt_name="Default")


class StateRecorder:
    """Collects every PipelineState published on a topic."""

    def __init__(self):
        self.states = []

    def on_state(self, state):
        self.states.append(state)

    @property
    def phases(self):
        """Phase sequence with consecutive repeats collapsed."""
        phases = []
        for state in self.states:
            if not phases or phases[-1] != state.phase:
                phases.append(state.phase)
        return phases


@pytest.fixture
def publisher():
    """Publisher on a topic root no other test uses."""
    return PipelinePublisher(topic_root=f"test_{uuid.uuid4().hex}")


@pytest.fixture
def state_recorder(publisher):
    recorder = StateRecorder()
    pub.subscribe(recorder.on_state, publisher.state_topic)
    yield recorder
    pub.unsubscribe(recorder.on_state, publisher.state_topic)


@pytest.fixture
def file_manager(temp_data_dir):
    return FileManager(temp_data_dir)


@pytest.fixture
def record_store(file_manager):
    return JsonRecordStore(file_manager)


@pytest.fixture
def fake_decoder():
    return FakeDecoder()


@pytest.fixture
def registry_factory(fake_decoder):
    return FakeRegistryFactory(fake_decoder)


@pytest.fixture
def enhancer():
    return FakeEnhancementService()
