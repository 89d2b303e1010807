"""Command line entry point for filescribe."""

import sys
import asyncio
import argparse
import logging
from pathlib import Path
from typing import List

from pubsub import pub

from filescribe.media import collect_media_files
from filescribe.models.pipeline import PipelineState
from filescribe.pipeline.manager import AudioTranscriptionManager
from filescribe.storage import FileManager, JsonRecordStore
from filescribe.transcription.base import TranscriptionModel
from filescribe.transcription.publisher import PipelinePublisher
from filescribe.transcription.session import BatchSession

from .config import FileScribeConfig

logger = logging.getLogger(__name__)


class BatchRunner:
    """Wires the pipeline from configuration and runs one batch."""

    def __init__(self, config_path: str, log_level: str = None):
        # Load configuration
        self.config = FileScribeConfig(config_path)
        self.file_manager = FileManager(self.config.get_data_directory())
        level = log_level or self.config.get('logging.level', 'INFO')
        setup_logging(self.config, level, default_log_dir=self.file_manager.logs_dir)
        self._last_phase = None

    def init(self):
        logger.info("Initializing services...")

        self.record_store = JsonRecordStore(
            self.file_manager,
            word_replacements=self.config.get_word_replacements()
        )
        self.publisher = PipelinePublisher(self.config.get('pipeline.topic_root', 'filescribe'))
        pub.subscribe(self.on_state, self.publisher.state_topic)

        power_mode_provider = None
        if self.config.get('collaborators.power_mode'):
            power_mode_provider = self.config.get_collaborator('power_mode')(self.config)

        self.manager = AudioTranscriptionManager(
            decoder=self.config.get_collaborator('decoder')(self.config),
            file_manager=self.file_manager,
            publisher=self.publisher,
            power_mode_provider=power_mode_provider,
            settle_seconds=self.config.get_settle_seconds()
        )

        model_name = self.config.get('transcription.model')
        enhancement_service = None
        if self.config.get('collaborators.enhancement'):
            enhancement_service = self.config.get_collaborator('enhancement')(self.config)

        registry_factory = self.config.get_collaborator('registry')
        self.session = BatchSession(
            current_model=TranscriptionModel(model_name) if model_name else None,
            registry_factory=lambda: registry_factory(self.config),
            enhancement_service=enhancement_service,
            formatting_enabled=self.config.is_formatting_enabled()
        )

    def on_state(self, state: PipelineState) -> None:
        if state.phase != self._last_phase and state.message:
            logger.info(f"[{state.current_file_index}/{state.total_file_count}] {state.message}")
        self._last_phase = state.phase

    async def run(self, files: List[str]) -> bool:
        self.manager.start_batch_processing(files, self.record_store, self.session)
        try:
            await self.manager.wait()
        except asyncio.CancelledError:
            self.manager.cancel_processing()
            raise
        return self.manager.error_message is None

    def report(self) -> None:
        for result in self.manager.completed_results:
            record = result.record
            text = record.enhanced_text if record.is_enhanced else record.text
            print(f"\n=== {result.file_name} ({record.id}) ===")
            print(text)
        if self.manager.error_message:
            print(f"\n❌ Error: {self.manager.error_message}")

    def cleanup(self):
        pub.unsubscribe(self.on_state, self.publisher.state_topic)


def setup_logging(config, level: str = "INFO", default_log_dir: Path = Path("data/logs")) -> None:
    """Set up logging configuration from YAML config.

    The log file goes to ``logging.file_path`` when configured, otherwise
    to ``filescribe.log`` under ``default_log_dir``.
    """
    log_file_path = config.get('logging.file_path') or str(Path(default_log_dir) / 'filescribe.log')
    console_output = config.get('logging.console_output', True)

    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("filescribe starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def main() -> None:
    """Main entry point for filescribe."""
    parser = argparse.ArgumentParser(
        description="filescribe - batch transcription of audio and video files"
    )

    parser.add_argument(
        "files",
        nargs="+",
        help="Audio or video files to transcribe, in order"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: filescribe.yaml)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="filescribe v0.1.0"
    )

    args = parser.parse_args()

    try:
        runner = BatchRunner(args.config, args.log_level)
        runner.init()
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    files = collect_media_files(args.files)
    if not files:
        print("❌ Error: no supported media files given")
        sys.exit(1)

    try:
        success = asyncio.run(runner.run(files))
    except KeyboardInterrupt:
        print("\n👋 Cancelled")
        sys.exit(130)
    finally:
        runner.cleanup()

    runner.report()
    if not success:
        sys.exit(1)


if __name__ == "__main__":
    main()
