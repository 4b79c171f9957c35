"""
End-to-end median run: CSV directory in, median file out.

discover files → decode → sequence → estimate → gate → write
"""

import json
import logging
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Optional

from ..adapters.base import Observation
from ..adapters.csv_adapter import SemicolonCSVAdapter, discover_files
from ..config.schema import MedianConfig
from ..formats.writer import EmissionWriter
from ..streaming.emitter import ChangeGatedEmitter
from ..streaming.factory import create_estimator
from ..streaming.sequence import sequence_observations, replay_medians


logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Summary of one run."""
    input_dir: str
    output_path: str
    strategy: str
    files_read: int = 0
    observations: int = 0
    rows_emitted: int = 0
    last_median: Optional[str] = None
    duration_seconds: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class MedianPipeline:
    """
    Run the running-median replay described by a MedianConfig.

    Each pipeline owns its estimator and emitter, so several pipelines can
    run side by side without sharing state.

    Example:
        config = MedianConfig.load(Path('tick_median.yml')).ensure_valid()
        result = MedianPipeline(config).run()
        print(result.rows_emitted)
    """

    def __init__(self, config: MedianConfig):
        self.config = config
        self.adapter = SemicolonCSVAdapter()

    def discover(self) -> List[Path]:
        """CSV files of the input directory selected by the filename masks."""
        main = self.config.main
        files = discover_files(main.input_dir, main.filename_mask)
        if not files:
            logger.warning(f"No CSV files matched in {main.input_dir}")
        return files

    def load_observations(self, files: List[Path]) -> List[Observation]:
        """Decode the given files and return their rows in replay order."""
        observations: List[Observation] = []
        for path in files:
            before = len(observations)
            observations.extend(self.adapter.decode_file(path))
            logger.info(f"Read {len(observations) - before} row(s) from {path.name}")

        return sequence_observations(observations)

    def run(self) -> PipelineResult:
        main = self.config.main
        settings = self.config.estimator

        result = PipelineResult(
            input_dir=str(main.input_dir),
            output_path=str(main.output_path),
            strategy=settings.strategy,
        )
        start = time.time()

        files = self.discover()
        observations = self.load_observations(files)
        result.files_read = len(files)
        result.observations = len(observations)

        estimator = create_estimator(settings.strategy, settings.seed_threshold)
        emitter = ChangeGatedEmitter()
        logger.info(
            f"Replaying {len(observations)} observation(s) with the {settings.strategy} estimator"
        )

        with EmissionWriter(main.output_path) as writer:
            writer.write_all(emitter.emit(replay_medians(observations, estimator)))
            result.rows_emitted = writer.rows_written

        result.last_median = emitter.last_emitted
        result.duration_seconds = time.time() - start
        logger.info(f"Wrote {result.rows_emitted} row(s) to {main.output_path}")
        return result
