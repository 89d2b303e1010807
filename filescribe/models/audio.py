"""Audio-related data models."""

from dataclasses import dataclass

import numpy as np


@dataclass
class SampleBuffer:
    """Normalized mono audio produced by a decoder."""
    samples: np.ndarray
    sample_rate: int = 16000

    def __post_init__(self):
        self.samples = np.asarray(self.samples, dtype=np.float32)
        if self.samples.ndim != 1:
            raise ValueError(f"Expected mono samples, got shape {self.samples.shape}")
        if self.sample_rate <= 0:
            raise ValueError(f"Invalid sample rate: {self.sample_rate}")

    @property
    def duration_seconds(self) -> float:
        return len(self.samples) / float(self.sample_rate)
