"""
Capabilities the pipeline consumes.

The pipeline only talks to classifiers and datasets through these protocols,
so any backend that honours the shapes below can be plugged in.
"""
from typing import Any, Optional, Protocol

import numpy as np
import torch


class Classifier(Protocol):
    """predict: [N, 64, 64, 1] -> [N, 3] probabilities; fit: incremental training."""

    def predict(self, batch: torch.Tensor) -> torch.Tensor:
        ...

    def fit(self, images: torch.Tensor, labels: torch.Tensor) -> Any:
        ...


class HeldOutBatchSource(Protocol):
    """Anything that can hand out a held-out batch of flattened images."""

    def next_test_batch(self, size: int) -> Any:
        ...


class RenderTarget(Protocol):
    """Paints a uint8 grayscale image."""

    def show(self, image: np.ndarray) -> None:
        ...


class CaptureSource(Protocol):
    """A live camera that may stop existing at any time."""

    @property
    def is_open(self) -> bool:
        ...

    def read_frame(self) -> Optional[np.ndarray]:
        ...
