"""
In-memory collection of user-labelled webcam samples.

Samples are buffered as flattened 64x64 images plus one-hot labels and handed
to the classifier for a short fine-tuning run, after which the buffer starts
over empty.
"""
import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence

import torch

from rps_dl.classes import CLASS_NAMES, IMAGE_SIZE, NUM_CLASSES
from rps_dl.interfaces import Classifier

from .preprocess import image_to_tensor
from .session import DemoSession

logger = logging.getLogger(__name__)


class SampleCollector:
    """
    Buffers labelled frames for incremental training.

    Images and labels are both appended at the back, so images[i] is always
    the frame labelled labels[i].
    """

    def __init__(self, session: DemoSession):
        self.session = session
        self.images: Optional[torch.Tensor] = None
        self.labels: List[List[float]] = []

    def __len__(self) -> int:
        return len(self.labels)

    def add_sample(self, label: Sequence[float]) -> bool:
        """
        Capture the current frame and buffer it under a one-hot label.

        Returns:
            False when no frame could be captured (nothing is added)
        """
        frame = self.session.capture_frame()
        if frame is None:
            logger.debug("No live frame, sample not added")
            return False

        sample = image_to_tensor(frame).reshape(1, IMAGE_SIZE)
        if self.images is None:
            self.images = sample
        else:
            self.images = torch.cat([self.images, sample], dim=0)
        self.labels.append([float(v) for v in label])

        logger.info(f"➕ Added {CLASS_NAMES[_label_index(label)]} sample ({len(self)} buffered)")
        return True

    def label_tensor(self) -> torch.Tensor:
        if not self.labels:
            return torch.zeros((0, NUM_CLASSES))
        return torch.tensor(self.labels, dtype=torch.float32)

    def train_and_reset(self, classifier: Classifier, **fit_kwargs) -> None:
        """Fit the classifier on everything buffered, then empty the buffer."""
        if self.images is not None and self.labels:
            logger.info(f"🎯 Training with {len(self)} new samples")
            classifier.fit(self.images, self.label_tensor(), **fit_kwargs)
        else:
            logger.info("No new samples to train with")
        self.reset()

    def reset(self) -> None:
        self.images = None
        self.labels = []

    def get_statistics(self) -> Dict:
        counts = Counter(CLASS_NAMES[_label_index(label)] for label in self.labels)
        return {
            "total_samples": len(self),
            "labels": {name: counts.get(name, 0) for name in CLASS_NAMES},
        }


def _label_index(label: Sequence[float]) -> int:
    return max(range(len(label)), key=lambda i: label[i])
