"""
Rock/Paper/Scissors dataset loading and batching.

Images are read from one folder per class, converted with the same
preprocessing the live camera uses, and served as flattened batches.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import cv2
import numpy as np
import torch
from sklearn.model_selection import train_test_split

from rps_cam.preprocess import image_to_tensor

from ..classes import CLASS_NAMES, IMAGE_SIZE, NUM_CLASSES

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ['*.jpg', '*.jpeg', '*.png']


@dataclass
class Batch:
    """Aligned images [N, 64*64] and one-hot labels [N, 3]."""
    images: torch.Tensor
    labels: torch.Tensor

    def __len__(self):
        return self.images.shape[0]


class _Cursor:
    """Endless walk over a shuffled index list, reshuffled on every wrap."""

    def __init__(self, indices: np.ndarray, rng: np.random.Generator):
        self.indices = indices.copy()
        self.rng = rng
        self.position = 0
        self.rng.shuffle(self.indices)

    def take(self, count: int) -> np.ndarray:
        taken = []
        while len(taken) < count:
            if self.position >= len(self.indices):
                self.rng.shuffle(self.indices)
                self.position = 0
            end = min(len(self.indices), self.position + count - len(taken))
            taken.extend(self.indices[self.position:end])
            self.position = end
        return np.array(taken, dtype=np.int64)


class RPSDataset:
    """Rock/Paper/Scissors images split into train and test partitions."""

    def __init__(self, images: torch.Tensor, labels: torch.Tensor,
                 test_fraction: float = 1 / 6, seed: Optional[int] = 42):
        """
        Initialize dataset from preprocessed data

        Args:
            images: Flattened images [N, 64*64], values in 0..255
            labels: One-hot labels [N, 3]
            test_fraction: Share of samples held out for evaluation
            seed: Random seed for the split and batch order
        """
        if len(images) != len(labels):
            raise ValueError(f"Got {len(images)} images but {len(labels)} labels")
        if len(images) < 2:
            raise ValueError("Need at least two samples to build train and test splits")

        self.images = images.reshape(-1, IMAGE_SIZE).float()
        self.labels = labels.float()
        self.rng = np.random.default_rng(seed)

        all_indices = np.arange(len(self.images))
        class_ids = self.labels.argmax(dim=1).numpy()
        counts = np.bincount(class_ids, minlength=NUM_CLASSES)
        present = int((counts > 0).sum())
        num_test = int(np.ceil(test_fraction * len(all_indices)))
        can_stratify = (counts[counts > 0].min() >= 2
                        and present <= num_test <= len(all_indices) - present)
        stratify = class_ids if can_stratify else None
        train_idx, test_idx = train_test_split(
            all_indices, test_size=test_fraction, random_state=seed, stratify=stratify
        )
        self.train_indices = np.sort(train_idx)
        self.test_indices = np.sort(test_idx)
        self._train_cursor = _Cursor(self.train_indices, self.rng)
        self._test_cursor = _Cursor(self.test_indices, self.rng)

        logger.info(f"📁 Dataset ready: {len(self.train_indices):,} train / "
                    f"{len(self.test_indices):,} test samples")
        for idx, class_name in enumerate(CLASS_NAMES):
            logger.info(f"   {class_name}: {counts[idx]:,} samples")

    @classmethod
    def from_directory(cls, data_dir, test_fraction: float = 1 / 6,
                       seed: Optional[int] = 42) -> "RPSDataset":
        """
        Load a dataset laid out as data_dir/{rock,paper,scissors}/*.png

        Class folder names are matched case-insensitively.
        """
        data_dir = Path(data_dir)
        if not data_dir.exists():
            raise FileNotFoundError(f"Dataset not found: {data_dir}")

        images: List[torch.Tensor] = []
        labels: List[int] = []
        for class_dir in sorted(data_dir.iterdir()):
            if not class_dir.is_dir() or class_dir.name.startswith('.'):
                continue
            class_idx = _class_index(class_dir.name)
            if class_idx is None:
                logger.warning(f"Skipping unknown class folder: {class_dir.name}")
                continue

            for ext in IMAGE_EXTENSIONS:
                for img_path in sorted(class_dir.glob(ext)):
                    frame = cv2.imread(str(img_path))
                    if frame is None:
                        logger.warning(f"Could not read image: {img_path}")
                        continue
                    images.append(image_to_tensor(frame).reshape(IMAGE_SIZE))
                    labels.append(class_idx)

        if not images:
            raise ValueError(f"No samples found in {data_dir}")

        one_hot = torch.nn.functional.one_hot(
            torch.tensor(labels), num_classes=NUM_CLASSES
        ).float()
        return cls(torch.stack(images), one_hot, test_fraction=test_fraction, seed=seed)

    @property
    def num_train(self) -> int:
        return len(self.train_indices)

    @property
    def num_test(self) -> int:
        return len(self.test_indices)

    def next_train_batch(self, size: int) -> Batch:
        return self._batch(self._train_cursor.take(size))

    def next_test_batch(self, size: int) -> Batch:
        return self._batch(self._test_cursor.take(size))

    def _batch(self, indices: Sequence[int]) -> Batch:
        index = torch.as_tensor(indices, dtype=torch.long)
        return Batch(images=self.images[index], labels=self.labels[index])


def _class_index(folder_name: str) -> Optional[int]:
    lowered = [name.lower() for name in CLASS_NAMES]
    name = folder_name.lower()
    return lowered.index(name) if name in lowered else None
