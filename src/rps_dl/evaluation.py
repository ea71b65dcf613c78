"""
Batch evaluation and derived metrics.

``evaluate`` runs a held-out batch through a classifier and reduces both the
model output and the one-hot labels to class indices. The metric helpers turn
those index pairs into per-class accuracy and a confusion matrix.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

import numpy as np
import torch
from sklearn.metrics import confusion_matrix as sk_confusion_matrix

from .classes import CLASS_NAMES, IMAGE_HEIGHT, IMAGE_WIDTH, NUM_CLASSES
from .interfaces import Classifier, HeldOutBatchSource
from .scope import TensorScope

logger = logging.getLogger(__name__)

TEST_DATA_SIZE = 420


@dataclass(frozen=True)
class ClassAccuracy:
    class_name: str
    accuracy: float
    count: int


def evaluate(classifier: Classifier, dataset: HeldOutBatchSource,
             test_size: int = TEST_DATA_SIZE) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Predict a held-out batch.

    torch.argmax returns the first maximal index, so ties always resolve to
    the lowest class index.

    Returns:
        (predicted, true) class indices, both int64 tensors of length test_size
    """
    test_data = dataset.next_test_batch(test_size)
    with TensorScope() as scope:
        test_xs = scope.track(test_data.images.reshape(test_size, IMAGE_HEIGHT, IMAGE_WIDTH, 1))
        labels = scope.track(test_data.labels.argmax(dim=-1))
        probabilities = scope.track(classifier.predict(test_xs))
        preds = scope.track(probabilities.argmax(dim=-1))
        return scope.keep(preds), scope.keep(labels)


def _as_indices(values) -> np.ndarray:
    if isinstance(values, torch.Tensor):
        values = values.detach().cpu().numpy()
    return np.asarray(values, dtype=np.int64).reshape(-1)


def confusion_matrix(predicted, true) -> np.ndarray:
    """3x3 counts where matrix[true_idx][predicted_idx] counts each example once."""
    return sk_confusion_matrix(
        _as_indices(true), _as_indices(predicted), labels=list(range(NUM_CLASSES))
    ).astype(np.int64)


def per_class_accuracy(predicted, true) -> List[ClassAccuracy]:
    """Share of each class' examples predicted correctly; 0.0 for empty classes."""
    matrix = confusion_matrix(predicted, true)
    results = []
    for idx, class_name in enumerate(CLASS_NAMES):
        count = int(matrix[idx].sum())
        accuracy = float(matrix[idx, idx]) / count if count > 0 else 0.0
        results.append(ClassAccuracy(class_name=class_name, accuracy=accuracy, count=count))
    return results


def report_accuracy(classifier: Classifier, dataset: HeldOutBatchSource,
                    title: str = "Accuracy", output_dir=None,
                    test_size: int = TEST_DATA_SIZE) -> List[ClassAccuracy]:
    """Evaluate, log a per-class accuracy table and optionally save a bar chart."""
    preds, labels = evaluate(classifier, dataset, test_size)
    class_accuracy = per_class_accuracy(preds, labels)
    del preds, labels

    logger.info(f"📊 {title}")
    for entry in class_accuracy:
        logger.info(f"   {entry.class_name:<9} {entry.accuracy:6.2%}  ({entry.count} samples)")

    if output_dir is not None:
        from .visualization.plots import plot_per_class_accuracy
        plot_per_class_accuracy(class_accuracy, _report_path(output_dir, title), title)

    return class_accuracy


def report_confusion(classifier: Classifier, dataset: HeldOutBatchSource,
                     title: str = "Confusion Matrix", output_dir=None,
                     test_size: int = TEST_DATA_SIZE) -> np.ndarray:
    """Evaluate, log the confusion matrix and optionally save a heatmap."""
    preds, labels = evaluate(classifier, dataset, test_size)
    matrix = confusion_matrix(preds, labels)
    del preds, labels

    logger.info(f"📊 {title} (rows: true, columns: predicted)")
    logger.info("   " + " ".join(f"{name:>9}" for name in [""] + CLASS_NAMES))
    for idx, class_name in enumerate(CLASS_NAMES):
        logger.info("   " + " ".join(f"{v:>9}" for v in [class_name] + matrix[idx].tolist()))

    if output_dir is not None:
        from .visualization.plots import plot_confusion_matrix
        plot_confusion_matrix(matrix, _report_path(output_dir, title), title)

    return matrix


def _report_path(output_dir, title: str, suffix: str = ".png") -> Path:
    filename = title.lower().replace(" ", "_") + suffix
    return Path(output_dir) / filename
