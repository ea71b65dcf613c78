"""
Single-frame inference.

Runs one camera frame through a classifier and returns one probability per
class, in the fixed Rock, Paper, Scissors order.
"""
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from rps_cam.preprocess import image_to_tensor, to_display_image

from .classes import CLASS_NAMES, IMAGE_HEIGHT, IMAGE_WIDTH
from .interfaces import Classifier, RenderTarget
from .scope import TensorScope


@dataclass(frozen=True)
class Prediction:
    """Probability the classifier assigns to one class."""
    class_name: str
    probability: float


def predict_single(classifier: Classifier, frame: np.ndarray,
                   render_target: Optional[RenderTarget] = None) -> List[Prediction]:
    """
    Predict Rock/Paper/Scissors probabilities for one frame.

    Args:
        classifier: Model honouring the Classifier protocol
        frame: Raw H x W x 3 camera frame
        render_target: Optional surface that receives the 64x64 model input

    Returns:
        Three predictions ordered Rock, Paper, Scissors
    """
    with TensorScope() as scope:
        resized = scope.track(image_to_tensor(frame))

        # Single-element batch of single channel images
        batched = scope.track(resized.reshape(1, IMAGE_HEIGHT, IMAGE_WIDTH, 1))
        probabilities = scope.track(classifier.predict(batched))
        values = probabilities.reshape(-1).tolist()

        if render_target is not None:
            render_target.show(to_display_image(resized))

    return [
        Prediction(class_name=class_name, probability=float(values[idx]))
        for idx, class_name in enumerate(CLASS_NAMES)
    ]


def format_predictions(predictions: List[Prediction]) -> str:
    """Status line for the live view, e.g. ' Rock: %80.00, Paper: %15.00, Scissors: %5.00'."""
    return ','.join(
        f" {p.class_name}: %{p.probability * 100:.2f}" for p in predictions
    )
