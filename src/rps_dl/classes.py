"""
Fixed class layout and tensor shapes shared by the whole pipeline.
"""
from typing import List

CLASS_NAMES: List[str] = ['Rock', 'Paper', 'Scissors']
NUM_CLASSES = len(CLASS_NAMES)

IMAGE_WIDTH = 64
IMAGE_HEIGHT = 64
IMAGE_SIZE = IMAGE_WIDTH * IMAGE_HEIGHT


def one_hot(class_idx: int) -> List[float]:
    """One-hot label vector for a class index, e.g. 1 -> [0, 1, 0]."""
    if not 0 <= class_idx < NUM_CLASSES:
        raise ValueError(f"Unknown class index: {class_idx}")
    label = [0.0] * NUM_CLASSES
    label[class_idx] = 1.0
    return label
