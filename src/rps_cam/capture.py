"""
Basic webcam capture for the Rock/Paper/Scissors demo.
"""
import logging
from typing import Optional

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def setup_camera(device_id: int = 0) -> cv2.VideoCapture:
    """Initialize the webcam."""
    cap = cv2.VideoCapture(device_id)
    if not cap.isOpened():
        raise RuntimeError(f"Could not open camera device {device_id}")

    # 640x480 is plenty, frames end up as 64x64 anyway
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, 640)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, 480)
    cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
    return cap


class CameraSource:
    """A webcam that can be switched on and off while the app runs."""

    def __init__(self, device_id: int = 0, mirror: bool = True):
        self.device_id = device_id
        self.mirror = mirror
        self._cap: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None and self._cap.isOpened()

    def open(self) -> None:
        if self.is_open:
            return
        self._cap = setup_camera(self.device_id)
        width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        logger.info(f"📹 Camera {self.device_id}: {width}x{height}")

    def read_frame(self) -> Optional[np.ndarray]:
        """Grab the current frame, or None when the camera is gone."""
        if not self.is_open:
            return None
        ret, frame = self._cap.read()
        if not ret:
            logger.warning("Failed to grab frame")
            return None
        return cv2.flip(frame, 1) if self.mirror else frame

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            logger.info("📹 Camera released")
