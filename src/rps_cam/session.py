"""
Demo session state.

Holds the model, dataset, camera and feedback surface the UI is working
with, so every operation receives them explicitly.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from rps_dl.interfaces import CaptureSource, Classifier, HeldOutBatchSource, RenderTarget


@dataclass
class DemoSession:
    classifier: Optional[Classifier] = None
    dataset: Optional[HeldOutBatchSource] = None
    camera: Optional[CaptureSource] = None
    render_target: Optional[RenderTarget] = None

    def capture_source(self) -> Optional[CaptureSource]:
        """The camera, if one is currently live."""
        if self.camera is not None and self.camera.is_open:
            return self.camera
        return None

    def capture_frame(self) -> Optional[np.ndarray]:
        camera = self.capture_source()
        return camera.read_frame() if camera is not None else None
