#!/usr/bin/env python3
"""
Live Rock/Paper/Scissors Recognition

Shows the webcam, classifies it every couple of seconds with a trained model
and lets the user add labelled samples to fine-tune the model on the spot.

Controls:
- W: Launch / turn off webcam (and live detection)
- 1 / 2 / 3: Add a Rock / Paper / Scissors sample
- T: Train with new samples
- E: Evaluate on the test split (needs --data-dir)
- Q: Quit

Author: RPS-Cam Team
"""

import argparse
import logging
from typing import Optional

import cv2
import numpy as np

from rps_dl.classes import CLASS_NAMES, one_hot
from rps_dl.evaluation import TEST_DATA_SIZE, report_accuracy, report_confusion
from rps_dl.models import load_classifier

from .capture import CameraSource
from .collect import SampleCollector
from .live import LiveDetectionLoop
from .scheduler import Scheduler
from .session import DemoSession

logger = logging.getLogger(__name__)

INPUT_WINDOW = "64x64 Input"
MAIN_WINDOW = "Rock Paper Scissors"
FRAME_WAIT_MS = 30


class WindowRenderTarget:
    """Paints the model input into its own OpenCV window."""

    def __init__(self, window_name: str = INPUT_WINDOW, scale: int = 4):
        self.window_name = window_name
        self.scale = scale
        self.visible = False

    def show(self, image: np.ndarray) -> None:
        enlarged = cv2.resize(image, None, fx=self.scale, fy=self.scale,
                              interpolation=cv2.INTER_NEAREST)
        cv2.imshow(self.window_name, enlarged)
        self.visible = True

    def close(self) -> None:
        """Destroy the window if it was ever shown."""
        if self.visible:
            cv2.destroyWindow(self.window_name)
            self.visible = False


class LiveRPSApp:
    """Keyboard-driven webcam front end around the detection loop and sample buffer."""

    def __init__(self, session: DemoSession, camera: CameraSource,
                 report_dir: Optional[str] = None):
        self.session = session
        self.camera = camera
        self.report_dir = report_dir
        self.scheduler = Scheduler()
        self.cam_message = ""
        self.detector = LiveDetectionLoop(session, self.scheduler, self._set_message)
        self.collector = SampleCollector(session)

    def _set_message(self, message: str) -> None:
        self.cam_message = message
        if message:
            logger.info(f"🔮{message}")

    def toggle_webcam(self) -> None:
        if self.session.classifier is None:
            return
        if self.camera.is_open:
            self.detector.stop()
            self.camera.release()
            if isinstance(self.session.render_target, WindowRenderTarget):
                self.session.render_target.close()
            self.cam_message = ""
        else:
            try:
                self.camera.open()
            except RuntimeError as e:
                logger.error(f"❌ {e}")
                return
            self.detector.start()

    def train_with_new_samples(self) -> None:
        if self.session.classifier is None:
            return
        self.collector.train_and_reset(self.session.classifier, epochs=3, batch_size=32)

    def evaluate(self) -> None:
        dataset = self.session.dataset
        if dataset is None or self.session.classifier is None:
            logger.info("Evaluation needs --data-dir")
            return
        test_size = min(TEST_DATA_SIZE, dataset.num_test)
        report_accuracy(self.session.classifier, dataset, "Trained Accuracy",
                        self.report_dir, test_size=test_size)
        report_confusion(self.session.classifier, dataset, "Trained Confusion Matrix",
                         self.report_dir, test_size=test_size)

    def _handle_keypress(self, key: int) -> None:
        if key == ord('w'):
            self.toggle_webcam()
        elif key in (ord('1'), ord('2'), ord('3')):
            self.collector.add_sample(one_hot(key - ord('1')))
        elif key == ord('t'):
            self.train_with_new_samples()
        elif key == ord('e'):
            self.evaluate()

    def _draw_ui(self, frame: np.ndarray) -> np.ndarray:
        h = frame.shape[0]
        if self.cam_message:
            cv2.putText(frame, self.cam_message.strip(), (10, 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)
        stats = self.collector.get_statistics()
        buffered = ", ".join(f"{name}: {stats['labels'][name]}" for name in CLASS_NAMES)
        cv2.putText(frame, f"New samples - {buffered}", (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
        cv2.putText(frame, "W: webcam | 1/2/3: +Rock/+Paper/+Scissors | T: train | E: evaluate | Q: quit",
                    (10, h - 10), cv2.FONT_HERSHEY_SIMPLEX, 0.45, (255, 255, 255), 1)
        return frame

    def _wait_ms(self) -> int:
        """Key wait for this frame, shortened when a scheduled callback is due sooner."""
        due = self.scheduler.next_due()
        if due is None:
            return FRAME_WAIT_MS
        remaining = int((due - self.scheduler.clock()) * 1000)
        return max(1, min(FRAME_WAIT_MS, remaining))

    def run(self) -> None:
        """Main loop: pump the scheduler, draw, handle keys."""
        logger.info("🟢 Starting Rock/Paper/Scissors demo (press W to launch the webcam)")
        idle = np.zeros((480, 640, 3), dtype=np.uint8)

        try:
            while True:
                self.scheduler.run_pending()

                frame = self.camera.read_frame() if self.camera.is_open else None
                canvas = frame.copy() if frame is not None else idle.copy()
                cv2.imshow(MAIN_WINDOW, self._draw_ui(canvas))

                key = cv2.waitKey(self._wait_ms()) & 0xFF
                if key == ord('q'):
                    logger.info("👋 Exiting...")
                    break
                self._handle_keypress(key)
        finally:
            self.detector.stop()
            self.camera.release()
            cv2.destroyAllWindows()


def main():
    """Entry point."""
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="Live Rock/Paper/Scissors recognition")
    parser.add_argument("--model", "-m", default="models/rps_model.pth",
                        help="Path to trained model checkpoint")
    parser.add_argument("--camera", "-c", type=int, default=0, help="Camera device ID")
    parser.add_argument("--data-dir", help="Dataset folder, enables evaluation with E")
    parser.add_argument("--report-dir", default="reports", help="Where to save evaluation plots")
    args = parser.parse_args()

    try:
        session = DemoSession(classifier=load_classifier(args.model),
                              render_target=WindowRenderTarget())
        if args.data_dir:
            from rps_dl.data.dataset import RPSDataset
            session.dataset = RPSDataset.from_directory(args.data_dir)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        return

    camera = CameraSource(args.camera)
    session.camera = camera
    LiveRPSApp(session, camera, args.report_dir).run()


if __name__ == "__main__":
    main()
