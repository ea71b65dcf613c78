"""
Live detection loop.

Every cycle waits a short settle delay, checks that the camera is still
there, classifies the current frame, publishes a status line and schedules
the next cycle. The loop ends when it is toggled off or when the camera
disappears.

    STOPPED --start--> ARMED --settle, camera live--> PREDICTING --publish--> ARMED
                         |
                         +--settle, camera gone--> STOPPED
                         +--settle, no frame---> ARMED (next cycle)
"""
import logging
from enum import Enum
from typing import Callable, Optional

from rps_dl.infer import format_predictions, predict_single

from .scheduler import ScheduledTask, Scheduler
from .session import DemoSession

logger = logging.getLogger(__name__)

DETECTION_PERIOD = 2.0  # seconds between the end of one cycle and the next
SETTLE_DELAY = 0.1      # lets the latest UI state commit before sampling


class DetectionState(Enum):
    STOPPED = "stopped"
    ARMED = "armed"
    PREDICTING = "predicting"


class LiveDetectionLoop:
    """
    Self-rescheduling webcam classification.

    Every scheduled callback carries the generation it was queued under;
    stop() and start() bump the generation so leftovers from an earlier run
    never act. A prediction already running when detection is switched off
    still publishes its message but schedules nothing.
    """

    def __init__(self, session: DemoSession, scheduler: Scheduler,
                 on_message: Callable[[str], None],
                 period: float = DETECTION_PERIOD, settle_delay: float = SETTLE_DELAY):
        self.session = session
        self.scheduler = scheduler
        self.on_message = on_message
        self.period = period
        self.settle_delay = settle_delay

        self.state = DetectionState.STOPPED
        self.message = ""
        self.cycles = 0
        self._task: Optional[ScheduledTask] = None
        self._generation = 0

    @property
    def running(self) -> bool:
        return self.state is not DetectionState.STOPPED

    def start(self) -> bool:
        """Arm the loop. Returns False when there is no model to run."""
        if self.running:
            return True
        if self.session.classifier is None:
            logger.debug("No model yet, live detection not started")
            return False

        self._generation += 1
        self._publish("")
        self._arm(self._generation)
        logger.info("🟢 Live detection started")
        return True

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if self.running:
            logger.info("🔴 Live detection stopped")
        self._generation += 1
        self.state = DetectionState.STOPPED

    def toggle(self) -> bool:
        """Flip detection on/off. Returns whether the loop is now running."""
        if self.running:
            self.stop()
            return False
        return self.start()

    def _arm(self, generation: int) -> None:
        self.state = DetectionState.ARMED
        self._task = self.scheduler.call_later(
            self.settle_delay, lambda: self._on_settled(generation)
        )

    def _on_next_cycle(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._arm(generation)

    def _on_settled(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._task = None

        classifier = self.session.classifier
        camera = self.session.capture_source()
        if camera is None or classifier is None:
            logger.info("📹 Camera gone, live detection stopped")
            self._generation += 1
            self.state = DetectionState.STOPPED
            return

        frame = camera.read_frame()
        if frame is None:
            logger.debug("Dropped frame, skipping this cycle")
            self._schedule_next_cycle(generation)
            return

        self.state = DetectionState.PREDICTING
        try:
            predictions = predict_single(classifier, frame, self.session.render_target)
        except Exception:
            self._generation += 1
            self.state = DetectionState.STOPPED
            raise

        self.cycles += 1
        self._publish(format_predictions(predictions))

        if generation != self._generation:
            return
        self._schedule_next_cycle(generation)

    def _schedule_next_cycle(self, generation: int) -> None:
        self.state = DetectionState.ARMED
        self._task = self.scheduler.call_later(
            self.period, lambda: self._on_next_cycle(generation)
        )

    def _publish(self, message: str) -> None:
        self.message = message
        self.on_message(message)
