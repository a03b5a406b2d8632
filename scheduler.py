import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional, Protocol

from constants import MIN_WAIT_SECONDS
from exceptions import ConfigurationError
from monitor_config import MonitorConfig

logger = logging.getLogger(__name__)


class CycleRunner(Protocol):
    def run_cycle(self) -> Optional[Exception]: ...


class SchedulerState(Enum):
    IDLE = "Idle"
    RUNNING = "Running"
    STOPPING = "Stopping"
    STOPPED = "Stopped"


def compute_wait(period_seconds: float, cycle_seconds: float) -> float:
    """Time left in the period after a cycle, never less than the floor."""
    return max(period_seconds - cycle_seconds, MIN_WAIT_SECONDS)


class MonitorScheduler:
    """Runs the collect/submit cycle on a fixed, drift-compensated period.

    A cycle is never interrupted; a stop request is honoured at the next wait.
    Errors from a cycle are logged and the loop carries on.
    """

    def __init__(
        self,
        config_loader: Callable[[], MonitorConfig],
        service_factory: Callable[[MonitorConfig], CycleRunner],
        clock: Callable[[], float] = time.monotonic,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.config_loader = config_loader
        self.service_factory = service_factory
        self.clock = clock
        self._stop_event = stop_event or threading.Event()
        self._state = SchedulerState.IDLE
        self._thread: Optional[threading.Thread] = None
        self._runner: Optional[CycleRunner] = None
        self._period_seconds = 0.0
        self.cycles_run = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    def _prepare(self) -> bool:
        if self._state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler cannot start from state {self._state.value}")

        logger.info("CloudWatch Monitor starting")
        try:
            config = self.config_loader()
        except ConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            self._state = SchedulerState.STOPPED
            return False

        self._runner = self.service_factory(config)
        self._period_seconds = config.period_seconds
        self._state = SchedulerState.RUNNING
        return True

    def start(self) -> bool:
        """Load configuration and run the loop on a background thread."""
        if not self._prepare():
            return False
        self._thread = threading.Thread(
            target=self._loop, name="cloudwatch-monitor", daemon=True
        )
        self._thread.start()
        return True

    def run(self) -> bool:
        """Load configuration and run the loop on the calling thread."""
        if not self._prepare():
            return False
        self._loop()
        return True

    def stop(self) -> None:
        """Ask the loop to exit at its next wait. Safe to call at any time."""
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            update_begin = self.clock()

            error = self._runner.run_cycle()
            self.cycles_run += 1
            if error is not None:
                logger.error(f"Error submitting metrics: {error}")

            update_diff = self.clock() - update_begin
            time_to_wait = compute_wait(self._period_seconds, update_diff)
            logger.debug(f"Cycle took {update_diff:.3f}s, waiting {time_to_wait:.3f}s")

            if self._stop_event.wait(time_to_wait):
                break

        self._state = SchedulerState.STOPPING
        logger.info("CloudWatch Monitor shutting down")
        self._state = SchedulerState.STOPPED
