"""Wall-clock and CPU time measurement for named pipeline spans."""

import os
import time
from contextlib import contextmanager
from dataclasses import dataclass

from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)


@dataclass
class TimeMeasurement:
    """Timing of a single named span."""

    span_name: str
    wall_time: float
    process_user_time: float
    process_system_time: float


class TimeRecorder:
    """Collects a ``TimeMeasurement`` for every ``measure`` block."""

    def __init__(self):
        self.measurements: list[TimeMeasurement] = []

    @contextmanager
    def measure(self, span_name: str):
        start_wall = time.perf_counter()
        start_times = os.times()
        try:
            yield
        finally:
            end_wall = time.perf_counter()
            end_times = os.times()
            measurement = TimeMeasurement(
                span_name=span_name,
                wall_time=end_wall - start_wall,
                process_user_time=end_times.user - start_times.user,
                process_system_time=end_times.system - start_times.system,
            )
            self.measurements.append(measurement)
            logger.debug(f"{span_name}: {measurement.wall_time:.4f}s wall")

    def get(self, span_name: str) -> TimeMeasurement | None:
        """Return the most recent measurement recorded for ``span_name``."""
        for measurement in reversed(self.measurements):
            if measurement.span_name == span_name:
                return measurement
        return None
