from typing import List
from intersection_sim.domain.models import PerformanceSample
from intersection_sim.domain import config

class PerformanceTracker:
    def __init__(self, sample_interval: float = config.SAMPLE_INTERVAL):
        self.sample_interval = sample_interval
        self.reset()

    def reset(self):
        self.total_wait = 0.0
        self.completed_cars = 0
        self._sample_accumulator = 0.0
        self._pending_samples: List[PerformanceSample] = []

    def record_car_finished(self, wait_seconds: float):
        self.total_wait += wait_seconds
        self.completed_cars += 1

    @property
    def average_wait(self) -> float:
        if self.completed_cars == 0:
            return 0.0
        return self.total_wait / self.completed_cars

    def update(self, dt: float, simulation_time: float):
        self._sample_accumulator += dt
        while self._sample_accumulator >= self.sample_interval:
            self._sample_accumulator -= self.sample_interval
            self._pending_samples.append(
                PerformanceSample(time=simulation_time, averageWait=self.average_wait)
            )

    def drain_samples(self) -> List[PerformanceSample]:
        samples = self._pending_samples
        self._pending_samples = []
        return samples
