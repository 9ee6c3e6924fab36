from typing import Optional
from intersection_sim.controllers.base import SignalAlgorithm, LaneQueues, group_pressure
from intersection_sim.domain.models import AlgorithmName, DirectionGroup
from intersection_sim.systems.signal_system import SignalSystem
from intersection_sim.domain import config

class FixedTimeController(SignalAlgorithm):
    name = AlgorithmName.FIXED_TIME

    def __init__(self, phase_duration: float = config.FIXED_PHASE_DURATION):
        super().__init__()
        self.phase_duration = phase_duration

    def should_switch(self, controller: SignalSystem, lane_queues: LaneQueues) -> bool:
        # Load independent baseline
        return self.timer >= self.phase_duration

class GreenWaveController(SignalAlgorithm):
    name = AlgorithmName.GREEN_WAVE

    def __init__(self,
                 base_duration: float = config.GREEN_WAVE_BASE_DURATION,
                 extension: float = config.GREEN_WAVE_EXTENSION,
                 min_duration: float = config.GREEN_WAVE_MIN_DURATION,
                 busy_queue: int = config.GREEN_WAVE_BUSY_QUEUE):
        super().__init__()
        self.base_duration = base_duration
        self.extension = extension
        self.min_duration = min_duration
        self.busy_queue = busy_queue

    def duration_for_group(self, lane_queues: LaneQueues, group: DirectionGroup) -> float:
        queued = group_pressure(lane_queues, group)
        if queued >= self.busy_queue:
            return self.base_duration + self.extension
        if queued == 0:
            return self.min_duration
        return self.base_duration

    def should_switch(self, controller: SignalSystem, lane_queues: LaneQueues) -> bool:
        return self.timer >= self.duration_for_group(lane_queues, controller.active_group)

class MaxPressureController(SignalAlgorithm):
    name = AlgorithmName.MAX_PRESSURE

    def __init__(self,
                 min_hold: float = config.MAX_PRESSURE_MIN_HOLD,
                 max_hold: float = config.MAX_PRESSURE_MAX_HOLD,
                 threshold: int = config.MAX_PRESSURE_THRESHOLD):
        super().__init__()
        self.min_hold = min_hold
        self.max_hold = max_hold
        self.threshold = threshold

    def should_switch(self, controller: SignalSystem, lane_queues: LaneQueues) -> bool:
        active = controller.active_group
        served = group_pressure(lane_queues, active)
        waiting = group_pressure(lane_queues, active.opposite())

        if waiting - served >= self.threshold and self.timer >= self.min_hold:
            return True
        # Bounds starvation of the waiting group
        return self.timer >= self.max_hold

def build_algorithm(name: AlgorithmName,
                    phase_duration: Optional[float] = None,
                    min_hold: Optional[float] = None,
                    max_hold: Optional[float] = None,
                    threshold: Optional[int] = None) -> SignalAlgorithm:
    name = AlgorithmName(name)
    if name == AlgorithmName.FIXED_TIME:
        if phase_duration is None:
            return FixedTimeController()
        return FixedTimeController(phase_duration=phase_duration)
    if name == AlgorithmName.GREEN_WAVE:
        if phase_duration is None:
            return GreenWaveController()
        return GreenWaveController(base_duration=phase_duration)

    params = {}
    if min_hold is not None: params["min_hold"] = min_hold
    if max_hold is not None: params["max_hold"] = max_hold
    if threshold is not None: params["threshold"] = threshold
    return MaxPressureController(**params)
