from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from intersection_sim.domain.models import AlgorithmName, Direction, DirectionGroup
from intersection_sim.simulation.models import Car
from intersection_sim.systems.signal_system import SignalSystem

LaneQueues = Dict[Direction, List[Car]]

def queue_length(lane_queues: LaneQueues, direction: Direction) -> int:
    return len(lane_queues.get(direction, ()))

def group_pressure(lane_queues: LaneQueues, group: DirectionGroup) -> int:
    return sum(queue_length(lane_queues, direction) for direction in group.directions)

class SignalAlgorithm(ABC):
    """Signal timing policy.

    Subclasses decide when the active group should hand over right of way.
    The shared ``timer`` counts seconds since the controller's active group
    last changed. No decision is taken while the controller is in yellow or
    while a previously requested switch is still pending.
    """

    name: AlgorithmName

    def __init__(self):
        self.timer = 0.0
        self._last_group: Optional[DirectionGroup] = None

    def update(self, dt: float, controller: SignalSystem, lane_queues: LaneQueues):
        self.timer += dt

        active = controller.active_group
        if self._last_group is None or active != self._last_group:
            self._last_group = active
            self.timer = 0.0

        if controller.is_transitioning() or controller.target_group != active:
            return

        if self.should_switch(controller, lane_queues):
            controller.request_switch(active.opposite())
            self.timer = 0.0

    @abstractmethod
    def should_switch(self, controller: SignalSystem, lane_queues: LaneQueues) -> bool:
        pass

    def reset(self, controller: SignalSystem):
        self.timer = 0.0
        self._last_group = controller.active_group
