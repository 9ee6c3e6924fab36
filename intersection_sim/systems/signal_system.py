import logging
from typing import Optional
from intersection_sim.domain.models import Direction, DirectionGroup, LightState, PhaseState
from intersection_sim.simulation.models import Intersection
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

class SignalSystem:
    """Phase controller for the intersection.

    Policies only request a direction group; this class alone decides when
    the lights change, so the minimum green and the yellow clearance can
    never be skipped.
    """

    def __init__(self, intersection: Intersection, start_group: DirectionGroup = DirectionGroup.EAST_WEST):
        self.intersection = intersection
        self.reset(start_group)

    def reset(self, start_group: DirectionGroup = DirectionGroup.EAST_WEST):
        self.active_group = start_group
        self.target_group = start_group
        self.phase_state = PhaseState.GREEN
        self.state_timer = 0.0
        self.min_green = config.BASE_GREEN_MIN
        self.intersection.reset_group_state(self.active_group, LightState.GREEN)
        self.intersection.reset_group_state(self.active_group.opposite(), LightState.RED)

    def request_switch(self, group: Optional[DirectionGroup]):
        if group is None:
            return
        self.target_group = DirectionGroup(group)

    def enforce_minimum_green(self, seconds: float):
        # Applies to the current phase only, cleared on the next transition
        self.min_green = max(config.BASE_GREEN_MIN, seconds)

    def update(self, dt: float):
        self.state_timer += dt

        if self.phase_state == PhaseState.GREEN:
            if self._should_begin_yellow():
                self._start_yellow()
        elif self.phase_state == PhaseState.YELLOW:
            if self.state_timer >= config.YELLOW_DURATION:
                self._complete_transition()

    def _should_begin_yellow(self) -> bool:
        if self.target_group == self.active_group:
            return False
        return self.state_timer >= self.min_green

    def _start_yellow(self):
        self.phase_state = PhaseState.YELLOW
        self.state_timer = 0.0
        self._apply_group_state(self.active_group.opposite(), LightState.RED)
        self._apply_group_state(self.active_group, LightState.YELLOW)
        logger.debug("Yellow for %s, switching to %s", self.active_group.value, self.target_group.value)

    def _complete_transition(self):
        self._apply_group_state(self.active_group, LightState.RED)
        self.active_group = self.target_group
        self.phase_state = PhaseState.GREEN
        self.state_timer = 0.0
        self.min_green = config.BASE_GREEN_MIN
        self._apply_group_state(self.active_group, LightState.GREEN)
        self._apply_group_state(self.active_group.opposite(), LightState.RED)
        logger.debug("Green for %s", self.active_group.value)

    def _apply_group_state(self, group: DirectionGroup, state: LightState):
        self.intersection.set_group_state(group, state)

    def is_transitioning(self) -> bool:
        return self.phase_state == PhaseState.YELLOW

    def state(self, direction: Direction) -> LightState:
        return self.intersection.state(direction)

    def is_green(self, direction: Direction) -> bool:
        return self.state(direction) == LightState.GREEN

    def is_yellow(self, direction: Direction) -> bool:
        return self.state(direction) == LightState.YELLOW

    def is_red(self, direction: Direction) -> bool:
        return self.state(direction) == LightState.RED

    def group_for(self, direction: Direction) -> DirectionGroup:
        return DirectionGroup.for_direction(direction)
