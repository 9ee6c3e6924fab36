from typing import Dict
from pydantic import BaseModel, Field
from intersection_sim.domain.models import Direction, DirectionGroup, LightState

class Car(BaseModel):
    direction: Direction = Field(frozen=True)
    x: float
    y: float
    speed: float = Field(frozen=True)
    length: float = Field(frozen=True)
    color: str = Field(default="dodgerblue", frozen=True)
    moving: bool = True
    wait_timer: float = 0.0      # Seconds continuously blocked
    cumulative_wait: float = 0.0 # Never resets, feeds the average wait metric

    @property
    def progress(self) -> float:
        """Position projected on the travel axis; larger means further along."""
        return self.x * self.direction.dx + self.y * self.direction.dy

    def update(self, dt: float, allowed_to_move: bool):
        if allowed_to_move:
            self.moving = True
            self.wait_timer = 0.0
            distance = self.speed * dt
            self.x += distance * self.direction.dx
            self.y += distance * self.direction.dy
        else:
            self.moving = False
            self.wait_timer += dt
            self.cumulative_wait += dt

class TrafficLight(BaseModel):
    direction: Direction = Field(frozen=True)
    state: LightState = LightState.RED
    time_in_state: float = 0.0

    def update(self, dt: float):
        self.time_in_state += dt

    def set_state(self, new_state: LightState):
        if self.state != new_state:
            self.state = new_state
            self.time_in_state = 0.0

    def reset(self, state: LightState):
        self.state = state
        self.time_in_state = 0.0

class Intersection:
    def __init__(self):
        self.lights: Dict[Direction, TrafficLight] = {
            direction: TrafficLight(direction=direction) for direction in Direction
        }
        self.reset_to_default_phase()

    def reset_to_default_phase(self):
        self.reset_group_state(DirectionGroup.EAST_WEST, LightState.GREEN)
        self.reset_group_state(DirectionGroup.NORTH_SOUTH, LightState.RED)

    def light(self, direction: Direction) -> TrafficLight:
        return self.lights[Direction(direction)]

    def state(self, direction: Direction) -> LightState:
        return self.light(direction).state

    def set_group_state(self, group: DirectionGroup, state: LightState):
        for direction in group.directions:
            self.lights[direction].set_state(state)

    def reset_group_state(self, group: DirectionGroup, state: LightState):
        """Like set_group_state, but also zeroes time in state."""
        for direction in group.directions:
            self.lights[direction].reset(state)

    def update_lights(self, dt: float):
        for light in self.lights.values():
            light.update(dt)
