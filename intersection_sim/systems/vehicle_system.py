import logging
import random
from typing import Dict, List, Optional
from intersection_sim.domain.graph import RoadNetwork
from intersection_sim.domain.models import Direction, LightState
from intersection_sim.simulation.models import Car
from intersection_sim.systems.signal_system import SignalSystem
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

class VehicleSystem:
    """Per-direction lane queues, car-following and spawning."""

    def __init__(self, network: RoadNetwork, rng: Optional[random.Random] = None):
        self.network = network
        self.rng = rng or random.Random()
        self.lanes: Dict[Direction, List[Car]] = {direction: [] for direction in Direction}
        self.spawn_timers: Dict[Direction, float] = {}
        self.reset()

    def reset(self):
        for cars in self.lanes.values():
            cars.clear()
        for direction in Direction:
            self.spawn_timers[direction] = self._random_interval()

    def _random_interval(self) -> float:
        return self.rng.uniform(config.SPAWN_INTERVAL_MIN, config.SPAWN_INTERVAL_MAX)

    def _random_spacing(self) -> float:
        return self.rng.uniform(config.WAVE_GAP_MIN, config.WAVE_GAP_MAX) + config.CAR_LENGTH

    # Spawning

    def spawn(self, dt: float) -> int:
        spawned = 0
        for direction in Direction:
            self.spawn_timers[direction] -= dt
            if self.spawn_timers[direction] > 0.0:
                continue
            wave_size = self.rng.randint(config.WAVE_SIZE_MIN, config.WAVE_SIZE_MAX)
            spawned += len(self.spawn_wave(direction, wave_size))
            self.spawn_timers[direction] = self._random_interval()
        return spawned

    def spawn_wave(self, direction: Direction, count: int) -> List[Car]:
        direction = Direction(direction)
        created = []
        for _ in range(count):
            color = self.rng.choice(config.CAR_PALETTE)
            created.append(self.add_car(direction, color=color))
        return created

    def add_car(self, direction: Direction, color: str = config.CAR_PALETTE[0],
                speed: float = config.CAR_SPEED) -> Car:
        """Place a car at the lane entry, or behind the lane's tail if the entry is crowded."""
        direction = Direction(direction)
        cars = self.lanes[direction]
        x, y = self.network.entry_point(direction)

        if cars:
            tail = min(cars, key=lambda car: car.progress)
            entry_progress = x * direction.dx + y * direction.dy
            spacing = self._random_spacing()
            if tail.progress - entry_progress < spacing:
                x = tail.x - direction.dx * spacing
                y = tail.y - direction.dy * spacing

        car = Car(direction=direction, x=x, y=y, speed=speed, length=config.CAR_LENGTH, color=color)
        cars.append(car)
        return car

    # Kinematics

    def has_cleared_stop_line(self, car: Car) -> bool:
        stop_x, stop_y = self.network.stop_point(car.direction)
        return car.progress >= stop_x * car.direction.dx + stop_y * car.direction.dy

    def update(self, dt: float, controller: SignalSystem):
        for direction in Direction:
            cars = self.lanes[direction]
            cars.sort(key=lambda car: car.progress, reverse=True)
            light_state = controller.state(direction)

            previous: Optional[Car] = None
            for car in cars:
                car.update(dt, self.allowed_to_move(car, previous, light_state))
                previous = car

    def allowed_to_move(self, car: Car, previous: Optional[Car], light_state: LightState) -> bool:
        at_signal = not self.has_cleared_stop_line(car)
        front_has_space = previous is None or \
            previous.progress - car.progress > config.CAR_LENGTH + config.MIN_GAP
        # A car past the stop line is committed and never stops mid-intersection
        light_allows = light_state == LightState.GREEN or \
            (light_state == LightState.YELLOW and not at_signal)
        return front_has_space and (not at_signal or light_allows)

    def has_exited(self, car: Car) -> bool:
        exit_x, exit_y = self.network.exit_point(car.direction)
        return car.progress > exit_x * car.direction.dx + exit_y * car.direction.dy

    def remove_finished(self) -> List[Car]:
        finished: List[Car] = []
        for direction in Direction:
            remaining = []
            for car in self.lanes[direction]:
                if self.has_exited(car):
                    finished.append(car)
                else:
                    remaining.append(car)
            self.lanes[direction][:] = remaining
        if finished:
            logger.debug("Retired %d cars", len(finished))
        return finished

    # Queries

    def queue_lengths(self) -> Dict[Direction, int]:
        return {direction: len(cars) for direction, cars in self.lanes.items()}

    def all_cars(self) -> List[Car]:
        return [car for direction in Direction for car in self.lanes[direction]]
