import logging
import random
from typing import Dict, List, Optional
from intersection_sim.application.commands import Command
from intersection_sim.controllers.base import SignalAlgorithm
from intersection_sim.controllers.implementations import FixedTimeController
from intersection_sim.domain.graph import RoadNetwork
from intersection_sim.domain.models import (
    CarSnapshot, Direction, DirectionGroup, IntersectionGeometry, LightSnapshot, LightState,
    PerformanceSample, PerformanceStats, SimulationSnapshot
)
from intersection_sim.domain.state import SimulationState
from intersection_sim.kernel.command_queue import CommandQueue
from intersection_sim.kernel.snapshot_builder import SnapshotBuilder
from intersection_sim.simulation.models import Car, Intersection
from intersection_sim.stats.performance_tracker import PerformanceTracker
from intersection_sim.systems.signal_system import SignalSystem
from intersection_sim.systems.vehicle_system import VehicleSystem
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

class SimulationKernel:
    """Owns all simulation state and advances it one tick at a time.

    ``update(dt)`` is the only place state changes. External callers either
    read snapshots or queue commands that ``run_tick`` applies before the next
    update.
    """

    def __init__(self, width: float = config.CANVAS_WIDTH, height: float = config.CANVAS_HEIGHT,
                 seed: Optional[int] = None, spawning: bool = True):
        self.state = SimulationState()
        self.dt = 1.0 / config.TICK_RATE
        self.seed = seed
        self.spawning = spawning
        self.rng = random.Random(seed)
        self.command_queue = CommandQueue()
        self.snapshots = SnapshotBuilder()

        self.network = RoadNetwork.single_intersection(width, height)
        self.intersection = Intersection()
        self.controller = SignalSystem(self.intersection)
        self.vehicles = VehicleSystem(self.network, self.rng)
        self.tracker = PerformanceTracker()
        self.algorithm: Optional[SignalAlgorithm] = None
        self.reset()

    def reset(self):
        if self.seed is not None:
            self.rng.seed(self.seed)
        self.state.tick_id = 0
        self.state.time = 0.0
        self.vehicles.reset()
        self.tracker.reset()
        self.intersection.reset_to_default_phase()
        self.controller.reset(DirectionGroup.EAST_WEST)
        if self.algorithm is not None:
            self.algorithm.reset(self.controller)
        logger.info("Simulation reset (algorithm=%s, seed=%s)",
                    self.state.algorithm.value if self.state.algorithm else None, self.seed)

    def set_algorithm(self, algorithm: Optional[SignalAlgorithm]):
        self.algorithm = algorithm
        self.state.algorithm = algorithm.name if algorithm is not None else None
        logger.info("Signal algorithm set to %s", self.state.algorithm.value if algorithm else None)
        self.reset()

    def set_running(self, running: bool):
        if running and self.algorithm is None:
            self.set_algorithm(FixedTimeController())
        self.state.running = running
        logger.info("Simulation %s", "running" if running else "paused")

    def queue_command(self, command: Command):
        self.command_queue.add(command)

    def process_commands(self):
        if len(self.command_queue):
            logger.debug("Applying %d queued command(s) at tick %d", len(self.command_queue), self.state.tick_id)
        commands = self.command_queue.pop_all()
        while commands:
            cmd = commands.popleft()
            cmd.execute(self)

    def run_tick(self):
        """One iteration of the served loop: apply commands, then advance if running."""
        self.process_commands()
        if self.state.running:
            self.update(self.dt)

    def update(self, dt: float):
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if self.algorithm is None:
            return

        # 1. Clock and phase controller
        self.state.time += dt
        self.state.tick_id += 1
        self.controller.update(dt)
        self.intersection.update_lights(dt)

        # 2. Policy
        self.algorithm.update(dt, self.controller, self.vehicles.lanes)

        # 3. Spawning and kinematics
        if self.spawning:
            self.vehicles.spawn(dt)
        self.vehicles.update(dt, self.controller)

        # 4. Retirement and statistics
        for car in self.vehicles.remove_finished():
            self.tracker.record_car_finished(car.cumulative_wait)
        self.tracker.update(dt, self.state.time)

    # Queries

    @property
    def average_wait(self) -> float:
        return self.tracker.average_wait

    @property
    def completed_cars(self) -> int:
        return self.tracker.completed_cars

    def drain_samples(self) -> List[PerformanceSample]:
        return self.tracker.drain_samples()

    def get_lane_queues(self) -> Dict[Direction, List[Car]]:
        return {direction: list(cars) for direction, cars in self.vehicles.lanes.items()}

    def get_cars(self) -> List[CarSnapshot]:
        return self.snapshots.cars(self.vehicles.all_cars())

    def get_light_states(self) -> List[LightSnapshot]:
        return self.snapshots.lights(self.intersection)

    def get_light_state(self, direction: Direction) -> LightState:
        return self.controller.state(direction)

    def get_geometry(self) -> IntersectionGeometry:
        return self.snapshots.geometry(self.network)

    def get_stats(self) -> PerformanceStats:
        return self.snapshots.stats(self.tracker, self.vehicles.all_cars(), self.state)

    def get_snapshot(self) -> SimulationSnapshot:
        return self.snapshots.build(self.state, self.controller, self.vehicles.all_cars(), self.tracker)
