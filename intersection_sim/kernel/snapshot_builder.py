from typing import List
from intersection_sim.domain.graph import RoadNetwork
from intersection_sim.domain.models import (
    CarSnapshot, Direction, IntersectionGeometry, LightSnapshot, PerformanceStats,
    PhaseSnapshot, SimulationSnapshot
)
from intersection_sim.domain.state import SimulationState
from intersection_sim.simulation.models import Car, Intersection
from intersection_sim.stats.performance_tracker import PerformanceTracker
from intersection_sim.systems.signal_system import SignalSystem
from intersection_sim.domain import config

class SnapshotBuilder:
    """Copies live simulation objects into read-only response models."""

    def cars(self, cars: List[Car]) -> List[CarSnapshot]:
        return [
            CarSnapshot(
                direction=car.direction,
                x=car.x,
                y=car.y,
                color=car.color,
                moving=car.moving,
                waitTimer=car.wait_timer,
                cumulativeWait=car.cumulative_wait,
            )
            for car in cars
        ]

    def lights(self, intersection: Intersection) -> List[LightSnapshot]:
        return [
            LightSnapshot(direction=light.direction, state=light.state, timeInState=light.time_in_state)
            for light in (intersection.light(direction) for direction in Direction)
        ]

    def phase(self, controller: SignalSystem) -> PhaseSnapshot:
        return PhaseSnapshot(
            activeGroup=controller.active_group,
            targetGroup=controller.target_group,
            phaseState=controller.phase_state,
            stateTimer=controller.state_timer,
            minGreen=controller.min_green,
        )

    def geometry(self, network: RoadNetwork) -> IntersectionGeometry:
        return IntersectionGeometry(
            width=network.width,
            height=network.height,
            halfSize=config.INTERSECTION_HALF_SIZE,
            spawnOffset=config.SPAWN_OFFSET,
            carLength=config.CAR_LENGTH,
            carWidth=config.CAR_WIDTH,
            laneOffsets=dict(network.lane_coordinates),
        )

    def stats(self, tracker: PerformanceTracker, cars: List[Car], state: SimulationState) -> PerformanceStats:
        return PerformanceStats(
            averageWait=tracker.average_wait,
            completedCars=tracker.completed_cars,
            liveTotalWait=sum(car.wait_timer for car in cars),
            simulationTime=state.time,
        )

    def build(self, state: SimulationState, controller: SignalSystem,
              cars: List[Car], tracker: PerformanceTracker) -> SimulationSnapshot:
        return SimulationSnapshot(
            tick=state.tick_id,
            time=state.time,
            running=state.running,
            algorithm=state.algorithm,
            phase=self.phase(controller),
            lights=self.lights(controller.intersection),
            cars=self.cars(cars),
            stats=self.stats(tracker, cars, state),
        )
