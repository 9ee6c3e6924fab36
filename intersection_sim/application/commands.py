import logging
from abc import ABC, abstractmethod
from typing import Any
from intersection_sim.controllers.implementations import build_algorithm
from intersection_sim.domain.models import AlgorithmSelection

logger = logging.getLogger(__name__)

class Command(ABC):
    """A mutation requested from outside the loop, applied at a tick boundary."""

    @abstractmethod
    def execute(self, kernel: Any):
        pass

class ResetCommand(Command):
    def execute(self, kernel: Any):
        kernel.reset()

class SetAlgorithmCommand(Command):
    def __init__(self, selection: AlgorithmSelection):
        self.selection = selection

    def execute(self, kernel: Any):
        algorithm = build_algorithm(
            self.selection.algorithm,
            phase_duration=self.selection.phaseDuration,
            min_hold=self.selection.minHold,
            max_hold=self.selection.maxHold,
            threshold=self.selection.threshold,
        )
        kernel.set_algorithm(algorithm)

class SetRunningCommand(Command):
    def __init__(self, running: bool):
        self.running = running

    def execute(self, kernel: Any):
        kernel.set_running(self.running)

class StepCommand(Command):
    def __init__(self, dt: float, steps: int = 1):
        self.dt = dt
        self.steps = steps

    def execute(self, kernel: Any):
        # An earlier command in the same batch may have resumed the loop
        if kernel.state.running:
            logger.warning("Ignoring step of %d x %.3fs while the simulation is running", self.steps, self.dt)
            return
        for _ in range(self.steps):
            kernel.update(self.dt)
