import unittest
from unittest.mock import MagicMock
from intersection_sim.controllers.implementations import (
    FixedTimeController, GreenWaveController, MaxPressureController, build_algorithm
)
from intersection_sim.domain.models import AlgorithmName, Direction, DirectionGroup, LightState
from intersection_sim.kernel.simulation_kernel import SimulationKernel
from intersection_sim.systems.signal_system import SignalSystem

# Exact in binary floating point, so tick boundaries land on whole seconds
DT = 0.125

def run(kernel: SimulationKernel, seconds: float, dt: float = DT):
    for _ in range(int(round(seconds / dt))):
        kernel.update(dt)

class TestFixedTimeController(unittest.TestCase):
    def setUp(self):
        self.kernel = SimulationKernel(seed=1, spawning=False)
        self.kernel.set_algorithm(FixedTimeController(phase_duration=8.0))
        self.controller = self.kernel.controller

    def test_switch_sequence(self):
        run(self.kernel, 8.0)
        # The request is issued on this tick and honoured on the next one
        self.assertFalse(self.controller.is_transitioning())
        self.assertEqual(self.controller.target_group, DirectionGroup.NORTH_SOUTH)

        self.kernel.update(DT)
        self.assertTrue(self.controller.is_transitioning())
        self.assertEqual(self.kernel.get_light_state(Direction.EAST), LightState.YELLOW)
        self.assertEqual(self.kernel.get_light_state(Direction.NORTH), LightState.RED)

        run(self.kernel, 10.0 - 8.0 - DT)
        self.assertTrue(self.controller.is_transitioning())

        self.kernel.update(DT)
        self.assertFalse(self.controller.is_transitioning())
        self.assertEqual(self.controller.active_group, DirectionGroup.NORTH_SOUTH)
        self.assertEqual(self.kernel.get_light_state(Direction.NORTH), LightState.GREEN)
        self.assertEqual(self.kernel.get_light_state(Direction.EAST), LightState.RED)

    def test_timer_restarts_when_active_group_changes(self):
        run(self.kernel, 10.0 + DT)
        self.assertEqual(self.controller.active_group, DirectionGroup.NORTH_SOUTH)

        run(self.kernel, 8.0)
        self.assertFalse(self.controller.is_transitioning())
        self.kernel.update(DT)
        self.assertTrue(self.controller.is_transitioning())

    def test_no_request_while_transitioning_or_pending(self):
        controller = MagicMock(spec=SignalSystem)
        controller.active_group = DirectionGroup.EAST_WEST
        controller.target_group = DirectionGroup.EAST_WEST
        controller.is_transitioning.return_value = True

        algorithm = FixedTimeController(phase_duration=1.0)
        algorithm.reset(controller)
        for _ in range(20):
            algorithm.update(0.5, controller, {})
        controller.request_switch.assert_not_called()

        controller.is_transitioning.return_value = False
        controller.target_group = DirectionGroup.NORTH_SOUTH
        algorithm.update(0.5, controller, {})
        controller.request_switch.assert_not_called()

        controller.target_group = DirectionGroup.EAST_WEST
        algorithm.update(0.5, controller, {})
        controller.request_switch.assert_called_once_with(DirectionGroup.NORTH_SOUTH)

class TestGreenWaveController(unittest.TestCase):
    def queues(self, **counts):
        return {Direction[name]: [object()] * count for name, count in counts.items()}

    def test_duration_depends_on_active_group_load(self):
        algorithm = GreenWaveController()
        ew = DirectionGroup.EAST_WEST
        self.assertEqual(algorithm.duration_for_group({}, ew), 5.0)
        self.assertEqual(algorithm.duration_for_group(self.queues(EAST=1), ew), 8.0)
        self.assertEqual(algorithm.duration_for_group(self.queues(EAST=1, WEST=1), ew), 8.0)
        self.assertEqual(algorithm.duration_for_group(self.queues(EAST=2, WEST=1), ew), 12.0)
        # Load on the other group does not count
        self.assertEqual(algorithm.duration_for_group(self.queues(NORTH=9), ew), 5.0)

    def test_empty_lanes_switch_at_minimum(self):
        kernel = SimulationKernel(seed=1, spawning=False)
        kernel.set_algorithm(GreenWaveController())
        run(kernel, 5.0)
        self.assertEqual(kernel.controller.target_group, DirectionGroup.NORTH_SOUTH)

    def test_busy_group_holds_green_longer(self):
        kernel = SimulationKernel(seed=1, spawning=False)
        kernel.set_algorithm(GreenWaveController())
        kernel.vehicles.spawn_wave(Direction.EAST, 2)
        kernel.vehicles.spawn_wave(Direction.WEST, 2)
        run(kernel, 11.875)
        self.assertEqual(kernel.controller.target_group, DirectionGroup.EAST_WEST)
        kernel.update(DT)
        self.assertEqual(kernel.controller.target_group, DirectionGroup.NORTH_SOUTH)

class TestMaxPressureController(unittest.TestCase):
    def setUp(self):
        self.kernel = SimulationKernel(seed=1, spawning=False)
        self.kernel.set_algorithm(MaxPressureController(min_hold=3.0, max_hold=12.0, threshold=2))
        self.controller = self.kernel.controller

    def test_pressure_difference_switches_after_min_hold(self):
        self.kernel.vehicles.spawn_wave(Direction.NORTH, 3)
        self.kernel.vehicles.spawn_wave(Direction.SOUTH, 2)

        run(self.kernel, 3.0 - DT)
        self.assertEqual(self.controller.target_group, DirectionGroup.EAST_WEST)

        self.kernel.update(DT)
        self.assertEqual(self.controller.target_group, DirectionGroup.NORTH_SOUTH)

        # The controller still enforces its own minimum green
        run(self.kernel, 2.0)
        self.assertTrue(self.controller.is_transitioning())

    def test_balanced_load_switches_at_max_hold(self):
        run(self.kernel, 12.0 - DT)
        self.assertEqual(self.controller.target_group, DirectionGroup.EAST_WEST)
        self.kernel.update(DT)
        self.assertEqual(self.controller.target_group, DirectionGroup.NORTH_SOUTH)

    def test_difference_below_threshold_waits_for_max_hold(self):
        self.kernel.vehicles.spawn_wave(Direction.NORTH, 1)
        run(self.kernel, 11.0)
        self.assertEqual(self.controller.target_group, DirectionGroup.EAST_WEST)

class TestBuildAlgorithm(unittest.TestCase):
    def test_builds_each_policy(self):
        self.assertIsInstance(build_algorithm(AlgorithmName.FIXED_TIME), FixedTimeController)
        self.assertIsInstance(build_algorithm("GREEN_WAVE"), GreenWaveController)
        self.assertIsInstance(build_algorithm(AlgorithmName.MAX_PRESSURE), MaxPressureController)

    def test_overrides(self):
        self.assertEqual(build_algorithm(AlgorithmName.FIXED_TIME, phase_duration=4.0).phase_duration, 4.0)
        algorithm = build_algorithm(AlgorithmName.MAX_PRESSURE, min_hold=1.0, threshold=5)
        self.assertEqual(algorithm.min_hold, 1.0)
        self.assertEqual(algorithm.threshold, 5)
        self.assertEqual(algorithm.max_hold, 12.0)

    def test_unknown_name(self):
        with self.assertRaises(ValueError):
            build_algorithm("ROUND_ROBIN")

if __name__ == '__main__':
    unittest.main()
