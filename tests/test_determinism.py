import unittest
from intersection_sim.controllers.implementations import FixedTimeController, MaxPressureController
from intersection_sim.kernel.simulation_kernel import SimulationKernel

def run_kernel(seed: int, ticks: int, dt: float = 0.05) -> SimulationKernel:
    kernel = SimulationKernel(seed=seed)
    kernel.set_algorithm(MaxPressureController())
    for _ in range(ticks):
        kernel.update(dt)
    return kernel

def car_signature(kernel: SimulationKernel):
    return [(c.direction, c.x, c.y, c.color, c.cumulativeWait) for c in kernel.get_cars()]

class TestDeterminism(unittest.TestCase):
    def test_determinism(self):
        kernel1 = run_kernel(42, 400)
        kernel2 = run_kernel(42, 400)

        # Verify vehicles are identical
        self.assertEqual(car_signature(kernel1), car_signature(kernel2))
        self.assertEqual(kernel1.completed_cars, kernel2.completed_cars)
        self.assertEqual(kernel1.average_wait, kernel2.average_wait)

        # Verify signals are identical
        self.assertEqual(kernel1.controller.active_group, kernel2.controller.active_group)
        self.assertEqual(kernel1.controller.state_timer, kernel2.controller.state_timer)
        for light1, light2 in zip(kernel1.get_light_states(), kernel2.get_light_states()):
            self.assertEqual(light1, light2)

    def test_different_seeds(self):
        kernel1 = run_kernel(42, 200)
        kernel2 = run_kernel(999, 200)

        self.assertNotEqual(car_signature(kernel1), car_signature(kernel2),
                            "Different seeds should produce different states")

    def test_reset_matches_fresh_construction(self):
        kernel = run_kernel(7, 300)
        kernel.reset()

        initial = run_kernel(7, 0)
        self.assertEqual(kernel.get_light_states(), initial.get_light_states())
        self.assertEqual(kernel.controller.state_timer, initial.controller.state_timer)
        self.assertEqual(kernel.get_cars(), initial.get_cars())

        for _ in range(300):
            kernel.update(0.05)

        fresh = run_kernel(7, 300)
        self.assertEqual(car_signature(kernel), car_signature(fresh))
        self.assertEqual(kernel.completed_cars, fresh.completed_cars)
        self.assertEqual(kernel.controller.active_group, fresh.controller.active_group)
        self.assertEqual(kernel.controller.state_timer, fresh.controller.state_timer)
        self.assertEqual(kernel.get_light_states(), fresh.get_light_states())

    def test_set_algorithm_restarts_light_clocks(self):
        kernel = SimulationKernel(seed=7)
        kernel.set_algorithm(FixedTimeController())
        for _ in range(60):
            kernel.update(0.05)
        kernel.set_algorithm(FixedTimeController())

        for light in kernel.get_light_states():
            self.assertEqual(light.timeInState, 0.0)

if __name__ == '__main__':
    unittest.main()
