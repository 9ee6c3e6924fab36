import json
import logging
import time
from typing import Dict, Any
from intersection_sim.controllers.implementations import build_algorithm
from intersection_sim.domain.models import AlgorithmName
from intersection_sim.kernel.simulation_kernel import SimulationKernel
from intersection_sim.domain import config

logger = logging.getLogger(__name__)

def run_policy(algorithm: AlgorithmName, duration: float, seed: int, dt: float = 0.05) -> Dict[str, Any]:
    kernel = SimulationKernel(seed=seed)
    kernel.set_algorithm(build_algorithm(algorithm))

    ticks = int(round(duration / dt))
    for _ in range(ticks):
        kernel.update(dt)

    return {
        "averageWait": kernel.average_wait,
        "completedCars": kernel.completed_cars,
        "liveCars": len(kernel.vehicles.all_cars()),
        "samples": [sample.model_dump() for sample in kernel.drain_samples()],
    }

def run_headless_experiment(output_path: str, duration: float = 300.0, seed: int = config.DEFAULT_SEED):
    """Runs every policy on the same seeded traffic and writes the comparison as JSON."""
    results = {}

    start_time = time.time()
    for algorithm in AlgorithmName:
        results[algorithm.value] = run_policy(algorithm, duration, seed)
        logger.info("%s: average wait %.2fs over %d cars",
                    algorithm.value, results[algorithm.value]["averageWait"],
                    results[algorithm.value]["completedCars"])

    end_time = time.time()
    logger.info("Experiment finished in %.4fs", end_time - start_time)

    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
    return results

if __name__ == "__main__":
    import sys
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
    if len(sys.argv) > 1:
        duration = float(sys.argv[2]) if len(sys.argv) > 2 else 300.0
        seed = int(sys.argv[3]) if len(sys.argv) > 3 else config.DEFAULT_SEED
        run_headless_experiment(sys.argv[1], duration, seed)
    else:
        print("Usage: python -m intersection_sim.experiments.run_experiment <output> [duration] [seed]")
