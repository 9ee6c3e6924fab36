import asyncio
import logging
import time
from fastapi import FastAPI, HTTPException
from typing import List
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from intersection_sim.kernel.simulation_kernel import SimulationKernel
from intersection_sim.application.commands import (
    ResetCommand, SetAlgorithmCommand, SetRunningCommand, StepCommand
)
from intersection_sim.domain.models import (
    AlgorithmName, AlgorithmSelection, CarSnapshot, Direction, IntersectionGeometry,
    LightSnapshot, PerformanceSample, PerformanceStats, RunControl, SimulationSnapshot, StepRequest
)
from intersection_sim.domain import config

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
logger = logging.getLogger(__name__)

# Initialize Kernel
kernel = SimulationKernel(seed=config.DEFAULT_SEED)

# Background task for simulation loop
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: select the baseline policy and start the loop paused
    kernel.queue_command(SetAlgorithmCommand(AlgorithmSelection(algorithm=AlgorithmName.FIXED_TIME)))
    loop_task = asyncio.create_task(run_simulation())
    yield
    # Shutdown
    loop_task.cancel()

app = FastAPI(lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

async def run_simulation():
    """Runs the simulation update loop at config.TICK_RATE"""
    dt = 1.0 / config.TICK_RATE

    while True:
        start_time = time.time()

        try:
            kernel.run_tick()
        except Exception:
            logger.exception("Simulation tick failed, pausing")
            kernel.state.running = False

        # Sleep to maintain frame rate
        elapsed = time.time() - start_time
        await asyncio.sleep(max(0.0, dt - elapsed))

@app.get("/api/state", response_model=SimulationSnapshot)
async def get_state():
    """Returns a full read-only snapshot of the simulation"""
    return kernel.get_snapshot()

@app.get("/api/cars", response_model=List[CarSnapshot])
async def get_cars():
    return kernel.get_cars()

@app.get("/api/lights", response_model=List[LightSnapshot])
async def get_lights():
    return kernel.get_light_states()

@app.get("/api/lights/{direction}", response_model=LightSnapshot)
async def get_light(direction: str):
    """Returns the light for one approach direction"""
    try:
        light = kernel.intersection.light(Direction(direction.upper()))
    except ValueError:
        raise HTTPException(status_code=404, detail="Direction not found")
    return LightSnapshot(direction=light.direction, state=light.state, timeInState=light.time_in_state)

@app.get("/api/geometry", response_model=IntersectionGeometry)
async def get_geometry():
    return kernel.get_geometry()

@app.get("/api/stats", response_model=PerformanceStats)
async def get_stats():
    """Returns the running average wait and completed-vehicle count"""
    return kernel.get_stats()

@app.get("/api/stats/samples", response_model=List[PerformanceSample])
async def drain_samples():
    """Returns and clears the pending (time, averageWait) samples"""
    return kernel.drain_samples()

@app.post("/api/simulation/reset")
async def reset_simulation():
    kernel.queue_command(ResetCommand())
    return {"status": "Reset queued"}

@app.post("/api/simulation/algorithm")
async def set_algorithm(selection: AlgorithmSelection):
    """Switches the signal policy; the simulation is reset on the next tick"""
    kernel.queue_command(SetAlgorithmCommand(selection))
    return {"status": "Algorithm change queued", "algorithm": selection.algorithm}

@app.post("/api/simulation/run")
async def set_running(control: RunControl):
    kernel.queue_command(SetRunningCommand(control.running))
    return {"status": "Run state queued", "running": control.running}

@app.post("/api/simulation/step")
async def step_simulation(request: StepRequest):
    """Advances the simulation manually, intended for use while paused"""
    if kernel.state.running:
        raise HTTPException(status_code=409, detail="Pause the simulation before stepping")
    kernel.queue_command(StepCommand(request.dt, request.steps))
    return {"status": "Step queued", "dt": request.dt, "steps": request.steps}

@app.get("/")
def read_root():
    return {"status": "Intersection Signal Simulator Running"}

def main():
    """Run the application using uvicorn."""
    import uvicorn

    uvicorn.run("intersection_sim.main:app", host="0.0.0.0", port=8001)

if __name__ == "__main__":
    main()
