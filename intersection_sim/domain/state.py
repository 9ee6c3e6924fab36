from typing import Optional
from pydantic import BaseModel
from intersection_sim.domain.models import AlgorithmName

class SimulationState(BaseModel):
    tick_id: int = 0
    time: float = 0.0
    running: bool = False
    algorithm: Optional[AlgorithmName] = None
