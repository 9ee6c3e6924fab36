from enum import Enum
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field

class Direction(str, Enum):
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @property
    def vector(self) -> Tuple[int, int]:
        # Screen coordinates: y grows downwards, so northbound travel is -y
        return _DIRECTION_VECTORS[self]

    @property
    def dx(self) -> int:
        return self.vector[0]

    @property
    def dy(self) -> int:
        return self.vector[1]

    @property
    def group(self) -> "DirectionGroup":
        return DirectionGroup.for_direction(self)

_DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

class DirectionGroup(str, Enum):
    EAST_WEST = "EAST_WEST"
    NORTH_SOUTH = "NORTH_SOUTH"

    @property
    def directions(self) -> Tuple[Direction, Direction]:
        if self == DirectionGroup.EAST_WEST:
            return (Direction.EAST, Direction.WEST)
        return (Direction.NORTH, Direction.SOUTH)

    def opposite(self) -> "DirectionGroup":
        if self == DirectionGroup.EAST_WEST:
            return DirectionGroup.NORTH_SOUTH
        return DirectionGroup.EAST_WEST

    @classmethod
    def for_direction(cls, direction: Direction) -> "DirectionGroup":
        direction = Direction(direction)
        if direction in (Direction.EAST, Direction.WEST):
            return cls.EAST_WEST
        return cls.NORTH_SOUTH

class LightState(str, Enum):
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"

class PhaseState(str, Enum):
    GREEN = "GREEN"
    YELLOW = "YELLOW"

class AlgorithmName(str, Enum):
    FIXED_TIME = "FIXED_TIME"
    GREEN_WAVE = "GREEN_WAVE"
    MAX_PRESSURE = "MAX_PRESSURE"

# API/Response Models

class CarSnapshot(BaseModel):
    direction: Direction
    x: float
    y: float
    color: str
    moving: bool
    waitTimer: float
    cumulativeWait: float

class LightSnapshot(BaseModel):
    direction: Direction
    state: LightState
    timeInState: float

class PhaseSnapshot(BaseModel):
    activeGroup: DirectionGroup
    targetGroup: DirectionGroup
    phaseState: PhaseState
    stateTimer: float
    minGreen: float

class IntersectionGeometry(BaseModel):
    width: float
    height: float
    halfSize: float
    spawnOffset: float
    carLength: float
    carWidth: float
    laneOffsets: Dict[Direction, float]

class PerformanceStats(BaseModel):
    averageWait: float
    completedCars: int
    liveTotalWait: float
    simulationTime: float

class PerformanceSample(BaseModel):
    time: float
    averageWait: float

class SimulationSnapshot(BaseModel):
    tick: int
    time: float
    running: bool
    algorithm: Optional[AlgorithmName] = None
    phase: PhaseSnapshot
    lights: List[LightSnapshot]
    cars: List[CarSnapshot]
    stats: PerformanceStats

class AlgorithmSelection(BaseModel):
    algorithm: AlgorithmName
    # Optional overrides, forwarded to the policy constructor
    phaseDuration: Optional[float] = Field(default=None, gt=0)
    minHold: Optional[float] = Field(default=None, ge=0)
    maxHold: Optional[float] = Field(default=None, gt=0)
    threshold: Optional[int] = Field(default=None, ge=0)

class RunControl(BaseModel):
    running: bool

class StepRequest(BaseModel):
    dt: float = Field(default=0.05, gt=0, le=1.0)
    steps: int = Field(default=1, ge=1, le=10000)
