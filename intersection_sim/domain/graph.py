import networkx as nx
from typing import Dict, Any, Tuple
from intersection_sim.domain.models import Direction
from intersection_sim.domain import config

CENTER = "center"

def _node(direction: Direction, kind: str) -> str:
    return f"{Direction(direction).value}-{kind}"

class RoadNetwork:
    """Approach geometry of a single four-way intersection.

    Every direction owns a straight path ``entry -> stop -> center -> exit``.
    Entry and exit nodes sit ``SPAWN_OFFSET`` units outside the canvas, the
    stop node sits ``INTERSECTION_HALF_SIZE`` before the center on the
    approach side.
    """

    def __init__(self):
        self.graph = nx.DiGraph()
        self.width = 0.0
        self.height = 0.0
        self.lane_coordinates: Dict[Direction, float] = {}

    def add_intersection(self, intersection_id: str, pos: Tuple[float, float]):
        self.graph.add_node(intersection_id, pos=pos, type="intersection")

    def add_point(self, node_id: str, pos: Tuple[float, float], kind: str):
        self.graph.add_node(node_id, pos=pos, type=kind)

    def add_road(self, u: str, v: str, direction: Direction):
        (ux, uy), (vx, vy) = self.get_node_pos(u), self.get_node_pos(v)
        # Measured along the travel axis; the lane offset from the center is lateral
        length = abs((vx - ux) * direction.dx + (vy - uy) * direction.dy)
        self.graph.add_edge(u, v, length=length, direction=direction)

    def get_edge_data(self, u: str, v: str) -> Dict[str, Any]:
        return self.graph.get_edge_data(u, v)

    def get_node_pos(self, u: str) -> Tuple[float, float]:
        return self.graph.nodes[u].get('pos', (0.0, 0.0))

    @classmethod
    def single_intersection(cls, width: float = config.CANVAS_WIDTH,
                            height: float = config.CANVAS_HEIGHT) -> "RoadNetwork":
        network = cls()
        network.width = width
        network.height = height
        cx, cy = width / 2.0, height / 2.0
        half, spawn = config.INTERSECTION_HALF_SIZE, config.SPAWN_OFFSET

        network.lane_coordinates = {
            Direction.EAST: cy - config.LANE_OFFSET,
            Direction.WEST: cy + config.LANE_OFFSET,
            Direction.NORTH: cx + config.LANE_OFFSET,
            Direction.SOUTH: cx - config.LANE_OFFSET,
        }
        network.add_intersection(CENTER, (cx, cy))

        for direction in Direction:
            lane = network.lane_coordinates[direction]
            if direction == Direction.EAST:
                points = ((-spawn, lane), (cx - half, lane), (width + spawn, lane))
            elif direction == Direction.WEST:
                points = ((width + spawn, lane), (cx + half, lane), (-spawn, lane))
            elif direction == Direction.NORTH:
                points = ((lane, height + spawn), (lane, cy + half), (lane, -spawn))
            elif direction == Direction.SOUTH:
                points = ((lane, -spawn), (lane, cy - half), (lane, height + spawn))
            else:
                raise ValueError(f"Unexpected direction: {direction}")

            entry, stop, exit_ = (_node(direction, kind) for kind in ("entry", "stop", "exit"))
            network.add_point(entry, points[0], "entry")
            network.add_point(stop, points[1], "stop")
            network.add_point(exit_, points[2], "exit")
            network.add_road(entry, stop, direction)
            network.add_road(stop, CENTER, direction)
            network.add_road(CENTER, exit_, direction)

        return network

    def entry_point(self, direction: Direction) -> Tuple[float, float]:
        return self.get_node_pos(_node(direction, "entry"))

    def stop_point(self, direction: Direction) -> Tuple[float, float]:
        return self.get_node_pos(_node(direction, "stop"))

    def exit_point(self, direction: Direction) -> Tuple[float, float]:
        return self.get_node_pos(_node(direction, "exit"))

    def route_length(self, direction: Direction) -> float:
        """Distance a car travels from its entry point to its exit point."""
        return nx.shortest_path_length(
            self.graph, _node(direction, "entry"), _node(direction, "exit"), weight="length"
        )
