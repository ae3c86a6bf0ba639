class TSPError(Exception):
    """Base class for every failure raised while loading or solving a problem."""


class InvalidProblem(TSPError):
    """The problem definition is structurally malformed."""


class UnknownVertex(TSPError):
    def __init__(self, vertex_id):
        self.vertex_id = vertex_id
        super().__init__(f"No vertex with id {vertex_id} in problem.")


class DeadEnd(TSPError):
    """Greedy construction reached a vertex with no eligible neighbour."""

    def __init__(self, vertex_id, visited_count: int):
        self.vertex_id = vertex_id
        self.visited_count = visited_count
        super().__init__(
            f"Vertex {vertex_id} has no edge to an unvisited vertex "
            f"({visited_count} vertices visited so far)."
        )


class MissingEdge(TSPError):
    def __init__(self, departure_vertex_id, arrival_vertex_id):
        self.departure_vertex_id = departure_vertex_id
        self.arrival_vertex_id = arrival_vertex_id
        super().__init__(f"No edge from {departure_vertex_id} to {arrival_vertex_id}.")
