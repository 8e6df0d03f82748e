#Maze generation and escape-path search
#Mazes are grown as a random spanning tree (Prim style) over the odd cells of a square grid
#An entrance is punched in the west wall and an exit in the east wall
#Dijkstra's algorithm over the same graph finds the escape route, which is painted back onto the grid

#To run this code, open terminal, follow directories to where the files are then run "python3 maze_gen.py"
#To generate a solved maze without the menu, run "python3 maze_gen.py --mode cli --size 21 --solve"
#To save metrics for several runs to a csv file, run "python3 maze_gen.py --mode cli --runs 10 --seed 1 --solve --csv-output results.csv"

from __future__ import annotations

import argparse
import bisect
import heapq
import json
import logging
import math
import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union


logger = logging.getLogger(__name__)

MIN_SIZE = 5
WALL_THICKNESS = 1
SEED_DISTANCE = 2
BORDER_DISTANCE = 1
SNAPSHOT_FORMAT = 1


class MazeError(Exception):
    pass


class InvalidSizeError(MazeError, ValueError):
    pass


class NoValidBorderNodeError(MazeError, RuntimeError):
    pass


class MazeFormatError(MazeError, ValueError):
    pass


class Direction(Enum):
    #Declaration order is the probe order used while growing the maze
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


@dataclass(frozen=True, order=True)
class Cell:
    x: int
    y: int

    def shift(self, direction: Direction, distance: int) -> Cell:
        return Cell(self.x + direction.dx * distance, self.y + direction.dy * distance)


@dataclass(frozen=True, order=True)
class Node:
    cell: Cell

    @property
    def x(self) -> int:
        return self.cell.x

    @property
    def y(self) -> int:
        return self.cell.y


@dataclass(frozen=True)
class Edge:
    target: Node
    weight: int

    def __lt__(self, other: Edge) -> bool:
        return self.weight < other.weight


class Graph:
    #Single adjacency table: node -> outgoing edges, lightest first
    #Nodes do not carry their own copy of the edges, reverse lookups go through the graph

    def __init__(self):
        self._adjacency: Dict[Node, List[Edge]] = {}

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, node: Node) -> bool:
        return node in self._adjacency

    def add_node(self, node: Node) -> None:
        self._adjacency.setdefault(node, [])

    def contains(self, node: Node) -> bool:
        return node in self._adjacency

    def nodes(self) -> Set[Node]:
        return set(self._adjacency)

    def adjacency(self, node: Node) -> Optional[List[Edge]]:
        edges = self._adjacency.get(node)
        return None if edges is None else list(edges)

    def add_edge(self, source: Node, target: Node, weight: int) -> None:
        self.add_node(source)
        self.add_node(target)
        #insort keeps equal weights in insertion order
        bisect.insort(self._adjacency[source], Edge(target, weight))

    def link(self, a: Node, b: Node, weight: int) -> None:
        self.add_edge(a, b, weight)
        self.add_edge(b, a, weight)

    def edge_between(self, source: Node, target: Node) -> Optional[Edge]:
        for edge in self._adjacency.get(source, ()):
            if edge.target == target:
                return edge
        return None

    def edges(self) -> Iterator[Tuple[Node, Edge]]:
        for source, edges in self._adjacency.items():
            for edge in edges:
                yield source, edge

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())


class CellKind(IntEnum):
    PASSAGE = 0
    BLOCK = 1
    PATH = 2


Grid = List[List[CellKind]]


def new_grid(width: int, height: int) -> Grid:
    return [[CellKind.BLOCK for _ in range(width)] for _ in range(height)]


def pave(grid: Grid, start: Cell, end: Cell, kind: CellKind) -> None:
    #Paints the straight segment between two cells, both ends included
    if start.x == end.x:
        for y in range(min(start.y, end.y), max(start.y, end.y) + 1):
            grid[y][start.x] = kind
    elif start.y == end.y:
        for x in range(min(start.x, end.x), max(start.x, end.x) + 1):
            grid[start.y][x] = kind


@dataclass
class Maze:
    width: int
    height: int
    graph: Graph
    grid: Grid
    entrance: Node
    exit: Node

    def find_paths(self) -> Dict[Node, Node]:
        return shortest_paths(self.graph, self.entrance)

    def display_escape_path(self, paths: Dict[Node, Node]) -> None:
        render_path(self.grid, paths, self.exit)

    def solve(self) -> List[Node]:
        paths = self.find_paths()
        self.display_escape_path(paths)
        return escape_route(paths, self.exit)

    def interior_nodes(self) -> Set[Node]:
        return self.graph.nodes() - {self.entrance, self.exit}

    def __str__(self) -> str:
        from visualizer import MazeVisualizer

        return MazeVisualizer(self).render()


# Generation


def normalize_size(size: int) -> int:
    if size < MIN_SIZE:
        raise InvalidSizeError(
            f"Invalid maze dimensions: width and height must be at least {MIN_SIZE}, got {size}."
        )
    return size + 1 if size % 2 == 0 else size


class MazeGenerator:

    #Randomized Prim: grows a spanning tree over cells two units apart, then paints it onto a grid
    #Everything is built on local structures, a Maze only comes out once generation fully succeeded

    def __init__(self, size: int, rng: Optional[random.Random] = None):
        self.size = normalize_size(size)
        self.width = self.size
        self.height = self.size
        self.rng = rng if rng is not None else random.Random()

    def generate(self) -> Maze:
        graph = Graph()
        self._grow_tree(graph)
        grid = new_grid(self.width, self.height)
        for source, edge in graph.edges():
            pave(grid, source.cell, edge.target.cell, CellKind.PASSAGE)
        entrance = self._carve_entrance(graph, grid, WALL_THICKNESS, Direction.WEST, 0, self.width // 2)
        exit_node = self._carve_entrance(
            graph, grid, self.width - WALL_THICKNESS - 1, Direction.EAST, self.width // 4, self.width // 2
        )
        logger.debug(
            "Generated %dx%d maze: %d nodes, %d directed edges, entrance %s, exit %s",
            self.width, self.height, len(graph), graph.edge_count(), entrance.cell, exit_node.cell,
        )
        return Maze(self.width, self.height, graph, grid, entrance, exit_node)

    def _initial_seed(self) -> Node:
        x = self.rng.randrange(WALL_THICKNESS, self.width - WALL_THICKNESS, 2)
        y = self.rng.randrange(WALL_THICKNESS, self.height - WALL_THICKNESS, 2)
        return Node(Cell(x, y))

    def _grow_tree(self, graph: Graph) -> None:
        frontier: List[Node] = []
        seed = self._initial_seed()
        graph.add_node(seed)
        while True:
            self._discover_frontier(graph, seed, frontier)
            if not frontier:
                break
            seed = self._next_seed(frontier)

    def _discover_frontier(self, graph: Graph, seed: Node, frontier: List[Node]) -> None:
        for direction in Direction:
            candidate = Node(seed.cell.shift(direction, SEED_DISTANCE))
            if candidate in graph or not self._is_interior(candidate.cell):
                continue
            graph.link(candidate, seed, SEED_DISTANCE)
            frontier.append(candidate)

    def _next_seed(self, frontier: List[Node]) -> Node:
        index = 0
        if len(frontier) > 1:
            index = self.rng.randrange(len(frontier))
            index -= index % 2
        return frontier.pop(index)

    def _is_interior(self, cell: Cell) -> bool:
        return (
            WALL_THICKNESS <= cell.x < self.width - WALL_THICKNESS
            and WALL_THICKNESS <= cell.y < self.height - WALL_THICKNESS
        )

    def _carve_entrance(
        self,
        graph: Graph,
        grid: Grid,
        column: int,
        outward: Direction,
        skip_low: int,
        skip_high: int,
    ) -> Node:
        candidates = sorted(node for node in graph.nodes() if node.x == column)
        skip = self.rng.randrange(skip_low, skip_high)
        if skip >= len(candidates):
            raise NoValidBorderNodeError(
                f"No node on column {column} after skipping {skip} of {len(candidates)} candidates"
            )
        border = candidates[skip]
        opening = Node(border.cell.shift(outward, BORDER_DISTANCE))
        graph.link(opening, border, BORDER_DISTANCE)
        pave(grid, border.cell, opening.cell, CellKind.PASSAGE)
        return opening


def generate_maze(size: int, rng: Optional[random.Random] = None) -> Maze:
    return MazeGenerator(size, rng).generate()


# Path finding


def shortest_paths(graph: Graph, source: Node) -> Dict[Node, Node]:

    #Dijkstra from source, returns predecessor links of the shortest-path tree
    #Once u -> v is relaxed the pair (v, u) is marked consumed so the connection is never walked back
    #The graph itself is left untouched

    predecessors: Dict[Node, Node] = {}
    if source not in graph:
        return predecessors
    distances: Dict[Node, float] = {node: math.inf for node in graph.nodes()}
    distances[source] = 0
    consumed: Set[Tuple[Node, Node]] = set()
    exhausted: Set[Node] = set()
    open_heap: List[Tuple[float, Node]] = [(0, source)]

    while open_heap:
        _, node = heapq.heappop(open_heap)
        if node in exhausted:
            continue
        for edge in graph.adjacency(node):
            target = edge.target
            if (node, target) in consumed:
                continue
            new_distance = distances[node] + edge.weight
            if new_distance < distances[target]:
                distances[target] = new_distance
                predecessors[target] = node
                heapq.heappush(open_heap, (new_distance, target))
            consumed.add((target, node))
        exhausted.add(node)

    logger.debug("Shortest paths from %s reached %d nodes", source.cell, len(predecessors))
    return predecessors


def escape_route(predecessors: Dict[Node, Node], exit_node: Node) -> List[Node]:
    if exit_node not in predecessors:
        return []
    cur = exit_node
    result = [cur]
    while cur in predecessors:
        cur = predecessors[cur]
        result.append(cur)
    result.reverse()
    return result


def render_path(grid: Grid, predecessors: Dict[Node, Node], exit_node: Node) -> Grid:
    route = escape_route(predecessors, exit_node)
    for a, b in zip(route, route[1:]):
        pave(grid, a.cell, b.cell, CellKind.PATH)
    return grid


# Persistence


def maze_to_dict(maze: Maze) -> dict:
    return {
        "format": SNAPSHOT_FORMAT,
        "width": maze.width,
        "height": maze.height,
        "grid": [[int(kind) for kind in row] for row in maze.grid],
        "nodes": [[node.x, node.y] for node in sorted(maze.graph.nodes())],
        "edges": [
            [source.x, source.y, edge.target.x, edge.target.y, edge.weight]
            for source, edge in sorted(maze.graph.edges(), key=lambda pair: (pair[0], pair[1].target))
        ],
        "entrance": [maze.entrance.x, maze.entrance.y],
        "exit": [maze.exit.x, maze.exit.y],
    }


def _read_node(value, name: str) -> Node:
    if not isinstance(value, list) or len(value) != 2 or not all(isinstance(v, int) for v in value):
        raise MazeFormatError(f"{name} must be a pair of integers, got {value!r}")
    return Node(Cell(value[0], value[1]))


def maze_from_dict(data: dict) -> Maze:
    if not isinstance(data, dict):
        raise MazeFormatError("Maze snapshot must be a JSON object")
    if data.get("format") != SNAPSHOT_FORMAT:
        raise MazeFormatError(f"Unsupported maze snapshot format: {data.get('format')!r}")
    try:
        width = data["width"]
        height = data["height"]
        rows = data["grid"]
        raw_nodes = data["nodes"]
        raw_edges = data["edges"]
        raw_entrance = data["entrance"]
        raw_exit = data["exit"]
    except KeyError as exc:
        raise MazeFormatError(f"Maze snapshot is missing field {exc.args[0]!r}") from exc
    for name, value in (("width", width), ("height", height)):
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise MazeFormatError(f"{name} must be a positive integer, got {value!r}")
    entrance = _read_node(raw_entrance, "entrance")
    exit_node = _read_node(raw_exit, "exit")

    if not all(isinstance(value, list) for value in (rows, raw_nodes, raw_edges)):
        raise MazeFormatError("grid, nodes and edges must be JSON arrays")
    if len(rows) != height or any(not isinstance(row, list) or len(row) != width for row in rows):
        raise MazeFormatError(f"Grid does not match declared size {width}x{height}")
    try:
        grid: Grid = [[CellKind(value) for value in row] for row in rows]
    except ValueError as exc:
        raise MazeFormatError(f"Grid contains an unknown cell marker: {exc}") from exc

    graph = Graph()
    for raw in raw_nodes:
        node = _read_node(raw, "node")
        if not (0 <= node.x < width and 0 <= node.y < height):
            raise MazeFormatError(f"Node {node.cell} lies outside the {width}x{height} grid")
        graph.add_node(node)
    for raw in raw_edges:
        if not isinstance(raw, list) or len(raw) != 5 or not all(isinstance(v, int) for v in raw):
            raise MazeFormatError(f"Edge must be five integers, got {raw!r}")
        source = Node(Cell(raw[0], raw[1]))
        target = Node(Cell(raw[2], raw[3]))
        if source not in graph or target not in graph:
            raise MazeFormatError(f"Edge {raw!r} references an unknown node")
        if source.x != target.x and source.y != target.y:
            raise MazeFormatError(f"Edge {raw!r} is not axis-aligned")
        graph.add_edge(source, target, raw[4])
    for node, name in ((entrance, "entrance"), (exit_node, "exit")):
        if node not in graph:
            raise MazeFormatError(f"The {name} {node.cell} is not part of the graph")
    return Maze(width, height, graph, grid, entrance, exit_node)


def save_maze(maze: Maze, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(maze_to_dict(maze), f)
    logger.debug("Saved %dx%d maze to %s", maze.width, maze.height, path)


def load_maze(path: Union[str, Path]) -> Maze:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise MazeFormatError(f"{path} is not a valid maze snapshot: {exc}") from exc
    maze = maze_from_dict(data)
    logger.debug("Loaded %dx%d maze from %s", maze.width, maze.height, path)
    return maze


# CLI + menu


@dataclass
class MazeConfig:
    size: int = 21
    seed: Optional[int] = None
    solve: bool = False
    load: Optional[str] = None
    save: Optional[str] = None
    glyphs: str = "unicode"
    runs: int = 1
    csv_output: Optional[str] = None

    def rng_for_run(self, run_idx: int) -> random.Random:
        return random.Random(None if self.seed is None else self.seed + run_idx)


def build_maze_config(args) -> MazeConfig:
    return MazeConfig(
        size=args.size,
        seed=args.seed,
        solve=args.solve,
        load=args.load,
        save=args.save,
        glyphs=args.glyphs,
        runs=args.runs,
        csv_output=args.csv_output,
    )


def render_maze(maze: Maze, glyphs: str = "unicode") -> str:
    from visualizer import GLYPH_SETS, MazeVisualizer

    return MazeVisualizer(maze, GLYPH_SETS[glyphs]).render()


def run_cli_mode(config: MazeConfig) -> int:
    rows = []
    maze = None
    try:
        for run_idx in range(config.runs):
            if config.load:
                maze = load_maze(config.load)
            else:
                maze = generate_maze(config.size, config.rng_for_run(run_idx))
            route = maze.solve() if config.solve else []
            seed_desc = "random" if config.seed is None else config.seed + run_idx
            print(render_maze(maze, config.glyphs), end="")
            path_length = len(route) - 1 if route else "-"
            print(f"Run {run_idx + 1}/{config.runs} | maze {maze.width}x{maze.height} | seed: {seed_desc} | nodes={len(maze.graph)} | path_len={path_length}")
            rows.append({
                "run": run_idx + 1,
                "seed": seed_desc,
                "size": maze.width,
                "nodes": len(maze.graph),
                "edges": maze.graph.edge_count() // 2,
                "path_length": path_length,
            })
        if config.save and maze is not None:
            save_maze(maze, config.save)
            print(f"Saved maze to {config.save}")

        if config.csv_output:
            import csv

            fieldnames = ["run", "seed", "size", "nodes", "edges", "path_length"]
            with open(config.csv_output, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=fieldnames)
                writer.writeheader()
                writer.writerows(rows)
            print(f"\nWrote {len(rows)} rows to {config.csv_output}")
    except (MazeError, OSError) as exc:
        print(f"Error: {exc}")
        return 1
    return 0


class MenuOption(Enum):
    EXIT = (0, "Exit.")
    GENERATE = (1, "Generate a new maze.")
    LOAD = (2, "Load a maze.")
    SAVE = (3, "Save the maze.")
    DISPLAY = (4, "Display the maze.")
    FIND_PATH = (5, "Find the escape.")

    @property
    def number(self) -> int:
        return self.value[0]

    @property
    def prompt(self) -> str:
        return self.value[1]


ALWAYS_AVAILABLE = (MenuOption.GENERATE, MenuOption.LOAD, MenuOption.EXIT)


@dataclass
class MazeMenu:
    #Text menu around a single current maze, replaced wholesale by generate/load
    glyphs: str = "unicode"
    rng: random.Random = field(default_factory=random.Random)
    maze: Optional[Maze] = None

    def available_options(self) -> List[MenuOption]:
        options = [option for option in MenuOption if option is not MenuOption.EXIT]
        options.append(MenuOption.EXIT)
        if self.maze is None:
            options = [option for option in options if option in ALWAYS_AVAILABLE]
        return options

    def print_menu(self) -> None:
        print("=== Menu ===")
        for option in self.available_options():
            print(f"{option.number}. {option.prompt}")

    def read_option(self) -> Optional[MenuOption]:
        response = input().strip()
        try:
            number = int(response)
        except ValueError:
            return None
        for option in self.available_options():
            if option.number == number:
                return option
        return None

    def run(self) -> None:
        while True:
            self.print_menu()
            option = self.read_option()
            if option is None:
                print("Incorrect option. Please try again;")
                continue
            self.handle(option)
            if option is MenuOption.EXIT:
                return

    def handle(self, option: MenuOption) -> None:
        if option is MenuOption.GENERATE:
            self.generate()
        elif option is MenuOption.LOAD:
            self.load()
        elif option is MenuOption.SAVE:
            self.save()
        elif option is MenuOption.DISPLAY:
            self.display()
        elif option is MenuOption.FIND_PATH:
            self.find_path()
        else:
            print("Bye!")

    def generate(self) -> None:
        print("Enter the size of a new maze")
        response = input().strip()
        try:
            self.maze = generate_maze(int(response), self.rng)
        except (ValueError, MazeError) as exc:
            #a non-numeric size lands here too
            print(f"Error: {exc}")
            return
        self.display()

    def load(self) -> None:
        print("Enter the path of the maze file")
        path = input().strip()
        try:
            self.maze = load_maze(path)
        except (MazeError, OSError) as exc:
            print(f"Error: {exc}")

    def save(self) -> None:
        print("Enter the path of the maze file")
        path = input().strip()
        try:
            save_maze(self.maze, path)
        except OSError as exc:
            print(f"Error: {exc}")

    def display(self) -> None:
        print(render_maze(self.maze, self.glyphs), end="")

    def find_path(self) -> None:
        self.maze.solve()
        self.display()


def run_menu_mode(config: MazeConfig) -> int:
    menu = MazeMenu(glyphs=config.glyphs, rng=config.rng_for_run(0))
    if config.load:
        try:
            menu.maze = load_maze(config.load)
        except (MazeError, OSError) as exc:
            print(f"Error: {exc}")
    menu.run()
    return 0


def prompt_for_mode():
    response = input("Open the interactive menu? (y/n): ").strip().lower()
    return "menu" if response.startswith("y") else "cli"


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Random maze generator with shortest escape path.")
    parser.add_argument("--mode", choices=["menu", "cli"], help="Choose 'menu' for the interactive menu or 'cli' for one-shot generation.")
    parser.add_argument("--size", type=int, default=21, help="Maze side length in grid cells (at least 5, even values are bumped to odd).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for maze generation (default: random). Run N uses seed + N - 1.")
    parser.add_argument("--solve", action="store_true", help="Find and draw the escape path in CLI mode.")
    parser.add_argument("--load", type=str, default=None, help="Load a saved maze instead of generating one.")
    parser.add_argument("--save", type=str, default=None, help="Save the last maze to this path in CLI mode.")
    parser.add_argument("--glyphs", choices=["unicode", "ascii"], default="unicode", help="Glyph set used to draw the maze.")
    parser.add_argument("--runs", type=int, default=1, help="Number of mazes to generate in CLI mode.")
    parser.add_argument("--csv-output", type=str, default=None, help="Path to write CSV metrics.")
    parser.add_argument("--verbose", action="store_true", help="Log generation and search details.")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    config = build_maze_config(args)
    mode = args.mode or prompt_for_mode()
    if mode == "menu":
        return run_menu_mode(config)
    return run_cli_mode(config)


if __name__ == "__main__":
    raise SystemExit(main())
