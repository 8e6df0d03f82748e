import json

import pytest

from maze_gen import (
    MazeFormatError,
    escape_route,
    load_maze,
    maze_to_dict,
    save_maze,
    shortest_paths,
)


def test_snapshot_round_trips(maze, tmp_path):
    path = tmp_path / "mazes" / "maze.json"
    save_maze(maze, path)
    loaded = load_maze(path)

    assert (loaded.width, loaded.height) == (maze.width, maze.height)
    assert loaded.grid == maze.grid
    assert loaded.graph.nodes() == maze.graph.nodes()
    assert set(loaded.graph.edges()) == set(maze.graph.edges())
    assert loaded.entrance == maze.entrance
    assert loaded.exit == maze.exit


def test_loaded_maze_solves_like_the_saved_one(maze, tmp_path):
    expected = escape_route(shortest_paths(maze.graph, maze.entrance), maze.exit)
    path = tmp_path / "maze.json"
    save_maze(maze, path)
    assert load_maze(path).solve() == expected


def test_solved_grid_survives_a_round_trip(maze, tmp_path):
    maze.solve()
    path = tmp_path / "maze.json"
    save_maze(maze, path)
    assert load_maze(path).grid == maze.grid


def write_snapshot(tmp_path, data):
    path = tmp_path / "maze.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_garbage_file_is_rejected(tmp_path):
    path = tmp_path / "maze.json"
    path.write_text("not a maze", encoding="utf-8")
    with pytest.raises(MazeFormatError):
        load_maze(path)


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        load_maze(tmp_path / "absent.json")


@pytest.mark.parametrize("field", ["width", "grid", "edges", "entrance"])
def test_missing_field_is_rejected(maze, tmp_path, field):
    data = maze_to_dict(maze)
    del data[field]
    with pytest.raises(MazeFormatError, match=field):
        load_maze(write_snapshot(tmp_path, data))


def test_unknown_format_is_rejected(maze, tmp_path):
    data = maze_to_dict(maze)
    data["format"] = 99
    with pytest.raises(MazeFormatError):
        load_maze(write_snapshot(tmp_path, data))


def test_unknown_cell_marker_is_rejected(maze, tmp_path):
    data = maze_to_dict(maze)
    data["grid"][0][0] = 7
    with pytest.raises(MazeFormatError):
        load_maze(write_snapshot(tmp_path, data))


def test_grid_size_mismatch_is_rejected(maze, tmp_path):
    data = maze_to_dict(maze)
    data["grid"].pop()
    with pytest.raises(MazeFormatError):
        load_maze(write_snapshot(tmp_path, data))


def test_edge_to_unknown_node_is_rejected(maze, tmp_path):
    data = maze_to_dict(maze)
    data["edges"].append([1, 1, 99, 99, 2])
    with pytest.raises(MazeFormatError):
        load_maze(write_snapshot(tmp_path, data))


def test_exit_outside_graph_is_rejected(maze, tmp_path):
    data = maze_to_dict(maze)
    data["exit"] = [99, 99]
    with pytest.raises(MazeFormatError):
        load_maze(write_snapshot(tmp_path, data))


def test_undecodable_bytes_are_rejected(tmp_path):
    path = tmp_path / "maze.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(MazeFormatError):
        load_maze(path)


@pytest.mark.parametrize("field", ["width", "height"])
@pytest.mark.parametrize("value", ["7", 7.9, True, 0, None])
def test_non_integer_dimensions_are_rejected(maze, tmp_path, field, value):
    data = maze_to_dict(maze)
    data[field] = value
    with pytest.raises(MazeFormatError, match=field):
        load_maze(write_snapshot(tmp_path, data))


@pytest.mark.parametrize("offset", [(3, 0), (0, -99), (-100, 0)])
def test_node_outside_grid_is_rejected(maze, tmp_path, offset):
    data = maze_to_dict(maze)
    stray = [maze.exit.x + offset[0], maze.exit.y + offset[1]]
    data["nodes"].append(stray)
    data["edges"].append([maze.exit.x, maze.exit.y, stray[0], stray[1], 3])
    data["exit"] = stray
    with pytest.raises(MazeFormatError, match="outside"):
        load_maze(write_snapshot(tmp_path, data))


def test_diagonal_edge_is_rejected(maze, tmp_path):
    data = maze_to_dict(maze)
    assert [1, 1] in data["nodes"] and [3, 3] in data["nodes"]
    data["edges"].append([1, 1, 3, 3, 2])
    with pytest.raises(MazeFormatError, match="axis-aligned"):
        load_maze(write_snapshot(tmp_path, data))
