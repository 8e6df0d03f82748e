import random

import pytest

from maze_gen import generate_maze


MAZE_CASES = [
    (5, 1),
    (5, 2024),
    (6, 7),
    (9, 3),
    (9, 41),
    (15, 1234),
    (21, 99),
    (21, 5150),
]


@pytest.fixture(params=MAZE_CASES, ids=lambda case: f"size{case[0]}-seed{case[1]}")
def maze(request):
    size, seed = request.param
    return generate_maze(size, random.Random(seed))
