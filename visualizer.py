#Text visualization for mazes and escape paths

from __future__ import annotations

from typing import Dict, List, Optional

from maze_gen import CellKind, Maze


#glyph schemes for each kind of grid cell, every glyph in a scheme has the same width
UNICODE_GLYPHS: Dict[CellKind, str] = {
    CellKind.BLOCK: "██",
    CellKind.PASSAGE: "  ",
    CellKind.PATH: "//",
}

ASCII_GLYPHS: Dict[CellKind, str] = {
    CellKind.BLOCK: "##",
    CellKind.PASSAGE: "  ",
    CellKind.PATH: "..",
}

GLYPH_SETS = {
    "unicode": UNICODE_GLYPHS,
    "ascii": ASCII_GLYPHS,
}


def check_glyphs(glyphs: Dict[CellKind, str]) -> None:
    missing = [kind.name for kind in CellKind if kind not in glyphs]
    if missing:
        raise ValueError(f"No glyph for cell kinds: {', '.join(missing)}")
    widths = {len(glyphs[kind]) for kind in CellKind}
    if len(widths) != 1 or 0 in widths:
        raise ValueError("Glyphs must be non-empty and share one width")
    if len({glyphs[kind] for kind in CellKind}) != len(CellKind):
        raise ValueError("Each cell kind needs its own glyph")


class MazeVisualizer:
    #Draws a maze grid as text, one line per grid row

    def __init__(self, maze: Maze, glyphs: Optional[Dict[CellKind, str]] = None):
        self.maze = maze
        self.glyphs = glyphs if glyphs is not None else UNICODE_GLYPHS
        check_glyphs(self.glyphs)

    def render_rows(self) -> List[str]:
        return ["".join(self.glyphs[kind] for kind in row) for row in self.maze.grid]

    def render(self) -> str:
        return "".join(f"{line}\n" for line in self.render_rows())

    def run(self):
        print(self.render(), end="")
