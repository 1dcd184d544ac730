"""Plain-text rendering of game snapshots."""

from __future__ import annotations

HEAD = "@"
BODY = "o"
FOOD = "*"
EMPTY = "."


def render_text(snap: dict, show_score: bool = True) -> str:
    """Draw a snapshot as a text frame, row 0 on top.

    One glyph marks the head, one each body segment, and one the food.
    """
    width = snap["grid"]["width"]
    height = snap["grid"]["height"]
    rows = [[EMPTY] * width for _ in range(height)]

    food = snap.get("food")
    if food is not None:
        rows[food[0]][food[1]] = FOOD
    for r, c in snap["snake"]["body"]:
        rows[r][c] = BODY
    hr, hc = snap["snake"]["head"]
    rows[hr][hc] = HEAD

    lines = ["".join(row) for row in rows]
    if show_score:
        lines.append(f"Score: {snap['score']}")
    return "\n".join(lines)
