"""Structured SVG path commands.

Commands are tuples whose first item is the command letter, followed by its
numeric arguments, e.g. ``("C", x1, y1, x2, y2, x, y)``. Layout code builds
lists of them; renderers format or convert them.
"""

from __future__ import annotations

from typing import Tuple, Union

PathCommand = Tuple[Union[str, float, int], ...]

PATH_COMMAND_LENGTHS: dict[str, int] = {
    "M": 2,
    "L": 2,
    "C": 6,
    "A": 7,
    "Z": 0,
}


def fmt_num(n: float) -> str:
    text = f"{float(n):.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_path(commands: list[PathCommand]) -> str:
    """Render commands as an SVG ``d`` attribute string."""
    parts: list[str] = []
    for c in commands:
        code = str(c[0])
        try:
            expected = PATH_COMMAND_LENGTHS[code]
        except KeyError as e:
            raise ValueError(f"bad path command code: {c!r}") from e
        if len(c) != expected + 1:
            raise ValueError(f"path command {code} requires {expected} arguments: {c!r}")
        if code == "A":
            rx, ry, rotation, large_arc, sweep, x, y = c[1:]
            parts.append(
                f"A {fmt_num(rx)} {fmt_num(ry)} {fmt_num(rotation)} "
                f"{int(large_arc)} {int(sweep)} {fmt_num(x)} {fmt_num(y)}"
            )
        elif expected:
            coords = c[1:]
            pairs = [
                f"{fmt_num(coords[i])},{fmt_num(coords[i + 1])}"
                for i in range(0, len(coords), 2)
            ]
            parts.append(f"{code} {' '.join(pairs)}")
        else:
            parts.append(code)
    return " ".join(parts)
