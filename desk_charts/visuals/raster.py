"""Rasterize scenes to PNG with matplotlib."""

from __future__ import annotations

import base64
import math
from io import BytesIO
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgb
from matplotlib.patches import Circle, FancyBboxPatch, PathPatch, Rectangle
from matplotlib.path import Path as MplPath
from matplotlib.transforms import Affine2D

from ..core.enums import TextAnchor, TextWeight
from ..core.errors import ExportError
from ..core.logging_config import get_logger
from ..core.theme import Theme
from ..layout.paths import PathCommand
from ..scene.elements import (
    CircleElement,
    LineElement,
    PathElement,
    PolylineElement,
    RectElement,
    Scene,
    TextElement,
)

# Use non-interactive backend for server environments
matplotlib.use("Agg")

logger = get_logger(__name__)

HORIZONTAL_ALIGNMENT = {
    TextAnchor.START: "left",
    TextAnchor.MIDDLE: "center",
    TextAnchor.END: "right",
}
FONT_WEIGHTS = {
    TextWeight.NORMAL: "normal",
    TextWeight.MEDIUM: "medium",
    TextWeight.BOLD: "bold",
}


def _arc_vertices(
    start: tuple[float, float],
    end: tuple[float, float],
    radius: float,
    large_arc: int,
    sweep: int,
) -> np.ndarray:
    """Bezier vertices (without the start point) for a circular SVG arc.

    Uses the endpoint-to-centre conversion for rx == ry and no rotation.
    Angles are measured in the scene's own (y-down) coordinates, where
    ``sweep == 1`` means increasing angle.
    """
    x0, y0 = start
    x1, y1 = end
    hx = (x0 - x1) / 2
    hy = (y0 - y1) / 2
    d2 = hx * hx + hy * hy
    if d2 == 0:
        return np.empty((0, 2))
    r = max(radius, math.sqrt(d2))
    coef = math.sqrt(max(r * r - d2, 0.0) / d2)
    if large_arc == sweep:
        coef = -coef
    cx = coef * hy + (x0 + x1) / 2
    cy = -coef * hx + (y0 + y1) / 2

    a0 = math.atan2(y0 - cy, x0 - cx)
    a1 = math.atan2(y1 - cy, x1 - cx)
    delta = a1 - a0
    if sweep and delta < 0:
        delta += 2 * math.pi
    elif not sweep and delta > 0:
        delta -= 2 * math.pi

    if delta >= 0:
        unit = MplPath.arc(math.degrees(a0), math.degrees(a0 + delta)).vertices
    else:
        unit = MplPath.arc(math.degrees(a0 + delta), math.degrees(a0)).vertices[::-1]
    return unit[1:] * r + np.array([cx, cy])


def to_mpl_path(commands: tuple[PathCommand, ...]) -> MplPath:
    """Convert structured path commands into a matplotlib Path."""
    vertices: list[tuple[float, float]] = []
    codes: list[int] = []
    current = (0.0, 0.0)
    subpath_start = current
    for c in commands:
        code = c[0]
        if code == "M":
            current = (float(c[1]), float(c[2]))
            subpath_start = current
            vertices.append(current)
            codes.append(MplPath.MOVETO)
        elif code == "L":
            current = (float(c[1]), float(c[2]))
            vertices.append(current)
            codes.append(MplPath.LINETO)
        elif code == "C":
            pts = [(float(c[i]), float(c[i + 1])) for i in (1, 3, 5)]
            vertices.extend(pts)
            codes.extend([MplPath.CURVE4] * 3)
            current = pts[-1]
        elif code == "A":
            end = (float(c[6]), float(c[7]))
            arc = _arc_vertices(current, end, float(c[1]), int(c[4]), int(c[5]))
            vertices.extend(map(tuple, arc))
            codes.extend([MplPath.CURVE4] * len(arc))
            current = end
        elif code == "Z":
            vertices.append(subpath_start)
            codes.append(MplPath.CLOSEPOLY)
            current = subpath_start
        else:
            raise ValueError(f"bad path command code: {c!r}")
    return MplPath(vertices, codes)


def _brighten(color: str, factor: float) -> tuple[float, float, float]:
    r, g, b = to_rgb(color)
    return (min(r * factor, 1.0), min(g * factor, 1.0), min(b * factor, 1.0))


class SceneRasterizer:
    """Draw a Scene onto a matplotlib figure and export it as PNG."""

    def __init__(self, output_dir: Path | None = None, dpi: int = 100, theme: Theme | None = None):
        """Initialize the rasterizer.

        Args:
            output_dir: Optional directory for PNG files. If None, images are only returned as base64.
            dpi: Resolution for images (default: 100)
            theme: Colors for tooltip chrome
        """
        self.output_dir = output_dir
        self.dpi = dpi
        self.theme = theme or Theme()
        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)

    def draw(self, scene: Scene) -> plt.Figure:
        """Build a figure sized to the scene's pixel box."""
        vx, vy, vw, vh = scene.view_box
        fig = plt.figure(figsize=(scene.width / self.dpi, scene.height / self.dpi), dpi=self.dpi)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(vx, vx + vw)
        ax.set_ylim(vy + vh, vy)
        ax.set_aspect("equal", adjustable="datalim")
        ax.axis("off")

        # Scene sizes (strokes, fonts) are in view-box units; matplotlib wants points
        px_per_unit = min(scene.width / vw, scene.height / vh)
        to_pt = px_per_unit * 72.0 / self.dpi

        for z, el in enumerate(scene.elements):
            if isinstance(el, PathElement):
                self._draw_path(ax, el, to_pt, z)
            elif isinstance(el, RectElement):
                self._draw_rect(ax, el, z)
            elif isinstance(el, CircleElement):
                ax.add_patch(
                    Circle(
                        (el.cx, el.cy),
                        el.r,
                        facecolor="none" if el.fill == "none" else el.fill,
                        edgecolor=el.stroke or "none",
                        linewidth=el.stroke_width * to_pt,
                        alpha=el.opacity,
                        zorder=z,
                    )
                )
            elif isinstance(el, LineElement):
                ax.plot(
                    [el.x1, el.x2],
                    [el.y1, el.y2],
                    color=el.stroke,
                    linewidth=el.stroke_width * to_pt,
                    linestyle=(0, tuple(d * to_pt for d in el.dash)) if el.dash else "-",
                    alpha=el.opacity,
                    zorder=z,
                )
            elif isinstance(el, PolylineElement):
                xs, ys = zip(*el.points) if el.points else ((), ())
                ax.plot(
                    xs,
                    ys,
                    color=el.stroke,
                    linewidth=el.stroke_width * to_pt,
                    alpha=el.opacity,
                    zorder=z,
                )
            elif isinstance(el, TextElement):
                ax.text(
                    el.x,
                    el.y,
                    el.text,
                    ha=HORIZONTAL_ALIGNMENT[el.anchor],
                    va="baseline",
                    fontsize=el.size * to_pt,
                    fontweight=FONT_WEIGHTS[el.weight],
                    color=el.fill,
                    alpha=el.opacity,
                    zorder=z,
                )

        if scene.tooltip is not None:
            self._draw_tooltip(ax, scene, len(scene.elements))
        return fig

    def _draw_path(self, ax, el: PathElement, to_pt: float, z: int) -> None:
        path = to_mpl_path(el.commands)
        transform = ax.transData
        if el.transform is not None:
            t = el.transform
            transform = (
                Affine2D().translate(-t.cx, -t.cy).scale(t.factor).translate(t.cx, t.cy)
                + ax.transData
            )
        if el.fill == "none":
            facecolor: object = "none"
        else:
            rgb = _brighten(el.fill, el.brightness) if el.brightness != 1 else to_rgb(el.fill)
            facecolor = (*rgb, el.fill_opacity * el.opacity)
        edgecolor: object = "none"
        if el.stroke:
            edgecolor = (*to_rgb(el.stroke), el.opacity)
        ax.add_patch(
            PathPatch(
                path,
                facecolor=facecolor,
                edgecolor=edgecolor,
                linewidth=el.stroke_width * to_pt,
                transform=transform,
                zorder=z,
            )
        )

    def _draw_rect(self, ax, el: RectElement, z: int) -> None:
        if el.rx:
            patch = FancyBboxPatch(
                (el.x, el.y),
                el.width,
                el.height,
                boxstyle=f"round,pad=0,rounding_size={min(el.rx, el.width / 2, el.height / 2)}",
                facecolor=el.fill,
                edgecolor="none",
                alpha=el.opacity,
                zorder=z,
            )
        else:
            patch = Rectangle(
                (el.x, el.y),
                el.width,
                el.height,
                facecolor=el.fill,
                edgecolor="none",
                alpha=el.opacity,
                zorder=z,
            )
        ax.add_patch(patch)

    def _draw_tooltip(self, ax, scene: Scene, z: int) -> None:
        box = scene.tooltip.placement
        content = scene.tooltip.content
        ax.add_patch(
            FancyBboxPatch(
                (box.x, box.y),
                box.width,
                box.height,
                boxstyle="round,pad=0,rounding_size=8",
                facecolor=self.theme.tooltip_background,
                edgecolor="none",
                alpha=0.95,
                zorder=z,
            )
        )
        ax.text(
            box.x + 12, box.y + 26, content.title,
            fontsize=9, fontweight="bold", color="#FFFFFF", zorder=z + 1,
        )
        for i, row in enumerate(content.rows, start=1):
            row_y = box.y + 26 + 18 * i
            ax.add_patch(Circle((box.x + 17, row_y - 4), 4, facecolor=row.color, zorder=z + 1))
            ax.text(
                box.x + 28, row_y, f"{row.label}: {row.value_text}",
                fontsize=8, color="#E2E8F0", zorder=z + 1,
            )

    def rasterize(self, scene: Scene, filename: str | None = None) -> dict[str, str]:
        """Render a scene to PNG file and/or base64.

        Args:
            scene: Scene to draw
            filename: Base filename (without extension); used only with output_dir

        Returns:
            Dict with 'base64' and, when written to disk, 'path' keys

        Raises:
            ExportError: If the image cannot be written or encoded
        """
        fig = self.draw(scene)
        result: dict[str, str] = {}
        try:
            if self.output_dir:
                filepath = self.output_dir / f"{filename or scene.kind.value}.png"
                try:
                    fig.savefig(filepath, dpi=self.dpi, format="png")
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to save chart to {filepath}: {e}")
                    raise ExportError(f"Failed to save chart to {filepath}: {e}") from e
                result["path"] = str(filepath)
                logger.debug(f"Chart saved to {filepath}")

            try:
                buffer = BytesIO()
                fig.savefig(buffer, dpi=self.dpi, format="png")
                buffer.seek(0)
                result["base64"] = base64.b64encode(buffer.read()).decode("utf-8")
                buffer.close()
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to generate base64 for chart: {e}")
                raise ExportError(f"Failed to encode chart: {e}") from e
        finally:
            plt.close(fig)
        return result

    def write_png(self, scene: Scene, path: str | Path) -> Path:
        """Write a scene straight to ``path``."""
        p = Path(path)
        fig = self.draw(scene)
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(p, dpi=self.dpi, format="png")
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to save chart to {p}: {e}")
            raise ExportError(f"Failed to save chart to {p}: {e}") from e
        finally:
            plt.close(fig)
        logger.debug(f"Chart saved to {p}")
        return p
