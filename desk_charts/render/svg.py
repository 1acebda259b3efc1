from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from .. import __version__
from ..core.enums import TextWeight
from ..core.errors import ExportError
from ..core.logging_config import get_logger
from ..core.theme import Theme
from ..layout.paths import fmt_num
from ..scene.elements import PathElement, ScaleAbout, Scene

logger = get_logger(__name__)

FONT_WEIGHTS = {
    TextWeight.NORMAL: "400",
    TextWeight.MEDIUM: "500",
    TextWeight.BOLD: "700",
}


def _scale_about(t: ScaleAbout) -> str:
    cx, cy = fmt_num(t.cx), fmt_num(t.cy)
    return f"translate({cx} {cy}) scale({fmt_num(t.factor)}) translate({fmt_num(-t.cx)} {fmt_num(-t.cy)})"


def _filter_id(brightness: float) -> str:
    return "brightness-" + fmt_num(brightness).replace(".", "_")


def _points(points: tuple[tuple[float, float], ...]) -> str:
    return " ".join(f"{fmt_num(x)},{fmt_num(y)}" for x, y in points)


class SvgRenderer:
    """Serialize a Scene to an SVG document using Jinja2 templates."""

    def __init__(self, templates_dir: Path | None = None, theme: Theme | None = None):
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=lambda name: name is not None and name.endswith(".svg.j2"),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.globals.update(
            num=fmt_num,
            scale_about=_scale_about,
            filter_id=_filter_id,
            points=_points,
            font_weight=lambda w: FONT_WEIGHTS[w],
        )
        self.theme = theme or Theme()

    def render(self, scene: Scene) -> str:
        """Render a scene as a standalone SVG string.

        Raises:
            ExportError: If the template is missing or fails to render
        """
        brightness = sorted(
            {
                el.brightness
                for el in scene.elements
                if isinstance(el, PathElement) and el.brightness != 1
            }
        )
        filters = [{"id": _filter_id(b), "slope": b} for b in brightness]
        try:
            template = self.env.get_template("chart.svg.j2")
            logger.debug(
                "Rendering SVG",
                extra={"kind": scene.kind.value, "elements": len(scene.elements)},
            )
            return template.render(
                scene=scene,
                view_box=" ".join(fmt_num(v) for v in scene.view_box),
                filters=filters,
                tooltip_background=self.theme.tooltip_background,
                version=__version__,
            )
        except TemplateNotFound as e:
            logger.error("SVG template not found", extra={"error": str(e)})
            raise ExportError(
                f"SVG template not found: {e}. "
                "Ensure desk_charts/render/templates/chart.svg.j2 exists."
            ) from e


def render_svg(scene: Scene, theme: Theme | None = None) -> str:
    return SvgRenderer(theme=theme).render(scene)


def write_text(path: str | Path, content: str) -> None:
    """Write text content to file."""
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write {p}: {e}") from e
