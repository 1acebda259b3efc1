from __future__ import annotations

from pathlib import Path

import typer

from .. import __version__
from ..core.config import get_settings
from ..core.errors import ChartError
from ..core.logging_config import get_logger, setup_logging
from ..core.spec_loader import load_chart_spec
from ..core.theme import load_theme
from ..layout.paths import fmt_num
from ..render.svg import render_svg, write_text
from ..scene.view import ChartView
from ..visuals.raster import SceneRasterizer
from . import output as cli_output

app = typer.Typer(help="DeskCharts CLI")

logger = get_logger(__name__)


@app.callback()
def callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure global CLI options."""
    setup_logging(json_output=json_logs, log_level=log_level)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


def _open_view(spec_path: str, width: float | None) -> ChartView:
    settings = get_settings()
    theme = load_theme(settings.theme_path)
    spec = load_chart_spec(spec_path)
    return ChartView(spec, width if width is not None else settings.default_width, theme=theme)


@app.command()
def render(
    spec_path: str = typer.Argument(..., metavar="SPEC", help="Path to a chart spec (YAML or JSON)"),
    output: str = typer.Option(..., "--output", "-o", help="Output file (.svg or .png)"),
    width: float | None = typer.Option(None, help="Container width in pixels (defaults per chart kind)"),
    hover: int | None = typer.Option(None, help="Category (or slice) index to render as hovered"),
) -> None:
    """Render a chart spec to SVG or PNG."""
    suffix = Path(output).suffix.lower()
    if suffix not in (".svg", ".png"):
        cli_output.error(f"Unsupported output format '{suffix or output}'. Use .svg or .png")
        raise typer.Exit(code=1)

    try:
        view = _open_view(spec_path, width)
        if hover is not None and not view.pointer_enter(hover):
            cli_output.warning(f"Hover index {hover} ignored for this chart")
        scene = view.render()
        if suffix == ".svg":
            write_text(output, render_svg(scene, theme=view.theme))
        else:
            SceneRasterizer(dpi=get_settings().png_dpi, theme=view.theme).write_png(scene, output)
    except ChartError as e:
        logger.error("Render failed", extra={"spec": spec_path, "error": str(e)})
        cli_output.error(str(e))
        raise typer.Exit(code=1) from None

    logger.info(
        "Chart rendered",
        extra={"spec": spec_path, "kind": scene.kind.value, "output": output},
    )
    if scene.empty:
        cli_output.warning(scene.empty_message or "Chart has no data")
    cli_output.success(f"Chart written to {output}")


@app.command()
def inspect(
    spec_path: str = typer.Argument(..., metavar="SPEC", help="Path to a chart spec (YAML or JSON)"),
    width: float | None = typer.Option(None, help="Container width in pixels (defaults per chart kind)"),
) -> None:
    """Print the computed scale, gridlines and hit regions for a chart spec."""
    try:
        view = _open_view(spec_path, width)
        donut = view.donut_layout()
        scale = view.scale() if donut is None else None
        regions = view.hit_regions
    except ChartError as e:
        cli_output.error(str(e))
        raise typer.Exit(code=1) from None

    spec = view.spec
    vp = view.viewport
    cli_output.data(f"{spec.kind.value} chart: {spec.category_count} categories, {len(spec.series)} series")
    cli_output.plain(f"  viewport: {fmt_num(vp.width)} x {fmt_num(vp.height)} (inner {fmt_num(vp.inner_width)} x {fmt_num(vp.inner_height)})")

    if donut is not None:
        if donut.empty:
            cli_output.warning("No data available")
            return
        cli_output.plain(f"  total: {donut.total_label}")
        for s in donut.slices:
            cli_output.plain(f"  [{s.index}] {s.label}: {fmt_num(s.fraction * 100)}%")
        return

    cli_output.plain(f"  domain max: {fmt_num(scale.domain_max)}")
    cli_output.data("Gridlines:")
    for g in scale.gridlines():
        cli_output.plain(f"  {g.label:>6}  y={fmt_num(g.y)}")
    cli_output.data("Hit regions:")
    for region in regions:
        cli_output.plain(
            f"  [{region.index}] {spec.categories[region.index]}: "
            f"x={fmt_num(region.x)} width={fmt_num(region.width)}"
        )


if __name__ == "__main__":
    app()
