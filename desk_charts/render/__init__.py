from .svg import SvgRenderer, render_svg, write_text

__all__ = ["SvgRenderer", "render_svg", "write_text"]
