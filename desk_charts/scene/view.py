"""Stateful chart view: one spec, one measured width, one hover model.

The view rebuilds its scene whenever the width, the chart data or the hovered
index changes, and hands the new scene to its listeners. Several views may
share an ``InteractionModel`` so that hovering one highlights the same
category in the others.
"""

from __future__ import annotations

from collections.abc import Callable

from ..core.enums import ChartKind
from ..core.logging_config import get_logger
from ..core.models import ChartSpec, Viewport
from ..core.theme import Theme
from ..layout.arcs import DonutLayout
from ..layout.interaction import InteractionModel
from ..layout.scale import ScaleEngine
from .builders import DONUT_VIEW_BOX, BaseChartBuilder, DonutBuilder, get_builder
from .elements import Scene

logger = get_logger(__name__)

SceneListener = Callable[[Scene], None]


class ChartView:
    def __init__(
        self,
        spec: ChartSpec,
        width: float | None = None,
        *,
        theme: Theme | None = None,
        interaction: InteractionModel | None = None,
        nominal_width: float | None = None,
    ):
        self.theme = theme or Theme()
        self.interaction = interaction or InteractionModel()
        self.nominal_width = nominal_width
        self._spec = spec
        self._builder: BaseChartBuilder = get_builder(spec.kind, self.theme)
        self._measured_width = width
        self._viewport = Viewport.for_kind(spec.kind, width, nominal_width=nominal_width)
        self._listeners: list[SceneListener] = []
        self._scene: Scene | None = None
        self._unsubscribe: Callable[[], None] | None = self.interaction.subscribe(
            self._on_hover
        )

    @property
    def spec(self) -> ChartSpec:
        return self._spec

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def measure(self, width: float | None) -> Scene:
        """Apply a host-reported width and re-render."""
        self._measured_width = width
        viewport = Viewport.for_kind(self._spec.kind, width, nominal_width=self.nominal_width)
        if viewport != self._viewport:
            self._viewport = viewport
            self._invalidate()
        return self.render()

    def set_spec(self, spec: ChartSpec) -> Scene:
        """Swap in new chart data. A hovered index past the new axis is dropped."""
        kind_changed = spec.kind is not self._spec.kind
        self._spec = spec
        if kind_changed:
            self._builder = get_builder(spec.kind, self.theme)
            self._viewport = Viewport.for_kind(
                spec.kind, self._measured_width, nominal_width=self.nominal_width
            )
        hovered = self.interaction.hovered_index
        if hovered is not None and hovered >= spec.category_count:
            self.interaction.reset()
        self._invalidate()
        return self.render()

    def render(self) -> Scene:
        """Return the scene for the current state; pure with respect to that state."""
        if self._scene is None:
            self._scene = self._builder.build(
                self._spec, self._viewport, self._effective_hover()
            )
        return self._scene

    @property
    def hit_regions(self):
        return self.render().hit_regions

    def scale(self) -> ScaleEngine | None:
        return self._builder.scale_for(self._spec, self._viewport)

    def donut_layout(self) -> DonutLayout | None:
        if self._spec.kind is not ChartKind.DONUT:
            return None
        return self._donut_builder().slices_for(self._spec)

    # ---------------- Pointer events --------------------------------------
    def pointer_enter(self, index: int) -> bool:
        if self._is_empty_donut():
            logger.debug("Ignoring hover on empty donut")
            return False
        return self.interaction.pointer_enter(index, self._spec.category_count)

    def pointer_leave(self, index: int | None = None) -> bool:
        return self.interaction.pointer_leave(index)

    def pointer_move(self, x: float, y: float) -> bool:
        """Resolve a pixel position to a category (or slice) and hover it."""
        if self._spec.kind is ChartKind.DONUT:
            if self._is_empty_donut():
                return False
            ux, uy = self._to_unit_space(x, y)
            index = self.donut_layout().slice_at(ux, uy)
            if index is None:
                return self.interaction.pointer_leave()
            return self.interaction.pointer_enter(index, self._spec.category_count)
        return self.interaction.pointer_move(x, y, self.hit_regions)

    # ---------------- Listeners --------------------------------------------
    def subscribe(self, listener: SceneListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def unmount(self) -> None:
        """Detach from the hover model.

        The hover is cleared only when no other subscriber is left on the model,
        so linked views keep their highlight.
        """
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        if self.interaction.subscriber_count == 0:
            self.interaction.reset()
        self._listeners.clear()

    # ---------------- Internals --------------------------------------------
    def _effective_hover(self) -> int | None:
        hovered = self.interaction.hovered_index
        if hovered is None or hovered >= self._spec.category_count:
            return None
        return hovered

    def _invalidate(self) -> None:
        self._scene = None
        if self._listeners:
            scene = self.render()
            for listener in list(self._listeners):
                listener(scene)

    def _on_hover(self, index: int | None) -> None:
        self._invalidate()

    def _donut_builder(self) -> DonutBuilder:
        assert isinstance(self._builder, DonutBuilder)
        return self._builder

    def _is_empty_donut(self) -> bool:
        if self._spec.kind is not ChartKind.DONUT:
            return False
        return self.donut_layout().empty

    def _to_unit_space(self, x: float, y: float) -> tuple[float, float]:
        # The donut view box is fitted into the pixel box, centred and uniformly scaled
        vx, vy, vw, vh = DONUT_VIEW_BOX
        scale = min(self._viewport.width / vw, self._viewport.height / vh)
        cx = vx + vw / 2
        cy = vy + vh / 2
        return (
            (x - self._viewport.width / 2) / scale + cx,
            (y - self._viewport.height / 2) / scale + cy,
        )
