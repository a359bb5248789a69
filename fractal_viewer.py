"""Interactive host for the fractal engine.

``FractalViewer`` holds the state the window needs: which catalog model is
shown and the live turn angle.  ``run_viewer`` puts it in a tkinter window:

  Left / Right   previous / next model
  Up / Down      turn angle +/- 0.5 degrees (x10 with Ctrl held)
  Escape         quit
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fractal_curves import (
    MAX_ANGLE_STEP,
    MIN_ANGLE_STEP,
    BoundedValue,
    Canvas,
    ConfigError,
    FractalError,
    GrammarModel,
    LineSegment,
    render_model,
)

logger = logging.getLogger(__name__)

ANGLE_INCREMENT = 0.5
COARSE_FACTOR = 10

_CONTROL_MASK = 0x0004


class FractalViewer:
    def __init__(
        self,
        models: Sequence[GrammarModel],
        canvas: Canvas | None = None,
        *,
        wrap_models: bool = False,
    ) -> None:
        if not models:
            raise ConfigError("viewer needs at least one model")
        self.models = list(models)
        self.canvas = canvas if canvas is not None else Canvas()
        if wrap_models:
            self._index = BoundedValue(0, len(self.models), 0, wrap=True)
        else:
            self._index = BoundedValue(0, len(self.models) - 1, 0, wrap=False)
        self._angle = BoundedValue(
            MIN_ANGLE_STEP, MAX_ANGLE_STEP, self.models[0].angle_step, wrap=False
        )

    @property
    def index(self) -> int:
        return int(self._index.get())

    @property
    def model(self) -> GrammarModel:
        return self.models[self.index]

    @property
    def angle_step(self) -> float:
        return self._angle.get()

    @property
    def title(self) -> str:
        return f"Angle step: {self.angle_step:g}; Model: {self.model.name}"

    def select(self, index: int) -> GrammarModel:
        """Switch models; the angle step goes back to the new model's default."""
        self._index.set(index)
        self._angle.set(self.model.angle_step)
        logger.info("selected model %d: %s", self.index, self.model.name)
        return self.model

    def next_model(self) -> GrammarModel:
        return self.select(self.index + 1)

    def previous_model(self) -> GrammarModel:
        return self.select(self.index - 1)

    def adjust_angle(self, direction: int, *, coarse: bool = False) -> float:
        step = ANGLE_INCREMENT * (COARSE_FACTOR if coarse else 1)
        return self._angle.add(direction * step)

    def redraw(self) -> list[LineSegment]:
        try:
            return render_model(self.model, self.canvas, self.angle_step)
        except FractalError as e:
            logger.error("skipping frame for %r: %s", self.model.name, e)
            return []


def run_viewer(viewer: FractalViewer) -> None:
    import tkinter as tk

    root = tk.Tk()
    canvas = tk.Canvas(
        root,
        width=viewer.canvas.width,
        height=viewer.canvas.height,
        background="white",
        highlightthickness=0,
    )
    canvas.pack(fill=tk.BOTH, expand=True)

    def repaint() -> None:
        canvas.delete("all")
        for seg in viewer.redraw():
            canvas.create_line(*seg.start, *seg.end, fill="black")
        root.title(viewer.title)

    def on_key(event: tk.Event) -> None:
        coarse = bool(event.state & _CONTROL_MASK)
        if event.keysym == "Left":
            viewer.previous_model()
        elif event.keysym == "Right":
            viewer.next_model()
        elif event.keysym == "Up":
            viewer.adjust_angle(+1, coarse=coarse)
        elif event.keysym == "Down":
            viewer.adjust_angle(-1, coarse=coarse)
        elif event.keysym == "Escape":
            root.destroy()
            return
        else:
            return
        repaint()

    root.bind("<Key>", on_key)
    root.resizable(False, False)
    repaint()
    root.mainloop()
