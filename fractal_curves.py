#!/usr/bin/env python3
"""fractal_curves.py

Deterministic L-system fractal engine with a turtle interpreter and SVG output.

Key features:
- Immutable grammar models with an optional one-shot final mapping.
- Iterative (and streaming) pattern expansion.
- Turtle interpretation to line segments, with branching via push/pop.
- Canvas placement that scales segment length by segments**iterations.
- Built-in catalog of classic curves plus JSON catalogs.
- SVG rendering, an interactive viewer and a random model generator.

Run:
  python fractal_curves.py list
  python fractal_curves.py render Koch koch.svg --angle 60
  python fractal_curves.py render-all out/
  python fractal_curves.py validate example/koch.json
  python fractal_curves.py random out.json --seed 123
  python fractal_curves.py view
  python fractal_curves.py --help
"""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import math
import os
import random
import re
import sys
from collections.abc import Generator, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, cast

from fractal_catalog import MODELS

Point = tuple[float, float]

logger = logging.getLogger(__name__)


# -------------------------
# Errors / Validation
# -------------------------


class FractalError(ValueError):
    pass


class ConfigError(FractalError):
    pass


class InvalidModel(ConfigError):
    pass


class StackUnderflow(FractalError):
    pass


def _require(cond: bool, msg: str, exc: type[FractalError] = ConfigError) -> None:
    if not cond:
        raise exc(msg)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _as_list(x: Any, path: str) -> list[Any]:
    _require(isinstance(x, list), f"{path} must be an array")
    return cast(list[Any], x)


# -------------------------
# Bounded values
# -------------------------


class BoundedValue:
    """A number kept inside [minimum, maximum) by wrapping or clamping.

    In wrap mode every write is folded back with
    ``((v - minimum) % (maximum - minimum)) + minimum``; in clamp mode it is
    pinned to ``minimum`` or ``maximum`` (inclusive).  Works for ints and floats.
    """

    def __init__(
        self,
        minimum: float,
        maximum: float,
        initial: float = 0,
        *,
        wrap: bool = True,
    ) -> None:
        self.wrap = wrap
        self._minimum = minimum
        self._check_range(maximum)
        self._maximum = maximum
        self._value = self.fit(initial)

    def _check_range(self, maximum: float) -> None:
        if self.wrap and not maximum > self._minimum:
            raise ValueError(
                f"wrapping range needs maximum > minimum; got [{self._minimum}, {maximum})"
            )
        if not self.wrap and maximum < self._minimum:
            raise ValueError(
                f"clamping range needs maximum >= minimum; got [{self._minimum}, {maximum}]"
            )

    @property
    def minimum(self) -> float:
        return self._minimum

    @property
    def maximum(self) -> float:
        return self._maximum

    def fit(self, v: float) -> float:
        lo, hi = self._minimum, self._maximum
        if self.wrap:
            return ((v - lo) % (hi - lo)) + lo
        if v < lo:
            return lo
        if v > hi:
            return hi
        return v

    def get(self) -> float:
        return self._value

    def set(self, v: float) -> float:
        self._value = self.fit(v)
        return self._value

    def add(self, delta: float) -> float:
        return self.set(self._value + delta)

    def __repr__(self) -> str:
        mode = "wrap" if self.wrap else "clamp"
        return (
            f"BoundedValue({self._value!r}, [{self._minimum!r}, {self._maximum!r}], "
            f"{mode})"
        )


HEADING = BoundedValue(-180.0, 180.0)

MIN_ANGLE_STEP = 5.0
MAX_ANGLE_STEP = 120.0


def clamp_angle_step(angle: float) -> float:
    return BoundedValue(MIN_ANGLE_STEP, MAX_ANGLE_STEP, angle, wrap=False).get()


# -------------------------
# Grammar model
# -------------------------


def _check_mapping(mapping: Mapping[str, str], path: str) -> None:
    for k, v in mapping.items():
        _require(
            isinstance(k, str) and len(k) == 1,
            f"{path} keys must be single-character strings; got {k!r}",
            InvalidModel,
        )
        _require(isinstance(v, str), f"{path}[{k!r}] must be a string", InvalidModel)


@dataclass(frozen=True)
class GrammarModel:
    """One fractal: rewrite rules plus where and how to start drawing it."""

    name: str
    segments: float
    mapping: Mapping[str, str] = field(default_factory=dict)
    final_mapping: Mapping[str, str] = field(default_factory=dict)
    iterations: int = 4
    initial_value: str = "F"
    initial_angle: float = 90.0
    initial_position: Point = (0.5, 1.0)
    # Host default for the user-adjustable turn angle.
    angle_step: float = 0.0

    def __post_init__(self) -> None:
        _require(isinstance(self.name, str), "name must be a string", InvalidModel)
        _require(
            isinstance(self.iterations, int) and not isinstance(self.iterations, bool),
            f"{self.name}: iterations must be an integer",
            InvalidModel,
        )
        _require(
            self.iterations >= 0,
            f"{self.name}: iterations must be >= 0; got {self.iterations}",
            InvalidModel,
        )
        _require(
            isinstance(self.segments, (int, float))
            and not isinstance(self.segments, bool)
            and self.segments > 0,
            f"{self.name}: segments must be > 0; got {self.segments}",
            InvalidModel,
        )
        _require(
            isinstance(self.initial_value, str),
            f"{self.name}: initial_value must be a string",
            InvalidModel,
        )
        pos = self.initial_position
        _require(
            isinstance(pos, (tuple, list))
            and len(pos) == 2
            and all(
                isinstance(c, (int, float)) and not isinstance(c, bool) for c in pos
            ),
            f"{self.name}: initial_position must be a pair of numbers; got {pos!r}",
            InvalidModel,
        )
        x, y = pos
        _require(
            0.0 <= x <= 1.0 and 0.0 <= y <= 1.0,
            f"{self.name}: initial_position must lie in [0,1]x[0,1]; got ({x}, {y})",
            InvalidModel,
        )
        _check_mapping(self.mapping, f"{self.name}: mapping")
        _check_mapping(self.final_mapping, f"{self.name}: final_mapping")

        # Freeze the rule tables; callers keep their own dicts.
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))
        object.__setattr__(
            self, "final_mapping", MappingProxyType(dict(self.final_mapping))
        )
        object.__setattr__(self, "initial_position", (float(x), float(y)))


# -------------------------
# Pattern generation
# -------------------------


def _substitute(pattern: str, mapping: Mapping[str, str]) -> str:
    return "".join(mapping.get(ch, ch) for ch in pattern)


def generate(model: GrammarModel) -> str:
    """Expand ``model.initial_value`` by ``model.iterations`` rewriting passes.

    Characters without a rule pass through unchanged.  A non-empty
    ``final_mapping`` is applied exactly once at the end.
    """
    pattern = model.initial_value
    for _ in range(model.iterations):
        pattern = _substitute(pattern, model.mapping)
    if model.final_mapping:
        pattern = _substitute(pattern, model.final_mapping)
    logger.debug(
        "expanded %r: %d iterations -> %d symbols",
        model.name,
        model.iterations,
        len(pattern),
    )
    return pattern


def stream_pattern(model: GrammarModel) -> Generator[str, None, None]:
    """Yield the symbols of ``generate(model)`` without building the full string.

    Uses an explicit stack of (string, index, depth) frames.
    """
    mapping = model.mapping
    final = model.final_mapping
    stack: list[tuple[str, int, int]] = [(model.initial_value, 0, 0)]

    while stack:
        s, i, d = stack.pop()
        if i >= len(s):
            continue

        ch = s[i]
        stack.append((s, i + 1, d))

        if d < model.iterations and ch in mapping:
            # Replacement goes on top so it is consumed before the continuation.
            stack.append((mapping[ch], 0, d + 1))
        elif ch in final:
            yield from final[ch]
        else:
            yield ch


# -------------------------
# Turtle interpreter
# -------------------------


@dataclass(frozen=True)
class CursorState:
    x: float
    y: float
    heading: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "heading", HEADING.fit(self.heading))

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def rotated(self, degrees: float) -> CursorState:
        return CursorState(self.x, self.y, self.heading + degrees)

    def moved(self, length: float) -> CursorState:
        rad = math.radians(self.heading)
        # Screen coordinates: y grows downwards.
        return CursorState(
            self.x + math.cos(rad) * length,
            self.y - math.sin(rad) * length,
            self.heading,
        )


@dataclass(frozen=True)
class LineSegment:
    start: Point
    end: Point


def iter_segments(
    pattern: Iterable[str],
    start: CursorState,
    segment_length: float,
    angle_step: float,
) -> Generator[LineSegment, None, None]:
    """Walk ``pattern`` and yield a LineSegment for every drawn forward step.

      F  forward, drawing        f  forward, pen up
      -  heading += angle_step   +  heading -= angle_step
      |  turn around             [  push cursor      ]  pop cursor

    Any other symbol is ignored.  Popping an empty stack raises StackUnderflow.
    """
    cur = start
    stack: list[CursorState] = []

    for pos, sym in enumerate(pattern):
        if sym == "F":
            nxt = cur.moved(segment_length)
            yield LineSegment(cur.position, nxt.position)
            cur = nxt
        elif sym == "f":
            cur = cur.moved(segment_length)
        elif sym == "-":
            cur = cur.rotated(angle_step)
        elif sym == "+":
            cur = cur.rotated(-angle_step)
        elif sym == "|":
            cur = cur.rotated(180.0)
        elif sym == "[":
            stack.append(cur)
        elif sym == "]":
            _require(
                bool(stack),
                f"']' at symbol {pos} encountered with empty branch stack",
                StackUnderflow,
            )
            cur = stack.pop()

    if stack:
        logger.debug("pattern ended with %d unclosed branch(es)", len(stack))


def interpret(
    pattern: Iterable[str],
    start: CursorState,
    segment_length: float,
    angle_step: float,
) -> list[LineSegment]:
    return list(iter_segments(pattern, start, segment_length, angle_step))


# -------------------------
# Canvas placement
# -------------------------


@dataclass(frozen=True)
class Canvas:
    width: float = 750.0
    height: float = 750.0
    margin: float = 10.0

    def __post_init__(self) -> None:
        _require(
            self.width > 2 * self.margin and self.height > 2 * self.margin,
            f"canvas {self.width}x{self.height} leaves no room inside margin {self.margin}",
        )

    @property
    def extent(self) -> float:
        return self.height - 2 * self.margin

    def start_state(self, model: GrammarModel) -> CursorState:
        x, y = model.initial_position
        m = self.margin
        return CursorState(
            (self.width - 2 * m) * x + m,
            (self.height - 2 * m) * y + m,
            model.initial_angle,
        )


def segment_length(model: GrammarModel, extent: float) -> float:
    try:
        return extent / model.segments ** model.iterations
    except (OverflowError, ZeroDivisionError) as e:
        raise InvalidModel(
            f"{model.name}: segments**iterations ({model.segments:g}**{model.iterations}) "
            "is out of floating-point range"
        ) from e


def render_model(
    model: GrammarModel,
    canvas: Canvas | None = None,
    angle_step: float | None = None,
) -> list[LineSegment]:
    """Generate and interpret ``model`` in absolute canvas coordinates."""
    if canvas is None:
        canvas = Canvas()
    angle = clamp_angle_step(model.angle_step if angle_step is None else angle_step)
    pattern = generate(model)
    segments = interpret(
        pattern,
        canvas.start_state(model),
        segment_length(model, canvas.extent),
        angle,
    )
    logger.debug("rendered %r at %s deg: %d segments", model.name, angle, len(segments))
    return segments


# -------------------------
# SVG writing
# -------------------------


def segments_to_polylines(segments: Iterable[LineSegment]) -> list[list[Point]]:
    """Chain consecutive segments that share an endpoint into polylines."""
    polylines: list[list[Point]] = []
    for seg in segments:
        if polylines and polylines[-1][-1] == seg.start:
            polylines[-1].append(seg.end)
        else:
            polylines.append([seg.start, seg.end])
    return polylines


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def compute_bounds(polylines: list[list[Point]]) -> tuple[float, float, float, float]:
    _require(len(polylines) > 0, "No drawable geometry produced.")
    xs = [x for pl in polylines for x, _ in pl]
    ys = [y for pl in polylines for _, y in pl]
    return (min(xs), min(ys), max(xs), max(ys))


def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never produces "-0" in SVG output.
    if not x:
        x = 0.0
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s or "0"


def write_svg(
    polylines: list[list[Point]],
    *,
    out_path: str,
    width: float,
    height: float,
    precision: int = 3,
    title: str | None = None,
) -> None:
    w = _fmt(width, precision)
    h = _fmt(height, precision)

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        "<svg xmlns=\"http://www.w3.org/2000/svg\" version=\"1.1\" "
        f"viewBox=\"0 0 {w} {h}\" width=\"{w}\" height=\"{h}\">"
    )

    if title:
        safe_title = (
            title.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        )
        lines.append(f"  <title>{safe_title}</title>")

    lines.append(f'  <rect x="0" y="0" width="{w}" height="{h}" fill="#fff" />')

    for pl in polylines:
        pts = " ".join(f"{_fmt(x, precision)},{_fmt(y, precision)}" for x, y in pl)
        lines.append(
            f'  <polyline points="{pts}" stroke="#000" stroke-width="1" fill="none" />'
        )

    lines.append("</svg>")

    _ensure_parent_dir(out_path)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
        f.write("\n")


# -------------------------
# Config parsing
# -------------------------


def _parse_mapping(obj: Any, path: str) -> dict[str, str]:
    rules = _as_dict(obj, path)
    out: dict[str, str] = {}
    for k, v in rules.items():
        _require(
            len(k) == 1, f"{path} keys must be single-character strings", InvalidModel
        )
        out[k] = _as_str(v, f"{path}['{k}']")
    return out


def parse_model(obj: dict[str, Any], path: str = "model") -> GrammarModel:
    obj = _as_dict(obj, path)

    _require("name" in obj, f"{path}.name is required")
    name = _as_str(obj["name"], f"{path}.name")
    _require("segments" in obj, f"{path}.segments is required")

    pos = _as_dict(obj.get("initial_position", {}), f"{path}.initial_position")

    return GrammarModel(
        name=name,
        segments=_as_float(obj["segments"], f"{path}.segments"),
        mapping=_parse_mapping(obj.get("mapping", {}), f"{path}.mapping"),
        final_mapping=_parse_mapping(
            obj.get("final_mapping", {}), f"{path}.final_mapping"
        ),
        iterations=_as_int(obj.get("iterations", 4), f"{path}.iterations"),
        initial_value=_as_str(obj.get("initial_value", "F"), f"{path}.initial_value"),
        initial_angle=_as_float(obj.get("initial_angle", 90), f"{path}.initial_angle"),
        initial_position=(
            _as_float(pos.get("x", 0.5), f"{path}.initial_position.x"),
            _as_float(pos.get("y", 1.0), f"{path}.initial_position.y"),
        ),
        angle_step=_as_float(obj.get("angle_step", 0), f"{path}.angle_step"),
    )


def parse_catalog(obj: Any) -> list[GrammarModel]:
    """Accept a list of models, ``{"models": [...]}`` or a single model object."""
    if isinstance(obj, dict) and "models" in obj:
        obj = obj["models"]
    if isinstance(obj, dict):
        return [parse_model(obj)]
    entries = _as_list(obj, "root")
    _require(len(entries) > 0, "catalog must contain at least one model")
    return [parse_model(e, f"models[{i}]") for i, e in enumerate(entries)]


def load_json(path: str) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def load_catalog(path: str | None = None) -> list[GrammarModel]:
    if path is None:
        return builtin_catalog()
    models = parse_catalog(load_json(path))
    logger.info("loaded %d model(s) from %s", len(models), path)
    return models


def builtin_catalog() -> list[GrammarModel]:
    return parse_catalog(MODELS)


def find_model(models: Sequence[GrammarModel], key: str) -> GrammarModel:
    """Look a model up by catalog index or (case-insensitive) name."""
    if re.fullmatch(r"-?[0-9]+", key):
        idx = int(key)
        _require(
            0 <= idx < len(models),
            f"model index {idx} out of range 0..{len(models) - 1}",
        )
        return models[idx]
    for m in models:
        if m.name.lower() == key.lower():
            return m
    raise ConfigError(f"No model named {key!r}")


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "model"


# -------------------------
# Random model generator
# -------------------------


def _random_branch_word(rng: random.Random, length: int, *, p_branch: float = 0.2) -> str:
    """Random replacement word over F, +, -, [, ] with balanced brackets."""
    word: list[str] = []
    depth = 0

    for _ in range(length):
        r = rng.random()
        if r < p_branch and depth < 3:
            word.append("[")
            depth += 1
        elif r < p_branch * 2 and depth > 0:
            word.append("]")
            depth -= 1
        else:
            word.append(rng.choice("FFF+-"))

    word.extend("]" * depth)
    if "F" not in word:
        word.insert(0, "F")
    return "".join(word)


def generate_random_model(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    rule = _random_branch_word(rng, rng.randint(8, 16))
    # Trunk length of the rule sets how fast the drawing grows per iteration.
    trunk = max(2, rule.count("F") - rule.count("["))

    cfg = {
        "name": f"Random {seed}" if seed is not None else "Random",
        "initial_value": "F",
        "iterations": rng.randint(2, 4),
        "mapping": {"F": rule},
        "final_mapping": {},
        "segments": float(trunk),
        "angle_step": float(rng.choice([15, 20, 22.5, 25, 30, 36, 45, 60, 90])),
        "initial_angle": 90.0,
        "initial_position": {"x": 0.5, "y": 1.0},
    }

    # Generated configs must always parse cleanly.
    parse_model(cfg)
    return cfg


def dump_json(obj: Any, path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


# -------------------------
# Logging
# -------------------------


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the loggers of this package to write to stderr."""
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )
    for name in ("fractal_curves", "fractal_viewer", "__main__"):
        log = logging.getLogger(name)
        log.setLevel(level)
        if log.hasHandlers():
            log.handlers.clear()
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        log.addHandler(handler)


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
MODEL JSON SYNTAX (--catalog, validate)

A catalog file is a list of model objects, an object {"models": [...]}, or a
single model object.

  name: string (required)
  segments: number > 0 (required)
      Line length is canvas_extent / segments**iterations.
  initial_value: string (default "F")
  iterations: integer >= 0 (default 4)
  mapping: object single-character -> string (default {})
      Rewrite rules.  Symbols without a rule rewrite to themselves.
  final_mapping: object single-character -> string (default {})
      Applied once after the last iteration, e.g. {"A": "F"}.
  angle_step: number (default 0, clamped to 5..120 when drawing)
  initial_angle: number degrees (default 90; 0 = +X, 90 = up)
  initial_position: {"x": 0..1, "y": 0..1} (default {"x": 0.5, "y": 1.0})
      Normalized canvas position; y = 1 is the bottom edge.

TURTLE SYMBOLS

  F forward drawing     f forward without drawing
  - turn +angle_step    + turn -angle_step    | turn 180
  [ push cursor         ] pop cursor
  anything else is ignored

Example (Koch curve):

    {
      "name": "Koch",
      "mapping": {"F": "F-F++F-F"},
      "segments": 3,
      "angle_step": 60
    }
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fractal-curves",
        description="L-system fractal curve generator.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    def add_catalog(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--catalog",
            default=None,
            help="JSON catalog to use instead of the built-in models.",
        )

    def add_canvas(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--width", type=float, default=750.0, help="Canvas width.")
        sp.add_argument("--height", type=float, default=750.0, help="Canvas height.")
        sp.add_argument(
            "--precision", type=int, default=3, help="Coordinate decimals (0..10)."
        )

    pl = sub.add_parser("list", help="List the catalog models.")
    add_catalog(pl)

    pr = sub.add_parser("render", help="Render one model to an SVG file.")
    pr.add_argument("model", help="Model index or name.")
    pr.add_argument("output", help="Path to write the SVG output.")
    pr.add_argument(
        "--angle",
        type=float,
        default=None,
        help="Turn angle in degrees (default: the model's own; clamped to 5..120).",
    )
    add_catalog(pr)
    add_canvas(pr)

    pa = sub.add_parser("render-all", help="Render every model into a directory.")
    pa.add_argument("outdir", help="Directory for the SVG files.")
    add_catalog(pa)
    add_canvas(pa)

    pv = sub.add_parser(
        "validate", help="Validate a JSON catalog and print a brief summary."
    )
    pv.add_argument("config", help="Path to the JSON catalog or model.")

    pg = sub.add_parser("random", help="Generate a random model JSON.")
    pg.add_argument("output", help="Where to write the generated JSON file.")
    pg.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    pw = sub.add_parser("view", help="Open the interactive viewer window.")
    add_catalog(pw)
    pw.add_argument(
        "--wrap",
        action="store_true",
        help="Wrap around at either end of the catalog instead of stopping.",
    )
    pw.add_argument("--width", type=float, default=750.0, help="Window width.")
    pw.add_argument("--height", type=float, default=750.0, help="Window height.")

    return p


# -------------------------
# Commands
# -------------------------


def _canvas_from_args(args: argparse.Namespace) -> Canvas:
    _require(0 <= args.precision <= 10, "precision must be between 0 and 10")
    return Canvas(width=args.width, height=args.height)


def _render_to_file(
    model: GrammarModel,
    canvas: Canvas,
    out_path: str,
    *,
    angle: float | None,
    precision: int,
) -> int:
    segments = render_model(model, canvas, angle)
    polylines = segments_to_polylines(segments)
    write_svg(
        polylines,
        out_path=out_path,
        width=canvas.width,
        height=canvas.height,
        precision=precision,
        title=model.name,
    )
    logger.info("wrote %s (%d segments)", out_path, len(segments))
    return len(segments)


def cmd_list(catalog_path: str | None) -> None:
    for i, m in enumerate(load_catalog(catalog_path)):
        print(
            f"{i:2d}  {m.name:<16} iterations={m.iterations} "
            f"angle={m.angle_step:g} segments={m.segments:g}"
        )


def cmd_render(args: argparse.Namespace) -> None:
    canvas = _canvas_from_args(args)
    model = find_model(load_catalog(args.catalog), args.model)
    _render_to_file(
        model, canvas, args.output, angle=args.angle, precision=args.precision
    )


def cmd_render_all(args: argparse.Namespace) -> None:
    canvas = _canvas_from_args(args)
    for i, model in enumerate(load_catalog(args.catalog)):
        out = os.path.join(args.outdir, f"{i:02d}-{slugify(model.name)}.svg")
        _render_to_file(model, canvas, out, angle=None, precision=args.precision)
        print(out)


_VALIDATE_SYMBOL_LIMIT = 10_000


def cmd_validate(config_path: str) -> None:
    models = parse_catalog(load_json(config_path))
    canvas = Canvas()

    print(f"models: {len(models)}")
    for m in models:
        print(
            f"- {m.name}: initial length={len(m.initial_value)} "
            f"iterations={m.iterations} rules={len(m.mapping)} "
            f"final rules={len(m.final_mapping)} segments={m.segments:g} "
            f"angle={clamp_angle_step(m.angle_step):g}"
        )

        # Bounded expansion + interpretation to catch render-time failures
        # (unbalanced branches, no drawable geometry, exponential blow-up).
        bounded = list(itertools.islice(stream_pattern(m), _VALIDATE_SYMBOL_LIMIT))
        truncated = len(bounded) == _VALIDATE_SYMBOL_LIMIT
        segments = interpret(
            bounded,
            canvas.start_state(m),
            segment_length(m, canvas.extent),
            clamp_angle_step(m.angle_step),
        )
        sym_label = f"{len(bounded)}+" if truncated else str(len(bounded))
        print(f"  symbols (sampled): {sym_label}")
        print(f"  segments: {len(segments)}")
        if truncated:
            print(
                f"  warning: expansion exceeds {_VALIDATE_SYMBOL_LIMIT} symbols; "
                "geometry stats are based on the first portion only"
            )
        if not segments:
            raise ConfigError(f"Model {m.name!r} produces no drawable geometry")
        min_x, min_y, max_x, max_y = compute_bounds(segments_to_polylines(segments))
        print(
            f"  extent: x {min_x:.1f}..{max_x:.1f} y {min_y:.1f}..{max_y:.1f} "
            f"(canvas {canvas.width:g}x{canvas.height:g})"
        )


def cmd_random(output_path: str, seed: int | None) -> None:
    dump_json(generate_random_model(seed), output_path)


def cmd_view(args: argparse.Namespace) -> None:
    from fractal_viewer import FractalViewer, run_viewer

    viewer = FractalViewer(
        load_catalog(args.catalog),
        Canvas(width=args.width, height=args.height),
        wrap_models=args.wrap,
    )
    run_viewer(viewer)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        if args.cmd == "list":
            cmd_list(args.catalog)
        elif args.cmd == "render":
            cmd_render(args)
        elif args.cmd == "render-all":
            cmd_render_all(args)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "random":
            cmd_random(args.output, args.seed)
        elif args.cmd == "view":
            cmd_view(args)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except FractalError as e:
        print(f"Render error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
