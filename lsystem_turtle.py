#!/usr/bin/env python3
"""lsystem_turtle.py

A deterministic turtle interpreter for expanded L-system words.

Key features:
- Single-character word syntax (F R X + - [ ]) parsed into a command queue.
- Replayable rendering: every run works on copies, the stored word is never
  consumed.
- Branching via an explicit push/pop pen stack.
- Pluggable drawing surfaces (segment recorder, polyline/SVG output).
- JSON-based render configuration and a random word generator.

Run:
  python lsystem_turtle.py render config.json output.svg
  python lsystem_turtle.py show "F[+F]F"
  python lsystem_turtle.py random out.json --seed 123
  python lsystem_turtle.py --help
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import random
import sys
from collections import Counter, deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Protocol, cast

Point = tuple[float, float]

log = logging.getLogger("lsystem_turtle")

# Canvas defaults: 8 pixel steps and 25 degree turns.
DEFAULT_STEP = 8.0
DEFAULT_TURN = 25.0


# -------------------------
# Errors / Validation
# -------------------------


class TurtleError(Exception):
    pass


class ConfigError(TurtleError, ValueError):
    pass


class InvalidInputError(TurtleError, ValueError):
    pass


class UnknownSymbolError(TurtleError, ValueError):
    def __init__(self, symbol: str, index: int) -> None:
        super().__init__(f"Unknown command symbol {symbol!r} at position {index}")
        self.symbol = symbol
        self.index = index


class StackUnderflowError(TurtleError, IndexError):
    """Pop or peek on an empty pen stack.

    When raised by the interpreter, ``position`` is the index of the offending
    command in the word and ``emitted`` the number of segments already drawn.
    """

    def __init__(
        self, msg: str, *, position: int | None = None, emitted: int = 0
    ) -> None:
        super().__init__(msg)
        self.position = position
        self.emitted = emitted


class EmptySequenceError(TurtleError, IndexError):
    pass


class NonFiniteError(TurtleError, ValueError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    _require(math.isfinite(x), f"{path} must be finite")
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


# -------------------------
# Command model
# -------------------------


class Command(Enum):
    """Turtle drawing primitives, valued by their word symbol.

    FORWARD and FORWARD2 draw identically; they are separate so a grammar can
    rewrite them differently. IGNORE only exists as a recursion placeholder.
    """

    FORWARD = "F"
    FORWARD2 = "R"
    IGNORE = "X"
    RIGHT = "+"
    LEFT = "-"
    PUSH = "["
    POP = "]"

    @property
    def symbol(self) -> str:
        return cast(str, self.value)

    @classmethod
    def from_symbol(cls, ch: str, index: int = 0) -> Command:
        try:
            return cls(ch)
        except ValueError:
            raise UnknownSymbolError(ch, index) from None


_DRAWING = frozenset((Command.FORWARD, Command.FORWARD2))


class CommandSequence:
    """FIFO queue of commands.

    ``dequeue`` is strict: it raises ``EmptySequenceError`` on an empty
    sequence, so callers loop on ``empty()``. ``dequeue_or_none`` is the
    optional-result form.
    """

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        self._items: deque[Command] = deque()
        for cmd in commands:
            self.enqueue(cmd)

    @classmethod
    def parse(cls, text: str | None) -> CommandSequence:
        """Parse a word such as ``"F[+F]F"``; all-or-nothing.

        Surrounding whitespace is trimmed, so whitespace-only text counts as
        empty. ``UnknownSymbolError.index`` is a position in ``text`` as given.
        """
        if not isinstance(text, str):
            raise InvalidInputError("Word must be a non-empty string")
        offset = len(text) - len(text.lstrip())
        text = text.strip()
        if not text:
            raise InvalidInputError("Word must be a non-empty string")

        # Build into a plain list first so a bad symbol leaves nothing behind.
        commands = [
            Command.from_symbol(ch, offset + i) for i, ch in enumerate(text)
        ]
        seq = cls()
        seq._items.extend(commands)
        return seq

    def enqueue(self, cmd: Command) -> None:
        if not isinstance(cmd, Command):
            raise TypeError(f"Expected Command, got {type(cmd).__name__}")
        self._items.append(cmd)

    def dequeue(self) -> Command:
        if not self._items:
            raise EmptySequenceError("dequeue() from an empty command sequence")
        return self._items.popleft()

    def dequeue_or_none(self) -> Command | None:
        return self._items.popleft() if self._items else None

    def empty(self) -> bool:
        return not self._items

    def copy(self) -> CommandSequence:
        dup = type(self)()
        dup._items = self._items.copy()
        return dup

    def append(self, other: CommandSequence) -> None:
        if not isinstance(other, CommandSequence):
            raise TypeError(f"Expected CommandSequence, got {type(other).__name__}")
        # Snapshot first: other may be self.
        self._items.extend(list(other._items))

    def to_symbols(self) -> str:
        return "".join(cmd.symbol for cmd in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandSequence):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "[" + ", ".join(cmd.name for cmd in self._items) + "]"

    def __repr__(self) -> str:
        return f"CommandSequence.parse({self.to_symbols()!r})"


# -------------------------
# Pen state and stack
# -------------------------


def _round_half_up(v: float) -> int:
    return math.floor(v + 0.5)


@dataclass
class PenState:
    """Turtle position and heading in screen space (y grows downward).

    Heading 0 points along +x. A positive rotation therefore turns clockwise
    on screen.
    """

    x: float = 0.0
    y: float = 0.0
    heading_deg: float = 0.0

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def move(self, distance: float) -> None:
        rad = math.radians(self.heading_deg)
        self.x += distance * math.cos(rad)
        self.y += distance * math.sin(rad)

    def rotate(self, degrees: float) -> None:
        self.heading_deg += degrees

    def copy(self) -> PenState:
        return replace(self)

    def pixel(self) -> tuple[int, int]:
        return (_round_half_up(self.x), _round_half_up(self.y))


class StateStack:
    def __init__(self) -> None:
        self._items: list[PenState] = []

    def push(self, state: PenState) -> None:
        self._items.append(state.copy())

    def pop(self) -> PenState:
        if not self._items:
            raise StackUnderflowError("pop() from an empty pen stack")
        return self._items.pop()

    def peek(self) -> PenState:
        if not self._items:
            raise StackUnderflowError("peek() on an empty pen stack")
        return self._items[-1].copy()

    def empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)


# -------------------------
# Drawing surfaces
# -------------------------


class DrawingSurface(Protocol):
    def draw_segment(self, x0: float, y0: float, x1: float, y1: float) -> None: ...


@dataclass(frozen=True)
class Segment:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def start(self) -> Point:
        return (self.x0, self.y0)

    @property
    def end(self) -> Point:
        return (self.x1, self.y1)


class SegmentRecorder:
    """Surface that keeps every segment in call order."""

    def __init__(self) -> None:
        self.segments: list[Segment] = []

    def draw_segment(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.segments.append(Segment(x0, y0, x1, y1))


class PolylineSurface:
    """Surface that chains contiguous segments into polylines.

    A segment starting where the previous one ended extends the current
    polyline; anything else (e.g. after a pop) starts a new one.
    """

    def __init__(self) -> None:
        self._polylines: list[list[Point]] = []

    def draw_segment(self, x0: float, y0: float, x1: float, y1: float) -> None:
        start, end = (x0, y0), (x1, y1)
        if self._polylines and self._polylines[-1][-1] == start:
            cur = self._polylines[-1]
        else:
            cur = [start]
            self._polylines.append(cur)
        if cur[-1] != end:
            cur.append(end)

    @property
    def polylines(self) -> list[list[Point]]:
        # Zero-length moves can leave single-point polylines behind.
        return [pl for pl in self._polylines if len(pl) >= 2]


# -------------------------
# Turtle interpreter
# -------------------------


@dataclass(frozen=True)
class TurtleInterpreter:
    step: float = DEFAULT_STEP
    turn_deg: float = DEFAULT_TURN
    snap: bool = True

    def _coords(self, pen: PenState) -> Point:
        if not (math.isfinite(pen.x) and math.isfinite(pen.y)):
            raise NonFiniteError(f"Pen position is not finite: ({pen.x}, {pen.y})")
        if self.snap:
            px, py = pen.pixel()
            return (px, py)
        return pen.position

    def run(
        self, sequence: CommandSequence, start: PenState, surface: DrawingSurface
    ) -> int:
        """Replay ``sequence`` from ``start``, drawing onto ``surface``.

        Neither argument is modified. Returns the number of segments drawn.
        An unmatched pop raises ``StackUnderflowError``; segments drawn
        before it stay on the surface.
        """
        word = sequence.copy()
        pen = start.copy()
        stack = StateStack()
        emitted = 0
        index = -1

        log.debug(
            "run: %d commands, step=%s turn=%s start=%s",
            len(word),
            self.step,
            self.turn_deg,
            pen,
        )

        while not word.empty():
            cmd = word.dequeue()
            index += 1

            if cmd in _DRAWING:
                x0, y0 = self._coords(pen)
                pen.move(self.step)
                x1, y1 = self._coords(pen)
                surface.draw_segment(x0, y0, x1, y1)
                emitted += 1
                continue

            if cmd is Command.RIGHT:
                pen.rotate(self.turn_deg)
                continue

            if cmd is Command.LEFT:
                pen.rotate(-self.turn_deg)
                continue

            if cmd is Command.PUSH:
                stack.push(pen)
                continue

            if cmd is Command.POP:
                try:
                    pen = stack.pop()
                except StackUnderflowError as e:
                    raise StackUnderflowError(
                        f"Pop at position {index} with no saved pen state "
                        f"({emitted} segment(s) already drawn)",
                        position=index,
                        emitted=emitted,
                    ) from e
                continue

            # IGNORE

        if not stack.empty():
            log.debug("run: discarding %d unmatched push(es)", len(stack))
        log.debug("run: %d segment(s) drawn", emitted)
        return emitted

    def render(self, sequence: CommandSequence, start: PenState) -> list[Segment]:
        rec = SegmentRecorder()
        self.run(sequence, start, rec)
        return rec.segments


def render(
    sequence: CommandSequence,
    position: Point = (0.0, 0.0),
    heading: float = 0.0,
    step: float = DEFAULT_STEP,
    turn_deg: float = DEFAULT_TURN,
    *,
    snap: bool = True,
) -> list[Segment]:
    """Interpret ``sequence`` and return the drawn segments in order."""
    x, y = position
    interp = TurtleInterpreter(step=step, turn_deg=turn_deg, snap=snap)
    return interp.render(sequence, PenState(x, y, heading))


def branch_depth(sequence: CommandSequence) -> tuple[int, int]:
    """Return (max nesting depth, unmatched pushes at the end).

    Raises StackUnderflowError at the first pop with nothing to match.
    """
    depth = max_depth = 0
    for i, cmd in enumerate(sequence):
        if cmd is Command.PUSH:
            depth += 1
            max_depth = max(max_depth, depth)
        elif cmd is Command.POP:
            if depth == 0:
                raise StackUnderflowError(f"Unmatched pop at position {i}", position=i)
            depth -= 1
    return max_depth, depth


class Sketch:
    """A stored word and its pen parameters, replayed on every paint."""

    def __init__(self) -> None:
        self.word = CommandSequence()
        self.pen = PenState()
        self.step = DEFAULT_STEP
        self.turn_deg = DEFAULT_TURN
        self.snap = True

    def set_word(
        self,
        word: CommandSequence,
        *,
        step: float | None = None,
        turn_deg: float | None = None,
        start: PenState | None = None,
    ) -> None:
        self.word = word
        if step is not None:
            self.step = step
        if turn_deg is not None:
            self.turn_deg = turn_deg
        if start is not None:
            self.pen = start.copy()

    def paint(self, surface: DrawingSurface) -> int:
        log.debug("paint: %s", self.word)
        interp = TurtleInterpreter(
            step=self.step, turn_deg=self.turn_deg, snap=self.snap
        )
        return interp.run(self.word, self.pen, surface)


# -------------------------
# SVG writing
# -------------------------


@dataclass(frozen=True)
class SvgStyle:
    stroke: str = "#000"
    stroke_width: float = 1.0
    fill: str = "none"
    stroke_linecap: str = "round"
    stroke_linejoin: str = "round"


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
    if s in ("", "-0"):
        s = "0"
    return s


def write_svg(
    polylines: list[list[Point]],
    *,
    out_path: str,
    margin: float,
    precision: int,
    flip_y: bool,
    width: float | None,
    height: float | None,
    style: SvgStyle,
    background: str | None,
    title: str | None = None,
) -> None:
    minx, miny, maxx, maxy = compute_bounds(polylines)

    minx -= margin
    miny -= margin
    maxx += margin
    maxy += margin
    w = maxx - minx
    h = maxy - miny
    _require(
        w > 0 and h > 0,
        "Degenerate bounds after margin (width or height is zero). "
        "Set svg.margin > 0 to render collinear or single-point geometry.",
    )

    svg_w_attr = f' width="{_fmt(float(width), precision)}"' if width else ""
    svg_h_attr = f' height="{_fmt(float(height), precision)}"' if height else ""

    view_box = (
        f"{_fmt(minx, precision)} {_fmt(miny, precision)} {_fmt(w, precision)} "
        f"{_fmt(h, precision)}"
    )

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        "<svg xmlns=\"http://www.w3.org/2000/svg\" version=\"1.1\" "
        f"viewBox=\"{view_box}\"{svg_w_attr}{svg_h_attr}>"
    )

    if title:
        safe_title = (
            title.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        )
        lines.append(f"  <title>{safe_title}</title>")

    if background and background.lower() != "none":
        lines.append(
            f'  <rect x="{_fmt(minx, precision)}" y="{_fmt(miny, precision)}" '
            f'width="{_fmt(w, precision)}" height="{_fmt(h, precision)}" '
            f'fill="{background}" />'
        )

    style_attr = (
        f'stroke="{style.stroke}" stroke-width="{_fmt(style.stroke_width, precision)}" '
        f'fill="{style.fill}" stroke-linecap="{style.stroke_linecap}" '
        f'stroke-linejoin="{style.stroke_linejoin}"'
    )

    if flip_y:
        # Mirror about the horizontal centre line of the viewBox.
        flip_y_line = _fmt(miny + maxy, precision)
        lines.append(f'  <g transform="translate(0,{flip_y_line}) scale(1,-1)">')
        indent = "    "
    else:
        indent = "  "

    for pl in polylines:
        pts = " ".join(f"{_fmt(x, precision)},{_fmt(y, precision)}" for x, y in pl)
        lines.append(f'{indent}<polyline points="{pts}" {style_attr} />')

    if flip_y:
        lines.append("  </g>")

    lines.append("</svg>")

    _ensure_parent_dir(out_path)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
        f.write("\n")


# -------------------------
# Config parsing
# -------------------------


@dataclass(frozen=True)
class RenderConfig:
    name: str
    word: CommandSequence

    step: float
    turn_deg: float
    start: PenState
    snap: bool

    # svg
    margin: float
    precision: int
    flip_y: bool
    width: float | None
    height: float | None
    style: SvgStyle
    background: str | None

    def interpreter(self) -> TurtleInterpreter:
        return TurtleInterpreter(
            step=self.step, turn_deg=self.turn_deg, snap=self.snap
        )


def parse_word(text: Any, path: str = "word") -> CommandSequence:
    try:
        return CommandSequence.parse(text)
    except (InvalidInputError, UnknownSymbolError) as e:
        raise ConfigError(f"{path}: {e}") from e


def parse_config(obj: dict[str, Any]) -> RenderConfig:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name", "L-System"), "name")
    _require("word" in obj, "word is required")
    word = parse_word(_as_str(obj["word"], "word"))

    turtle = _as_dict(obj.get("turtle", {}), "turtle")
    step = _as_float(turtle.get("step", DEFAULT_STEP), "turtle.step")
    turn_deg = _as_float(turtle.get("turn", DEFAULT_TURN), "turtle.turn")
    snap = _as_bool(turtle.get("snap", True), "turtle.snap")

    start_obj = _as_dict(turtle.get("start", {}), "turtle.start")
    start = PenState(
        x=_as_float(start_obj.get("x", 0), "turtle.start.x"),
        y=_as_float(start_obj.get("y", 0), "turtle.start.y"),
        heading_deg=_as_float(start_obj.get("heading", 0), "turtle.start.heading"),
    )

    svg = _as_dict(obj.get("svg", {}), "svg")
    margin = _as_float(svg.get("margin", 10), "svg.margin")
    precision = _as_int(svg.get("precision", 3), "svg.precision")
    _require(0 <= precision <= 10, "svg.precision must be between 0 and 10")
    flip_y = _as_bool(svg.get("flip_y", False), "svg.flip_y")

    width = svg.get("width")
    height = svg.get("height")
    if width is not None:
        width = _as_float(width, "svg.width")
        _require(width > 0, "svg.width must be > 0")
    if height is not None:
        height = _as_float(height, "svg.height")
        _require(height > 0, "svg.height must be > 0")

    style_obj = _as_dict(svg.get("style", {}), "svg.style")
    style = SvgStyle(
        stroke=_as_str(style_obj.get("stroke", "#000"), "svg.style.stroke"),
        stroke_width=_as_float(
            style_obj.get("stroke_width", 1.0), "svg.style.stroke_width"
        ),
        fill=_as_str(style_obj.get("fill", "none"), "svg.style.fill"),
        stroke_linecap=_as_str(
            style_obj.get("stroke_linecap", "round"), "svg.style.stroke_linecap"
        ),
        stroke_linejoin=_as_str(
            style_obj.get("stroke_linejoin", "round"), "svg.style.stroke_linejoin"
        ),
    )

    background = svg.get("background")
    if background is not None:
        background = _as_str(background, "svg.background")

    return RenderConfig(
        name=name,
        word=word,
        step=step,
        turn_deg=turn_deg,
        start=start,
        snap=snap,
        margin=margin,
        precision=precision,
        flip_y=flip_y,
        width=width,
        height=height,
        style=style,
        background=background,
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def dump_json(obj: dict[str, Any], path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


# -------------------------
# Random word generator
# -------------------------


def _random_balanced_word(
    rng: random.Random, length: int, *, p_branch: float = 0.15, max_depth: int = 4
) -> str:
    """Generate a random word with balanced brackets.

    Produces symbols from: F, R, X, +, -, [, ]
    Brackets never go negative and are closed at the end.
    """
    word: list[str] = []
    depth = 0

    for _ in range(length):
        r = rng.random()
        if r < p_branch and depth < max_depth:
            word.append("[")
            depth += 1
            continue
        # At depth 0 the ']' mass falls through to the plain symbols below.
        if r < p_branch * 2 and depth > 0:
            word.append("]")
            depth -= 1
            continue

        t = rng.random()
        if t < 0.45:
            word.append("F")
        elif t < 0.55:
            word.append("R")
        elif t < 0.60:
            word.append("X")
        elif t < 0.80:
            word.append("+")
        else:
            word.append("-")

    word.extend("]" * depth)

    if "F" not in word and "R" not in word:
        word.append("F")

    return "".join(word)


def generate_random_config(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    turn = rng.choice([15, 20, 22.5, 25, 30, 36, 45, 60, 90])
    step = rng.choice([5, 8, 10, 12, 15])
    word = _random_balanced_word(rng, rng.randint(40, 160))

    cfg = {
        "name": "Random L-System Word",
        "word": word,
        "turtle": {
            "step": step,
            "turn": turn,
            "snap": True,
            # Screen space: -90 points up.
            "start": {"x": 0, "y": 0, "heading": -90},
        },
        "svg": {
            "margin": 10,
            "precision": 3,
            "flip_y": False,
            "style": {
                "stroke": "#000",
                "stroke_width": 1.0,
                "fill": "none",
                "stroke_linecap": "round",
                "stroke_linejoin": "round",
            },
        },
    }

    # Internal sanity check: generated config must always parse cleanly.
    parse_config(cfg)
    return cfg


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
WORD SYNTAX

A word is a string of single-character commands (surrounding whitespace is
ignored):

  F   forward: move one step and draw
  R   forward (second variant, draws exactly like F)
  X   ignore: no effect
  +   right: turn by +turn degrees
  -   left: turn by -turn degrees
  [   push: save the pen position and heading
  ]   pop: restore the last saved pen

Coordinates are screen space: x grows right, y grows down, heading 0 points
along +x, so '+' turns clockwise on screen.

INPUT JSON SYNTAX (render / validate)

  name: string (optional)
      Written into the SVG <title>.

  word: string (required)
      The expanded L-system word.

  turtle: object (optional)
    turtle.step: number (default 8)      Forward step length.
    turtle.turn: number (default 25)     Turn increment in degrees.
    turtle.snap: boolean (default true)  Round drawn coordinates to pixels.
    turtle.start: {"x": 0, "y": 0, "heading": 0}

  svg: object (optional)
    svg.margin: number (default 10)
    svg.precision: integer 0..10 (default 3)
    svg.flip_y: boolean (default false)
    svg.width / svg.height: number (optional)
    svg.background: string color (optional)
    svg.style: {stroke, stroke_width, fill, stroke_linecap, stroke_linejoin}

Example

    {
      "word": "F[+F]F[-F]F",
      "turtle": {"step": 10, "turn": 25, "start": {"heading": -90}}
    }

RANDOM INPUT GENERATION (random)

  python lsystem_turtle.py random out.json --seed 123
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lsystem_turtle.py",
        description="Turtle interpreter for L-system words; outputs SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser(
        "render",
        help="Render a JSON config to an SVG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("config", help="Path to the input JSON config.")
    pr.add_argument("output", help="Path to write the SVG output.")
    pr.add_argument(
        "--word", default=None, help="Render this word instead of the config's."
    )

    pv = sub.add_parser(
        "validate",
        help="Validate a JSON config and print a brief summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pv.add_argument("config", help="Path to the input JSON config.")

    ps = sub.add_parser(
        "show",
        help="Parse a word and print its command list.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ps.add_argument("word", help="Word to parse, e.g. 'F[+F]F'.")

    pg = sub.add_parser(
        "random",
        help="Generate a random JSON config for experimentation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pg.add_argument("output", help="Where to write the generated JSON file.")
    pg.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    return p


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


# -------------------------
# Commands
# -------------------------


def cmd_render(config_path: str, output_path: str, word: str | None = None) -> None:
    cfg = parse_config(load_json(config_path))
    if word is not None:
        cfg = replace(cfg, word=parse_word(word, "--word"))

    surface = PolylineSurface()
    cfg.interpreter().run(cfg.word, cfg.start, surface)

    write_svg(
        surface.polylines,
        out_path=output_path,
        margin=cfg.margin,
        precision=cfg.precision,
        flip_y=cfg.flip_y,
        width=cfg.width,
        height=cfg.height,
        style=cfg.style,
        background=cfg.background,
        title=cfg.name,
    )
    log.info("wrote %s", output_path)


def cmd_validate(config_path: str) -> None:
    cfg = parse_config(load_json(config_path))

    counts = Counter(cfg.word)
    max_depth, unmatched = branch_depth(cfg.word)

    print(f"name: {cfg.name}")
    print(f"symbols: {len(cfg.word)}")
    print(
        "commands: "
        + " ".join(f"{c.name}={counts[c]}" for c in Command if counts[c])
    )
    print(f"branch depth: {max_depth}")
    print(
        "turtle: "
        f"step={cfg.step} turn={cfg.turn_deg} snap={cfg.snap} "
        f"start=({cfg.start.x},{cfg.start.y},{cfg.start.heading_deg}deg)"
    )
    print(f"svg: margin={cfg.margin} precision={cfg.precision} flip_y={cfg.flip_y}")

    segments = cfg.interpreter().render(cfg.word, cfg.start)
    print(f"segments: {len(segments)}")
    if unmatched:
        print(f"warning: {unmatched} unmatched push(es) at end of word")
    if not segments:
        raise ConfigError("Config produces no drawable geometry")


def cmd_show(word: str) -> None:
    seq = CommandSequence.parse(word)
    print(seq)
    print(f"segments: {len(render(seq))}")


def cmd_random(output_path: str, seed: int | None) -> None:
    cfg = generate_random_config(seed)
    dump_json(cfg, output_path)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.cmd == "render":
            cmd_render(args.config, args.output, args.word)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "show":
            cmd_show(args.word)
        elif args.cmd == "random":
            cmd_random(args.output, args.seed)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except TurtleError as e:
        print(f"Word error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
