"""Run-time configuration: board size and palette size.

Values outside their bounds are clamped and unusable values fall back to the
defaults; neither case is treated as an error.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from jewels.constants import (
    DEFAULT_COLS,
    DEFAULT_NUM_COLORS,
    DEFAULT_ROWS,
    MAX_COLORS,
    MAX_DIMENSION,
    MIN_COLORS,
    MIN_DIMENSION,
)

logger = logging.getLogger(__name__)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def coerce_setting(raw: object, default: int, low: int, high: int, label: str) -> int:
    """Turn a raw command line value into an in-range int.

    Missing, non-numeric and non-positive values use ``default``; other numbers
    are clamped into ``[low, high]``.
    """
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning("%s %r is not a number, using %d", label, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, using %d", label, default)
        return default
    clamped = clamp(value, low, high)
    if clamped != value:
        logger.warning("%s %d out of range [%d, %d], using %d", label, value, low, high, clamped)
    return clamped


@dataclass(frozen=True)
class GameConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    num_colors: int = DEFAULT_NUM_COLORS

    @classmethod
    def from_raw(cls, rows: object = None, cols: object = None, num_colors: object = None) -> "GameConfig":
        return cls(
            rows=coerce_setting(rows, DEFAULT_ROWS, MIN_DIMENSION, MAX_DIMENSION, "rows"),
            cols=coerce_setting(cols, DEFAULT_COLS, MIN_DIMENSION, MAX_DIMENSION, "cols"),
            num_colors=coerce_setting(num_colors, DEFAULT_NUM_COLORS, MIN_COLORS, MAX_COLORS, "num_colors"),
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jewels',
        description='Swap adjacent jewels to line up three of a color; clear every cell to win.',
    )
    parser.add_argument('rows', nargs='?', default=None,
                        help=f'Board rows ({MIN_DIMENSION}-{MAX_DIMENSION}, default {DEFAULT_ROWS})')
    parser.add_argument('cols', nargs='?', default=None,
                        help=f'Board columns ({MIN_DIMENSION}-{MAX_DIMENSION}, default {DEFAULT_COLS})')
    parser.add_argument('num_colors', nargs='?', default=None,
                        help=f'Jewel colors ({MIN_COLORS}-{MAX_COLORS}, default {DEFAULT_NUM_COLORS})')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the board')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug-level logging')
    return parser


def parse_args(argv: Sequence[str] | None = None) -> Tuple[GameConfig, argparse.Namespace]:
    args, extras = build_parser().parse_known_args(argv)
    if extras:
        logger.warning("ignoring extra arguments: %s", " ".join(extras))
    config = GameConfig.from_raw(args.rows, args.cols, args.num_colors)
    return config, args
