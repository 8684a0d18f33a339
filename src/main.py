"""Entry point for the Jewels match-three puzzle.

Parses the board size from the command line, builds the board engine, and
hands it to an Arcade window that feeds clicks and frame ticks into the event bus.
"""
import logging
import random
import sys
from typing import Sequence

from arcade import Window, run, set_background_color, color
from jewels.config import GameConfig, parse_args
from jewels.constants import WINDOW_TITLE
from jewels.engine import BoardEngine
from jewels.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TICK
from jewels.systems.cascade_clock import CascadeClockSystem
from jewels.systems.input import InputSystem
from jewels.systems.render import RenderSystem
from jewels.ui.layout import window_size_for

logger = logging.getLogger("jewels")


class JewelsWindow(Window):
    def __init__(self, config: GameConfig, rng: random.Random | None = None):
        width, height = window_size_for(config.rows, config.cols)
        super().__init__(width, height, WINDOW_TITLE)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.engine = BoardEngine(
            config.rows,
            config.cols,
            config.num_colors,
            rng=rng,
            event_bus=self.event_bus,
        )
        self.world = self.engine.world
        # Paces cascade steps; the engine itself never sees wall-clock time.
        self.cascade_clock_system = CascadeClockSystem(self.world, self.event_bus)
        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)


def main(argv: Sequence[str] | None = None):
    config, args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("starting %dx%d board with %d colors", config.rows, config.cols, config.num_colors)
    rng = random.Random(args.seed) if args.seed is not None else None
    window = JewelsWindow(config, rng=rng)
    logger.debug("window %dx%d", window.width, window.height)
    run()

if __name__ == "__main__":
    main()
