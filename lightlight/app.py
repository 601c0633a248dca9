"""Start-up and main loop of the console."""

from __future__ import annotations

import argparse
import itertools
import random

from .board import Board
from .games import Console
from .hardware import (
    BatteryKeeper,
    Buzzer,
    Eeprom,
    Ht16k33,
    ManualClock,
    MemoryBus,
    SystemClock,
)

FIRST_RUN_ADDRESS = 100
FIRST_RUN_MARK = 123


def setup(console: Console) -> None:
    """Start the LED driver and clear the high scores on the very first run."""
    console.board.driver.start()
    console.board.clear()
    if console.eeprom.read(FIRST_RUN_ADDRESS) != FIRST_RUN_MARK:
        console.eeprom.write(FIRST_RUN_ADDRESS, FIRST_RUN_MARK)
        console.board.write_highscore(0, 1)
        console.board.write_highscore(0, 2)


def play_round(console: Console) -> int:
    """Play one full round; return the number of the game that was played."""
    game = console.start_screen()
    console.launch_animation()
    if game == 1:
        console.game_one()
    elif game == 2:
        console.game_two()
    console.winner_animation(game)
    console.board.clear()
    console.clock.sleep(2000)
    return game


def _mask(text: str) -> int:
    return int(text, 0)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="lightlight", description="Two-player reaction light console.")
    parser.add_argument("--eeprom", help="file that keeps the non-volatile memory")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--rounds", type=int, default=0, help="rounds to play, 0 for no limit")
    parser.add_argument(
        "--keys", nargs=2, type=_mask, default=(0, 0), metavar=("P1", "P2"),
        help="button masks held by each player",
    )
    parser.add_argument("--fast", action="store_true", help="run on a simulated clock")
    args = parser.parse_args(argv)

    bus = MemoryBus()
    bus.press(*args.keys)
    eeprom = Eeprom(path=args.eeprom)
    board = Board(Ht16k33(bus), eeprom)
    clock = ManualClock() if args.fast else SystemClock()
    console = Console(board, clock, Buzzer(), BatteryKeeper(clock), random.Random(args.seed), eeprom)

    setup(console)
    rounds = itertools.count() if args.rounds == 0 else range(args.rounds)
    for _ in rounds:
        game = play_round(console)
        one, two = console.scores
        print(f"game {game}: {one} - {two} (highscore {board.read_highscore(game)})")
    return 0