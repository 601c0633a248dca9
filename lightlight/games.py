"""Game flow of the console: attract screen, countdown, both games and the result screen."""

from __future__ import annotations

import itertools
import random
from collections.abc import Iterator

from .board import FULL_PLAYER
from .font import (
    EQUALITY_TEXT,
    LAUNCH_MUSIC,
    LOSER_TEXT,
    NEW_HIGHSCORE_TEXT,
    START_TEXT,
    WINNER_MUSIC,
    WINNER_TEXT,
)
from .hardware import (
    EEPROM_SOUND_ADDRESS,
    GAME_DURATION,
    GAME_ONE_ACTIVE_LEDS,
    SAVE_SOUND,
    BatteryKeeper,
    Buzzer,
    SystemClock,
)

_MILLIS_MASK = 0xFFFFFFFF
_SOUND_BUTTON = 0b100000000
_ALL_BUTTONS = 0b111111111
_FULL_TIMER = 0b1111111111

_ATTRACT_PLAYER_PATTERN = (0b110110001, 0, 0b1001010, 0, 0b100, 0)
_LAUNCH_TIMER = {0: 0b1111111111, 2: 0b11111, 4: 0b11}


def _timer_sweep() -> Iterator[int]:
    """Yield the successive timer-bar patterns of the attract screen, forever."""
    while True:
        bit, direction = 0, 1
        ends = 0b100000000001  # sentinels just outside both ends of the bar
        while True:
            if not (ends >> (bit + direction)) & 1 and bit != 0:
                ends &= ~(1 << bit)
            bit += direction
            if (ends >> bit) & 1:
                direction = -direction
                bit += 2 * direction
            ends |= 1 << bit
            timer = ends >> 1
            yield timer
            if timer == 0b11111111111:
                break
        for bit in range(10, -1, -1):
            timer &= ~(1 << bit)
            yield timer
        for bit in range(0, 10):
            timer |= 1 << bit
            yield timer
        for bit in range(9, -1, -1):
            timer &= ~(1 << bit)
            yield timer


class Console:
    """Runs the screens and games of the two-player reaction console."""

    def __init__(self, board, clock=None, buzzer=None, keeper=None, rng=None, eeprom=None) -> None:
        self.board = board
        self.clock = clock if clock is not None else SystemClock()
        self.buzzer = buzzer if buzzer is not None else Buzzer()
        self.keeper = keeper if keeper is not None else BatteryKeeper(self.clock)
        self.rng = rng if rng is not None else random.Random()
        self.eeprom = eeprom if eeprom is not None else board.eeprom
        self.music_on = bool(self.eeprom.read(EEPROM_SOUND_ADDRESS)) if SAVE_SOUND else True
        self.scores = [0, 0]

    def _ticks(self, tick: int) -> Iterator[None]:
        """Yield once each time more than `tick` milliseconds have passed."""
        last = self.clock.millis()
        while True:
            elapsed = (self.clock.millis() - last) & _MILLIS_MASK
            if elapsed <= tick:
                self.clock.sleep(tick + 1 - elapsed)
            last = self.clock.millis()
            yield

    def _play(self, frequency: int) -> None:
        if frequency:
            self.buzzer.tone(frequency)
        else:
            self.buzzer.no_tone()

    def _start_driver(self) -> None:
        self.board.driver.start()
        self.board.clear()

    def switch_sound(self) -> bool:
        """Toggle the music and remember the choice; return the new state."""
        self.music_on = not self.music_on
        if SAVE_SOUND:
            self.eeprom.write(EEPROM_SOUND_ADDRESS, int(self.music_on))
        return self.music_on

    def start_screen(self) -> int:
        """Run the attract screen until a player chooses a game; return its number."""
        board = self.board
        board.clear()
        board.refresh(True)
        self.buzzer.no_tone()

        t_read = t_read_total = t_players = t_timer = t_score = t_sound = 0
        players = itertools.cycle(_ATTRACT_PLAYER_PATTERN)
        sweep = _timer_sweep()
        text_index = 0
        note = 0
        last_switch = 0

        for _ in self._ticks(20):
            t_players += 1
            t_timer += 1
            t_score += 1
            t_sound = (t_sound + 1) & 0xFF
            t_read += 1
            t_read_total += 1

            if t_score == 10:
                t_score = 0
                text_index = board.show_text(text_index, START_TEXT, 0)
                board.score_digits[3:6] = board.score_digits[0:3]

            if t_timer == 3:
                t_timer = 0
                board.timer_leds = next(sweep)

            if t_players == 12:
                t_players = 0
                pattern = next(players)
                board.player_leds = [pattern, pattern]

            if t_sound == 6 and self.music_on:
                t_sound = 0
                self._play(LAUNCH_MUSIC[note])
                note = (note + 1) % len(LAUNCH_MUSIC)

            board.refresh(True)

            if t_read >= 2:
                t_read = 0
                board.read_buttons()
                one, two = board.buttons
                if one == _ALL_BUTTONS or two == _ALL_BUTTONS:
                    board.write_highscore(0, 1)
                    board.write_highscore(0, 2)
                if (one | two) & _SOUND_BUTTON and t_read_total - last_switch > 40:
                    self.switch_sound()
                    last_switch = t_read_total
                    note = 0
                    t_sound = 5
                    self.buzzer.no_tone()
                if t_read_total > 50:
                    if (one | two) & 0b1:
                        return 1
                    if (one | two) & 0b10:
                        return 2

            self.keeper.tick()
        raise AssertionError("unreachable")

    def launch_animation(self) -> None:
        """Count down on the timer bar with beeps before a game starts."""
        board = self.board
        board.clear()
        board.refresh(True)
        self.buzzer.no_tone()

        count = 0
        step = 0
        for _ in self._ticks(10):
            count += 1
            if count == 50:
                count = 0
                if step in _LAUNCH_TIMER:
                    board.timer_leds = _LAUNCH_TIMER[step]
                    if self.music_on:
                        self.buzzer.tone(500)
                elif step in (1, 3, 5):
                    board.timer_leds = 0
                    if self.music_on:
                        self.buzzer.no_tone()
                elif step in (6, 7) and self.music_on:
                    self.buzzer.tone(1000)
                step += 1
                board.refresh(True)

            if step == 8:
                return
            self.keeper.tick()

    def game_one(self) -> list[int]:
        """Timed game: hit lit LEDs until the timer bar runs out; return the scores."""
        board = self.board
        self._start_driver()
        for player in (0, 1):
            board.top_up_leds(player, GAME_ONE_ACTIVE_LEDS, self.rng)
        self.buzzer.no_tone()
        self.scores = [0, 0]

        t_read = t_time = 0
        board.timer_leds = _FULL_TIMER

        for _ in self._ticks(10):
            t_read += 1
            t_time += 1

            if t_read == 2:
                t_read = 0
                board.read_buttons()
                for player in (0, 1):
                    self.scores[player] = (self.scores[player] + board.detect_hits(player)) & 0xFFFF
                    board.update_score(self.scores[player], player)
                    board.top_up_leds(player, GAME_ONE_ACTIVE_LEDS, self.rng)

            if t_time == GAME_DURATION * 100:
                t_time = 0
                board.timer_leds >>= 1

            board.refresh(True)
            if board.timer_leds == 0:
                return list(self.scores)
            self.keeper.tick()
        raise AssertionError("unreachable")

    def game_two(self) -> list[int]:
        """Survival game: LEDs pile up ever faster until both sides are full; return the scores."""
        board = self.board
        self._start_driver()
        self.buzzer.no_tone()
        self.scores = [0, 0]

        t_read = t_refresh = 0
        refresh_every = 50
        board.timer_leds = 0

        for _ in self._ticks(10):
            t_read += 1
            t_refresh = (t_refresh + 1) & 0xFF

            if t_read == 2:
                t_read = 0
                board.read_buttons()
                for player in (0, 1):
                    self.scores[player] = (self.scores[player] + board.detect_hits(player)) & 0xFFFF
                    board.update_score(self.scores[player], player)

            if t_refresh == refresh_every:
                t_refresh = 0
                if board.player_leds[0] == FULL_PLAYER and board.player_leds[1] == FULL_PLAYER:
                    return list(self.scores)
                refresh_every = (50 - sum(self.scores) // 5) & 0xFF
                board.add_random_led(0, self.rng)
                board.add_random_led(1, self.rng)
                if self.music_on:
                    self.buzzer.tone(800, 20)

            board.refresh(True)
            self.keeper.tick()
        raise AssertionError("unreachable")

    def winner_animation(self, game: int) -> None:
        """Show the result, record a new high score for `game` and flash the winner."""
        board = self.board
        board.clear()
        board.refresh(True)

        scores = self.scores
        tie = scores[0] == scores[1]
        if tie:
            winner = loser = 0
            phase = 0
        else:
            winner = 0 if scores[0] > scores[1] else 1
            loser = 1 - winner
            phase = 1

        new_highscore = board.read_highscore(game) < scores[winner]
        if new_highscore:
            board.write_highscore(scores[winner], game)

        t_score = t_players = t_sound = t_read = t_end = 0
        index = 0
        blink_on = True
        note = 0

        for _ in self._ticks(20):
            t_score += 1
            t_players += 1
            t_sound = (t_sound + 1) & 0xFF
            t_read += 1
            t_end += 1

            if t_score == 15:
                t_score = 0
                digits = board.score_digits
                if phase == 0:
                    index = board.show_text(index, EQUALITY_TEXT, 0)
                    digits[3:6] = digits[0:3]
                    if index == 0:
                        phase = 2 if new_highscore else 3
                    t_end = 0
                if phase == 1:
                    index = board.show_text(index, WINNER_TEXT, winner)
                    board.show_text(index, LOSER_TEXT, loser)
                    if index == 0:
                        phase = 2 if new_highscore else 3
                    t_end = 0
                if phase == 2 and new_highscore:
                    index = board.show_text(index, NEW_HIGHSCORE_TEXT, winner)
                    if tie:
                        if winner == 0:
                            digits[3:6] = digits[0:3]
                        else:
                            digits[0:3] = digits[3:6]
                    if index == 0:
                        phase = 3
                    t_end = 0

            if t_players == 5:
                t_players = 0
                if phase == 3:
                    if blink_on:
                        board.player_leds[winner] = FULL_PLAYER
                        board.update_score(scores[winner], winner)
                        board.update_score(scores[loser], loser)
                        if tie:
                            board.player_leds[1] = board.player_leds[0]
                            board.update_score(scores[1], 1)
                    else:
                        board.player_leds[winner] = 0
                        board.score_digits[winner * 3:winner * 3 + 3] = [0, 0, 0]
                        if tie:
                            board.player_leds[1] = 0
                            board.score_digits[3:6] = [0, 0, 0]
                    blink_on = not blink_on

            if t_sound == 5 and self.music_on:
                t_sound = 0
                if note < len(WINNER_MUSIC):
                    self._play(WINNER_MUSIC[note])
                    note += 1

            if t_read == 300:
                t_read = 0
                board.read_buttons()
                if (board.buttons[0] | board.buttons[1]) > 1:
                    return

            if t_end == 300:
                return
            board.refresh(True)
            self.keeper.tick()