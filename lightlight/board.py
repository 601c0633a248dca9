"""Display and button state of the two-player board."""

from __future__ import annotations

from .font import (
    BLINK_MARK,
    END_MARK,
    HIGHSCORE_ONE_MARK,
    HIGHSCORE_TWO_MARK,
    segment_for,
)
from .hardware import DISPLAY_SETUP

FULL_PLAYER = 0b111111111
PLAYER_LEDS = 9


def encode_frame(score_digits, player_leds, timer_leds) -> bytes:
    """Pack the board state into the 16 display-RAM bytes of the LED driver."""
    frame = bytearray(16)
    digits = [d & 0xFF for d in score_digits]
    one, two = (leds & 0xFFFF for leds in player_leds)
    timer = timer_leds & 0xFFFF

    frame[0], frame[2], frame[4] = digits[0], digits[1], digits[2]
    frame[6], frame[8], frame[10] = digits[3], digits[4], digits[5]

    frame[14] = one & 0xFF
    frame[15] = (one >> 8) & 0xFF

    # The second player's LEDs share the rows of its score digits.
    frame[6] |= ((two & 0b1) << 7) & 0xFF
    frame[7] = (two & 0b11111) >> 1
    frame[8] |= ((two & 0b100000) << 2) & 0xFF
    frame[9] = (two & 0b111100000) >> 6

    frame[12] = timer & 0xFF
    frame[13] = (timer >> 8) & 0xFF
    return bytes(frame)


def _char(text: str, position: int) -> str:
    return text[position] if position < len(text) else END_MARK


class Board:
    """Score digits, player LEDs, timer bar and buttons of both players."""

    def __init__(self, driver, eeprom) -> None:
        self.driver = driver
        self.eeprom = eeprom
        self.score_digits = [0] * 6
        self.player_leds = [0, 0]
        self.timer_leds = 0
        self.buttons = [0, 0]
        self.dirty = False

    def clear(self) -> None:
        self.score_digits = [0] * 6
        self.player_leds = [0, 0]
        self.timer_leds = 0
        self.refresh(True)

    def refresh(self, force: bool = False) -> bool:
        """Send the state to the driver; return whether anything was sent."""
        if not force and not self.dirty:
            return False
        self.driver.write_display(
            encode_frame(self.score_digits, self.player_leds, self.timer_leds)
        )
        self.driver.command(DISPLAY_SETUP | 0b1)
        self.dirty = False
        return True

    def update_score(self, score: int, player: int) -> None:
        score &= 0xFFFF
        base = player * 3
        self.score_digits[base + 2] = segment_for(chr(ord("0") + score // 100))
        self.score_digits[base + 1] = segment_for(chr(ord("0") + score // 10 % 10))
        self.score_digits[base] = segment_for(chr(ord("0") + score % 10))
        self.dirty = True

    def show_text(self, index: int, text: str, player: int) -> int:
        """Show three characters of text from index; return the next index, 0 at the end."""
        slot = 0
        for offset in (2, 1, 0):
            ch = _char(text, index + offset)
            if ch == END_MARK:
                return 0
            if ch in (HIGHSCORE_ONE_MARK, HIGHSCORE_TWO_MARK):
                game = 1 if ch == HIGHSCORE_ONE_MARK else 2
                self.update_score(self.read_highscore(game), 0)
                index += 2
                break
            self.score_digits[slot + player * 3] = segment_for(ch)
            slot += 1

        if _char(text, index + 3) == BLINK_MARK:
            index += 3
        return index + 1

    def read_highscore(self, game: int) -> int:
        return (self.eeprom.read(2 * game) << 8) | self.eeprom.read(2 * game + 1)

    def write_highscore(self, score: int, game: int) -> None:
        score &= 0xFFFF
        if self.read_highscore(game) != score:
            self.eeprom.write(2 * game, score >> 8)
            self.eeprom.write(2 * game + 1, score & 0xFF)

    def read_buttons(self) -> None:
        self.buttons = list(self.driver.read_keys())

    def detect_hits(self, player: int) -> int:
        """Turn off lit LEDs whose button is pressed; return how many there were."""
        hits = self.player_leds[player] & self.buttons[player] & FULL_PLAYER
        self.player_leds[player] &= ~hits & 0xFFFF
        return bin(hits).count("1")

    def _free_slots(self, player: int, avoid_pressed: bool) -> int:
        taken = self.player_leds[player]
        if avoid_pressed:
            taken |= self.buttons[player]
        return ~taken & FULL_PLAYER

    def _light_from(self, player: int, start: int, avoid_pressed: bool) -> None:
        free = self._free_slots(player, avoid_pressed)
        bit = start
        while not free & (1 << bit):
            bit = (bit + 1) % PLAYER_LEDS
        self.player_leds[player] |= 1 << bit

    def top_up_leds(self, player: int, active: int, rng) -> None:
        """Light random free, unpressed LEDs until `active` are lit or none are left."""
        while bin(self.player_leds[player] & FULL_PLAYER).count("1") < active:
            if not self._free_slots(player, True):
                break
            self._light_from(player, rng.randrange(PLAYER_LEDS), True)
        self.dirty = True

    def add_random_led(self, player: int, rng) -> bool:
        """Light one more random LED; return False when all are already lit."""
        if self.player_leds[player] == FULL_PLAYER:
            return False
        self._light_from(player, rng.randrange(PLAYER_LEDS), False)
        return True

    def test_pattern(self, mode: int = 0, clock=None) -> None:
        """Walk a light across every LED (mode 0) or light them all (mode 1)."""
        if mode == 0:
            for player in (0, 1):
                self.player_leds[player] = 1
                for _ in range(PLAYER_LEDS):
                    self._show_step(clock)
                    self.player_leds[player] = (self.player_leds[player] << 1) & 0xFFFF
            for base in (0, 3):
                for pos in range(base, base + 3):
                    self.score_digits[pos] = 1
                for _ in range(7):
                    self._show_step(clock)
                    for pos in range(base, base + 3):
                        self.score_digits[pos] = (self.score_digits[pos] << 1) & 0xFF
            # These digit segments share lines with the second player's LEDs.
            self.score_digits[3] = 0
            self.score_digits[4] = 0
            self.timer_leds = 1
            for _ in range(12):
                self._show_step(clock)
                self.timer_leds = (self.timer_leds << 1) & 0xFFFF
        elif mode == 1:
            self.player_leds = [0xFFFF, 0xFFFF]
            self.score_digits = [0xFF] * 6
            self.timer_leds = 0xFFFF
            self.refresh(True)

    def _show_step(self, clock) -> None:
        self.refresh(True)
        if clock is not None:
            clock.sleep(200)