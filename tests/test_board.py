import random

import pytest

from lightlight.board import Board, encode_frame
from lightlight.font import segment_for
from lightlight.hardware import DISPLAY_SETUP, Eeprom, Ht16k33, ManualClock, MemoryBus


@pytest.fixture
def bus():
    return MemoryBus()


@pytest.fixture
def board(bus):
    return Board(Ht16k33(bus), Eeprom())


def test_empty_frame_is_blank():
    assert encode_frame([0] * 6, [0, 0], 0) == bytes(16)


def test_frame_player_one_round_trip():
    frame = encode_frame([0] * 6, [0b101010101, 0], 0)
    assert frame[14] | (frame[15] << 8) == 0b101010101


def test_frame_timer_round_trip():
    frame = encode_frame([0] * 6, [0, 0], 0b1111111111)
    assert frame[12] | (frame[13] << 8) == 0b1111111111


def test_frame_player_two_first_led_in_digit_row():
    frame = encode_frame([0] * 6, [0, 1], 0)
    assert frame[6] == 1 << 7
    assert sum(frame) == frame[6]


def test_frame_score_digits_placed_on_even_bytes():
    digits = [segment_for(c) for c in "123456"]
    frame = encode_frame(digits, [0, 0], 0)
    assert [frame[i] for i in (0, 2, 4, 6, 8, 10)] == digits


def test_update_score_digits(board):
    board.update_score(123, 0)
    assert board.score_digits[:3] == [segment_for("3"), segment_for("2"), segment_for("1")]
    board.update_score(7, 1)
    assert board.score_digits[3:] == [segment_for("7"), segment_for("0"), segment_for("0")]


def test_refresh_only_when_dirty(board, bus):
    board.clear()
    assert board.refresh() is False
    board.update_score(5, 0)
    assert board.refresh() is True
    assert bus.display[0] == segment_for("5")
    assert bus.commands[-1] == DISPLAY_SETUP | 1


def test_clear_blanks_display(board, bus):
    board.update_score(999, 1)
    board.player_leds = [0x1FF, 0x1FF]
    board.refresh()
    board.clear()
    assert bytes(bus.display) == bytes(16)


def test_highscore_round_trip(board):
    board.write_highscore(300, 1)
    assert board.read_highscore(1) == 300
    assert board.eeprom.read(2) == 300 >> 8
    board.write_highscore(0, 2)
    assert board.read_highscore(2) == 0


def test_read_buttons(board, bus):
    bus.press(0b100000001, 0b10)
    board.read_buttons()
    assert board.buttons == [0b100000001, 0b10]


def test_detect_hits_clears_matching_leds(board):
    board.player_leds[0] = 0b1011
    board.buttons[0] = 0b0011
    assert board.detect_hits(0) == 2
    assert board.player_leds[0] == 0b1011 & ~0b0011


def test_top_up_leds_avoids_pressed(board):
    board.buttons[1] = 0b11
    board.top_up_leds(1, 4, random.Random(1))
    leds = board.player_leds[1]
    assert bin(leds).count("1") == 4
    assert leds & board.buttons[1] == 0
    assert leds <= 0x1FF


def test_top_up_leds_stops_when_no_slot_left(board):
    board.buttons[0] = 0b111111
    board.top_up_leds(0, 4, random.Random(3))
    assert board.player_leds[0] == 0b111000000


def test_add_random_led_fills_up(board):
    rng = random.Random(7)
    assert all(board.add_random_led(0, rng) for _ in range(9))
    assert board.player_leds[0] == 0b111111111
    assert board.add_random_led(0, rng) is False


def test_show_text_scrolls(board):
    assert board.show_text(0, "ABC D@", 0) == 1
    assert board.score_digits[:3] == [segment_for("C"), segment_for("B"), segment_for("A")]


def test_show_text_end_restarts(board):
    assert board.show_text(0, "AB@", 1) == 0


def test_show_text_highscore_marker(board):
    board.write_highscore(42, 1)
    index = board.show_text(0, "  ;   @", 1)
    assert index == 3
    assert board.score_digits[:3] == [segment_for("2"), segment_for("4"), segment_for("0")]


def test_show_text_blink_jump(board):
    assert board.show_text(0, "ABC:DEF@", 0) == 4


def test_test_pattern_all_on(board, bus):
    board.test_pattern(1)
    assert board.player_leds == [0xFFFF, 0xFFFF]
    assert bus.display[0] == 0xFF


def test_test_pattern_walk(board):
    clock = ManualClock()
    board.test_pattern(0, clock)
    assert clock.millis() > 0
    assert clock.millis() % 200 == 0
    assert board.score_digits[3] == 0
    assert board.score_digits[4] == 0