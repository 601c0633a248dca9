"""Seven-segment glyphs, scrolling messages and melodies."""

FIRST_CODE = ord("0")

SEGMENTS: tuple[int, ...] = (
    0b00111111,  # 0
    0b00000110,  # 1
    0b01011011,  # 2
    0b01001111,  # 3
    0b01100110,  # 4
    0b01101101,  # 5
    0b01111101,  # 6
    0b00000111,  # 7
    0b01111111,  # 8
    0b01101111,  # 9
    0b11111111,  # : blink jump marker
    0b11111111,  # ; high score of game 1
    0b11111111,  # < high score of game 2
    0b11111111,  # =
    0b11111111,  # >
    0b11111111,  # ?
    0b11111111,  # @ end of text
    0b01110111,  # A
    0b01111100,  # B
    0b00111001,  # C
    0b01011110,  # D
    0b01111001,  # E
    0b01110001,  # F
    0b00111101,  # G
    0b01110110,  # H
    0b00110000,  # I
    0b00011110,  # J
    0b01110101,  # K
    0b00111000,  # L
    0b00010101,  # M
    0b00110111,  # N
    0b00111111,  # O
    0b01110011,  # P
    0b01101011,  # Q
    0b00110011,  # R
    0b01101101,  # S
    0b01111000,  # T
    0b00111110,  # U
    0b00111110,  # V
    0b00101010,  # W
    0b01110110,  # X
    0b01101110,  # Y
    0b01011011,  # Z
)

BLANK = 0
DASH = 0b1000000

END_MARK = "@"
BLINK_MARK = ":"
HIGHSCORE_ONE_MARK = ";"
HIGHSCORE_TWO_MARK = "<"

START_TEXT = (
    "   - PRESS BOTTOM BUTTON TO START - PLAYER 1 FOR GAME 1 - PLAYER 2 FOR GAME 2 -"
    "   HIGHSCORE GAME 1   ;   ;   ;   ;   ;   ;      HIGHSCORE GAME 2   <   <   <"
    "   <   <   <    WINNER DONT USE DRUGS   @"
)
NEW_HIGHSCORE_TEXT = "NEW HIGHSCORE   @"
EQUALITY_TEXT = "   SAME SAME   @"
WINNER_TEXT = "   WIN - WIN - WIN   @"
LOSER_TEXT = "   LOOSE - LOOSE -   @"

LAUNCH_MUSIC: tuple[int, ...] = (
    330, 0, 392, 0, 440, 0, 392, 0, 330, 0, 392, 0, 440, 0, 392, 0,
    294, 0, 370, 0, 392, 0, 370, 0, 294, 0, 370, 0, 392, 0, 370, 0,
    261, 0, 330, 0, 392, 0, 330, 0, 261, 0, 330, 0, 392, 0, 330, 0,
    247, 0, 294, 0, 370, 0, 294, 0, 247, 0, 294, 0, 370, 0, 294, 0,
    220, 0, 261, 0, 330, 0, 261, 0, 220, 0, 261, 0, 330, 0, 261, 0,
    196, 0, 247, 0, 294, 0, 247, 0, 196, 0, 247, 0, 294, 0, 247, 0,
)

WINNER_MUSIC: tuple[int, ...] = (
    392, 392, 0, 523, 523, 0, 659, 659, 0, 784, 784, 0, 0,
    659, 784, 784, 784, 784, 784, 0, 0, 0,
)


def segment_for(char: str) -> int:
    """Return the seven-segment pattern for a single character."""
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    if char == " ":
        return BLANK
    if char == "-":
        return DASH
    code = ord(char) - FIRST_CODE
    if not 0 <= code < len(SEGMENTS):
        raise ValueError(f"no segment pattern for {char!r}")
    return SEGMENTS[code]