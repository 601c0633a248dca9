# lightlight

A two-player reaction game. Each player has nine lit buttons and a
three-digit seven-segment score display. A shared row of timer LEDs
counts down the round. The game logic drives a HT16K33 LED and key matrix
controller through a small device layer. The I2C bus, the EEPROM, the clock
and the buzzer are separate objects, and the package ships simulated
versions of each, so the whole game runs on a desktop.

## Games

- **Game 1**: each player keeps four lit LEDs. Pressing a lit button scores
  a point and turns that LED off. A new random LED then lights, never one
  whose button is being held. The timer row of ten LEDs loses one LED about
  every two seconds, and the round ends when the row is empty.
- **Game 2**: one more random LED lights on each side at a steady pace, and
  the pace rises as the combined score goes up. Pressing a lit button
  scores a point and turns the LED off. The round ends when both sides are
  fully lit.

The start screen scrolls a text that includes the stored high scores of
both games. On the start screen:

- Button 9 (mask `0x100`) switches the sound on or off. The choice is kept
  in the EEPROM.
- Holding all nine buttons of one player resets both high scores.
- After about one second, button 1 starts game 1 and button 2 starts
  game 2.

A countdown on the timer row runs before each game. After the game, a
result screen shows "WIN" or "LOOSE", or "SAME SAME" on a tie. It shows
"NEW HIGHSCORE" when a record was set, stores the record, and flashes the
winner's score.

## Installation

```
pip install .
```

## Running

```
lightlight --fast --rounds 3 --keys 1 0
```

Options:

- `--keys P1 P2`: the button masks each player holds for the whole run.
  Masks can be given in any integer notation, for example `0x1ff`. The
  default is `0 0`. With no button held, the start screen never picks a
  game, so the command waits forever.
- `--fast`: run on a simulated clock rather than in real time.
- `--rounds N`: the number of rounds to play. `0`, the default, means no
  limit.
- `--seed N`: the seed for the random LED placement.
- `--eeprom FILE`: a file that keeps the EEPROM contents (high scores,
  sound setting, first-run mark) between runs. Without it, memory starts
  blank every time.

On the first run the high scores are cleared. After each round the command
prints one line:

```
game 1: 0 - 0 (highscore 0)
```

## Using the pieces

- `lightlight.hardware` holds the device layer:
  - `Eeprom`: byte memory, optionally backed by a file.
  - `MemoryBus`: an in-memory I2C bus that records the display RAM and the
    commands it is sent. `MemoryBus.press(player1, player2)` sets the key
    state that the next key read returns.
  - `Ht16k33`: the controller driver, with `start`, `command`,
    `write_display` and `read_keys`.
  - `SystemClock` and `ManualClock` (`advance(ms)`).
  - `Buzzer`: records each tone in `history`.
  - `BatteryKeeper`: the on/off pulse timer that keeps a power bank awake.
- `lightlight.board` holds `Board`, the display and button state, and
  `encode_frame`, which builds the 16-byte display RAM image.
- `lightlight.games` holds `Console`. It has `start_screen`,
  `launch_animation`, `game_one`, `game_two`, `winner_animation` and
  `switch_sound`.
- `lightlight.app` holds `setup`, `play_round` and `main`.
- `lightlight.font` holds the glyph table, the scrolling texts, the
  melodies, and `segment_for`, which maps a character to its
  seven-segment pattern.

## What it does not do

- It does not talk to a real I2C bus. `Ht16k33` works with any object that
  has `write(address, data)` and `read(address, count)`, but the only bus
  included is `MemoryBus`.
- It does not draw the board on screen.
- It does not play sound. `Buzzer` only records the tones it is asked for.
- It does not drive real output pins. `BatteryKeeper` only tracks whether
  the load would be on.

## Tests

```
pip install .[test]
pytest
```