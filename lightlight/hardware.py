"""Simulated peripherals of the console: EEPROM, I2C bus, LED driver, clock, buzzer."""

from __future__ import annotations

import time
from pathlib import Path

GAME_ONE_ACTIVE_LEDS = 4
GAME_DURATION = 2
SAVE_SOUND = True

HT16K33_ADDRESS = 0x70
DISPLAY_DATA = 0x00
SYSTEM_SETUP = 0x20
KEY_DATA = 0x40
INT_FLAG = 0x60
DISPLAY_SETUP = 0x80
ROW_INT = 0xA0
DIMMING_SET = 0xE0

BATTERY_ON_MS = 2000
BATTERY_OFF_MS = 8000

EEPROM_SOUND_ADDRESS = 102

_MILLIS_MASK = 0xFFFFFFFF


class Eeprom:
    """Byte-addressed non-volatile memory, optionally backed by a file."""

    def __init__(self, size: int = 256, path: str | Path | None = None) -> None:
        self.size = size
        self.path = Path(path) if path is not None else None
        self._data = bytearray(b"\xff" * size)
        if self.path is not None and self.path.exists():
            stored = self.path.read_bytes()[:size]
            self._data[: len(stored)] = stored

    def _check(self, address: int) -> None:
        if not 0 <= address < self.size:
            raise IndexError(f"EEPROM address {address} out of range 0..{self.size - 1}")

    def read(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def write(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF
        if self.path is not None:
            self.path.write_bytes(bytes(self._data))


class MemoryBus:
    """In-memory I2C bus emulating a single HT16K33 device."""

    def __init__(self) -> None:
        self.transactions: list[tuple[int, bytes]] = []
        self.commands: list[int] = []
        self.display = bytearray(16)
        self.keys = bytearray(6)

    def write(self, address: int, data: bytes) -> None:
        payload = bytes(data)
        self.transactions.append((address, payload))
        if not payload:
            return
        head = payload[0]
        if head <= 0x0F:
            for offset, byte in enumerate(payload[1:]):
                self.display[(head + offset) % len(self.display)] = byte
        else:
            self.commands.append(head)

    def read(self, address: int, count: int) -> bytes:
        data = bytes(self.keys[:count])
        return data + bytes(count - len(data))

    def press(self, player1: int, player2: int) -> None:
        """Set the key matrix state seen by the next key read."""
        self.keys[0] = player1 & 0xFF
        self.keys[1] = (player1 >> 8) & 0xFF
        self.keys[2] = player2 & 0xFF
        self.keys[3] = (player2 >> 8) & 0xFF


class Ht16k33:
    """LED matrix and key-scan driver on an I2C bus."""

    def __init__(self, bus, address: int = HT16K33_ADDRESS) -> None:
        self.bus = bus
        self.address = address

    def command(self, data: int) -> None:
        self.bus.write(self.address, bytes([data & 0xFF]))

    def write_display(self, frame: bytes) -> None:
        self.bus.write(self.address, bytes([DISPLAY_DATA]) + bytes(frame))

    def read_keys(self) -> tuple[int, int]:
        """Return the pressed-button masks of both players."""
        self.command(KEY_DATA)
        raw = self.bus.read(self.address, 4)
        return raw[0] | (raw[1] << 8), raw[2] | (raw[3] << 8)

    def start(self) -> None:
        self.command(SYSTEM_SETUP | 0b1)
        self.command(ROW_INT | 0)
        self.command(DIMMING_SET | 0xF)


class SystemClock:
    """Millisecond clock backed by the monotonic system timer."""

    def __init__(self) -> None:
        self._origin = time.monotonic()

    def millis(self) -> int:
        return int((time.monotonic() - self._origin) * 1000) & _MILLIS_MASK

    def sleep(self, ms: float) -> None:
        time.sleep(ms / 1000)


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def millis(self) -> int:
        return self._now & _MILLIS_MASK

    def sleep(self, ms: int) -> None:
        self.advance(ms)

    def advance(self, ms: int) -> None:
        self._now += ms


class Buzzer:
    """Records the tones the console asks for."""

    def __init__(self) -> None:
        self.frequency: int | None = None
        self.duration: int | None = None
        self.history: list[tuple[int | None, int | None]] = []

    def tone(self, frequency: int, duration: int | None = None) -> None:
        self.frequency = frequency
        self.duration = duration
        self.history.append((frequency, duration))

    def no_tone(self) -> None:
        self.frequency = None
        self.duration = None
        self.history.append((None, None))


class BatteryKeeper:
    """Pulses a load periodically so an external power bank stays awake."""

    PINS = ("PA1", "PA5", "PA6", "PA7")

    def __init__(self, clock) -> None:
        self.clock = clock
        self.high = False
        self._since = 0

    def _elapsed(self) -> int:
        return (self.clock.millis() - self._since) & _MILLIS_MASK

    def tick(self) -> bool:
        """Advance the pulse state machine; return whether the load is on."""
        if self.high and self._elapsed() > BATTERY_ON_MS:
            self.high = False
            self._since = self.clock.millis()
        if not self.high and self._elapsed() > BATTERY_OFF_MS:
            self.high = True
            self._since = self.clock.millis()
        return self.high