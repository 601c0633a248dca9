import pytest

from lightlight.hardware import (
    BATTERY_OFF_MS,
    BATTERY_ON_MS,
    DIMMING_SET,
    HT16K33_ADDRESS,
    KEY_DATA,
    ROW_INT,
    SYSTEM_SETUP,
    BatteryKeeper,
    Buzzer,
    Eeprom,
    Ht16k33,
    ManualClock,
    MemoryBus,
    SystemClock,
)


def test_eeprom_round_trip():
    eeprom = Eeprom()
    eeprom.write(5, 42)
    assert eeprom.read(5) == 42


def test_eeprom_stores_bytes_only():
    eeprom = Eeprom()
    eeprom.write(1, 0x1AB)
    assert eeprom.read(1) == 0x1AB & 0xFF


def test_eeprom_out_of_range():
    eeprom = Eeprom(size=16)
    with pytest.raises(IndexError):
        eeprom.read(16)
    with pytest.raises(IndexError):
        eeprom.write(-1, 0)


def test_eeprom_persists_to_file(tmp_path):
    path = tmp_path / "eeprom.bin"
    Eeprom(path=path).write(102, 1)
    assert Eeprom(path=path).read(102) == 1


def test_fresh_eeprom_is_uniform():
    eeprom = Eeprom(size=8)
    values = {eeprom.read(a) for a in range(8)}
    assert len(values) == 1


def test_keys_round_trip_through_driver():
    bus = MemoryBus()
    bus.press(0x1FF, 0b10)
    driver = Ht16k33(bus)
    assert driver.read_keys() == (0x1FF, 0b10)
    assert bus.commands[-1] == KEY_DATA


def test_start_sends_setup_commands():
    bus = MemoryBus()
    Ht16k33(bus).start()
    assert bus.transactions == [
        (HT16K33_ADDRESS, bytes([SYSTEM_SETUP | 1])),
        (HT16K33_ADDRESS, bytes([ROW_INT])),
        (HT16K33_ADDRESS, bytes([DIMMING_SET | 0xF])),
    ]


def test_write_display_fills_ram():
    bus = MemoryBus()
    frame = bytes(range(16))
    Ht16k33(bus).write_display(frame)
    assert bytes(bus.display) == frame
    assert bus.transactions[-1] == (HT16K33_ADDRESS, bytes([0]) + frame)


def test_manual_clock():
    clock = ManualClock(start=5)
    clock.advance(10)
    clock.sleep(20)
    assert clock.millis() == 5 + 10 + 20


def test_system_clock_is_monotonic():
    clock = SystemClock()
    first = clock.millis()
    clock.sleep(2)
    assert clock.millis() >= first


def test_buzzer_records_tones():
    buzzer = Buzzer()
    buzzer.tone(500)
    assert buzzer.frequency == 500
    buzzer.tone(800, 20)
    buzzer.no_tone()
    assert buzzer.frequency is None
    assert buzzer.history == [(500, None), (800, 20), (None, None)]


def test_battery_keeper_cycle():
    clock = ManualClock()
    keeper = BatteryKeeper(clock)
    assert keeper.tick() is False
    clock.advance(BATTERY_OFF_MS)
    assert keeper.tick() is False
    clock.advance(1)
    assert keeper.tick() is True
    clock.advance(BATTERY_ON_MS)
    assert keeper.tick() is True
    clock.advance(1)
    assert keeper.tick() is False