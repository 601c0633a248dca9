"""Two-player LED reaction game for a HT16K33 board, with simulated peripherals."""

__version__ = "0.1.0"
__all__ = ["font", "hardware", "board", "games", "app"]