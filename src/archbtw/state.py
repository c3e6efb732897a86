from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


CELLS_BEGIN = 0
CELLS_END = 30000
MIN_CELL_SIZE = 0
MAX_CELL_SIZE = 256


def _new_tape() -> np.ndarray:
    # int16 holds the full 0..256 cell range
    return np.zeros(CELLS_END + 1, dtype=np.int16)


@dataclass
class MachineState:
    tape: np.ndarray = field(default_factory=_new_tape)
    cursor: int = CELLS_BEGIN

    @property
    def cell(self) -> int:
        return int(self.tape[self.cursor])

    @cell.setter
    def cell(self, value: int) -> None:
        self.tape[self.cursor] = value

    def add_cell(self) -> None:
        value = self.cell + 1
        if value > MAX_CELL_SIZE:
            value = MIN_CELL_SIZE
        self.cell = value

    def sub_cell(self) -> None:
        value = self.cell - 1
        if value < MIN_CELL_SIZE:
            value = MAX_CELL_SIZE
        self.cell = value

    def store_input(self, value: int) -> None:
        """Store a read integer, folding out-of-range values to the opposite end."""
        if value < MIN_CELL_SIZE:
            value = MAX_CELL_SIZE
        elif value > MAX_CELL_SIZE:
            value = MIN_CELL_SIZE
        self.cell = value

    def add_ptr(self) -> None:
        self.cursor += 1
        if self.cursor > CELLS_END:
            self.cursor = CELLS_BEGIN

    def sub_ptr(self) -> None:
        self.cursor -= 1
        if self.cursor < CELLS_BEGIN:
            self.cursor = CELLS_END
