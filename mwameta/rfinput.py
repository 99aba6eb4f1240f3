"""RF input (tile and polarisation) metadata from the metafits TILEDATA table."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

_T = TypeVar("_T")

NUM_DIGITAL_GAINS = 24
NUM_DIPOLE_DELAYS = 16
DEAD_DIPOLE_DELAY = 32


class Pol(Enum):
    """Instrument polarisation."""

    X = "X"
    Y = "Y"

    def __str__(self) -> str:
        return self.value


class RfinputError(Exception):
    """Base class for errors raised while reading RF input metadata."""


class ReadCellError(RfinputError):
    """A cell of the TILEDATA table could not be read."""

    def __init__(self, col_name: str, row_num: int | None = None) -> None:
        self.col_name = col_name
        self.row_num = row_num
        where = f"row {row_num}" if row_num is not None else "row"
        super().__init__(f"Failed to read table {where} for {col_name} from metafits")


class UnrecognisedPolError(RfinputError):
    """The polarisation of a TILEDATA row is neither X nor Y."""

    def __init__(self, got: object, row_num: int | None = None) -> None:
        self.got = got
        self.row_num = row_num
        where = f" in row {row_num}" if row_num is not None else ""
        super().__init__(
            f"Did not recognise the polarisation{where} ({got}); expected X or Y"
        )


def get_vcs_order(input: int) -> int:
    """Return the PFB-to-correlator order for a metafits input number."""
    return (input & 0xC0) | ((input & 0x30) >> 4) | ((input & 0x0F) << 2)


def get_mwax_order(antenna: int, pol: Pol) -> int:
    """Return the subfile order: 2*antenna for X, 2*antenna+1 for Y."""
    return antenna * 2 + (1 if pol is Pol.Y else 0)


def get_electrical_length(metafits_length_string: str, coax_v_factor: float) -> float:
    """Return the electrical length in metres.

    Strings starting with ``EL_`` already hold the electrical length; any
    other value is a cable length scaled by ``coax_v_factor``.
    """
    if metafits_length_string.startswith("EL_"):
        return float(metafits_length_string.replace("EL_", ""))
    return float(metafits_length_string) * coax_v_factor


def _parse_pol(value: str, row_num: int | None) -> Pol:
    try:
        return Pol(value)
    except ValueError:
        raise UnrecognisedPolError(value, row_num) from None


def parse_pol(value: str) -> Pol:
    """Parse a polarisation string ("X" or "Y")."""
    return _parse_pol(value, None)


def _read_cell(
    row: Mapping[str, Any], col_name: str, convert: Callable[[Any], _T], row_num: int | None
) -> _T:
    try:
        return convert(row[col_name])
    except (KeyError, TypeError, ValueError):
        raise ReadCellError(col_name, row_num) from None


def _read_cell_array(
    row: Mapping[str, Any], col_name: str, n_elem: int, row_num: int | None
) -> list[int]:
    try:
        values = [int(v) for v in row[col_name]]
    except (KeyError, TypeError, ValueError):
        raise ReadCellError(col_name, row_num) from None
    if len(values) < n_elem:
        raise ReadCellError(col_name, row_num)
    return values[:n_elem]


@dataclass
class Rfinput:
    """One RF input (a tile with a polarisation) from the metafits file."""

    input: int
    ant: int
    tile_id: int
    tile_name: str
    pol: Pol
    electrical_length_m: float
    north_m: float
    east_m: float
    height_m: float
    vcs_order: int
    subfile_order: int
    flagged: bool
    digital_gains: list[int] = field(default_factory=list)
    dipole_gains: list[float] = field(default_factory=list)
    dipole_delays: list[int] = field(default_factory=list)
    rec_number: int = 0
    rec_slot_number: int = 0

    def __repr__(self) -> str:
        return f"{self.tile_name}{self.pol}"

    @classmethod
    def from_row(cls, row: Mapping[str, Any], coax_v_factor: float) -> Rfinput:
        """Build an RF input from one TILEDATA row keyed by column name."""
        return cls._from_row(row, coax_v_factor, None)

    @classmethod
    def _from_row(
        cls, row: Mapping[str, Any], coax_v_factor: float, row_num: int | None
    ) -> Rfinput:
        input_num = _read_cell(row, "Input", int, row_num)
        antenna = _read_cell(row, "Antenna", int, row_num)
        tile_id = _read_cell(row, "Tile", int, row_num)
        tile_name = _read_cell(row, "TileName", str, row_num)
        pol = _parse_pol(_read_cell(row, "Pol", str, row_num), row_num)
        length_string = _read_cell(row, "Length", str, row_num)
        north_m = _read_cell(row, "North", float, row_num)
        east_m = _read_cell(row, "East", float, row_num)
        height_m = _read_cell(row, "Height", float, row_num)
        flag = _read_cell(row, "Flag", int, row_num)
        digital_gains = _read_cell_array(row, "Gains", NUM_DIGITAL_GAINS, row_num)
        dipole_delays = _read_cell_array(row, "Delays", NUM_DIPOLE_DELAYS, row_num)
        rx = _read_cell(row, "Rx", int, row_num)
        slot = _read_cell(row, "Slot", int, row_num)

        dipole_gains = [0.0 if d == DEAD_DIPOLE_DELAY else 1.0 for d in dipole_delays]

        return cls(
            input=input_num,
            ant=antenna,
            tile_id=tile_id,
            tile_name=tile_name,
            pol=pol,
            electrical_length_m=get_electrical_length(length_string, coax_v_factor),
            north_m=north_m,
            east_m=east_m,
            height_m=height_m,
            vcs_order=get_vcs_order(input_num),
            subfile_order=get_mwax_order(antenna, pol),
            flagged=flag == 1,
            digital_gains=digital_gains,
            dipole_gains=dipole_gains,
            dipole_delays=dipole_delays,
            rec_number=rx,
            rec_slot_number=slot,
        )


def populate_rf_inputs(
    rows: Iterable[Mapping[str, Any]], coax_v_factor: float
) -> list[Rfinput]:
    """Build RF inputs from TILEDATA rows, in table order."""
    return [
        Rfinput._from_row(row, coax_v_factor, row_num)
        for row_num, row in enumerate(rows)
    ]