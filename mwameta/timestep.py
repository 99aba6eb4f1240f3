"""Timestep metadata for correlator and voltage observations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


def _unix_to_gps_ms(
    unix_time_ms: int, scheduled_start_gps_ms: int, scheduled_start_unix_ms: int
) -> int:
    """Convert a UNIX time to GPS time using the scheduled start as reference."""
    return unix_time_ms - scheduled_start_unix_ms + scheduled_start_gps_ms


def _gps_to_unix_ms(
    gps_time_ms: int, scheduled_start_gps_ms: int, scheduled_start_unix_ms: int
) -> int:
    """Convert a GPS time to UNIX time using the scheduled start as reference."""
    return gps_time_ms - scheduled_start_gps_ms + scheduled_start_unix_ms


@dataclass(frozen=True)
class TimeStep:
    """One timestep, held both as UNIX and as GPS time in milliseconds."""

    unix_time_ms: int
    gps_time_ms: int

    def __repr__(self) -> str:
        return (
            f"unix={self.unix_time_ms / 1000:.3f}, "
            f"gps={self.gps_time_ms / 1000:.3f}"
        )


def populate_correlator_timesteps(
    gpubox_time_map: Mapping[int, Mapping[int, object]],
    scheduled_starttime_gps_ms: int,
    scheduled_starttime_unix_ms: int,
) -> list[TimeStep] | None:
    """Build timesteps common to all gpubox files.

    ``gpubox_time_map`` maps UNIX times (ms) to a mapping keyed by gpubox
    number. Only times present in every gpubox file are kept. Returns
    ``None`` when the map is empty.
    """
    if not gpubox_time_map:
        return None

    num_gpubox_files = max(len(files) for files in gpubox_time_map.values())

    return [
        TimeStep(
            unix_time_ms,
            _unix_to_gps_ms(
                unix_time_ms, scheduled_starttime_gps_ms, scheduled_starttime_unix_ms
            ),
        )
        for unix_time_ms, files in sorted(gpubox_time_map.items())
        if len(files) == num_gpubox_files
    ]


def populate_voltage_timesteps(
    start_gps_time_ms: int,
    end_gps_time_ms: int,
    voltage_file_interval_ms: int,
    scheduled_starttime_gps_ms: int,
    scheduled_starttime_unix_ms: int,
) -> list[TimeStep]:
    """Build timesteps from start (inclusive) to end (exclusive), spaced by the file interval."""
    if voltage_file_interval_ms <= 0:
        raise ValueError("voltage_file_interval_ms must be positive")

    return [
        TimeStep(
            _gps_to_unix_ms(
                gps_time_ms, scheduled_starttime_gps_ms, scheduled_starttime_unix_ms
            ),
            gps_time_ms,
        )
        for gps_time_ms in range(
            start_gps_time_ms, end_gps_time_ms, voltage_file_interval_ms
        )
    ]