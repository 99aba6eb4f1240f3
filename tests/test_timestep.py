import pytest

from mwameta.timestep import (
    TimeStep,
    populate_correlator_timesteps,
    populate_voltage_timesteps,
)

SCHED_GPS_MS = 1_065_880_139_000
SCHED_UNIX_MS = 1_381_844_923_000


def test_populate_correlator_timesteps():
    times = [
        1_381_844_923_000,
        1_381_844_923_500,
        1_381_844_924_000,
        1_381_844_924_500,
        1_381_844_925_000,
        1_381_844_925_500,
    ]
    gpubox_time_map = {
        time: {0: (0, i), 1: (0, i + 1)} for i, time in enumerate(times)
    }

    timesteps = populate_correlator_timesteps(
        gpubox_time_map, SCHED_GPS_MS, SCHED_UNIX_MS
    )

    assert len(timesteps) == 6
    assert timesteps[0].unix_time_ms == 1_381_844_923_000
    assert timesteps[0].gps_time_ms == 1_065_880_139_000
    assert timesteps[5].unix_time_ms == 1_381_844_925_500
    assert timesteps[5].gps_time_ms == 1_065_880_141_500


def test_populate_correlator_timesteps_none():
    assert populate_correlator_timesteps({}, 0, 0) is None


def test_populate_correlator_timesteps_only_common_and_sorted():
    gpubox_time_map = {
        1_381_844_924_000: {0: (0, 1), 1: (0, 1)},
        1_381_844_923_000: {0: (0, 0)},
        1_381_844_923_500: {0: (0, 2), 1: (0, 2)},
    }
    timesteps = populate_correlator_timesteps(
        gpubox_time_map, SCHED_GPS_MS, SCHED_UNIX_MS
    )
    assert [t.unix_time_ms for t in timesteps] == [
        1_381_844_923_500,
        1_381_844_924_000,
    ]


def test_timestep_new():
    timestep = TimeStep(unix_time_ms=1_381_844_923_000, gps_time_ms=1_065_880_139_000)
    new_timestep = TimeStep(1_381_844_923_000, 1_065_880_139_000)
    assert timestep.unix_time_ms == new_timestep.unix_time_ms
    assert timestep.gps_time_ms == new_timestep.gps_time_ms
    assert timestep == new_timestep


def test_timestep_repr():
    timestep = TimeStep(1_381_844_923_500, 1_065_880_139_500)
    assert repr(timestep) == "unix=1381844923.500, gps=1065880139.500"


@pytest.mark.parametrize("label", ["oldlegacy", "legacy"])
def test_populate_voltage_timesteps_legacy(label):
    timesteps = populate_voltage_timesteps(
        1_065_880_139_000, 1_065_880_143_000, 1000, SCHED_GPS_MS, SCHED_UNIX_MS
    )
    assert len(timesteps) == 4
    assert timesteps[0].gps_time_ms == 1_065_880_139_000
    assert timesteps[0].unix_time_ms == 1_381_844_923_000
    assert timesteps[1].gps_time_ms == 1_065_880_140_000
    assert timesteps[1].unix_time_ms == 1_381_844_924_000
    assert timesteps[2].gps_time_ms == 1_065_880_141_000
    assert timesteps[2].unix_time_ms == 1_381_844_925_000
    assert timesteps[3].gps_time_ms == 1_065_880_142_000
    assert timesteps[3].unix_time_ms == 1_381_844_926_000


def test_populate_voltage_timesteps_mwax():
    timesteps = populate_voltage_timesteps(
        1_065_880_139_000, 1_065_880_171_000, 8000, SCHED_GPS_MS, SCHED_UNIX_MS
    )
    assert len(timesteps) == 4
    assert timesteps[0].gps_time_ms == 1_065_880_139_000
    assert timesteps[0].unix_time_ms == 1_381_844_923_000
    assert timesteps[1].gps_time_ms == 1_065_880_147_000
    assert timesteps[1].unix_time_ms == 1_381_844_931_000
    assert timesteps[2].gps_time_ms == 1_065_880_155_000
    assert timesteps[2].unix_time_ms == 1_381_844_939_000
    assert timesteps[3].gps_time_ms == 1_065_880_163_000
    assert timesteps[3].unix_time_ms == 1_381_844_947_000


def test_populate_voltage_timesteps_empty_range():
    assert (
        populate_voltage_timesteps(
            1_065_880_139_000, 1_065_880_139_000, 1000, SCHED_GPS_MS, SCHED_UNIX_MS
        )
        == []
    )


def test_populate_voltage_timesteps_bad_interval():
    with pytest.raises(ValueError):
        populate_voltage_timesteps(0, 1000, 0, 0, 0)