# mwameta

Metadata helpers for Murchison Widefield Array (MWA) observations. The package
turns observation metadata into plain Python objects. Its inputs are TILEDATA
table rows (as mappings keyed by column name), gpubox time maps, and voltage
filenames.

It has no third-party dependencies.

## Modules

- **`mwameta.timestep`**
  - `TimeStep` is a frozen dataclass with `unix_time_ms` and `gps_time_ms`.
  - `populate_correlator_timesteps(gpubox_time_map, scheduled_starttime_gps_ms, scheduled_starttime_unix_ms)`
    keeps only the UNIX times that every gpubox file has. It returns `None` when
    the map is empty.
  - `populate_voltage_timesteps(start_gps_time_ms, end_gps_time_ms, voltage_file_interval_ms, scheduled_starttime_gps_ms, scheduled_starttime_unix_ms)`
    builds timesteps from the start (inclusive) to the end (exclusive). A
    non-positive interval raises `ValueError`.
- **`mwameta.visibility_pol`**
  - `VisibilityPol` holds a single `polarisation` string.
  - `populate_visibility_pols()` returns XX, XY, YX and YY, in that order.
- **`mwameta.rfinput`**
  - `Pol` is an enum with members `X` and `Y`. `parse_pol(value)` converts a
    string to a `Pol`.
  - `get_vcs_order(input)` gives the PFB-to-correlator order.
  - `get_mwax_order(antenna, pol)` gives `2*antenna` for X and `2*antenna+1` for Y.
  - `get_electrical_length(metafits_length_string, coax_v_factor)` reads an
    `EL_`-prefixed value as it stands. Any other value is multiplied by
    `coax_v_factor`.
  - `Rfinput.from_row(row, coax_v_factor)` and `populate_rf_inputs(rows, coax_v_factor)`
    build records from rows keyed by the TILEDATA column names: `Input`,
    `Antenna`, `Tile`, `TileName`, `Pol`, `Length`, `North`, `East`, `Height`,
    `Flag`, `Gains` (24 values), `Delays` (16 values), `Rx` and `Slot`.
    Dipoles with a delay of 32 are given a gain of 0.0; all other dipoles get 1.0.
  - Errors raised: `ReadCellError` when a cell is missing or malformed, and
    `UnrecognisedPolError` for a polarisation other than X or Y. Both are
    subclasses of `RfinputError`.
- **`mwameta.voltage_files`**
  - `determine_voltage_file_gpstime_batches(voltage_filenames, metafits_obs_id)`
    parses filenames of the forms `obsid_gpstime_chan.sub` (`CorrelatorVersion.V2`,
    8 s per file) and `obsid_gpstime_chNNN.dat` (`CorrelatorVersion.LEGACY`,
    1 s per file).
  - `examine_voltage_files(metafits_obs_id, voltage_filenames)` also checks
    that every file exists and that all files are the same size. It returns a
    `VoltageFileInfo`.
  - `create_time_map`, `convert_temp_voltage_files` and
    `determine_obs_times(voltage_time_map, voltage_file_interval_ms)` return
    an `ObsTimes`. These are the helpers behind the two functions above.
  - Errors are raised as subclasses of `VoltageFileError`:
    - `NoVoltageFilesError`
    - `UnrecognisedError`
    - `MixtureError`
    - `MetafitsObsidMismatchError`
    - `GpsTimeMissingError`
    - `UnevenChannelsForGpsTimeError`
    - `VoltageFileAccessError`
    - `UnequalFileSizesError`
    - `EmptyTimeMapError`

## Installation

```
pip install .
pip install ".[test]"   # with test dependencies
```

## Examples

```python
from mwameta.timestep import populate_voltage_timesteps

steps = populate_voltage_timesteps(
    1_065_880_139_000, 1_065_880_143_000, 1000,
    1_065_880_139_000, 1_381_844_923_000,
)
print([s.gps_time_ms for s in steps])
# [1065880139000, 1065880140000, 1065880141000, 1065880142000]
```

```python
from mwameta.voltage_files import determine_voltage_file_gpstime_batches

files, version, num_batches, interval_ms = determine_voltage_file_gpstime_batches(
    ["1065880128_1065880128_ch121.dat", "1065880128_1065880129_ch121.dat"],
    1065880128,
)
# version is CorrelatorVersion.LEGACY, num_batches == 2, interval_ms == 1000
```

## What it does not do

The package does not open metafits (FITS) files. Read the TILEDATA rows
yourself and pass them in as mappings. It does not read voltage sample data
either: voltage files are only checked for existence and size. The package
provides no command-line tool.

## Running the tests

```
pytest
```