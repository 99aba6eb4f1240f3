"""Grouping and consistency checks for voltage capture files."""

from __future__ import annotations

import os
import re
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

# obsid_gpstime_chan.sub, e.g. 1234567890_1234567890_123.sub
_RE_MWAX_VCS = re.compile(
    r"(?P<obs_id>\d{10})_(?P<gpstime>\d{10})_(?P<channel>\d{1,3})\.sub", re.ASCII
)
# obsid_gpstime_chNNN.dat, e.g. 1234567890_1234567890_ch123.dat
_RE_LEGACY_VCS_RECOMBINED = re.compile(
    r"(?P<obs_id>\d{10})_(?P<gpstime>\d{10})_ch(?P<channel>\d{1,3})\.dat", re.ASCII
)


class CorrelatorVersion(Enum):
    """Version of the correlator that produced the data."""

    OLD_LEGACY = "OldLegacy"
    LEGACY = "Legacy"
    V2 = "V2"

    def __str__(self) -> str:
        return self.value


_FILE_INTERVAL_SECONDS = {
    CorrelatorVersion.V2: 8,
    CorrelatorVersion.LEGACY: 1,
    CorrelatorVersion.OLD_LEGACY: 1,
}


class VoltageFileError(Exception):
    """Base class for errors found while examining voltage files."""


class NoVoltageFilesError(VoltageFileError):
    """No voltage files were supplied."""

    def __init__(self) -> None:
        super().__init__("No voltage files were supplied")


class VoltageFileAccessError(VoltageFileError):
    """A voltage file could not be accessed."""

    def __init__(self, filename: str, message: str) -> None:
        self.filename = filename
        self.message = message
        super().__init__(f"Voltage file {filename} error: {message}")


class MixtureError(VoltageFileError):
    """The supplied files have a mixture of filename types."""

    def __init__(self) -> None:
        super().__init__("There are a mixture of voltage filename types!")


class GpsTimeMissingError(VoltageFileError):
    """The GPS times of the supplied files are not contiguous."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"There are missing gps times- expected {expected} got {got}")


class UnevenChannelsForGpsTimeError(VoltageFileError):
    """Not every GPS time has the same number of channel files."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            "There are an uneven number of channel (files) across all of the gps "
            f"times- expected {expected} got {got}"
        )


class UnrecognisedError(VoltageFileError):
    """A filename does not match any known voltage filename structure."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            f"Could not identify the voltage filename structure for {filename}"
        )


class UnequalFileSizesError(VoltageFileError):
    """The supplied voltage files differ in size."""

    def __init__(self) -> None:
        super().__init__(
            "The provided voltage files are of different sizes and this is not supported"
        )


class MetafitsObsidMismatchError(VoltageFileError):
    """A filename's obsid differs from the metafits obsid."""

    def __init__(self) -> None:
        super().__init__(
            "The provided metafits obsid does not match the provided filenames obsid."
        )


class EmptyTimeMapError(VoltageFileError):
    """The time map holds no entries."""

    def __init__(self) -> None:
        super().__init__("Input BTreeMap was empty")


@dataclass(frozen=True)
class ObsTimes:
    """Start, end and duration of the part common to all voltage files."""

    start_gps_time_ms: int
    end_gps_time_ms: int
    duration_ms: int
    voltage_file_interval_ms: int


@dataclass
class VoltageFile:
    """One voltage file and its receiver channel number."""

    filename: str
    channel_identifier: int

    def __repr__(self) -> str:
        return f"filename={self.filename} channelidentifier={self.channel_identifier}"


@dataclass
class VoltageFileBatch:
    """Voltage files sharing one GPS time (batch)."""

    gps_time: int
    voltage_files: list[VoltageFile] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"gps_time={self.gps_time} voltage_files={self.voltage_files!r}"


@dataclass(frozen=True)
class TempVoltageFile:
    """A voltage filename with the fields parsed out of it."""

    filename: str
    obs_id: int
    channel_identifier: int
    gps_time: int


# gps time -> channel identifier -> filename
VoltageFileTimeMap = dict[int, dict[int, str]]


@dataclass
class VoltageFileInfo:
    """Everything learnt from examining a set of voltage files."""

    gpstime_batches: list[VoltageFileBatch]
    corr_format: CorrelatorVersion
    time_map: VoltageFileTimeMap
    file_size: int
    voltage_file_interval_ms: int


def convert_temp_voltage_files(
    temp_voltage_files: Iterable[TempVoltageFile],
) -> dict[int, VoltageFileBatch]:
    """Group files into batches keyed by GPS time, each sorted by channel."""
    batches: dict[int, VoltageFileBatch] = {}
    for temp in temp_voltage_files:
        batch = batches.setdefault(temp.gps_time, VoltageFileBatch(temp.gps_time))
        batch.voltage_files.append(VoltageFile(temp.filename, temp.channel_identifier))

    for batch in batches.values():
        batch.voltage_files.sort(key=lambda v: v.channel_identifier)
    return batches


def _parse_filename(filename: str) -> tuple[CorrelatorVersion, TempVoltageFile]:
    for version, pattern in (
        (CorrelatorVersion.V2, _RE_MWAX_VCS),
        (CorrelatorVersion.LEGACY, _RE_LEGACY_VCS_RECOMBINED),
    ):
        match = pattern.search(filename)
        if match:
            return version, TempVoltageFile(
                filename=filename,
                obs_id=int(match["obs_id"]),
                channel_identifier=int(match["channel"]),
                gps_time=int(match["gpstime"]),
            )
    raise UnrecognisedError(filename)


def determine_voltage_file_gpstime_batches(
    voltage_filenames: Sequence[PathLike], metafits_obs_id: int
) -> tuple[list[TempVoltageFile], CorrelatorVersion, int, int]:
    """Parse and group voltage filenames by GPS time.

    Returns the parsed files sorted by GPS time then channel, the correlator
    version, the number of GPS time batches and the interval between files
    in milliseconds.
    """
    if not voltage_filenames:
        raise NoVoltageFilesError()

    corr_format: CorrelatorVersion | None = None
    temp_voltage_files: list[TempVoltageFile] = []

    for path in voltage_filenames:
        version, temp = _parse_filename(os.fspath(path))
        if corr_format is None:
            corr_format = version
        elif corr_format is not version:
            raise MixtureError()

        if temp.obs_id != metafits_obs_id:
            raise MetafitsObsidMismatchError()
        temp_voltage_files.append(temp)

    assert corr_format is not None
    interval_seconds = _FILE_INTERVAL_SECONDS[corr_format]

    batches_and_files = Counter(v.gps_time for v in temp_voltage_files)

    file_count: int | None = None
    prev_batch: int | None = None
    for batch_num, num_files in sorted(batches_and_files.items()):
        if prev_batch is not None and prev_batch + interval_seconds != batch_num:
            raise GpsTimeMissingError(prev_batch + interval_seconds, batch_num)
        prev_batch = batch_num

        if file_count is None:
            file_count = num_files
        elif file_count != num_files:
            raise UnevenChannelsForGpsTimeError(file_count, num_files)

    temp_voltage_files.sort(key=lambda v: (v.gps_time, v.channel_identifier))

    return (
        temp_voltage_files,
        corr_format,
        len(batches_and_files),
        interval_seconds * 1000,
    )


def examine_voltage_files(
    metafits_obs_id: int, voltage_filenames: Sequence[PathLike]
) -> VoltageFileInfo:
    """Check a set of voltage files and gather their metadata.

    The files must exist, be of one filename type, belong to the given
    obsid, have contiguous GPS times, the same number of files per GPS time
    and all be the same size.
    """
    temp_voltage_files, corr_format, _, interval_ms = (
        determine_voltage_file_gpstime_batches(voltage_filenames, metafits_obs_id)
    )

    time_map = create_time_map(temp_voltage_files)
    batches = convert_temp_voltage_files(temp_voltage_files)
    sorted_batches = sorted(batches.values(), key=lambda b: b.gps_time)

    file_size: int | None = None
    for batch in sorted_batches:
        for voltage_file in batch.voltage_files:
            try:
                this_size = os.stat(voltage_file.filename).st_size
            except OSError as exc:
                raise VoltageFileAccessError(voltage_file.filename, str(exc)) from exc
            if file_size is None:
                file_size = this_size
            elif file_size != this_size:
                raise UnequalFileSizesError()

    assert file_size is not None
    return VoltageFileInfo(
        gpstime_batches=sorted_batches,
        corr_format=corr_format,
        time_map=time_map,
        file_size=file_size,
        voltage_file_interval_ms=interval_ms,
    )


def create_time_map(
    temp_voltage_files: Iterable[TempVoltageFile],
) -> VoltageFileTimeMap:
    """Map GPS time to channel identifier to filename, both levels sorted by key."""
    time_map: VoltageFileTimeMap = {}
    for temp in temp_voltage_files:
        time_map.setdefault(temp.gps_time, {}).setdefault(
            temp.channel_identifier, temp.filename
        )
    return {
        gps: dict(sorted(channels.items()))
        for gps, channels in sorted(time_map.items())
    }


def determine_obs_times(
    voltage_time_map: Mapping[int, Mapping[int, str]], voltage_file_interval_ms: int
) -> ObsTimes:
    """Find the start, end and duration common to all channels.

    Times (in GPS seconds) with fewer files than the most populated time are
    ignored at the edges; the end is the last common time plus one file
    interval.
    """
    if not voltage_time_map:
        raise EmptyTimeMapError()

    size = max(len(channels) for channels in voltage_time_map.values())
    common = [
        gps for gps, channels in sorted(voltage_time_map.items())
        if len(channels) == size
    ]
    start, end = common[0], common[-1]

    return ObsTimes(
        start_gps_time_ms=start * 1000,
        end_gps_time_ms=end * 1000 + voltage_file_interval_ms,
        duration_ms=(end - start) * 1000 + voltage_file_interval_ms,
        voltage_file_interval_ms=voltage_file_interval_ms,
    )