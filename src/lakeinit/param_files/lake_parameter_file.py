"""
Read per-cell lake parameters from a VIC-style lake parameter file.

Each record sits on one line, as whitespace-separated values:

    gridcel maxdepth numnod mindepth maxrate depth_in rpercent Cl[0] ... Cl[numnod-1]

or, for cells read with the parabolic profile,

    gridcel maxdepth numnod mindepth maxrate depth_in rpercent Cl[0] b

The file is scanned forward from where the previous lookup stopped, so cells
must be requested in the same order as they appear in the file. Set
`rewind=True` to search from the top of the file on every lookup instead.
"""

import numpy as np

from lakeinit.core.errors import CellNotFoundError, LakeParameterError
from lakeinit.core.lake_types import LakeParameterRecord, LakeProfile

MODULE_NAME = "lakeinit.param_files.lake_parameter_file"
NUM_HEADER_FIELDS = 7


class LakeParameterFile:
    """
    Sequential reader for a lake parameter file.

    Parameters
    ----------
    path : str
        Path to the lake parameter file.
    rewind : bool, optional
        If True, every lookup starts from the top of the file. Default False.
    """

    def __init__(self, path, rewind=False):
        self.path = path
        self.rewind = rewind
        self.file = open(path, "r", encoding="utf-8")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Close the underlying file."""
        self.file.close()

    def find_record(self, gridcel, profile=LakeProfile.TABULATED):
        """
        Locate the record for grid cell `gridcel` and parse it.

        Parameters
        ----------
        gridcel : int
            Identifier of the grid cell.
        profile : LakeProfile, optional
            Which profile the record is written for. Default TABULATED.

        Returns
        -------
        record : LakeParameterRecord
            Lake parameters for the cell.

        Raises
        ------
        CellNotFoundError
            If the end of the file is reached without finding the cell.
        LakeParameterError
            If the record is incomplete or contains non-numeric values.
        """
        func_name = f"{MODULE_NAME}.LakeParameterFile.find_record"
        if self.rewind:
            self.file.seek(0)

        for line in self.file:
            tokens = line.split()
            if not tokens or tokens[0].startswith("#"):
                continue
            if parse_int(tokens[0], "gridcel", gridcel) == gridcel:
                return parse_record(tokens, profile)

        hint = "" if self.rewind else " or set rewind to True"
        raise CellNotFoundError(
            f"{func_name}: Unable to find cell {gridcel} in the lake parameter"
            f" file {self.path}, check the file{hint}.",
            gridcel=gridcel,
        )


def parse_int(token, name, gridcel):
    """Convert one field of a record to an int."""
    try:
        return int(token)
    except ValueError as exc:
        raise LakeParameterError(
            f"{MODULE_NAME}.parse_int: Could not read {name} = '{token}' as"
            f" an integer (while looking for cell {gridcel}).",
            gridcel=gridcel,
        ) from exc


def parse_float(token, name, gridcel):
    """Convert one field of a record to a float."""
    try:
        return float(token)
    except ValueError as exc:
        raise LakeParameterError(
            f"{MODULE_NAME}.parse_float: Could not read {name} = '{token}' as"
            f" a number in cell {gridcel}.",
            gridcel=gridcel,
        ) from exc


def parse_record(tokens, profile=LakeProfile.TABULATED):
    """
    Build a LakeParameterRecord from the fields of one line of the file.

    Parameters
    ----------
    tokens : list of str
        Whitespace-separated fields of the record, starting with gridcel.
    profile : LakeProfile, optional
        Which profile the record is written for. Default TABULATED.

    Returns
    -------
    record : LakeParameterRecord
    """
    gridcel = parse_int(tokens[0], "gridcel", None)
    if len(tokens) < NUM_HEADER_FIELDS:
        raise LakeParameterError(
            f"{MODULE_NAME}.parse_record: Record for cell {gridcel} has"
            f" {len(tokens)} fields, expected at least {NUM_HEADER_FIELDS}.",
            gridcel=gridcel,
        )

    maxdepth = parse_float(tokens[1], "maxdepth", gridcel)
    numnod = parse_int(tokens[2], "numnod", gridcel)
    mindepth = parse_float(tokens[3], "mindepth", gridcel)
    maxrate = parse_float(tokens[4], "maxrate", gridcel)
    depth_in = parse_float(tokens[5], "depth_in", gridcel)
    rpercent = parse_float(tokens[6], "rpercent", gridcel)

    remainder = tokens[NUM_HEADER_FIELDS:]
    if profile == LakeProfile.PARABOLIC:
        expected = 2
    else:
        expected = numnod
    if len(remainder) < expected:
        raise LakeParameterError(
            f"{MODULE_NAME}.parse_record: Record for cell {gridcel} has"
            f" {len(remainder)} profile values, expected {expected} for a"
            f" {profile.value} lake profile with {numnod} nodes.",
            gridcel=gridcel,
        )

    b = np.nan
    if profile == LakeProfile.PARABOLIC:
        Cl = np.array([parse_float(remainder[0], "Cl[0]", gridcel)])
        b = parse_float(remainder[1], "b", gridcel)
    else:
        Cl = np.array(
            [
                parse_float(token, f"Cl[{i}]", gridcel)
                for i, token in enumerate(remainder[:numnod])
            ]
        )

    return LakeParameterRecord(
        gridcel=gridcel,
        maxdepth=maxdepth,
        numnod=numnod,
        mindepth=mindepth,
        maxrate=maxrate,
        depth_in=depth_in,
        rpercent=rpercent,
        Cl=Cl,
        b=b,
        profile=profile,
    )
