import warnings

import numpy as np


def check_profile(geometry):
    """
    Sanity check that a lake is physically sensible - the surface area of
    the lake should not increase with depth. This is not enforced, since the
    profile may come straight from a parameter file, so a warning is raised
    instead.

    Parameters
    ----------
    geometry : LakeGeometry
        Lake geometry we want to check.

    Returns
    -------
    ok : bool
        True if the surface area is non-increasing with depth.
    """
    # node 0 carries the full footprint, so area should shrink as i increases
    increases = np.where(np.diff(geometry.basin) > 0)[0]
    if len(increases) > 0:
        warnings.warn(
            f"lakeinit.core.utils.check_profile: Lake area in cell"
            f" {geometry.gridcel} increases from node(s) {increases} to"
            f" {increases + 1} (basin = {geometry.basin})"
        )
        return False
    return True


def get_cover_fraction(cv_sum, gridcel):
    """
    Look up the sum of the cover fractions already assigned in a grid cell.

    Parameters
    ----------
    cv_sum : float, or dict
        Either a single value used for every grid cell, or a dict keyed by
        grid cell identifier. Cells missing from the dict default to 0.
    gridcel : int
        Grid cell identifier.

    Returns
    -------
    cv_sum : float
    """
    if isinstance(cv_sum, dict):
        return float(cv_sum.get(gridcel, 0.0))
    return float(cv_sum)

