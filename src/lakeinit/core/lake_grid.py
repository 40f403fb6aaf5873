"""
Define the lake grid datatype. This is a Numpy structured array with one
element per grid cell, used to hand the lake geometries of a whole run to the
output routines.
"""

import numpy as np

from lakeinit.core.lake_types import LakeProfile


def get_spec(max_nodes):
    """
    Define the structured array dtype for the lake grid, with an explicit size
    for the node dimension.

    Parameters
    ----------
    max_nodes : int
        Number of lake nodes to reserve for each cell. Cells with fewer nodes
        are padded with NaN.

    Returns
    -------
    dtype : np.dtype
        Structured array dtype for the lake grid.
    """
    dtype = np.dtype(
        [
            ("gridcel", np.int32),
            ("lat", np.float64),
            ("lon", np.float64),
            ("cell_area", np.float64),
            ("numnod", np.int32),
            ("maxdepth", np.float64),
            ("mindepth", np.float64),
            ("maxrate", np.float64),
            ("depth_in", np.float64),
            ("rpercent", np.float64),
            ("bpercent", np.float64),
            ("wetland_veg_class", np.int32),
            ("dz", np.float64),
            ("b", np.float64),
            ("parabolic", np.bool_),
            ("maxvolume", np.float64),
            ("z", np.float64, max_nodes),
            ("Cl", np.float64, max_nodes),
            ("basin", np.float64, max_nodes),
        ]
    )
    return dtype


NODE_VARS = ("z", "Cl", "basin")


def initialise_lake_grid(geometries):
    """
    Pack a list of LakeGeometry objects into a structured array.

    Parameters
    ----------
    geometries : list of LakeGeometry
        Lake geometries, one per grid cell.

    Returns
    -------
    lake_grid : np.ndarray
        Structured array of length len(geometries). The node dimension is
        sized to the largest numnod.
    """
    max_nodes = max((geometry.numnod for geometry in geometries), default=1)
    lake_grid = np.zeros(len(geometries), dtype=get_spec(max_nodes))
    for key in NODE_VARS:
        lake_grid[key][:] = np.nan

    for i, geometry in enumerate(geometries):
        for key in lake_grid.dtype.names:
            if key in NODE_VARS:
                lake_grid[key][i, : geometry.numnod] = getattr(geometry, key)
            elif key == "parabolic":
                lake_grid[key][i] = geometry.profile == LakeProfile.PARABOLIC
            else:
                lake_grid[key][i] = getattr(geometry, key)
    return lake_grid
