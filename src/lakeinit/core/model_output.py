"""
Write the lake geometries of a run to netCDF, and read them back in.

The file has two dimensions: `cell` (one entry per grid cell with a lake)
and `node` (sized to the largest number of lake nodes). Per-node variables
are padded with NaN for cells with fewer nodes.
"""

import os

import numpy as np
from netCDF4 import Dataset  # pylint: disable=no-name-in-module

from lakeinit.core.lake_grid import NODE_VARS, get_spec

VARIABLE_UNITS = {
    "lat": "degrees_north",
    "lon": "degrees_east",
    "cell_area": "m2",
    "maxdepth": "m",
    "mindepth": "m",
    "maxrate": "m",
    "depth_in": "m",
    "dz": "m",
    "maxvolume": "m3",
    "z": "m",
    "basin": "m2",
}


def setup_output(fname, lake_grid):
    """
    Write the lake grid into a new NetCDF file, overwriting any existing file.

    Parameters
    ----------
    fname : str
        Filename for the output NetCDF file.
    lake_grid : np.ndarray
        Structured array of lake geometries, see
        lakeinit.core.lake_grid.initialise_lake_grid.
    Returns
    -------
    None.
    """
    folder_path = os.path.dirname(fname)
    if folder_path and not os.path.exists(folder_path):
        os.makedirs(folder_path)
    with Dataset(fname, clobber=True, mode="w") as data:
        create_dimensions(data, lake_grid)
        for key in lake_grid.dtype.names:
            var = lake_grid[key]
            dtype = convert_bool_dtypes(var)
            create_variable(data, key, var, dtype)


def create_dimensions(data, lake_grid):
    """
    Create dimensions in the NetCDF file. We have the following dimensions:
    - cell: one entry per grid cell
    - node: lake solution nodes, bottom of the lake first

    Parameters
    ----------
    data : netCDF4.Dataset
        The NetCDF dataset to which dimensions will be added.
    lake_grid : np.ndarray
        Structured array of lake geometries.
    Returns
    -------
    None (amends data object inplace)
    """
    data.createDimension("cell", size=len(lake_grid))
    data.createDimension("node", size=lake_grid.dtype["z"].shape[0])


def convert_bool_dtypes(var):
    """Convert boolean dtypes to 'b' for NetCDF compatibility."""
    return "b" if var.dtype == "bool" else var.dtype


def create_variable(data, key, var, dtype):
    """
    Create a variable in the NetCDF file with appropriate dimensions and data.
    Per-node variables have dimensions (cell, node), everything else (cell).

    Parameters
    ----------
    data : netCDF4.Dataset
        The NetCDF dataset to which the variable will be added.
    key : str
        Variable name.
    var : np.ndarray
        1D or 2D variable data to be saved.
    dtype : str
        Data type for the variable.
    Returns
    -------
    None (amends data object inplace)
    """
    dims = ("cell", "node") if key in NODE_VARS else ("cell",)
    var_write = data.createVariable(key, dtype, dims)
    if key in VARIABLE_UNITS:
        var_write.units = VARIABLE_UNITS[key]
    if dtype == "b":
        var_write[:] = var.astype(np.int8)
    else:
        var_write[:] = var


def load_output(fname):
    """
    Read a lake geometry file written by setup_output back into a structured
    array.

    Parameters
    ----------
    fname : str
        Filename of the NetCDF file.

    Returns
    -------
    lake_grid : np.ndarray
        Structured array of lake geometries.
    """
    with Dataset(fname, mode="r") as data:
        data.set_auto_mask(False)
        lake_grid = np.zeros(
            len(data.dimensions["cell"]), dtype=get_spec(len(data.dimensions["node"]))
        )
        for key in lake_grid.dtype.names:
            lake_grid[key] = data.variables[key][:]
    return lake_grid
