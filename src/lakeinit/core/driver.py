"""
Core functions used in the running of lakeinit.

When the code is run, it calls lakeinit(), which loads in the model setup,
works out which grid cells to initialise, and then for each cell in turn:
    - estimates the area of the grid cell from its latitude/longitude
    - finds the cell's record in the lake parameter file
    - builds the lake geometry, adding the lake to the cover fraction total
      of the cell
The resulting geometries are written out to netCDF, and optionally plotted.

Each cell has its own cover fraction total, so cells do not share any state.
"""

import time

from lakeinit.core import configuration, utils
from lakeinit.core.errors import LakeParameterError
from lakeinit.core.lake_grid import initialise_lake_grid
from lakeinit.core.lake_types import GridCellLocation, LakeProfile
from lakeinit.core.load_model_setup import get_model_setup
from lakeinit.core.model_output import setup_output
from lakeinit.geometry import grid_cell_area
from lakeinit.param_files.lake_parameter_file import LakeParameterFile
from lakeinit.param_files.soil_parameter_file import read_soil_cells
from lakeinit.physics.lake_profile import build_lake_geometry

MODULE_NAME = "lakeinit.core.driver"


def get_cells(model_setup):
    """
    Get the grid cells to initialise, either from a soil parameter file or
    from a list of (gridcel, lat, lon) tuples in the model setup.

    Parameters
    ----------
    model_setup : ModelSetup

    Returns
    -------
    cells : list of GridCellLocation
    """
    if hasattr(model_setup, "soil_param_path"):
        return read_soil_cells(model_setup.soil_param_path, model_setup.resolution)
    return [
        GridCellLocation(int(gridcel), float(lat), float(lon), model_setup.resolution)
        for gridcel, lat, lon in model_setup.cells
    ]


def initialise_cell(lake_file, cell, model_setup):
    """
    Build the lake geometry for a single grid cell.

    Parameters
    ----------
    lake_file : LakeParameterFile
        Open lake parameter file.
    cell : GridCellLocation
        Location of the grid cell.
    model_setup : ModelSetup

    Returns
    -------
    geometry : LakeGeometry
    cv_sum : float
        Cover fraction total of the cell, including the lake.
    """
    cell_area = grid_cell_area.estimate_cell_area(cell.lat, cell.lon, cell.resolution)
    record = lake_file.find_record(
        cell.gridcel, profile=LakeProfile(model_setup.lake_profile)
    )
    cv_sum = utils.get_cover_fraction(model_setup.cv_sum, cell.gridcel)
    geometry, cv_sum = build_lake_geometry(
        record, cell_area, cv_sum=cv_sum, max_nodes=model_setup.max_lake_nodes
    )
    geometry.lat = cell.lat
    geometry.lon = cell.lon
    if model_setup.check_profiles:
        utils.check_profile(geometry)
    return geometry, cv_sum


def main(model_setup):
    """
    Initialise the lakes for every grid cell in the model setup.

    Parameters
    ----------
    model_setup : ModelSetup
        Model setup, with defaults already applied.

    Returns
    -------
    geometries : list of LakeGeometry
        One lake geometry per successfully initialised cell.
    cv_sums : dict
        Cover fraction total of each initialised cell, keyed by gridcel.

    Raises
    ------
    LakeParameterError
        If a cell cannot be initialised and `ignore_errors` is False.
    """
    func_name = f"{MODULE_NAME}.main"
    cells = get_cells(model_setup)
    geometries = []
    cv_sums = {}
    skipped = []
    tic = time.perf_counter()
    with LakeParameterFile(
        model_setup.lake_param_path, rewind=model_setup.rewind
    ) as lake_file:
        for cell in cells:
            try:
                geometry, cv_sum = initialise_cell(lake_file, cell, model_setup)
            except LakeParameterError as err:
                if not model_setup.ignore_errors:
                    raise
                print(f"{func_name}: Skipping cell {cell.gridcel} - {err}")
                skipped.append(cell.gridcel)
                continue
            geometries.append(geometry)
            cv_sums[cell.gridcel] = cv_sum
    toc = time.perf_counter()
    print(
        f"{func_name}: Initialised {len(geometries)} lakes in {toc - tic:.3f} s"
    )
    if skipped:
        print(f"{func_name}: Skipped {len(skipped)} cells: {skipped}")

    if model_setup.save_output and geometries:
        setup_output(model_setup.output_filepath, initialise_lake_grid(geometries))
        print(f"{func_name}: Written lake geometry to {model_setup.output_filepath}")

    if model_setup.diagnostic_plots and geometries:
        # pylint: disable=import-outside-toplevel
        from lakeinit.plotting.plot_profiles import save_profile_plots

        # pylint: enable=import-outside-toplevel
        save_profile_plots(geometries, model_setup.plot_filepath)

    return geometries, cv_sums


def lakeinit(model_setup_path=None):
    """
    Load in a model setup script and run it.

    Parameters
    ----------
    model_setup_path : str, optional
        Path to the model setup script. If not given, it is read from the
        command line (see lakeinit.core.configuration.parse_args).

    Returns
    -------
    geometries : list of LakeGeometry
    cv_sums : dict
    """
    if model_setup_path is None:
        model_setup_path = configuration.parse_args()
    model_setup = get_model_setup(model_setup_path)
    configuration.create_defaults_for_missing_flags(model_setup)
    configuration.handle_incompatible_flags(model_setup)
    if model_setup.use_numba:
        configuration.jit_modules()
    return main(model_setup)
