import argparse
import warnings

from lakeinit.core.lake_types import LakeProfile

MODULE_NAME = "lakeinit.core.configuration"


def parse_args(argv=None):
    """
    Parse input. Everything else is controlled by `model_setup.py`; the only
    input here is (optionally) the location (as a filepath, so including the
    filename) of that setup file.
    """
    parser = argparse.ArgumentParser(
        prog="lakeinit",
        description="Initialise lake geometry for each grid cell of a land"
        " surface model from a lake parameter file.",
    )
    parser.add_argument(
        "--input_path",
        "-i",
        help="Absolute or relative path to an input file, in the format of"
        " <model_setup.py>",
        default="model_setup.py",
        required=False,
    )
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        warnings.warn(f"{MODULE_NAME}.parse_args: Ignoring unknown arguments {unknown}")
    return args.input_path


def create_defaults_for_missing_flags(model_setup):
    """
    Prevent the code from crashing out if certain flags are not specified in
    the model_setup file. This will not prevent the code from stopping if key
    information is not provided (the lake parameter file or the grid cell
    resolution).

    Args
    -------
    model_setup - loaded in model setup file (see <load_model_setup>)

    Returns
    -------
    None
    """
    func_name = f"{MODULE_NAME}.create_defaults_for_missing_flags"
    optional_args_to_true = [
        "check_profiles",
    ]
    optional_args_to_false = [
        "rewind",
        "ignore_errors",
        "use_numba",
        "diagnostic_plots",
    ]
    for attr in optional_args_to_true:
        if not hasattr(model_setup, attr):
            setattr(model_setup, attr, True)
            print(
                f"{func_name}: Setting missing model_setup attribute <{attr}>"
                " to default value True"
            )
    for attr in optional_args_to_false:
        if not hasattr(model_setup, attr):
            setattr(model_setup, attr, False)
            print(
                f"{func_name}: Setting missing model_setup attribute <{attr}>"
                " to default value False"
            )

    vardict = {}
    vardict["lake_profile"] = "tabulated"
    vardict["max_lake_nodes"] = 20
    vardict["cv_sum"] = 0.0
    vardict["save_output"] = True
    vardict["output_filepath"] = "output/lake_geometry.nc"
    for key, value in vardict.items():
        if not hasattr(model_setup, key):
            setattr(model_setup, key, value)
            print(
                f"{func_name}: Setting missing model_setup attribute <{key}>"
                f" to default value <{value}>"
            )


def handle_incompatible_flags(model_setup):
    """
    Handle incompatible model flags that could cause issues with the code.
    This consists of generating errors that the user should check for before
    any lake parameters are read.

    Parameters
    ----------
    model_setup : ModelSetup
        Loaded in model setup, with defaults already applied.

    Returns
    -------
    None

    Raises
    ------
    ValueError
        If the setup is inconsistent, e.g. an unknown lake profile, no source
        of grid cells, or a non-positive resolution.
    """
    func_name = f"{MODULE_NAME}.handle_incompatible_flags"
    valid_profiles = [profile.value for profile in LakeProfile]
    if model_setup.lake_profile not in valid_profiles:
        raise ValueError(
            f"{func_name}(): lake_profile must be one of {valid_profiles},"
            f" not {model_setup.lake_profile}"
        )
    if not hasattr(model_setup, "soil_param_path") and not hasattr(
        model_setup, "cells"
    ):
        raise ValueError(
            f"{func_name}(): No grid cells were specified. Either provide a"
            " soil parameter file via <soil_param_path>, or a list of"
            " (gridcel, lat, lon) tuples via <cells>."
        )
    if not model_setup.resolution > 0:
        raise ValueError(
            f"{func_name}(): resolution must be positive, not"
            f" {model_setup.resolution}"
        )
    if model_setup.max_lake_nodes < 2:
        raise ValueError(
            f"{func_name}(): max_lake_nodes must be at least 2, not"
            f" {model_setup.max_lake_nodes}"
        )
    if model_setup.diagnostic_plots and not hasattr(model_setup, "plot_filepath"):
        raise NameError(
            f"{func_name}(): <diagnostic_plots> is specified but"
            " <plot_filepath> is empty - please specify in model_setup a"
            " folder to save the plots into via the <plot_filepath> attribute."
        )


def jit_modules():
    """
    If using Numba, apply the `numba.jit` decorator to the functions in
    `lakeinit.geometry.grid_cell_area`, using `setattr` to overwrite the
    pure-Python implementations.

    This is only called when `use_numba` is `True`, so the import only happens
    if needed (important for if the user does not have Numba installed).
    Functions that already have a `__wrapped__` attribute are left alone.
    """
    # pylint: disable=import-outside-toplevel
    from inspect import getmembers, isfunction
    from numba import jit
    from lakeinit.geometry import grid_cell_area

    # pylint: enable=import-outside-toplevel
    module_list = [grid_cell_area]
    for module in module_list:
        functions_list = getmembers(module, isfunction)
        for name, function in functions_list:
            if hasattr(function, "__wrapped__") or name.startswith("__"):
                continue
            # skip anything imported into the module from elsewhere
            if not function.__module__ == module.__name__:
                continue
            print(f"Applying Numba jit decorator to {module.__name__}.{name}")
            jitted_function = jit(function, nopython=True, fastmath=False)
            setattr(module, name, jitted_function)
