import pytest

from lakeinit.core import configuration
from lakeinit.core.load_model_setup import ModelSetup


def write_script(tmp_path, text):
    path = tmp_path / "model_setup.py"
    path.write_text(text)
    return str(path)


def test_load_model_setup(tmp_path):
    script = write_script(
        tmp_path,
        "import numpy as np\n"
        'lake_param_path = "lakes.txt"\n'
        "resolution = 0.25\n"
        "cells = [(1, 10.0, 20.0)]\n"
        "cv_sum = np.float64(0.2)\n",
    )
    model_setup = ModelSetup(script)
    assert model_setup.lake_param_path == "lakes.txt"
    assert model_setup.resolution == 0.25
    assert model_setup.cv_sum == 0.2
    # modules imported by the script are not kept
    assert not hasattr(model_setup, "np")


def test_missing_setup_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        ModelSetup(str(tmp_path / "missing.py"))


def test_missing_required_variables(tmp_path):
    script = write_script(tmp_path, 'lake_param_path = "lakes.txt"\n')
    with pytest.raises(ValueError, match="resolution"):
        ModelSetup(script)


def test_unsafe_import(tmp_path):
    script = write_script(
        tmp_path,
        "import subprocess\n"
        'lake_param_path = "lakes.txt"\n'
        "resolution = 0.25\n",
    )
    with pytest.raises(ValueError, match="subprocess"):
        ModelSetup(script)


def test_all_setup_errors_reported_together(tmp_path):
    script = write_script(
        tmp_path,
        "from .local_options import depth\n"
        "import numpy.linalg\n"
        "resolution = 0.25\n",
    )
    with pytest.raises(ValueError) as excinfo:
        ModelSetup(script)
    message = str(excinfo.value)
    assert "not set: lake_param_path" in message
    # numpy is allowed, the relative import is not
    assert "not allowed in a runscript: ." in message
    assert "numpy." not in message


def test_annotated_setup_variables(tmp_path):
    script = write_script(
        tmp_path,
        'lake_param_path: str = "lakes.txt"\n'
        "resolution: float = 0.5\n"
        "cells = []\n"
        "def helper():\n"
        "    return 1\n",
    )
    model_setup = ModelSetup(script)
    assert model_setup.lake_param_path == "lakes.txt"
    assert model_setup.resolution == 0.5
    assert not hasattr(model_setup, "helper")


def test_defaults(tmp_path):
    script = write_script(
        tmp_path,
        'lake_param_path = "lakes.txt"\n'
        "resolution = 0.25\n"
        "cells = []\n"
        "rewind = True\n",
    )
    model_setup = ModelSetup(script)
    configuration.create_defaults_for_missing_flags(model_setup)
    assert model_setup.rewind is True
    assert model_setup.ignore_errors is False
    assert model_setup.use_numba is False
    assert model_setup.check_profiles is True
    assert model_setup.lake_profile == "tabulated"
    assert model_setup.max_lake_nodes == 20
    assert model_setup.cv_sum == 0.0
    assert model_setup.save_output is True
    configuration.handle_incompatible_flags(model_setup)


@pytest.mark.parametrize(
    "extra, error, message",
    [
        ('lake_profile = "conical"\n', ValueError, "lake_profile"),
        ("resolution = -0.5\n", ValueError, "resolution"),
        ("max_lake_nodes = 1\n", ValueError, "max_lake_nodes"),
        ("diagnostic_plots = True\n", NameError, "plot_filepath"),
    ],
)
def test_incompatible_flags(tmp_path, extra, error, message):
    script = write_script(
        tmp_path,
        'lake_param_path = "lakes.txt"\n'
        "resolution = 0.25\n"
        "cells = []\n" + extra,
    )
    model_setup = ModelSetup(script)
    configuration.create_defaults_for_missing_flags(model_setup)
    with pytest.raises(error, match=message):
        configuration.handle_incompatible_flags(model_setup)


def test_no_cells(tmp_path):
    script = write_script(
        tmp_path, 'lake_param_path = "lakes.txt"\nresolution = 0.25\n'
    )
    model_setup = ModelSetup(script)
    configuration.create_defaults_for_missing_flags(model_setup)
    with pytest.raises(ValueError, match="soil_param_path"):
        configuration.handle_incompatible_flags(model_setup)


def test_parse_args():
    assert configuration.parse_args([]) == "model_setup.py"
    assert configuration.parse_args(["-i", "runs/setup.py"]) == "runs/setup.py"
