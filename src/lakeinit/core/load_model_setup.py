"""
Load a lakeinit runscript (model_setup.py) into a ModelSetup object.

A runscript is a plain Python file that assigns the run options as module
level variables, e.g.

    lake_param_path = "input/lake_param.txt"
    soil_param_path = "input/soil_param.txt"
    resolution = 0.5

The script is checked before it is executed. It must assign every variable in
REQUIRED_VARS, and it may only import from SAFE_IMPORTS, since lakeinit runs
it with the permissions of whoever calls lakeinit.
"""

import ast
import importlib.util
import os
import types

SAFE_IMPORTS = {"lakeinit", "numpy", "netCDF4", "math", "os"}
REQUIRED_VARS = ("lake_param_path", "resolution")
MODULE_NAME = "lakeinit.core.load_model_setup"


def assigned_names(tree):
    """Names assigned at any level of a parsed runscript."""
    names = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            targets = [node.target]
        else:
            continue
        for target in targets:
            for name in ast.walk(target):
                if isinstance(name, ast.Name):
                    names.add(name.id)
    return names


def imported_modules(tree):
    """
    Top-level package of every module a parsed runscript imports. Relative
    imports are reported as "." since a runscript is not part of a package.
    """
    modules = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(alias.name.split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level or not node.module:
                modules.add(".")
            else:
                modules.add(node.module.split(".")[0])
    return modules


class ModelSetup:
    """
    Options for a lakeinit run, read from a runscript.

    Every module-level variable of the runscript becomes an attribute of the
    instance. Functions, classes and imported modules are left out. Defaults
    for options the runscript does not set are filled in later, by
    lakeinit.core.configuration.create_defaults_for_missing_flags.

    Parameters
    ----------
    script_path : str
        Path to the runscript.

    Raises
    ------
    ValueError
        If the runscript does not exist, does not set a required variable, or
        imports a module outside SAFE_IMPORTS.
    """

    def __init__(self, script_path):
        self.script_path = script_path
        print(f"{MODULE_NAME}: Loading model setup from {self.script_path}")
        self.validate_model_setup()
        for var_name, var_value in self.run_script().items():
            setattr(self, var_name, var_value)

    def validate_model_setup(self):
        """
        Check the runscript without running it, and raise a single ValueError
        listing every problem found.
        """
        method_name = f"{MODULE_NAME}.ModelSetup.validate_model_setup"
        if not os.path.isfile(self.script_path):
            raise ValueError(
                f"{method_name}: Runscript {self.script_path} not found. Either"
                " run lakeinit from a folder containing model_setup.py, or"
                " give the path to a runscript with -i."
            )
        with open(self.script_path, "r", encoding="utf-8") as f:
            tree = ast.parse(f.read(), filename=self.script_path)

        errors = []
        missing = [name for name in REQUIRED_VARS if name not in assigned_names(tree)]
        if missing:
            errors.append(
                f"Required variable(s) not set: {', '.join(missing)}. Every"
                f" runscript must set {', '.join(REQUIRED_VARS)}."
            )
        unsafe = sorted(imported_modules(tree) - SAFE_IMPORTS)
        if unsafe:
            errors.append(
                f"Import(s) not allowed in a runscript: {', '.join(unsafe)}."
                f" Allowed imports are {', '.join(sorted(SAFE_IMPORTS))}; see"
                f" SAFE_IMPORTS in {MODULE_NAME}."
            )
        if errors:
            error_message = "\n".join(errors)
            raise ValueError(
                f"{method_name}: Errors found in {self.script_path}:\n"
                f"{error_message}"
            )

    def run_script(self):
        """
        Execute the runscript and return its option variables.

        Returns
        -------
        options : dict
            Module-level variables of the runscript, by name.
        """
        spec = importlib.util.spec_from_file_location("model_setup", self.script_path)
        script = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(script)
        return {
            name: value
            for name, value in vars(script).items()
            if not name.startswith("__")
            and not callable(value)
            and not isinstance(value, types.ModuleType)
        }


def get_model_setup(model_setup_path):
    """Load the runscript at `model_setup_path` into a ModelSetup."""
    return ModelSetup(model_setup_path)
