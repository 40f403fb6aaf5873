"""
Main lakeinit execution script. Invoked via the command line with

`lakeinit -i <filepath>`

where <filepath> is the path to a model setup script.
"""

from lakeinit.core.driver import lakeinit


def run_from_cli(return_geometries=False):
    """
    Command line entry point for initialising the lakes.
    """
    geometries, _ = lakeinit()
    if return_geometries:
        return geometries
    return None


if __name__ == "__main__":
    run_from_cli()
