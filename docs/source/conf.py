# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#project-information

import os
import sys

# The package lives under src/, so make it importable for autodoc.
sys.path.append(os.path.abspath("../../src"))

project = "lakeinit"
copyright = "2026, the lakeinit developers"
author = "the lakeinit developers"

# -- General configuration ---------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#general-configuration

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "autoapi.extension",
]

autoapi_dirs = ["../../src/lakeinit"]
autoapi_ignore = ["*run_lakeinit*", "*conf.py*", "tests"]
autoapi_member_order = "groupwise"
autoapi_python_class_content = "both"
# lakeinit docstrings are numpydoc style
napoleon_google_docstring = False
napoleon_use_param = False
napoleon_use_ivar = True

# -- Options for HTML output -------------------------------------------------
# https://www.sphinx-doc.org/en/master/usage/configuration.html#options-for-html-output

html_theme = "sphinx_rtd_theme"
