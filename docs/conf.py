# Configuration file for the Sphinx documentation builder.
#
# phaselab documentation

import os
import sys

# Allow Sphinx to import the phaselab package
sys.path.insert(0, os.path.abspath(".."))

# -- Project information -----------------------------------------------------
project = "phaselab"
copyright = "2025, phaselab"
author = "phaselab"
release = "0.1.0"
version = "0.1.0"

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.mathjax",
]

templates_path = ["_templates"]
exclude_patterns = ["_build"]

# -- Options for HTML output -------------------------------------------------
html_theme = "sphinx_rtd_theme"
html_title = "phaselab"

# -- Extension configuration -------------------------------------------------
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "show-inheritance": True,
}
autodoc_mock_imports = ["matplotlib"]

napoleon_google_docstring = True
napoleon_numpy_docstring = False
