"""Sphinx configuration for the Matchday documentation."""

from __future__ import annotations

import os
import sys
from datetime import datetime

# Make the package importable for autodoc without an install.
PROJECT_ROOT = os.path.abspath(os.path.join(__file__, "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from matchday import __version__  # noqa: E402

project = "Matchday"
author = "Richard Owen"
copyright = f"{datetime.now():%Y}, {author}"

version = __version__
release = version

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
]

autosummary_generate = True
autodoc_member_order = "bysource"

templates_path = ["_templates"]
exclude_patterns: list[str] = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "sphinx_rtd_theme"

# Docstrings are numpydoc throughout.
autodoc_typehints = "description"
napoleon_google_docstring = False
napoleon_numpy_docstring = True
