# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys

# -- Path setup --------------------------------------------------------------
# Add the project root so that autodoc can find the `npuzzle` package.
sys.path.insert(0, os.path.abspath(".."))

# -- Project information -----------------------------------------------------
project = "npuzzle"
release = "0.1.0"

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.viewcode",
]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Autodoc configuration ---------------------------------------------------
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
    "member-order": "bysource",
}
autodoc_typehints = "description"

# Napoleon settings (Google-style docstrings)
napoleon_google_docstring = True
napoleon_include_init_with_doc = True
napoleon_attr_annotations = True

# Intersphinx mapping
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "jax": ("https://jax.readthedocs.io/en/latest/", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
}

# -- Options for HTML output -------------------------------------------------
html_title = "npuzzle Documentation"

# Mock imports for packages that may not be installed in the docs build env
autodoc_mock_imports = [
    "chex",
]

# Prefer real JAX when available; fall back to mocks only when unavailable.
try:
    import jax  # noqa: F401
except Exception:
    autodoc_mock_imports.extend(["jax", "jaxlib"])
