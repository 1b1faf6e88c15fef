# Sphinx configuration for the stepflow API reference

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

from stepflow import __version__  # noqa: E402

project = 'stepflow'
copyright = '2025, stepflow contributors'
author = 'stepflow contributors'
release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx.ext.intersphinx',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build']

html_theme = 'sphinx_rtd_theme'

# Blueprints and results are slotted dataclasses; skip the generated dunders.
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
    'undoc-members': True,
    'exclude-members': '__weakref__, __slots__, __match_args__',
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'pydantic': ('https://docs.pydantic.dev/latest', None),
}
