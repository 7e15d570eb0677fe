"""Configuration file for the Sphinx documentation builder.

This file contains the configuration for generating documentation
for taskboard using Sphinx and Read the Docs.
"""

import os
import sys
from pathlib import Path

# add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# configure Django settings for documentation
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "django.conf.global_settings")

import django
from django.conf import settings

# minimal Django settings for documentation
if not settings.configured:
    settings.configure(
        INSTALLED_APPS=[
            "django.contrib.contenttypes",
            "django.contrib.auth",
            "django.contrib.admin",
            "taskboard",
        ],
        DATABASES={
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": ":memory:",
            },
        },
        TASKBOARD={
            "BACKEND": "taskboard.repository.DjangoTaskRepository",
            "OPTIONS": {},
        },
        USE_TZ=True,
        SECRET_KEY="dummy-key-for-docs",
    )
    django.setup()

# project information
project = "taskboard"
copyright = "2025, taskboard contributors"
author = "taskboard contributors"
release = "0.1.0"

# general configuration
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "myst_parser",
]

# autodoc configuration
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "special-members": "__init__",
    "undoc-members": True,
    "exclude-members": "__weakref__",
}

# autosummary configuration
autosummary_generate = True

# napoleon configuration for Google/NumPy style docstrings
napoleon_google_docstring = True
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = False
napoleon_include_private_with_doc = False
napoleon_include_special_with_doc = True

# intersphinx mapping for external references
intersphinx_mapping = {
    "python": ("https://docs.python.org/3/", None),
    "django": ("https://docs.djangoproject.com/en/stable/", "https://docs.djangoproject.com/en/stable/_objects/"),
}

# list of patterns, relative to source directory, that match files and
# directories to ignore when looking for source files
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# the name of the Pygments (syntax highlighting) style to use
pygments_style = "sphinx"

# html theme options
html_theme = "sphinx_rtd_theme"
html_theme_options = {
    "prev_next_buttons_location": "bottom",
    "collapse_navigation": True,
    "navigation_depth": 3,
}

# html help
htmlhelp_basename = "taskboarddoc"

# myst parser configuration
myst_enable_extensions = [
    "colon_fence",
    "deflist",
]

# source suffix
source_suffix = [".rst", ".md"]
