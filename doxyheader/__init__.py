"""
Doxygen Header Renderer
=======================

Renders the page chrome of the ARGoS API documentation site: a Doxygen
HTML header template whose `$token` markers and `<!--BEGIN X-->` regions are
resolved against values supplied by the documentation build.

This package provides:
- A markup parser producing a tree of literal, token and region nodes
- Renderers that evaluate that tree against a Template Context
- Environment-driven settings and structured logging
- A command line front end for Doxygen build steps
"""

__version__ = "1.0.0"
__author__ = "ARGoS Documentation Team"
