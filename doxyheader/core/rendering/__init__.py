"""
Rendering Module
===============

Evaluation of parsed templates against a Template Context.

Components:
- renderer: region-aware and token-only renderers, factory, template loading
- templates: bundled Doxygen header markup
"""
