"""
Data Models
===========

Pydantic data models for template contexts, parsed markup and render results.

Models:
- schemas: Template Context, node tree and render result models
"""
