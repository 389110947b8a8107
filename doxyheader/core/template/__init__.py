"""
Template Processing Module
==========================

Markup parsing and Template Context validation.

Components:
- parser: lexer and recursive-descent parser for `$token` markers and
  `<!--BEGIN X-->` / `<!--END X-->` regions
- context: Cerberus validation and Template Context construction
"""
