"""
Core Logic
==========

Template parsing, context validation and page rendering.

Components:
- template: markup lexing, region parsing and context validation
- rendering: renderer implementations and bundled templates
- exceptions: error hierarchy shared by the parser and renderers
"""
