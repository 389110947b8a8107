"""
Test Suite
==========

Test suite matching the doxyheader/ package structure.

Test Categories:
- unit: Unit tests for individual components
"""
