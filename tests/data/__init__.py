"""
Test Data Package
================

Sample markups and Template Contexts for the header renderer tests.
"""

from .sample_contexts import (
    ALL_TEST_CONTEXTS,
    get_test_context,
    DOXYGEN_TOKENS,
    EMPTY_TOKEN_CONTEXT,
    SEARCHBOX_CONTEXT,
    FULL_HEADER_CONTEXT,
    INDEX_DISABLED_CONTEXT,
    EXTRA_KEYS_CONTEXT,
    SEARCH_REGION_MARKUP,
    NESTED_REGION_MARKUP,
    UNMATCHED_END_MARKUP,
    MISMATCHED_END_MARKUP,
    UNCLOSED_BEGIN_MARKUP,
)

__all__ = [
    'ALL_TEST_CONTEXTS',
    'get_test_context',
    'DOXYGEN_TOKENS',
    'EMPTY_TOKEN_CONTEXT',
    'SEARCHBOX_CONTEXT',
    'FULL_HEADER_CONTEXT',
    'INDEX_DISABLED_CONTEXT',
    'EXTRA_KEYS_CONTEXT',
    'SEARCH_REGION_MARKUP',
    'NESTED_REGION_MARKUP',
    'UNMATCHED_END_MARKUP',
    'MISMATCHED_END_MARKUP',
    'UNCLOSED_BEGIN_MARKUP',
]
