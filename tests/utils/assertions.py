"""
Test Assertions
===============

Custom assertion helpers for testing page template rendering.
"""

import re
from typing import Iterable, List, Optional

from doxyheader.models.schemas import RenderResult

TOKEN_MARKER = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*")
REGION_MARKER = re.compile(r"<!--\s*(BEGIN|END)\s+[A-Za-z_][A-Za-z0-9_]*\s*-->")


def assert_no_token_markers(html: str) -> None:
    """Assert that no `$name` markers remain in rendered output."""
    leftovers = TOKEN_MARKER.findall(html)
    assert not leftovers, f"Unresolved token markers in output: {leftovers}"


def assert_no_region_markers(html: str) -> None:
    """Assert that no BEGIN/END region comments remain in rendered output."""
    leftovers = [m.group(0) for m in REGION_MARKER.finditer(html)]
    assert not leftovers, f"Region markers left in output: {leftovers}"


def assert_contains_in_order(html: str, fragments: Iterable[str]) -> None:
    """Assert that fragments appear in the output in the given order."""
    position = 0
    for fragment in fragments:
        index = html.find(fragment, position)
        assert index != -1, f"Fragment {fragment!r} not found after offset {position}"
        position = index + len(fragment)


def assert_valid_render_result(
    result: RenderResult,
    expected_tokens: Optional[List[str]] = None,
    omitted_regions: Optional[List[str]] = None,
) -> None:
    """Assert that a render result is complete and matches expectations."""
    assert isinstance(result, RenderResult)
    assert isinstance(result.html, str)
    assert result.processing_time is not None
    assert result.processing_time >= 0

    if expected_tokens is not None:
        assert sorted(result.substituted_tokens) == sorted(expected_tokens)
    if omitted_regions is not None:
        assert sorted(result.omitted_regions) == sorted(omitted_regions)
        for region in omitted_regions:
            assert region not in result.included_regions
