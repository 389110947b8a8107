"""
Template Parser
===============

Lexer and recursive-descent parser for Doxygen header markup.

Markup is split into literal text, `$name` token markers and
`<!--BEGIN NAME-->` / `<!--END NAME-->` region comments. The parser nests
regions into a tree of TextNode, TokenNode and RegionNode objects so that
renderers never scan raw strings for matching markers.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import re

from doxyheader.config.logging import get_logger
from doxyheader.core.exceptions import MalformedRegionError
from doxyheader.models.schemas import (
    RegionNode,
    TemplateDocument,
    TemplateNode,
    TextNode,
    TokenNode,
)

logger = get_logger(__name__)

IDENTIFIER = r"[A-Za-z_][A-Za-z0-9_]*"

REGION_MARKER = re.compile(r"<!--\s*(?P<keyword>BEGIN|END)\s+(?P<region>" + IDENTIFIER + r")\s*-->")
TOKEN_MARKER = re.compile(r"\$(?P<token>" + IDENTIFIER + r")")
ANY_MARKER = re.compile(f"{REGION_MARKER.pattern}|{TOKEN_MARKER.pattern}")


class LexemeKind(str, Enum):
    """Lexeme categories produced by the lexer."""
    TEXT = "text"
    TOKEN = "token"
    BEGIN = "begin"
    END = "end"


@dataclass(frozen=True)
class Lexeme:
    """A slice of markup: literal text, a token marker or a region comment."""
    kind: LexemeKind
    value: str
    source: str
    line: int


class TemplateLexer:
    """Split markup into lexemes."""

    def __init__(
        self, parse_regions: bool = True, token_names: Optional[Iterable[str]] = None
    ) -> None:
        self.parse_regions = parse_regions
        self.token_names = frozenset(token_names) if token_names else None
        self._pattern = ANY_MARKER if parse_regions else TOKEN_MARKER

    def tokenize(self, markup: str) -> List[Lexeme]:
        """
        Tokenize markup.

        Args:
            markup: Raw template markup

        Returns:
            Lexemes in source order; adjacent literal text is merged
        """
        lexemes: List[Lexeme] = []
        text_start = 0
        text_line = 1
        line = 1
        scanned = 0

        for match in self._pattern.finditer(markup):
            line += markup.count("\n", scanned, match.start())
            scanned = match.start()

            lexeme = self._classify(match, line)
            if lexeme is None:
                # Unrecognized token name, stays part of the surrounding text
                continue

            if match.start() > text_start:
                lexemes.append(
                    Lexeme(LexemeKind.TEXT, markup[text_start : match.start()], "", text_line)
                )
            lexemes.append(lexeme)

            text_start = match.end()
            line += markup.count("\n", scanned, text_start)
            scanned = text_start
            text_line = line

        if text_start < len(markup):
            lexemes.append(Lexeme(LexemeKind.TEXT, markup[text_start:], "", text_line))

        return lexemes

    def _classify(self, match: "re.Match[str]", line: int) -> Optional[Lexeme]:
        """Map a regex match to a lexeme, or None when it is not a marker."""
        token = match.group("token")
        if token is not None:
            if self.token_names is not None and token not in self.token_names:
                return None
            return Lexeme(LexemeKind.TOKEN, token, match.group(0), line)

        kind = LexemeKind.BEGIN if match.group("keyword") == "BEGIN" else LexemeKind.END
        return Lexeme(kind, match.group("region"), match.group(0), line)


class TemplateParser:
    """Recursive-descent parser building a TemplateDocument from lexemes."""

    def __init__(
        self, parse_regions: bool = True, token_names: Optional[Iterable[str]] = None
    ) -> None:
        self.logger: Any = logger.bind(component="parser")  # structlog.BoundLoggerBase
        self.parse_regions = parse_regions
        self.lexer = TemplateLexer(parse_regions=parse_regions, token_names=token_names)

    def parse(self, markup: str) -> TemplateDocument:
        """
        Parse template markup into a node tree.

        Args:
            markup: Raw template markup

        Returns:
            Parsed TemplateDocument

        Raises:
            MalformedRegionError: If region markers are unmatched or improperly nested
        """
        lexemes = self.lexer.tokenize(markup)

        try:
            nodes, _ = self._parse_block(iter(lexemes), None)
        except MalformedRegionError as e:
            self.logger.error("Template parsing failed", error=str(e), line=e.line)
            raise

        document = TemplateDocument(nodes=nodes, parse_regions=self.parse_regions)
        self.logger.debug(
            "Template parsed",
            lexemes=len(lexemes),
            tokens=len(self.collect_tokens(document)),
            regions=len(self.collect_regions(document)),
        )
        return document

    def _parse_block(
        self, stream: Iterator[Lexeme], opening: Optional[Lexeme]
    ) -> Tuple[List[TemplateNode], Optional[Lexeme]]:
        """
        Parse nodes until the END marker matching `opening`, or end of input.

        Returns:
            Tuple of (nodes, closing END lexeme or None at top level)
        """
        nodes: List[TemplateNode] = []

        for lexeme in stream:
            if lexeme.kind is LexemeKind.TEXT:
                nodes.append(TextNode(text=lexeme.value, line=lexeme.line))
            elif lexeme.kind is LexemeKind.TOKEN:
                nodes.append(TokenNode(name=lexeme.value, line=lexeme.line))
            elif lexeme.kind is LexemeKind.BEGIN:
                children, closing = self._parse_block(stream, lexeme)
                nodes.append(
                    RegionNode(
                        name=lexeme.value,
                        children=children,
                        line=lexeme.line,
                        begin_marker=lexeme.source,
                        end_marker=closing.source if closing else "",
                    )
                )
            else:
                if opening is None:
                    raise MalformedRegionError(
                        f"END {lexeme.value} has no matching BEGIN", lexeme.line
                    )
                if lexeme.value != opening.value:
                    raise MalformedRegionError(
                        f"END {lexeme.value} closes BEGIN {opening.value} "
                        f"opened on line {opening.line}",
                        lexeme.line,
                    )
                return nodes, lexeme

        if opening is not None:
            raise MalformedRegionError(f"BEGIN {opening.value} is never closed", opening.line)

        return nodes, None

    @staticmethod
    def collect_tokens(document: TemplateDocument) -> List[str]:
        """
        List token names referenced anywhere in a document.

        Args:
            document: Parsed template

        Returns:
            Unique token names in first-occurrence order
        """
        names: List[str] = []
        for node in _walk(document.nodes):
            if isinstance(node, TokenNode) and node.name not in names:
                names.append(node.name)
        return names

    @staticmethod
    def collect_regions(document: TemplateDocument) -> List[str]:
        """
        List region names referenced anywhere in a document.

        Args:
            document: Parsed template

        Returns:
            Unique region names in first-occurrence order
        """
        names: List[str] = []
        for node in _walk(document.nodes):
            if isinstance(node, RegionNode) and node.name not in names:
                names.append(node.name)
        return names


def _walk(nodes: Iterable[TemplateNode]) -> Iterator[TemplateNode]:
    """Depth-first pre-order traversal."""
    for node in nodes:
        yield node
        if isinstance(node, RegionNode):
            yield from _walk(node.children)


def parse_template(
    markup: str, parse_regions: bool = True, token_names: Optional[Iterable[str]] = None
) -> TemplateDocument:
    """
    Parse template markup.

    Args:
        markup: Raw template markup
        parse_regions: Treat BEGIN/END comments as regions rather than text
        token_names: Restrict substitution to these names; None means every $identifier

    Returns:
        Parsed TemplateDocument
    """
    parser = TemplateParser(parse_regions=parse_regions, token_names=token_names)
    return parser.parse(markup)


def get_required_tokens(markup: str, token_names: Optional[Iterable[str]] = None) -> List[str]:
    """
    Get the token names a context must supply when every region is enabled.

    Args:
        markup: Raw template markup
        token_names: Optional restriction on recognized token names

    Returns:
        Unique token names in first-occurrence order
    """
    document = parse_template(markup, token_names=token_names)
    return TemplateParser.collect_tokens(document)
