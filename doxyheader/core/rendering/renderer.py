"""
Page Template Renderer
======================

Merge static Doxygen header markup with a Template Context.
Tokens are substituted verbatim; conditional regions are kept or dropped
according to the context flags.
"""

from typing import Any, Iterable, List, Optional, Union
from pathlib import Path
import time
from abc import ABC, abstractmethod

from doxyheader.config.logging import get_logger
from doxyheader.config.settings import get_settings
from doxyheader.core.exceptions import MissingTokenError, TemplateLoadError
from doxyheader.core.template.context import ContextValues, build_context
from doxyheader.core.template.parser import TemplateParser
from doxyheader.models.schemas import (
    RegionNode,
    RenderResult,
    RendererType,
    TemplateContext,
    TemplateDocument,
    TemplateNode,
    TextNode,
    TokenNode,
)

logger = get_logger(__name__)

BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "templates"


class _RenderState:
    """Accumulates output and bookkeeping for one render."""

    def __init__(self) -> None:
        self.parts: List[str] = []
        self.substituted: List[str] = []
        self.missing: List[str] = []
        self.included: List[str] = []
        self.omitted: List[str] = []

    @staticmethod
    def note(names: List[str], name: str) -> None:
        if name not in names:
            names.append(name)


class BaseTemplateRenderer(ABC):
    """Abstract base class for page template renderers."""

    parse_regions: bool = True

    def __init__(
        self,
        token_names: Optional[Iterable[str]] = None,
        keep_region_markers: Optional[bool] = None,
    ) -> None:
        self.settings = get_settings()
        if token_names is None:
            token_names = self.settings.recognized_tokens or None
        if keep_region_markers is None:
            keep_region_markers = self.settings.keep_region_markers
        self.keep_region_markers = keep_region_markers
        self.parser = TemplateParser(parse_regions=self.parse_regions, token_names=token_names)
        self.logger: Any = logger.bind(renderer=self.renderer_type.value)  # structlog.BoundLoggerBase

    @property
    @abstractmethod
    def renderer_type(self) -> RendererType:
        """Renderer identifier."""
        pass

    @abstractmethod
    def _render_region(self, node: RegionNode, context: TemplateContext, state: _RenderState) -> None:
        """Emit (or drop) a region node."""
        pass

    def parse(self, markup: str) -> TemplateDocument:
        """Parse markup with this renderer's parser configuration."""
        return self.parser.parse(markup)

    def render(self, markup: str, context: Union[ContextValues, TemplateContext]) -> str:
        """
        Render markup against a Template Context.

        Args:
            markup: Raw template markup
            context: TemplateContext or flat mapping of tokens and flags

        Returns:
            Rendered HTML document

        Raises:
            MissingTokenError: If an emitted token has no context value
            MalformedRegionError: If region markers are unmatched or improperly nested
        """
        return self.render_result(markup, context).html

    def render_result(
        self, markup: str, context: Union[ContextValues, TemplateContext]
    ) -> RenderResult:
        """
        Render markup and report what was substituted and which regions were kept.

        Args:
            markup: Raw template markup
            context: TemplateContext or flat mapping of tokens and flags

        Returns:
            RenderResult with the rendered document
        """
        start_time = time.time()
        document = self.parse(markup)
        return self.render_document(document, context, start_time=start_time)

    def render_document(
        self,
        document: TemplateDocument,
        context: Union[ContextValues, TemplateContext],
        start_time: Optional[float] = None,
    ) -> RenderResult:
        """
        Evaluate an already parsed document.

        Args:
            document: Parsed template
            context: TemplateContext or flat mapping of tokens and flags
            start_time: Timestamp the render started at, defaults to now

        Returns:
            RenderResult with the rendered document
        """
        if start_time is None:
            start_time = time.time()

        context = build_context(context)
        state = _RenderState()
        self._render_nodes(document.nodes, context, state)

        if state.missing:
            self.logger.error("Page template rendering failed", missing_tokens=state.missing)
            raise MissingTokenError(state.missing)

        result = RenderResult(
            html="".join(state.parts),
            substituted_tokens=state.substituted,
            included_regions=state.included,
            omitted_regions=state.omitted,
            processing_time=time.time() - start_time,
        )
        self.logger.info(
            "Page template rendered",
            html_length=len(result.html),
            tokens=len(result.substituted_tokens),
            omitted_regions=result.omitted_regions,
        )
        return result

    def _render_nodes(
        self, nodes: Iterable[TemplateNode], context: TemplateContext, state: _RenderState
    ) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                state.parts.append(node.text)
            elif isinstance(node, TokenNode):
                self._render_token(node, context, state)
            else:
                self._render_region(node, context, state)

    def _render_token(self, node: TokenNode, context: TemplateContext, state: _RenderState) -> None:
        if not context.has_token(node.name):
            state.note(state.missing, node.name)
            return
        state.parts.append(context.tokens[node.name])
        state.note(state.substituted, node.name)


class RegionTemplateRenderer(BaseTemplateRenderer):
    """Renderer evaluating BEGIN/END regions against context flags."""

    parse_regions = True

    @property
    def renderer_type(self) -> RendererType:
        return RendererType.REGIONS

    def _render_region(self, node: RegionNode, context: TemplateContext, state: _RenderState) -> None:
        if not context.is_enabled(node.name):
            state.note(state.omitted, node.name)
            return

        state.note(state.included, node.name)
        if self.keep_region_markers:
            state.parts.append(node.begin_marker)
        self._render_nodes(node.children, context, state)
        if self.keep_region_markers:
            state.parts.append(node.end_marker)


class TokenTemplateRenderer(BaseTemplateRenderer):
    """Renderer substituting tokens only; region comments pass through as text."""

    parse_regions = False

    @property
    def renderer_type(self) -> RendererType:
        return RendererType.TOKENS

    def _render_region(self, node: RegionNode, context: TemplateContext, state: _RenderState) -> None:
        # The token-only parser never produces region nodes
        raise TypeError(f"Unexpected region node {node.name!r} in token-only render")


class TemplateRendererFactory:
    """Factory for creating page template renderers."""

    _renderers = {
        RendererType.REGIONS.value: RegionTemplateRenderer,
        RendererType.TOKENS.value: TokenTemplateRenderer,
    }

    @classmethod
    def create_renderer(cls, renderer_type: Optional[str] = None, **kwargs: Any) -> BaseTemplateRenderer:
        """
        Create a renderer instance.

        Args:
            renderer_type: "regions" or "tokens"; defaults to the configured renderer
            **kwargs: Forwarded to the renderer constructor

        Returns:
            Renderer instance

        Raises:
            ValueError: If renderer type is not supported
        """
        if renderer_type is None:
            renderer_type = get_settings().default_renderer
        if isinstance(renderer_type, RendererType):
            renderer_type = renderer_type.value

        if renderer_type not in cls._renderers:
            raise ValueError(f"Unsupported renderer type: {renderer_type}")

        return cls._renderers[renderer_type](**kwargs)

    @classmethod
    def available_renderers(cls) -> List[str]:
        return list(cls._renderers)


def get_template_path(name: Optional[str] = None) -> Path:
    """
    Resolve a template name to a file path.

    The configured template directory is searched before the bundled templates.
    Paths containing a directory component are used as given.
    """
    settings = get_settings()
    name = name or settings.default_template

    candidate = Path(name)
    if candidate.parent != Path("."):
        return candidate

    if settings.template_dir is not None:
        override = settings.template_dir / name
        if override.is_file():
            return override

    return BUNDLED_TEMPLATE_DIR / name


def load_template(name: Optional[str] = None) -> str:
    """
    Read template markup.

    Args:
        name: Template file name or path; defaults to the configured default template

    Returns:
        Template markup

    Raises:
        TemplateLoadError: If the template cannot be read
    """
    settings = get_settings()
    path = get_template_path(name)
    try:
        return path.read_text(encoding=settings.template_encoding)
    except (OSError, UnicodeDecodeError) as e:
        error_msg = f"Cannot read template {path}: {e}"
        logger.error("Template loading failed", error=error_msg)
        raise TemplateLoadError(error_msg) from e


def render(
    markup: str,
    context: Union[ContextValues, TemplateContext],
    renderer_type: Optional[str] = None,
) -> str:
    """
    Render markup against a Template Context.

    Args:
        markup: Raw template markup
        context: TemplateContext or flat mapping of tokens and flags
        renderer_type: Renderer type, defaults to the configured renderer

    Returns:
        Rendered HTML document
    """
    renderer = TemplateRendererFactory.create_renderer(renderer_type)
    return renderer.render(markup, context)


def render_page(
    context: Union[ContextValues, TemplateContext],
    template_name: Optional[str] = None,
    renderer_type: Optional[str] = None,
) -> RenderResult:
    """
    Render a template file, by default the bundled API documentation header.

    Args:
        context: TemplateContext or flat mapping of tokens and flags
        template_name: Template file name or path
        renderer_type: Renderer type, defaults to the configured renderer

    Returns:
        RenderResult with the rendered document
    """
    markup = load_template(template_name)
    renderer = TemplateRendererFactory.create_renderer(renderer_type)
    return renderer.render_result(markup, context)
