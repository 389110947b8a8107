"""
Pydantic Models and Schemas
===========================

Core data models for Template Contexts, parsed template trees and render results.
"""

from typing import Annotated, Any, List, Literal, Mapping, Optional, Union
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Enums
class RendererType(str, Enum):
    """Available page template renderers."""
    REGIONS = "regions"
    TOKENS = "tokens"


# Template Context
class TemplateContext(BaseModel):
    """Named substitution values and region flags supplied to a single render."""
    model_config = ConfigDict(frozen=True)

    tokens: Mapping[str, str] = Field(
        default_factory=dict, validate_default=True, description="Token replacement values"
    )
    flags: Mapping[str, bool] = Field(
        default_factory=dict, validate_default=True, description="Conditional region flags"
    )

    @field_validator("tokens", "flags")
    @classmethod
    def freeze_mapping(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        """Store a private copy behind a read-only view."""
        return MappingProxyType(dict(v))

    def has_token(self, name: str) -> bool:
        return name in self.tokens

    def is_enabled(self, region: str) -> bool:
        """Regions without a flag are disabled."""
        return self.flags.get(region, False)


# Template Tree
class TextNode(BaseModel):
    """Literal markup copied to the output unchanged."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str
    line: int = Field(1, ge=1, description="Source line the node starts on")


class TokenNode(BaseModel):
    """A `$name` marker replaced by its context value."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["token"] = "token"
    name: str
    line: int = Field(1, ge=1, description="Source line the node starts on")

    @property
    def marker(self) -> str:
        return f"${self.name}"


class RegionNode(BaseModel):
    """Markup between `<!--BEGIN name-->` and `<!--END name-->`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["region"] = "region"
    name: str
    children: List["TemplateNode"] = Field(default_factory=list)
    line: int = Field(1, ge=1, description="Source line of the BEGIN marker")
    begin_marker: str = Field("", description="BEGIN comment as written in the source")
    end_marker: str = Field("", description="END comment as written in the source")


TemplateNode = Annotated[Union[TextNode, TokenNode, RegionNode], Field(discriminator="kind")]

# Update forward reference
RegionNode.model_rebuild()


class TemplateDocument(BaseModel):
    """Parsed template markup."""
    model_config = ConfigDict(frozen=True)

    nodes: List[TemplateNode] = Field(default_factory=list, description="Top-level nodes")
    parse_regions: bool = Field(True, description="Whether region comments were parsed")


# Rendering Results
class RenderResult(BaseModel):
    """Result of a page template render."""
    html: str = Field(..., description="Rendered document")
    substituted_tokens: List[str] = Field(
        default_factory=list, description="Token names substituted, in first-use order"
    )
    included_regions: List[str] = Field(default_factory=list, description="Regions emitted")
    omitted_regions: List[str] = Field(default_factory=list, description="Regions dropped")
    processing_time: Optional[float] = Field(None, description="Render time in seconds")
