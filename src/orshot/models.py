"""Pydantic models shared across orshot.

The models fall into three groups:

**Persisted models** -- serialised as JSON in the user's config directory:
    :class:`Credentials`, :class:`UserProfile` and :class:`Settings`.

**Upstream records** -- read-only shapes returned by the Orshot API:
    :class:`Template` and :class:`ModificationSpec`. Both allow extra keys so
    that unknown fields survive a ``--json`` round trip.

**Request bodies** -- posted to the render endpoints:
    :class:`LibraryRenderRequest` and :class:`StudioRenderRequest`, with the
    nested :class:`ResponseOptions`, :class:`PdfOptions` and
    :class:`VideoOptions`. Field names are snake_case in Python and camelCase
    on the wire; use :meth:`RenderRequestBase.to_body` to serialise.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_DOMAIN = "https://api.orshot.com"


# --- Persisted ---


class UserProfile(BaseModel):
    """Identity of the account that owns the API key.

    Every field has a neutral default because some valid keys cannot read
    their own profile; see :func:`orshot.client.response.normalize_user`.
    """

    user_id: str = "Unknown"
    email: str = ""
    name: str = ""


class Credentials(BaseModel):
    """Everything the CLI remembers between invocations."""

    api_key: Optional[str] = None
    domain: str = DEFAULT_DOMAIN
    user: Optional[UserProfile] = None


class Settings(BaseModel):
    """HTTP settings stored in ``config.json``."""

    timeout: float = Field(
        default=300.0,
        description="Request timeout in seconds; renders may include video encoding",
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


# --- Upstream records ---


class Template(BaseModel):
    """A library or studio template as listed by the service.

    Library templates carry a ``title``, studio templates a ``name``.
    """

    model_config = ConfigDict(extra="allow")

    id: Any = None
    title: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    modifications: Optional[list[Any]] = None

    @property
    def display_name(self) -> str:
        return self.title or self.name or "Untitled"


class ModificationSpec(BaseModel):
    """A customisable field of a template.

    Library endpoints identify the field by ``key``, studio endpoints by
    ``id``.
    """

    model_config = ConfigDict(extra="allow")

    key: Optional[str] = None
    id: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None

    @property
    def field_name(self) -> str:
        return self.key or self.id or ""


# --- Request bodies ---


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ResponseOptions(_WireModel):
    """The ``response`` sub-object: how the rendered asset is returned."""

    format: str = "png"
    type: str = "base64"
    scale: Optional[float] = None
    include_pages: Optional[list[int]] = Field(default=None, alias="includePages")
    quality: Optional[int] = None


class PdfOptions(_WireModel):
    dpi: int


class VideoOptions(_WireModel):
    loop: bool = False
    muted: bool = False
    trim_start: Optional[float] = Field(default=None, alias="trimStart")
    trim_end: Optional[float] = Field(default=None, alias="trimEnd")
    quality: Optional[int] = None


class RenderRequestBase(_WireModel):
    template_id: str = Field(alias="templateId")
    modifications: dict[str, str] = Field(default_factory=dict)
    source: str = "cli"
    response: ResponseOptions = Field(default_factory=ResponseOptions)

    def to_body(self) -> dict[str, Any]:
        """Serialise to the JSON body the service expects.

        Keys use their camelCase aliases and unset optional fields are
        omitted entirely.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LibraryRenderRequest(RenderRequestBase):
    """Body for ``POST /v1/generate/images``."""


class StudioRenderRequest(RenderRequestBase):
    """Body for ``POST /v1/studio/render``."""

    pdf_options: Optional[PdfOptions] = Field(default=None, alias="pdfOptions")
    video_options: Optional[VideoOptions] = Field(default=None, alias="videoOptions")
    webhook: Optional[str] = None
