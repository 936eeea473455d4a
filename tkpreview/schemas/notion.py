"""Typed views over the Notion page payloads the preview consumes.

Notion returns every database property as a JSON object tagged by ``type``.
Only a handful of those shapes carry text we can show, so the raw payload is
parsed once into one of the models below; everything else lands in
:class:`UnknownProperty`. Extraction code then works on these models instead
of poking at nested dictionaries.
"""

from __future__ import annotations

import logging
from typing import Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Field identifiers in the source database; the circled digit is part of the name.
SHORT_ID_PROPERTY = "tkid1"
RECORD_LABEL_PROPERTY = "TK id"
LIVE_TILE_PROPERTY = "Tile HTML"
LIVE_MODAL_PROPERTY = "Modal HTML"
PENDING_TILE_PROPERTY = "Builder ⓵ TILE"
PENDING_MODAL_PROPERTY = "Builder ⓵ MODAL"


class RichTextSegment(BaseModel):
    """One run of rich text; only the flattened text matters here."""

    model_config = ConfigDict(extra="ignore")

    plain_text: Optional[str] = ""


class _PropertyBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    # Some payloads carry a bare ``plain_text`` next to the typed value.
    plain_text: Optional[str] = None


class TitleProperty(_PropertyBase):
    type: Literal["title"] = "title"
    title: List[RichTextSegment] = Field(default_factory=list)


class RichTextProperty(_PropertyBase):
    type: Literal["rich_text"] = "rich_text"
    rich_text: List[RichTextSegment] = Field(default_factory=list)


class FormulaResult(BaseModel):
    """Computed formula value, tagged by its own ``type`` (string, number, ...)."""

    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    string: Optional[str] = None
    number: Optional[Union[int, float]] = None


class FormulaProperty(_PropertyBase):
    type: Literal["formula"] = "formula"
    formula: FormulaResult = Field(default_factory=FormulaResult)


class PlainTextProperty(_PropertyBase):
    type: Literal["plain_text"] = "plain_text"


class UnknownProperty(_PropertyBase):
    type: Optional[str] = None


PropertyValue = Union[TitleProperty, RichTextProperty, FormulaProperty, PlainTextProperty, UnknownProperty]

_PROPERTY_MODELS: dict[str, type[_PropertyBase]] = {
    "title": TitleProperty,
    "rich_text": RichTextProperty,
    "formula": FormulaProperty,
    "plain_text": PlainTextProperty,
}


def parse_property(raw: Any) -> Optional[PropertyValue]:
    """Parse one raw property payload; ``None`` when there is nothing to parse."""

    if not isinstance(raw, Mapping):
        return None
    kind = raw.get("type")
    model = _PROPERTY_MODELS.get(kind, UnknownProperty) if isinstance(kind, str) else UnknownProperty
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        logger.debug("Unparseable %s property treated as unknown: %s", kind, exc)
        return UnknownProperty(type=kind if isinstance(kind, str) else None)


class NotionRecord(BaseModel):
    """A single database page, reduced to what the preview needs."""

    id: str
    last_edited_time: Optional[str] = None
    properties: dict[str, PropertyValue] = Field(default_factory=dict)

    @classmethod
    def from_page(cls, page: Mapping[str, Any]) -> "NotionRecord":
        raw_properties = page.get("properties") or {}
        properties: dict[str, PropertyValue] = {}
        for name, raw in raw_properties.items():
            parsed = parse_property(raw)
            if parsed is not None:
                properties[name] = parsed
        return cls(
            id=str(page.get("id") or ""),
            last_edited_time=page.get("last_edited_time"),
            properties=properties,
        )

    def get_property(self, name: str) -> Optional[PropertyValue]:
        return self.properties.get(name)
