"""
Rendered page snapshot.

A snapshot is a point-in-time read of the page's display nodes, produced by
whatever browser driver the caller uses. It mirrors the page's DOM contract:

    .festival-container          one per festival
        .festival-name
        .band-container          one per band, may be hidden or not rendered
            .band-name
            .record-label

plus the free-standing message texts currently visible on the page.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class BandNode(BaseModel):
    """Rendered band container."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Displayed band name text")
    record_label: str = Field(default="", description="Displayed record label text")
    visible: bool = Field(default=True, description="Whether the band container is visible")


class FestivalNode(BaseModel):
    """Rendered festival container."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Displayed festival name text")
    bands: Tuple[BandNode, ...] = Field(
        default=(),
        description="Band containers present in the DOM (hidden ones included)",
    )

    @property
    def visible_bands(self) -> Tuple[BandNode, ...]:
        return tuple(band for band in self.bands if band.visible)


class RenderedSnapshot(BaseModel):
    """Display nodes of the festivals page at one point in time."""
    model_config = ConfigDict(frozen=True)

    festivals: Tuple[FestivalNode, ...] = Field(default=(), description="Festival containers in display order")
    messages: Tuple[str, ...] = Field(default=(), description="Visible free-standing message texts")

    def shows_message(self, message: str) -> bool:
        """True if the literal message is visible on the page."""
        return any(message in text for text in self.messages)
