"""
framing/inputs.py - User framing choices.

Pydantic model for the form values that drive a framing calculation.
Accepts both snake_case names and the camelCase keys used by the
drawing front end.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .enums import AttachmentType, BeamType, FootingType, PictureFrame


class DeckInputSpec(BaseModel):
    """Framing options for one deck."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    deck_height: float = Field(
        ..., ge=0, alias="deckHeight", description="Deck surface height above grade (inches)"
    )
    joist_spacing: Literal[12, 16] = Field(
        default=16, alias="joistSpacing", description="Joist on-center spacing (inches)"
    )
    attachment_type: AttachmentType = Field(
        default=AttachmentType.HOUSE_RIM,
        alias="attachmentType",
        description="How the deck meets the house",
    )
    beam_type: BeamType = Field(
        default=BeamType.DROP, alias="beamType", description="Beam style"
    )
    footing_type: FootingType = Field(
        default=FootingType.GH_LEVELLERS, alias="footingType", description="Footing product"
    )
    picture_frame: PictureFrame = Field(
        default=PictureFrame.NONE, alias="pictureFrame", description="Picture-frame border"
    )

    @property
    def has_picture_frame(self) -> bool:
        return self.picture_frame != PictureFrame.NONE

    def as_floating(self) -> DeckInputSpec:
        """Copy with the attachment switched to free-standing."""
        return self.model_copy(update={"attachment_type": AttachmentType.FLOATING})
