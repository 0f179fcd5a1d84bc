"""
Pydantic models for the festivals payload.

The upstream endpoint returns a JSON array of festivals:

    [
        {
            "name": "Glasto",
            "bands": [{"name": "Echo", "recordLabel": "EMI"}]
        }
    ]

Text fields may be empty or absent; only the structure is enforced here.
Structure violations are reported by the schema validator before a payload
is turned into these models.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Band(BaseModel):
    """A band playing at a festival."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, description="Band name (may be empty)")
    record_label: Optional[str] = Field(
        default=None,
        alias="recordLabel",
        description="Record label (may be empty)",
    )


class Festival(BaseModel):
    """A festival and its line-up, in payload order."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="Festival name (may be empty)")
    bands: Tuple[Band, ...] = Field(default=(), description="Bands in payload order")
