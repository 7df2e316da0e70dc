"""Backend records consumed in real mode.

The backend speaks camelCase JSON; fields are exposed in snake_case and
populated from either spelling. Unknown fields are ignored.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FloorRecord(BaseModel):
    """A level of a storage unit as returned by ``/api/Floor``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    floor_code: str = Field(default="", alias="floorCode")
    shelf_code: Optional[str] = Field(default=None, alias="shelfCode")
    floor_number: Optional[int] = Field(default=None, alias="floorNumber")
    status: Optional[str] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None


class ContainerRecord(BaseModel):
    """A container as returned by ``/api/Container``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    container_code: Optional[str] = Field(default=None, alias="containerCode")
    floor_code: Optional[str] = Field(default=None, alias="floorCode")
    type: Optional[str] = None
    status: Optional[str] = None
    # Older payloads use lowercase position keys.
    position_x: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("positionX", "positionx", "position_x")
    )
    position_y: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("positionY", "positiony", "position_y")
    )
    position_z: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("positionZ", "positionz", "position_z")
    )
    product_name: Optional[str] = Field(default=None, alias="productName")
    quantity: Optional[int] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @property
    def has_explicit_position(self) -> bool:
        return None not in (self.position_x, self.position_y, self.position_z)
