"""Listing models."""

from enum import Enum
from typing import Any, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ListingType(str, Enum):
    """Transaction kind."""
    SALE = "sale"
    RENT = "rent"


class Category(str, Enum):
    """Property category."""
    HOUSE = "house"
    APARTMENT = "apartment"
    LAND = "land"
    COMMERCIAL = "commercial"


class ListingStatus(str, Enum):
    """Listing lifecycle status. Any status may follow any other."""
    AVAILABLE = "available"
    SOLD = "sold"
    RENTED = "rented"


class Listing(BaseModel):
    """Real estate listing as stored in the ``properties`` table."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Listing ID")
    title: str = Field(..., description="Listing title")
    description: str = Field("", description="Free-text description")
    price: float = Field(..., ge=0, description="Asking price or monthly rent")
    type: ListingType = Field(..., description="sale or rent")
    category: Category = Field(..., description="house, apartment, land or commercial")
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    area_sqm: float = Field(..., gt=0, description="Floor area in square metres")
    location: str = Field("", description="Street or neighbourhood")
    city: str = Field("", description="City name")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    featured: bool = Field(False, description="Promoted on the catalog front page")
    status: ListingStatus = Field(default=ListingStatus.AVAILABLE)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("description", "location", "city", mode="before")
    @classmethod
    def blank_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class ListingImage(BaseModel):
    """Image attached to a listing (``property_images`` table)."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., description="Image ID")
    property_id: str = Field(..., description="Owning listing ID")
    image_url: str = Field(..., description="Public image URL")
    is_primary: bool = Field(False, description="Cover image flag (not enforced unique)")
    order_index: int = Field(0, description="Display order")
    created_at: Optional[datetime] = None


class ListingInput(BaseModel):
    """Admin listing form payload."""
    title: str
    description: str
    price: float = Field(..., ge=0, allow_inf_nan=False)
    type: ListingType
    category: Category
    bedrooms: int = Field(0, ge=0)
    bathrooms: int = Field(0, ge=0)
    area_sqm: float = Field(..., gt=0, allow_inf_nan=False)
    location: str = ""
    city: str = ""
    latitude: Optional[float] = Field(None, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, allow_inf_nan=False)
    featured: bool = False
    status: ListingStatus = ListingStatus.AVAILABLE

    @field_validator("title", "description", "location", "city", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("title", "description")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("type", "category", "status", mode="before")
    @classmethod
    def lower_choice(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("bedrooms", "bathrooms", mode="before")
    @classmethod
    def count_or_zero(cls, value: Any) -> Any:
        # Blank or garbled room counts fall back to zero
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return value
        try:
            return int(float(str(value).strip()))
        except (TypeError, ValueError):
            return 0

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def optional_coordinate(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("featured", mode="before")
    @classmethod
    def checkbox(cls, value: Any) -> Any:
        if value is None or value == "":
            return False
        return value

    def to_record(self) -> dict:
        """Row payload for the ``properties`` table, stamped with ``updated_at``."""
        record = self.model_dump(mode="json")
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        return record
