"""Catalog filter models."""

from typing import Mapping
from pydantic import BaseModel, Field

from primehomes.models.listing import Listing


ALL = "all"


class FilterCriteria(BaseModel):
    """Structural catalog filters. Empty strings mean "no constraint"."""
    type: str = Field(ALL, description="all, sale or rent")
    category: str = Field(ALL, description="all or a listing category")
    city: str = Field("", description="Exact city match; empty disables")
    min_price: str = Field("", description="Lower price bound as typed by the user")
    max_price: str = Field("", description="Upper price bound as typed by the user")

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "FilterCriteria":
        """Build criteria from query-string parameters (snake or camel case)."""
        return cls(
            type=params.get("type") or ALL,
            category=params.get("category") or ALL,
            city=params.get("city", ""),
            min_price=params.get("min_price") or params.get("minPrice", ""),
            max_price=params.get("max_price") or params.get("maxPrice", ""),
        )


class CatalogView(BaseModel):
    """Filtered catalog split for display."""
    featured: list[Listing] = Field(default_factory=list)
    regular: list[Listing] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.featured and not self.regular
