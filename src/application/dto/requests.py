"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Numeric fields accept strings and floats on purpose: the validation engine,
not pydantic, decides what a valid quantity is and how to word the error.
"""

from pydantic import BaseModel, Field

QuantityInput = int | float | str | None


class AddRecordRequest(BaseModel):
    """Request to create an inventory record."""

    sku: str = Field(..., description="Stock keeping unit, unique", examples=["WH-001"])
    name: str = Field(..., description="Product name", examples=["Pallet wrap"])
    description: str = Field(default="", description="Free text description")
    quantity: QuantityInput = Field(default=1, description="Units on hand", examples=[10])
    minimum_stock: QuantityInput = Field(
        default=1,
        description="Reorder threshold",
        examples=[5],
    )
    location: str = Field(default="", description="Storage location", examples=["Aisle 3"])
    category: str = Field(default="", description="Category", examples=["Packaging"])
    unit: str = Field(default="pcs", description="Unit of measure", examples=["pcs", "kg"])


class RemoveStockRequest(BaseModel):
    """Request to remove stock from a record.

    The amount is clamped to what is on hand, with a floor of one unit.
    """

    amount: QuantityInput = Field(..., description="Units to remove", examples=[3])


class LookupValueRequest(BaseModel):
    """Request to register a category or location name."""

    name: str = Field(..., description="Category or location name", examples=["Packaging"])
