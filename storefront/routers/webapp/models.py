"""
WebApp API Pydantic Models

Request bodies for the cart endpoints.
"""
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    product_id: str = Field(min_length=1)
    delta: int  # negative to decrement; reaching 0 removes the line
