"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ProductSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    category: str | None = None
    image_url: str | None = None


class CartItemSchema(BaseModel):
    product_id: str
    quantity: int


class CartLineSchema(CartItemSchema):
    product: ProductSchema | None = None


class OrderLineSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Trail Runner",
                    "description": "Lightweight running shoe",
                    "price": 89.99,
                    "category": "Shoes",
                    "image_url": "https://example.com/trail-runner.png",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    category: str | None = Field(None, max_length=100)
    image_url: str | None = Field(None, max_length=1024)


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "first_name": "Jane", "last_name": "Doe"}]}
    }

    email: str = Field(..., max_length=254)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class UpdateCartItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}

    quantity: int = Field(ge=1)


class AddOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"items": [{"product_id": "prod-001", "quantity": 2}, {"product_id": "prod-002", "quantity": 1}]}]
        }
    }

    items: list[OrderLineSchema]


class GoogleSignInRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"access_token": "ya29.a0Af..."}]}}

    access_token: str = Field(..., min_length=1)


class RefreshCredentialsRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductIdResponse(BaseModel):
    product_id: str


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    cart: list[CartItemSchema] = Field(default_factory=list)


class CartResponse(BaseModel):
    user_id: str
    items: list[CartLineSchema]


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderLineSchema]
    created_at: str | None = None


class CredentialsResponse(BaseModel):
    user_id: str
    access_token: str
    refresh_token: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    detail: str | dict | list | None = None
