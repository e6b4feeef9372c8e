"""FastAPI routes for the storefront: products, users with their carts and orders, sign-in."""

import json

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddOrderRequest,
    AddProductRequest,
    CartResponse,
    CredentialsResponse,
    ErrorResponse,
    GoogleSignInRequest,
    OrderResponse,
    ProductIdResponse,
    ProductSchema,
    RefreshCredentialsRequest,
    RegisterUserRequest,
    UpdateCartItemRequest,
    UserIdResponse,
    UserResponse,
)
from storefront.catalogue.listing import AddProduct
from storefront.catalogue.lookup import all_products, get_product, search_products
from storefront.domain import storefront
from storefront.identity.sign_in import SignInFailure, refresh_credentials, sign_up_google
from storefront.ordering.placement import AddOrder
from storefront.ordering.queries import get_order, get_user_orders
from storefront.serialization import process_serialized
from storefront.user.cart import AddToCart, ClearUserCart, MinusFromCart, RemoveCartItem, UpdateCartItem
from storefront.user.email import normalize_email
from storefront.user.queries import get_user, get_user_cart
from storefront.user.registration import RegisterUser


def _user_key(user_id: str) -> str:
    return f"user:{user_id.strip()}"


def _cart_response(user_id: str) -> CartResponse:
    return CartResponse(user_id=user_id, items=get_user_cart(user_id))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductSchema])
async def list_products(
    limit: int | None = Query(None, ge=1), offset: int = Query(0, ge=0)
) -> list[ProductSchema]:
    """The catalogue ordered by name. Without ``limit`` every product is returned."""
    return [ProductSchema(**product.to_dict()) for product in all_products(limit=limit, offset=offset)]


@product_router.get("/search", response_model=list[ProductSchema])
async def search(q: str = "") -> list[ProductSchema]:
    return [ProductSchema(**product.to_dict()) for product in search_products(q)]


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product_by_id(product_id: str) -> ProductSchema:
    return ProductSchema(**get_product(product_id).to_dict())


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


# ---------------------------------------------------------------------------
# User Router: accounts, carts and orders
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def register_user(body: RegisterUserRequest) -> UserIdResponse:
    command = RegisterUser(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    result = process_serialized(f"email:{normalize_email(body.email)}", command)
    return UserIdResponse(user_id=result)


@user_router.get("/{user_id}", response_model=UserResponse)
async def read_user(user_id: str) -> UserResponse:
    return UserResponse(**get_user(user_id))


@user_router.get("/{user_id}/cart", response_model=CartResponse)
async def read_cart(user_id: str) -> CartResponse:
    return _cart_response(user_id)


@user_router.post("/{user_id}/cart/{product_id}", response_model=CartResponse)
async def add_to_cart(user_id: str, product_id: str) -> CartResponse:
    process_serialized(_user_key(user_id), AddToCart(user_id=user_id, product_id=product_id))
    return _cart_response(user_id)


@user_router.put("/{user_id}/cart/{product_id}", response_model=CartResponse)
async def update_cart_item(user_id: str, product_id: str, body: UpdateCartItemRequest) -> CartResponse:
    process_serialized(
        _user_key(user_id),
        UpdateCartItem(user_id=user_id, product_id=product_id, quantity=body.quantity),
    )
    return _cart_response(user_id)


@user_router.post("/{user_id}/cart/{product_id}/decrement", response_model=CartResponse)
async def minus_from_cart(user_id: str, product_id: str) -> CartResponse:
    process_serialized(_user_key(user_id), MinusFromCart(user_id=user_id, product_id=product_id))
    return _cart_response(user_id)


@user_router.delete("/{user_id}/cart/{product_id}", response_model=CartResponse)
async def remove_cart_item(user_id: str, product_id: str) -> CartResponse:
    process_serialized(_user_key(user_id), RemoveCartItem(user_id=user_id, product_id=product_id))
    return _cart_response(user_id)


@user_router.delete("/{user_id}/cart", response_model=CartResponse)
async def clear_user_cart(user_id: str) -> CartResponse:
    process_serialized(_user_key(user_id), ClearUserCart(user_id=user_id))
    return _cart_response(user_id)


@user_router.get("/{user_id}/orders", response_model=list[OrderResponse])
async def read_orders(user_id: str) -> list[OrderResponse]:
    return [OrderResponse(**order) for order in get_user_orders(user_id)]


@user_router.post("/{user_id}/orders", status_code=201, response_model=OrderResponse)
async def add_order(user_id: str, body: AddOrderRequest) -> OrderResponse:
    """Place an order from the given lines. The cart is left as it is."""
    command = AddOrder(
        user_id=user_id,
        items=json.dumps([line.model_dump() for line in body.items]),
    )
    order_id = process_serialized(_user_key(user_id), command)
    return OrderResponse(**get_order(order_id))


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/auth", tags=["auth"])

_FAILURE_STATUS = {
    SignInFailure.PROVIDER_TIMEOUT: 503,
    SignInFailure.PROVIDER_REJECTED: 401,
}


def _credentials_response(credentials) -> CredentialsResponse:
    return CredentialsResponse(
        user_id=credentials.user_id,
        access_token=credentials.access_token,
        refresh_token=credentials.refresh_token,
        message=credentials.message,
    )


def _sign_up_google_in_domain(access_token: str):
    with storefront.domain_context():
        return sign_up_google(access_token)


@auth_router.post(
    "/google",
    response_model=CredentialsResponse,
    responses={401: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def google_sign_in(body: GoogleSignInRequest):
    # The provider round trip blocks for up to its timeout, so it runs on a worker thread
    result = await run_in_threadpool(_sign_up_google_in_domain, body.access_token)
    if not result.success:
        return JSONResponse(
            status_code=_FAILURE_STATUS[result.failure],
            content=ErrorResponse(error=result.failure.value, detail=result.failure_reason).model_dump(),
        )

    return _credentials_response(result.credentials)


@auth_router.post(
    "/refresh",
    response_model=CredentialsResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def refresh(body: RefreshCredentialsRequest):
    try:
        credentials = refresh_credentials(body.refresh_token)
    except ValidationError as exc:
        return JSONResponse(
            status_code=401,
            content=ErrorResponse(error="invalid_token", detail=exc.messages).model_dump(),
        )

    return _credentials_response(credentials)
