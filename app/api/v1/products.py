"""Clinic store product endpoints."""

from fastapi import APIRouter, Depends, status

from app.crud.base import StoreContext
from app.crud.catalog import ProductRepository
from app.dependencies import get_optional_user, get_store
from app.models.catalog import Product
from app.schemas.responses import ApiResponse, ListData, WriteData
from app.store.policy import AuthContext

router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_products(
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    products = ProductRepository(store).list(user)
    return ApiResponse.ok(ListData.of(products), "Products retrieved successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: Product,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = ProductRepository(store).create(product, user)
    return ApiResponse.ok(WriteData.from_result(result), f"{product.name} has been added.")


@router.put("/{product_id}", response_model=ApiResponse)
async def replace_product(
    product_id: str,
    product: Product,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    """Overwrite a product entirely (fields not sent are dropped)."""
    result = ProductRepository(store).overwrite(product_id, product, user)
    return ApiResponse.ok(WriteData.from_result(result), f"{product.name} has been updated.")


@router.delete("/{product_id}", response_model=ApiResponse)
async def delete_product(
    product_id: str,
    store: StoreContext = Depends(get_store),
    user: AuthContext = Depends(get_optional_user),
) -> ApiResponse:
    result = ProductRepository(store).delete(product_id, user)
    return ApiResponse.ok(WriteData.from_result(result), "Product deleted.")
