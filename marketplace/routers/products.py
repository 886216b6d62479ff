from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator, model_validator
from sqlmodel import Session

from marketplace.db.session import get_session
from marketplace.models.product import ProductPublic
from marketplace.routers.auth import get_current_user_id
from marketplace.routers.params import MAX_ID, parse_id
from marketplace.services.product import ProductService

router = APIRouter()
my_router = APIRouter()

MAX_LIMIT = 100
# Keeps (page - 1) * limit inside a 64-bit offset
MAX_PAGE = MAX_ID // MAX_LIMIT

http_url = TypeAdapter(HttpUrl)

class ProductCreate(BaseModel):
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(gt=0, strict=True)
    image: Optional[str] = None

    @field_validator("image")
    @classmethod
    def check_image_url(cls, value):
        # Validated as a URL but stored exactly as sent
        if value is not None:
            try:
                http_url.validate_python(value)
            except ValidationError:
                raise ValueError("Input should be a valid URL")
        return value

    def to_fields(self) -> dict:
        return self.model_dump(exclude_none=True)

class ProductUpdate(ProductCreate):
    title: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, gt=0, strict=True)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_dump(exclude_none=True):
            raise ValueError("Provide at least one field to update")
        return self

class ProductResponse(BaseModel):
    product: ProductPublic

class ProductListResponse(BaseModel):
    products: List[ProductPublic]
    total: int
    page: int
    limit: int

class MyProductsResponse(BaseModel):
    products: List[ProductPublic]

class MessageResponse(BaseModel):
    message: str

def get_product_service(session: Session = Depends(get_session)) -> ProductService:
    return ProductService(session)

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: ProductCreate,
    current_user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service)
):
    product = service.create_product(current_user_id, product_in.to_fields())
    return ProductResponse(product=service.to_public(product))

@router.get("", response_model=ProductListResponse)
def read_products(
    q: Optional[str] = None,
    category: Optional[str] = None,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(10, ge=1, le=MAX_LIMIT),
    service: ProductService = Depends(get_product_service)
):
    """Search listings by free text and category, one page at a time."""
    products, total = service.list_products(q=q, category=category, page=page, limit=limit)
    return ProductListResponse(
        products=[service.to_public(product) for product in products],
        total=total,
        page=page,
        limit=limit,
    )

@router.get("/{product_id}", response_model=ProductResponse)
def read_product(product_id: str, service: ProductService = Depends(get_product_service)):
    product = service.get_product(parse_id(product_id, "Product not found"))
    return ProductResponse(product=service.to_public(product))

@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    product_in: ProductUpdate,
    current_user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service)
):
    product = service.update_product(
        parse_id(product_id, "Product not found"), current_user_id, product_in.to_fields()
    )
    return ProductResponse(product=service.to_public(product))

@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    current_user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service)
):
    service.delete_product(parse_id(product_id, "Product not found"), current_user_id)
    return MessageResponse(message="Product deleted")

@my_router.get("/products", response_model=MyProductsResponse)
def read_my_products(
    current_user_id: int = Depends(get_current_user_id),
    service: ProductService = Depends(get_product_service)
):
    """Listings owned by the current user."""
    products = service.list_owner_products(current_user_id)
    return MyProductsResponse(products=[service.to_public(product) for product in products])
