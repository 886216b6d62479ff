from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import Session, delete, or_, select

from marketplace.core.logging import get_logger
from marketplace.core.errors import NotFoundError
from marketplace.core.security import ensure_owner
from marketplace.models.cart import CartItem
from marketplace.models.product import Product, ProductOwner, ProductPublic
from marketplace.models.user import User

logger = get_logger(__name__)


class ProductService:
    def __init__(self, session: Session):
        self.session = session

    def to_public(self, product: Product) -> ProductPublic:
        """Shape a product for output, with its owner populated."""
        public = ProductPublic.model_validate(product)
        owner = self.session.get(User, product.owner_id)
        if owner:
            public.owner = ProductOwner(id=owner.id, username=owner.username)
        return public

    def create_product(self, owner_id: int, data: Dict[str, Any]) -> Product:
        product = Product(**data, owner_id=owner_id)
        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)

        logger.info("Product created", product_id=product.id, owner_id=owner_id)
        return product

    def list_products(
        self,
        q: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Tuple[List[Product], int]:
        """Return one page of matching products and the total match count."""
        filters = []
        if category:
            filters.append(Product.category == category)
        if q:
            filters.append(
                or_(
                    Product.title.icontains(q, autoescape=True),
                    Product.description.icontains(q, autoescape=True),
                )
            )

        total = self.session.exec(select(func.count()).select_from(Product).where(*filters)).one()
        products = self.session.exec(
            select(Product)
            .where(*filters)
            .order_by(Product.id)
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return products, total

    def list_owner_products(self, owner_id: int) -> List[Product]:
        return self.session.exec(
            select(Product).where(Product.owner_id == owner_id).order_by(Product.id)
        ).all()

    def get_product(self, product_id: int) -> Product:
        product = self.session.get(Product, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def update_product(self, product_id: int, user_id: int, data: Dict[str, Any]) -> Product:
        product = self.get_product(product_id)
        ensure_owner(product.owner_id, user_id)

        for key, value in data.items():
            setattr(product, key, value)
        product.updated_at = datetime.now(timezone.utc)

        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        return product

    def delete_product(self, product_id: int, user_id: int) -> None:
        product = self.get_product(product_id)
        ensure_owner(product.owner_id, user_id)

        # Carts may not keep pointing at a product that no longer exists
        self.session.exec(delete(CartItem).where(CartItem.product_id == product_id))
        self.session.delete(product)
        self.session.commit()

        logger.info("Product deleted", product_id=product_id, owner_id=user_id)
