from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from marketplace.core.config import settings
from marketplace.core.errors import register_exception_handlers
from marketplace.core.logging import configure_logging, get_logger
from marketplace.db.session import create_db_and_tables

# Import models to ensure they are registered with SQLModel metadata
from marketplace.models.user import User
from marketplace.models.product import Product
from marketplace.models.cart import Cart, CartItem
from marketplace.models.order import Order, OrderItem

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    create_db_and_tables()
    logger.info("Marketplace API started", environment=settings.ENVIRONMENT)
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="API for a small marketplace: listings, carts and orders"
)

register_exception_handlers(app)

@app.get("/check")
def check():
    return {"status": "ok"}

from marketplace.routers import auth, users, products, cart, orders

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(products.my_router, prefix="/api/my", tags=["products"])
app.include_router(cart.router, prefix="/api/cart", tags=["cart"])
app.include_router(orders.checkout_router, prefix="/api/checkout", tags=["orders"])
app.include_router(orders.router, prefix="/api/orders", tags=["orders"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
