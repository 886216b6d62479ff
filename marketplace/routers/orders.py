from typing import List
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlmodel import Session

from marketplace.db.session import get_session
from marketplace.models.order import OrderPublic
from marketplace.routers.auth import get_current_user_id
from marketplace.routers.params import parse_id
from marketplace.services.order import OrderService

router = APIRouter()
checkout_router = APIRouter()

class OrderResponse(BaseModel):
    order: OrderPublic

class OrderListResponse(BaseModel):
    orders: List[OrderPublic]

def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)

@checkout_router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def checkout(
    current_user_id: int = Depends(get_current_user_id),
    service: OrderService = Depends(get_order_service)
):
    order = service.checkout(current_user_id)
    return OrderResponse(order=service.to_public(order))

@router.get("", response_model=OrderListResponse)
def list_orders(
    current_user_id: int = Depends(get_current_user_id),
    service: OrderService = Depends(get_order_service)
):
    orders = service.get_user_orders(current_user_id)
    return OrderListResponse(orders=[service.to_public(order) for order in orders])

@router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: str,
    current_user_id: int = Depends(get_current_user_id),
    service: OrderService = Depends(get_order_service)
):
    order = service.get_order(parse_id(order_id, "Order not found"), current_user_id)
    return OrderResponse(order=service.to_public(order))
