from datetime import timezone

from marketplace.models.cart import Cart
from marketplace.models.order import Order
from marketplace.models.product import Product
from marketplace.models.user import User


def test_timestamps_default_to_aware_utc():
    records = [
        User(email="tz@example.com", username="tz", password_hash="x"),
        Product(title="Clock", category="home", price=1, owner_id=1),
        Cart(user_id=1),
        Order(user_id=1, total=0),
    ]
    for record in records:
        assert record.created_at.tzinfo is timezone.utc


def test_registration_persists_with_aware_timestamps(session, register):
    _, user = register(email="stamp@example.com", username="stamp")

    stored = session.get(User, user["id"])
    assert stored.created_at is not None
    assert stored.updated_at >= stored.created_at
