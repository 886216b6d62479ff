from sqlmodel import Session, select
from marketplace.core.security import get_password_hash
from marketplace.db.session import engine, create_db_and_tables
from marketplace.models.product import Product
from marketplace.models.user import User

SELLER_EMAIL = "seller@example.com"

def seed_products():
    print("Creating database and tables...")
    create_db_and_tables()
    
    with Session(engine) as session:
        # Check if products already exist to avoid duplicates
        existing_products = session.exec(select(Product)).all()
        if existing_products:
            print(f"Database already contains {len(existing_products)} products. Skipping seed.")
            return

        seller = session.exec(select(User).where(User.email == SELLER_EMAIL)).first()
        if not seller:
            print("Creating demo seller...")
            seller = User(
                email=SELLER_EMAIL,
                username="demo.seller",
                password_hash=get_password_hash("ChangeMe123!"),
            )
            session.add(seller)
            session.commit()
            session.refresh(seller)

        print("Seeding initial products...")
        products = [
            Product(
                title="Vintage Film Camera",
                category="electronics",
                description="35mm rangefinder in working condition, light seals replaced last year.",
                price=120.00,
                image="https://example.com/images/camera.jpg",
                owner_id=seller.id
            ),
            Product(
                title="Oak Bookshelf",
                category="furniture",
                description="Five shelves, solid oak, minor scratches on the left side.",
                price=85.00,
                owner_id=seller.id
            ),
            Product(
                title="Road Bike Helmet",
                category="sports",
                description="Size M, worn a handful of times.",
                price=30.00,
                owner_id=seller.id
            ),
            Product(
                title="Cast Iron Skillet",
                category="kitchen",
                description="Pre-seasoned 12 inch skillet.",
                price=25.00,
                owner_id=seller.id
            ),
            Product(
                title="Mechanical Keyboard",
                category="electronics",
                description="Tenkeyless layout with brown switches.",
                price=60.00,
                owner_id=seller.id
            )
        ]

        for product in products:
            session.add(product)
        
        session.commit()
        print(f"Successfully seeded {len(products)} products!")

if __name__ == "__main__":
    seed_products()
