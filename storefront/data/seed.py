# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal
from storefront.data.models.product import ProductModel

MENU = [
    ("Margherita", "Salsa de tomate, mozzarella fresca y albahaca", "12.99", "pizzas"),
    ("Napolitana", "Mozzarella, tomate en rodajas, ajo y orégano", "14.50", "pizzas"),
    ("Fugazzeta", "Cebolla, mozzarella y orégano", "13.75", "pizzas"),
    ("Empanada de carne", "Carne cortada a cuchillo", "2.50", "empanadas"),
    ("Gaseosa 1.5L", "Línea Coca-Cola", "3.00", "bebidas"),
]


def seed(db=None):
    own_session = db is None
    if own_session:
        db = SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return
        db.add_all(
            ProductModel(name=n, description=d, price=Decimal(p), image="", category=c)
            for n, d, p, c in MENU
        )
        db.commit()
    finally:
        if own_session:
            db.close()
