from sqlalchemy import Boolean, CheckConstraint, Column, Integer, Numeric, String, true

from .database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)  # float out, exact in the DB
    availability = Column(Boolean, nullable=False, default=True, server_default=true())

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_pos"),
        CheckConstraint("name <> ''", name="ck_products_name_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} price={self.price} availability={self.availability}>"
