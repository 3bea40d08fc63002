from sqlalchemy import Column, ForeignKey, DateTime, Integer, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from storefront.db.base import Base


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), index=True, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    # Snapshot of product.price * quantity at creation time
    total_price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    customer = relationship("Customer", back_populates="purchases")
    product = relationship("Product", back_populates="purchases")
