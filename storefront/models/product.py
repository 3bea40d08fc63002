from sqlalchemy import Column, String, Numeric, DateTime, Integer, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from storefront.db.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, index=True, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    region = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    purchases = relationship("Purchase", back_populates="product")
