"""
Product catalog rows owned by the marketplace.

Landing pages are built for a product, but this service never writes to the
products table; it only reads titles, prices and media for rendering.
"""

import uuid

from sqlalchemy import Column, String, Text, Numeric, Boolean, Integer, ForeignKey, text, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from sqlalchemy.orm import relationship

from ..database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    seller_id = Column(UUID(as_uuid=False), nullable=True, index=True)

    title = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2))
    original_price = Column(Numeric(10, 2), nullable=True)
    tags = Column(ARRAY(String), nullable=True)
    categories = Column(ARRAY(String), nullable=True)
    preview_image_url = Column(String, nullable=True)
    product_type = Column(String, nullable=True)
    archived = Column(Boolean, default=False, nullable=False)

    created_at = Column(
        TIMESTAMP(timezone=True),
        server_default=text("timezone('utc', now())"),
        nullable=False
    )

    media = relationship(
        "ProductMedia",
        back_populates="product",
        order_by="ProductMedia.position",
        lazy="selectin",
    )
    landing_pages = relationship("LandingPage", back_populates="product")

    def __repr__(self):
        return f"<Product(id='{self.id}', title='{self.title}')>"


class ProductMedia(Base):
    __tablename__ = "product_media"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(UUID(as_uuid=False), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    media_type = Column(String(16), nullable=False, default="image")  # image, video
    position = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="media")
