import uuid

from sqlalchemy import Column, Integer, ForeignKey, text, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from ..database import Base

UTC_NOW = text("timezone('utc', now())")


class LandingPageComponent(Base):
    """
    One section placed on a landing page.

    ``content`` only holds the merchant's overrides; anything missing falls back
    to the variation's ``default_content`` at render time.
    """
    __tablename__ = "landing_page_components"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    page_id = Column(UUID(as_uuid=False), ForeignKey("landing_pages.id", ondelete="CASCADE"), nullable=False, index=True)
    component_variation_id = Column(
        UUID(as_uuid=False),
        ForeignKey("component_variations.id"),
        nullable=False,
    )
    order_index = Column(Integer, nullable=False, default=0)

    content = Column(JSONB, nullable=False, default=dict)
    styles = Column(JSONB, nullable=False, default=dict)
    custom_styles = Column(JSONB, nullable=False, default=dict)
    visibility = Column(JSONB, nullable=False, default=dict)
    media_urls = Column(JSONB, nullable=False, default=dict)
    custom_actions = Column(JSONB, nullable=False, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=UTC_NOW, onupdate=UTC_NOW, nullable=False)

    page = relationship("LandingPage", back_populates="components")
    variation = relationship("ComponentVariation", lazy="selectin")

    def __repr__(self):
        return f"<LandingPageComponent(id='{self.id}', page_id='{self.page_id}', order={self.order_index})>"
