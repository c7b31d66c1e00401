import uuid

from sqlalchemy import Column, String, ForeignKey, text, TIMESTAMP
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship

from ..database import Base
from landing_builder.core.enums import PageStatus

UTC_NOW = text("timezone('utc', now())")

DEFAULT_THEME = {
    "primaryColor": "#3b82f6",
    "secondaryColor": "#1f2937",
    "backgroundColor": "#ffffff",
    "fontFamily": "Inter",
    "direction": "ltr",
    "language": "en",
}


class LandingPage(Base):
    """
    A merchant's landing page for one product.

    Rows are never hard-deleted. Deployment metadata (netlify_site_id,
    deployed_url, last_deployed_at) is only written after a successful upload.
    """
    __tablename__ = "landing_pages"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(UUID(as_uuid=False), ForeignKey("products.id"), nullable=True, index=True)
    user_id = Column(UUID(as_uuid=False), nullable=True, index=True)

    slug = Column(String, unique=True, nullable=False)
    custom_domain = Column(String, nullable=True)
    language = Column(String(8), nullable=False, default="en")
    status = Column(String(16), nullable=False, default=PageStatus.DRAFT.value, index=True)

    # Hosting
    netlify_site_id = Column(String, nullable=True)
    deployed_url = Column(String, nullable=True)
    last_deployed_at = Column(TIMESTAMP(timezone=True), nullable=True)

    # JSONB settings blobs
    global_theme = Column(JSONB, nullable=False, default=lambda: dict(DEFAULT_THEME))
    seo_config = Column(JSONB, nullable=False, default=dict)
    tracking_config = Column(JSONB, nullable=False, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), server_default=UTC_NOW, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=UTC_NOW, onupdate=UTC_NOW, nullable=False)

    product = relationship("Product", back_populates="landing_pages", lazy="selectin")
    components = relationship(
        "LandingPageComponent",
        back_populates="page",
        order_by="LandingPageComponent.order_index",
        cascade="all, delete-orphan",
    )
    deployment_jobs = relationship(
        "DeploymentJob",
        back_populates="landing_page",
        order_by="desc(DeploymentJob.created_at)",
    )

    @property
    def theme(self) -> dict:
        """Stored theme layered over the defaults."""
        return {**DEFAULT_THEME, **(self.global_theme or {})}

    @property
    def is_deployed(self) -> bool:
        return bool(self.netlify_site_id and self.deployed_url)

    def __repr__(self):
        return f"<LandingPage(id='{self.id}', slug='{self.slug}', status='{self.status}')>"
