from sqlalchemy import Column, String, Integer, Boolean, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB, ARRAY
import uuid

from ..database import Base


class ComponentVariation(Base):
    """
    Catalog entry describing one layout of a section type.

    Reference data seeded by migration; the application treats it as read-only.
    """
    __tablename__ = "component_variations"
    __table_args__ = (
        UniqueConstraint("component_type", "variation_number", name="uq_component_variation_type_number"),
    )

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    component_type = Column(String(32), nullable=False, index=True)
    variation_name = Column(String, nullable=False)
    variation_number = Column(Integer, nullable=False)
    display_name = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    available_parts = Column(ARRAY(String), nullable=False, default=list)
    default_content = Column(JSONB, nullable=False, default=dict)
    character_limits = Column(JSONB, nullable=False, default=dict)
    required_images = Column(Integer, nullable=False, default=0)
    supports_video = Column(Boolean, nullable=False, default=False)
    layout_type = Column(String(32), nullable=True)  # centered, split, grid, ...
    button_actions = Column(JSONB, nullable=False, default=dict)
    visibility_keys = Column(JSONB, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<ComponentVariation({self.component_type} #{self.variation_number} '{self.variation_name}')>"
