import uuid

from sqlalchemy import Column, String, Text, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from landing_builder.core.enums import DeploymentJobStatus


class DeploymentJob(Base):
    """
    Local record of one hosting-provider deploy attempt.
    """

    __tablename__ = "deployment_jobs"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    landing_page_id = Column(
        UUID(as_uuid=False),
        ForeignKey("landing_pages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(32), nullable=False, default=DeploymentJobStatus.PENDING.value, index=True)  # pending, in_progress, completed, failed
    output_format = Column(String(32), nullable=False, default="html")

    deploy_id = Column(String, nullable=True, index=True)
    site_id = Column(String, nullable=True)
    deploy_url = Column(String, nullable=True)
    provider_state = Column(String(32), nullable=True)
    error_message = Column(Text, nullable=True)
    job_data = Column(JSONB, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    landing_page = relationship("LandingPage", back_populates="deployment_jobs")

    def __repr__(self) -> str:
        return f"<DeploymentJob(id={self.id}, page={self.landing_page_id}, status={self.status})>"
