"""
Data Transfer Objects for deployments and the Netlify API.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from landing_builder.core.enums import DeployState, OutputFormat
from .base import BaseSchema


class DeployRequest(BaseModel):
    output_format: OutputFormat = OutputFormat.HTML
    custom_domain: Optional[str] = None


class DeploymentResult(BaseModel):
    """Outcome of one deploy call; failures are reported here, not raised"""
    success: bool
    status: str
    url: Optional[str] = None
    site_id: Optional[str] = None
    deploy_id: Optional[str] = None
    job_id: Optional[str] = None
    output_format: Optional[OutputFormat] = None
    files: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class DeploymentStatus(BaseModel):
    """Stored deployment metadata for a page"""
    page_id: str
    status: str
    is_deployed: bool = False
    netlify_site_id: Optional[str] = None
    deployed_url: Optional[str] = None
    custom_domain: Optional[str] = None
    last_deployed_at: Optional[datetime] = None
    latest_job: Optional["DeploymentJobRead"] = None


class DeployStatusRead(BaseModel):
    deploy_id: str
    state: DeployState
    provider_state: Optional[str] = None
    url: Optional[str] = None
    error_message: Optional[str] = None


class DeploymentJobRead(BaseSchema):
    id: str
    landing_page_id: str
    status: str
    output_format: str
    deploy_id: Optional[str] = None
    site_id: Optional[str] = None
    deploy_url: Optional[str] = None
    provider_state: Optional[str] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class NetlifySite(BaseModel):
    id: str
    name: Optional[str] = None
    url: Optional[str] = None
    ssl_url: Optional[str] = None
    admin_url: Optional[str] = None
    custom_domain: Optional[str] = None

    @property
    def public_url(self) -> Optional[str]:
        return self.ssl_url or self.url


class NetlifyDeployment(BaseModel):
    id: str
    site_id: Optional[str] = None
    state: str = "new"
    required: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    ssl_url: Optional[str] = None
    deploy_ssl_url: Optional[str] = None
    error_message: Optional[str] = None

    @field_validator("required", mode="before")
    @classmethod
    def none_means_nothing_required(cls, v):
        return v or []

    @property
    def normalized_state(self) -> DeployState:
        return DeployState.from_netlify(self.state)


class RenderedSite(BaseModel):
    """Files produced by a render strategy, keyed by site-relative path"""
    output_format: OutputFormat
    files: Dict[str, str]

    @property
    def paths(self) -> List[str]:
        return sorted(self.files)


DeploymentStatus.model_rebuild()
