from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import DeploymentInput


class DeploymentPayload(BaseModel):
    """Create/update request body (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    time: Optional[str] = None
    team_issuer: Optional[str] = Field(default=None, alias="teamIssuer")
    issuer_name: Optional[str] = Field(default=None, alias="issuerName")
    crq: Optional[str] = None
    rlm: Optional[str] = None
    mop_link: Optional[str] = Field(default=None, alias="mopLink")

    def to_input(self) -> DeploymentInput:
        return DeploymentInput(
            title=self.title,
            time=self.time,
            team_issuer=self.team_issuer,
            issuer_name=self.issuer_name,
            crq=self.crq,
            rlm=self.rlm,
            mop_link=self.mop_link,
        )


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
