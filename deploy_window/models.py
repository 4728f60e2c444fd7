"""Data models for deployment windows."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .errors import ValidationError
from .timeutil import format_iso, parse_timestamp


def _clean_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class DeploymentFields:
    """The editable fields of a deployment window, already validated."""
    title: str
    time_ms: int
    team_issuer: str
    issuer_name: str
    crq: str | None = None
    rlm: str | None = None
    mop_link: str | None = None


@dataclass
class DeploymentWindow:
    """A persisted deployment window request."""
    # Identity
    id: int = 0

    # Definition
    title: str = ""
    time_ms: int = 0
    team_issuer: str = ""
    issuer_name: str = ""
    crq: str | None = None
    rlm: str | None = None
    mop_link: str | None = None

    # Timestamps
    created_at_ms: int = field(default_factory=lambda: int(datetime.now().timestamp() * 1000))
    updated_at_ms: int = field(default_factory=lambda: int(datetime.now().timestamp() * 1000))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase JSON wire format."""
        return {
            "id": self.id,
            "title": self.title,
            "time": format_iso(self.time_ms),
            "teamIssuer": self.team_issuer,
            "issuerName": self.issuer_name,
            "crq": self.crq,
            "rlm": self.rlm,
            "mopLink": self.mop_link,
            "createdAt": format_iso(self.created_at_ms),
            "updatedAt": format_iso(self.updated_at_ms),
        }

    def apply(self, fields: DeploymentFields) -> None:
        """Replace all editable fields."""
        self.title = fields.title
        self.time_ms = fields.time_ms
        self.team_issuer = fields.team_issuer
        self.issuer_name = fields.issuer_name
        self.crq = fields.crq
        self.rlm = fields.rlm
        self.mop_link = fields.mop_link


@dataclass
class DeploymentInput:
    """Raw submission for creating or updating a deployment window."""
    title: str | None = None
    time: str | None = None
    team_issuer: str | None = None
    issuer_name: str | None = None
    crq: str | None = None
    rlm: str | None = None
    mop_link: str | None = None

    def validate(self) -> DeploymentFields:
        """Check required fields and normalize the submission.

        Returns:
            Validated fields ready to be stored

        Raises:
            ValidationError: If a required field is missing or blank, or time is malformed
        """
        required = (self.title, self.time, self.team_issuer, self.issuer_name)
        if any(value is None or not value.strip() for value in required):
            raise ValidationError(
                "Missing required fields: Title, Time, Team Issuer, and Issuer Name must not be empty."
            )

        return DeploymentFields(
            title=self.title.strip(),
            time_ms=parse_timestamp(self.time),
            team_issuer=self.team_issuer.strip(),
            issuer_name=self.issuer_name.strip(),
            crq=_clean_optional(self.crq),
            rlm=_clean_optional(self.rlm),
            mop_link=_clean_optional(self.mop_link),
        )
