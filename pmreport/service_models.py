"""Pydantic models for the service-record payload served by the admin API.

Only the envelope is typed; ``workDetails`` stays a loose mapping because
its field set grows with every checklist revision.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Scalar = str | int | float | None


class SiteInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Scalar = None
    address: Scalar = None
    contactDetails: Scalar = None
    screenNo: Scalar = None


class ProjectorInfo(BaseModel):
    model_config = ConfigDict(extra="allow", protected_namespaces=())

    model: Scalar = None
    serialNo: Scalar = None


class SignatureRefs(BaseModel):
    model_config = ConfigDict(extra="allow")

    engineer: str | None = None
    site: str | None = None
    engineerSignatureUrl: str | None = None
    siteSignatureUrl: str | None = None


class ServiceRecordPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Scalar = None
    cinemaName: Scalar = None
    date: Scalar = None
    address: Scalar = None
    contactDetails: Scalar = None
    location: Scalar = None
    screenNumber: Scalar = None
    engineerName: Scalar = None
    serviceNumber: Scalar = None
    projectorRunningHours: Scalar = None
    remarks: Scalar = None
    site: SiteInfo | None = None
    projector: ProjectorInfo | None = None
    signatures: SignatureRefs | None = None
    workDetails: dict[str, Any] | None = None
    images: list[Any] | None = Field(default=None)
    afterImages: list[Any] | None = Field(default=None)
    brokenImages: list[Any] | None = Field(default=None)

    @classmethod
    def from_response(cls, data: Any) -> ServiceRecordPayload:
        """Validate an API response, unwrapping a ``{"service": {...}}`` envelope."""
        if isinstance(data, dict) and isinstance(data.get("service"), dict):
            data = data["service"]
        return cls.model_validate(data)

    @property
    def work(self) -> dict[str, Any]:
        return self.workDetails or {}

    def has_images(self) -> bool:
        return any(bool(v) for v in (self.images, self.afterImages, self.brokenImages))
