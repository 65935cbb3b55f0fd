"""Exception hierarchy for report rendering and service-record access."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for all pmreport errors."""


class FontEmbedError(ReportError):
    """A font could not be resolved or registered; text cannot be drawn."""


class ReportRenderError(ReportError):
    """The document could not be composed or serialised."""


class ServiceRecordError(ReportError):
    """Base class for service-record store failures."""


class ServiceRecordNotFoundError(ServiceRecordError):
    def __init__(self, service_id: str) -> None:
        super().__init__(f"service record not found: {service_id!r}")
        self.service_id = service_id


class ServiceRecordFetchError(ServiceRecordError):
    """The store was reachable but returned an unusable payload."""
