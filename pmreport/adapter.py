"""Report data adapter: service-record payload -> :class:`ReportRecord`.

The admin API stores each checklist answer as a flat ``<field>`` /
``<field>Note`` pair inside ``workDetails``.  This module translates that
shape into the renderer's grouped model and nothing else: no rendering,
no persistence.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from .errors import ServiceRecordFetchError
from .report.formatting import convert_service_visit_to_text
from .report.report_data import (
    AirPollution,
    ColorReading,
    Electronics,
    ImageEvaluation,
    LightEngineTest,
    McgdData,
    Mechanical,
    Opticals,
    RecommendedPart,
    ReportRecord,
    ScreenDims,
    ScreenInfo,
    StatusItem,
    VoltageParams,
)
from .service_models import ServiceRecordPayload
from .service_store import ServiceRecordStore

LOGGER = logging.getLogger(__name__)

# Legacy rows sometimes carry "<status> - <note>" in the status column.
VALID_STATUS_PREFIXES = (
    "OK",
    "YES",
    "Concern",
    "Working",
    "Not Working",
    "Not Available",
    "Removed",
    "Not removed",
    "OK (Part is Ok)",
    "YES (Needs Replacement)",
    "true",
    "false",
)

IMAGES_PATH = "/admin/services/{service_id}/images"


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _s(value: Any) -> str:
    """Stringify a payload scalar; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sanitize_status_value(value: str | None) -> str | None:
    """Strip a note that was appended to a status as ``"<status> - <note>"``.

    Only applies when the part before the separator starts with a known
    status; anything else is returned unchanged.
    """
    if not value or not isinstance(value, str):
        return value
    status_part, sep, _ = value.partition(" - ")
    if not sep:
        return value
    status_part = status_part.strip()
    if any(status_part.startswith(prefix) for prefix in VALID_STATUS_PREFIXES):
        return status_part
    return value


def map_status(value: Any, note: Any = None) -> StatusItem:
    """Build a checklist answer from a stored value and its note column.

    ``"YES (Needs Replacement)"`` becomes yes/no ``"YES"``; the note is the
    free-text status.
    """
    clean = sanitize_status_value(_s(value)) if value else ""
    return StatusItem(
        status=_s(note) if note else "",
        yes_no=clean.split("(", 1)[0].strip() if clean else "",
    )


def format_report_date(value: Any) -> str:
    """Render ISO dates as ``DD/MM/YYYY``; other text passes through."""
    text = _s(value).strip()
    if not text:
        return ""
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text
    return parsed.strftime("%d/%m/%Y")


def service_visit_label(engineer_name: Any, service_number: Any) -> str:
    if engineer_name:
        return f"{_s(engineer_name)} - {convert_service_visit_to_text(service_number)}"
    return _s(service_number)


def _reading(work: Mapping[str, Any], prefix: str) -> ColorReading:
    return ColorReading(
        fl=_s(work.get(f"{prefix}fl")),
        x=_s(work.get(f"{prefix}x")),
        y=_s(work.get(f"{prefix}y")),
    )


def _reading_2k(work: Mapping[str, Any], prefix_2k: str, prefix_4k: str) -> ColorReading:
    """2K reading, or the 4K one when no 2K value was recorded."""
    reading = _reading(work, prefix_2k)
    if reading.is_blank:
        return _reading(work, prefix_4k)
    return reading


def images_link(
    payload: ServiceRecordPayload, service_id: str, images_base_url: str = ""
) -> str | None:
    explicit = _s(payload.work.get("photosDriveLink")).strip()
    if explicit:
        return explicit
    if not payload.has_images():
        return None
    path = IMAGES_PATH.format(service_id=service_id)
    base = images_base_url.rstrip("/")
    return f"{base}{path}" if base else path


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def _status(work: Mapping[str, Any], key: str, note_key: str | None = None) -> StatusItem:
    return map_status(work.get(key), work.get(note_key or f"{key}Note"))


def _opticals(work: Mapping[str, Any]) -> Opticals:
    return Opticals(
        reflector=_status(work, "reflector"),
        uv_filter=_status(work, "uvFilter"),
        integrator_rod=_status(work, "integratorRod"),
        cold_mirror=_status(work, "coldMirror"),
        fold_mirror=_status(work, "foldMirror"),
    )


def _electronics(work: Mapping[str, Any]) -> Electronics:
    return Electronics(
        touch_panel=_status(work, "touchPanel"),
        evb_board=_status(work, "evbBoard"),
        imcb_board=_status(work, "ImcbBoard"),
        pib_board=_status(work, "pibBoard"),
        icp_board=_status(work, "IcpBoard"),
        imbs_board=_status(work, "imbSBoard"),
    )


def _light_engine(work: Mapping[str, Any]) -> LightEngineTest:
    return LightEngineTest(
        white=_status(work, "lightEngineWhite"),
        red=_status(work, "lightEngineRed"),
        green=_status(work, "lightEngineGreen"),
        blue=_status(work, "lightEngineBlue"),
        black=_status(work, "lightEngineBlack"),
    )


def _mechanical(work: Mapping[str, Any]) -> Mechanical:
    exhaust = work.get("exhaustCfm")
    return Mechanical(
        ac_blower=_status(work, "acBlowerVane"),
        extractor=_status(work, "extractorVane"),
        # Exhaust CFM is a measured value, not a yes/no answer.
        exhaust_cfm=StatusItem(
            status=_s(exhaust) if exhaust else "", yes_no="OK" if exhaust else ""
        ),
        light_engine_fans=_status(work, "lightEngineFans"),
        card_cage_fans=_status(work, "cardCageFans"),
        radiator_fan=_status(work, "radiatorFanPump"),
        connector_hose=_status(work, "pumpConnectorHose"),
        security_lock=_status(work, "securityLampHouseLock"),
    )


def _image_evaluation(work: Mapping[str, Any]) -> ImageEvaluation:
    return ImageEvaluation(
        focus_boresight=_status(work, "focusBoresight"),
        integrator_position=_status(work, "integratorPosition"),
        spot_on_screen=_status(work, "spotsOnScreen"),
        screen_cropping=_status(work, "screenCroppingOk", "screenCroppingNote"),
        convergence=_status(work, "convergenceOk", "convergenceNote"),
        channels_checked=_status(work, "channelsCheckedOk", "channelsCheckedNote"),
        pixel_defects=_status(work, "pixelDefects"),
        image_vibration=_status(work, "imageVibration"),
        lite_loc=_status(work, "liteloc"),
    )


def _mcgd(work: Mapping[str, Any]) -> McgdData:
    kwargs = {}
    for colour in ("white", "red", "green", "blue"):
        kwargs[f"{colour}_2k"] = _reading_2k(work, f"{colour}2K", f"{colour}4K")
        kwargs[f"{colour}_4k"] = _reading(work, f"{colour}4K")
    return McgdData(**kwargs)


def _screen_info(work: Mapping[str, Any]) -> ScreenInfo:
    gain = _s(work.get("screenGain"))
    return ScreenInfo(
        scope=ScreenDims(
            height=_s(work.get("screenHeight")), width=_s(work.get("screenWidth")), gain=gain
        ),
        flat=ScreenDims(
            height=_s(work.get("flatHeight")), width=_s(work.get("flatWidth")), gain=gain
        ),
        make=_s(work.get("screenMake")),
    )


def _air_pollution(work: Mapping[str, Any]) -> AirPollution:
    return AirPollution(
        level=_s(work.get("airPollutionLevel")),
        hcho=_s(work.get("hcho")),
        tvoc=_s(work.get("tvoc")),
        pm1=_s(work.get("pm1")),
        pm25=_s(work.get("pm2_5")),
        pm10=_s(work.get("pm10")),
        temperature=_s(work.get("temperature")),
        humidity=_s(work.get("humidity")),
    )


def _parts(work: Mapping[str, Any]) -> tuple[RecommendedPart, ...]:
    raw = work.get("recommendedParts")
    if not isinstance(raw, list):
        return ()
    return tuple(RecommendedPart.from_dict(p) for p in raw if isinstance(p, Mapping))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def record_from_payload(
    payload: ServiceRecordPayload, service_id: str = "", *, images_base_url: str = ""
) -> ReportRecord:
    work = payload.work
    site = payload.site
    projector = payload.projector
    signatures = payload.signatures
    service_id = service_id or _s(payload.id)

    def first(*values: Any) -> str:
        for value in values:
            if value:
                return _s(value)
        return ""

    return ReportRecord(
        cinema_name=first(payload.cinemaName, site and site.name),
        date=format_report_date(payload.date),
        address=first(payload.address, site and site.address),
        contact_details=first(payload.contactDetails, site and site.contactDetails),
        location=_s(payload.location),
        screen_no=first(payload.screenNumber, site and site.screenNo),
        service_visit=service_visit_label(payload.engineerName, payload.serviceNumber),
        projector_model=first(projector and projector.model),
        serial_no=first(projector and projector.serialNo),
        running_hours=_s(payload.projectorRunningHours),
        projector_environment=first(work.get("projectorPlacementEnvironment")) or None,
        start_time=first(work.get("startTime")) or None,
        end_time=first(work.get("endTime")) or None,
        opticals=_opticals(work),
        electronics=_electronics(work),
        serial_verified=_status(work, "serialNumberVerified"),
        disposable_consumables=_status(work, "AirIntakeLadRad"),
        coolant=_status(work, "coolantLevelColor"),
        light_engine_test=_light_engine(work),
        mechanical=_mechanical(work),
        lamp_loc=_status(work, "lampLocMechanism"),
        lamp_make=_s(work.get("lampMakeModel")),
        lamp_hours=_s(work.get("lampTotalRunningHours")),
        current_lamp_hours=_s(work.get("lampCurrentRunningHours")),
        voltage_params=VoltageParams(
            pvn=_s(work.get("pvVsN")), pve=_s(work.get("pvVsE")), nve=_s(work.get("nvVsE"))
        ),
        fl_before=_s(work.get("flLeft")),
        fl_after=_s(work.get("flRight")),
        content_player=_s(work.get("contentPlayerModel")),
        ac_status=_s(work.get("acStatus")),
        le_status=StatusItem(
            status=first(work.get("leStatus")), note=first(work.get("leStatusNote")) or None
        ),
        remarks=_s(payload.remarks),
        le_serial_no=_s(work.get("lightEngineSerialNumber")),
        software_version=_s(work.get("softwareVersion")),
        screen_info=_screen_info(work),
        throw_distance=_s(work.get("throwDistance")),
        mcgd=_mcgd(work),
        cie_xyz_2k=_reading_2k(work, "BW_Step_10_2K", "BW_Step_10_4K"),
        cie_xyz_4k=_reading(work, "BW_Step_10_4K"),
        image_evaluation=_image_evaluation(work),
        air_pollution=_air_pollution(work),
        recommended_parts=_parts(work),
        report_generated=True,
        engineer_signature_url=first(
            signatures and signatures.engineer, signatures and signatures.engineerSignatureUrl
        )
        or None,
        site_signature_url=first(
            signatures and signatures.site, signatures and signatures.siteSignatureUrl
        )
        or None,
        images_link=images_link(payload, service_id, images_base_url),
    )


def record_from_raw(
    data: Any, service_id: str = "", *, images_base_url: str = ""
) -> ReportRecord:
    """Validate a raw API response and map it."""
    try:
        payload = ServiceRecordPayload.from_response(data)
    except ValidationError as exc:
        raise ServiceRecordFetchError(f"malformed service record: {exc}") from exc
    return record_from_payload(payload, service_id, images_base_url=images_base_url)


def build_report_record(
    service_id: str, store: ServiceRecordStore, *, images_base_url: str = ""
) -> ReportRecord:
    """Fetch *service_id* from *store* and map it to a :class:`ReportRecord`.

    Store errors propagate unchanged.
    """
    raw = store.fetch(service_id)
    record = record_from_raw(raw, service_id, images_base_url=images_base_url)
    LOGGER.info("Mapped service record %s (%s)", service_id, record.cinema_name or "unnamed site")
    return record
