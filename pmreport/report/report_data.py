"""Input data model for the maintenance report PDF.

A :class:`ReportRecord` is built once per render, either from a fixture or
by :mod:`pmreport.adapter`, and is read-only afterwards.  Every field is
optional in practice: missing values are empty strings so the renderer is
total over sparse records.

``from_dict`` accepts the camelCase keys used by the web client payloads
as well as the snake_case attribute names.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _pick(data: object, *keys: str) -> Any:
    """Return the first non-None value found under *keys*."""
    if not isinstance(data, Mapping):
        return None
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _opt_text(value: object) -> str | None:
    text = _text(value).strip()
    return text or None


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatusItem:
    """One checklist answer: free-text status plus a short yes/no code."""

    status: str = ""
    yes_no: str = ""
    note: str | None = None

    @classmethod
    def from_dict(cls, data: object) -> StatusItem:
        if isinstance(data, StatusItem):
            return data
        if isinstance(data, str):
            return cls(yes_no=data)
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            status=_text(data.get("status")),
            yes_no=_text(_pick(data, "yesNo", "yes_no")),
            note=_opt_text(_pick(data, "note", "remarks")),
        )


@dataclass(frozen=True)
class ColorReading:
    fl: str = ""
    x: str = ""
    y: str = ""

    @classmethod
    def from_dict(cls, data: object) -> ColorReading:
        data = _mapping(data)
        return cls(fl=_text(data.get("fl")), x=_text(data.get("x")), y=_text(data.get("y")))

    @property
    def is_blank(self) -> bool:
        return not (self.fl.strip() or self.x.strip() or self.y.strip())


@dataclass(frozen=True)
class RecommendedPart:
    part_number: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: object) -> RecommendedPart:
        data = _mapping(data)
        return cls(
            part_number=_text(_pick(data, "partNumber", "part_number")),
            description=_text(_pick(data, "description", "name")),
        )


@dataclass(frozen=True)
class IssueNote:
    label: str = ""
    note: str = ""

    @classmethod
    def from_dict(cls, data: object) -> IssueNote:
        data = _mapping(data)
        return cls(label=_text(data.get("label")), note=_text(data.get("note")))


@dataclass(frozen=True)
class DetectedIssue:
    label: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: object) -> DetectedIssue:
        data = _mapping(data)
        return cls(label=_text(data.get("label")), value=_text(data.get("value")))


# ---------------------------------------------------------------------------
# Checklist groups
# ---------------------------------------------------------------------------


class _StatusGroup:
    """Mixin for frozen dataclasses whose fields are all :class:`StatusItem`.

    ``_KEYS`` maps each attribute to the payload keys it may arrive under.
    """

    _KEYS: ClassVar[dict[str, tuple[str, ...]]] = {}

    @classmethod
    def from_dict(cls, data: object):  # type: ignore[no-untyped-def]
        kwargs = {}
        for f in fields(cls):  # type: ignore[arg-type]
            keys = cls._KEYS.get(f.name, ()) + (f.name,)
            kwargs[f.name] = StatusItem.from_dict(_pick(data, *keys))
        return cls(**kwargs)

    def items(self) -> list[StatusItem]:
        return [getattr(self, f.name) for f in fields(self)]  # type: ignore[arg-type]


@dataclass(frozen=True)
class Opticals(_StatusGroup):
    _KEYS: ClassVar[dict[str, tuple[str, ...]]] = {
        "uv_filter": ("uvFilter",),
        "integrator_rod": ("integratorRod",),
        "cold_mirror": ("coldMirror",),
        "fold_mirror": ("foldMirror",),
    }

    reflector: StatusItem = field(default_factory=StatusItem)
    uv_filter: StatusItem = field(default_factory=StatusItem)
    integrator_rod: StatusItem = field(default_factory=StatusItem)
    cold_mirror: StatusItem = field(default_factory=StatusItem)
    fold_mirror: StatusItem = field(default_factory=StatusItem)


@dataclass(frozen=True)
class Electronics(_StatusGroup):
    _KEYS: ClassVar[dict[str, tuple[str, ...]]] = {
        "touch_panel": ("touchPanel",),
        "evb_board": ("evbBoard",),
        "imcb_board": ("ImcbBoard", "imcbBoard"),
        "pib_board": ("pibBoard",),
        "icp_board": ("IcpBoard", "icpBoard"),
        "imbs_board": ("imbSBoard", "imbsBoard"),
    }

    touch_panel: StatusItem = field(default_factory=StatusItem)
    evb_board: StatusItem = field(default_factory=StatusItem)
    imcb_board: StatusItem = field(default_factory=StatusItem)
    pib_board: StatusItem = field(default_factory=StatusItem)
    icp_board: StatusItem = field(default_factory=StatusItem)
    imbs_board: StatusItem = field(default_factory=StatusItem)


@dataclass(frozen=True)
class LightEngineTest(_StatusGroup):
    white: StatusItem = field(default_factory=StatusItem)
    red: StatusItem = field(default_factory=StatusItem)
    green: StatusItem = field(default_factory=StatusItem)
    blue: StatusItem = field(default_factory=StatusItem)
    black: StatusItem = field(default_factory=StatusItem)


@dataclass(frozen=True)
class Mechanical(_StatusGroup):
    _KEYS: ClassVar[dict[str, tuple[str, ...]]] = {
        "ac_blower": ("acBlower",),
        "exhaust_cfm": ("exhaustCFM", "exhaustCfm"),
        "light_engine_fans": ("lightEngine4Fans",),
        "card_cage_fans": ("cardCageFans",),
        "radiator_fan": ("radiatorFan",),
        "connector_hose": ("connectorHose",),
        "security_lock": ("securityLock",),
    }

    ac_blower: StatusItem = field(default_factory=StatusItem)
    extractor: StatusItem = field(default_factory=StatusItem)
    exhaust_cfm: StatusItem = field(default_factory=StatusItem)
    light_engine_fans: StatusItem = field(default_factory=StatusItem)
    card_cage_fans: StatusItem = field(default_factory=StatusItem)
    radiator_fan: StatusItem = field(default_factory=StatusItem)
    connector_hose: StatusItem = field(default_factory=StatusItem)
    security_lock: StatusItem = field(default_factory=StatusItem)


@dataclass(frozen=True)
class ImageEvaluation(_StatusGroup):
    _KEYS: ClassVar[dict[str, tuple[str, ...]]] = {
        "focus_boresight": ("focusBoresite", "focusBoresight"),
        "integrator_position": ("integratorPosition",),
        "spot_on_screen": ("spotOnScreen",),
        "screen_cropping": ("screenCropping",),
        "channels_checked": ("channelsChecked",),
        "pixel_defects": ("pixelDefects",),
        "image_vibration": ("imageVibration",),
        "lite_loc": ("liteLOC", "liteloc"),
    }

    focus_boresight: StatusItem = field(default_factory=StatusItem)
    integrator_position: StatusItem = field(default_factory=StatusItem)
    spot_on_screen: StatusItem = field(default_factory=StatusItem)
    screen_cropping: StatusItem = field(default_factory=StatusItem)
    convergence: StatusItem = field(default_factory=StatusItem)
    channels_checked: StatusItem = field(default_factory=StatusItem)
    pixel_defects: StatusItem = field(default_factory=StatusItem)
    image_vibration: StatusItem = field(default_factory=StatusItem)
    lite_loc: StatusItem = field(default_factory=StatusItem)


# ---------------------------------------------------------------------------
# Measurement groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VoltageParams:
    pvn: str = ""
    pve: str = ""
    nve: str = ""

    @classmethod
    def from_dict(cls, data: object) -> VoltageParams:
        data = _mapping(data)
        return cls(
            pvn=_text(data.get("pvn")),
            pve=_text(data.get("pve")),
            nve=_text(data.get("nve")),
        )


@dataclass(frozen=True)
class McgdData:
    white_2k: ColorReading = field(default_factory=ColorReading)
    white_4k: ColorReading = field(default_factory=ColorReading)
    red_2k: ColorReading = field(default_factory=ColorReading)
    red_4k: ColorReading = field(default_factory=ColorReading)
    green_2k: ColorReading = field(default_factory=ColorReading)
    green_4k: ColorReading = field(default_factory=ColorReading)
    blue_2k: ColorReading = field(default_factory=ColorReading)
    blue_4k: ColorReading = field(default_factory=ColorReading)

    @classmethod
    def from_dict(cls, data: object) -> McgdData:
        kwargs = {}
        for f in fields(cls):
            colour, res = f.name.split("_")
            kwargs[f.name] = ColorReading.from_dict(_pick(data, f"{colour}{res.upper()}", f.name))
        return cls(**kwargs)


@dataclass(frozen=True)
class ScreenDims:
    height: str = ""
    width: str = ""
    gain: str = ""

    @classmethod
    def from_dict(cls, data: object) -> ScreenDims:
        data = _mapping(data)
        return cls(
            height=_text(data.get("height")),
            width=_text(data.get("width")),
            gain=_text(data.get("gain")),
        )


@dataclass(frozen=True)
class ScreenInfo:
    scope: ScreenDims = field(default_factory=ScreenDims)
    flat: ScreenDims = field(default_factory=ScreenDims)
    make: str = ""

    @classmethod
    def from_dict(cls, data: object) -> ScreenInfo:
        data = _mapping(data)
        return cls(
            scope=ScreenDims.from_dict(data.get("scope")),
            flat=ScreenDims.from_dict(data.get("flat")),
            make=_text(data.get("make")),
        )


@dataclass(frozen=True)
class AirPollution:
    level: str = ""
    hcho: str = ""
    tvoc: str = ""
    pm1: str = ""
    pm25: str = ""
    pm10: str = ""
    temperature: str = ""
    humidity: str = ""

    @classmethod
    def from_dict(cls, data: object) -> AirPollution:
        return cls(
            level=_text(_pick(data, "airPollutionLevel", "level")),
            hcho=_text(_pick(data, "hcho")),
            tvoc=_text(_pick(data, "tvoc")),
            # Legacy payloads carry PM1.0 under "pm100".
            pm1=_text(_pick(data, "pm100", "pm1")),
            pm25=_text(_pick(data, "pm25", "pm2_5")),
            pm10=_text(_pick(data, "pm10")),
            temperature=_text(_pick(data, "temperature")),
            humidity=_text(_pick(data, "humidity")),
        )


# ---------------------------------------------------------------------------
# Report record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReportRecord:
    # Identity / header
    cinema_name: str = ""
    date: str = ""
    address: str = ""
    contact_details: str = ""
    location: str = ""
    screen_no: str = ""
    service_visit: str = ""
    projector_model: str = ""
    serial_no: str = ""
    running_hours: str = ""
    projector_environment: str | None = None
    start_time: str | None = None
    end_time: str | None = None

    # Checklists
    opticals: Opticals = field(default_factory=Opticals)
    electronics: Electronics = field(default_factory=Electronics)
    serial_verified: StatusItem = field(default_factory=StatusItem)
    disposable_consumables: StatusItem = field(default_factory=StatusItem)
    coolant: StatusItem = field(default_factory=StatusItem)
    light_engine_test: LightEngineTest = field(default_factory=LightEngineTest)
    mechanical: Mechanical = field(default_factory=Mechanical)
    lamp_loc: StatusItem = field(default_factory=StatusItem)

    # Page-2 measurements
    lamp_make: str = ""
    lamp_hours: str = ""
    current_lamp_hours: str = ""
    voltage_params: VoltageParams = field(default_factory=VoltageParams)
    fl_before: str = ""
    fl_after: str = ""
    content_player: str = ""
    ac_status: str = ""
    le_status: StatusItem = field(default_factory=StatusItem)
    remarks: str = ""
    le_serial_no: str = ""
    software_version: str = ""
    screen_info: ScreenInfo = field(default_factory=ScreenInfo)
    throw_distance: str = ""
    mcgd: McgdData = field(default_factory=McgdData)
    cie_xyz_2k: ColorReading = field(default_factory=ColorReading)
    cie_xyz_4k: ColorReading = field(default_factory=ColorReading)
    image_evaluation: ImageEvaluation = field(default_factory=ImageEvaluation)
    air_pollution: AirPollution = field(default_factory=AirPollution)

    # Variable-length collections
    recommended_parts: tuple[RecommendedPart, ...] = ()
    issue_notes: tuple[IssueNote, ...] = ()
    detected_issues: tuple[DetectedIssue, ...] = ()

    # References
    report_generated: bool = False
    report_url: str | None = None
    engineer_signature_url: str | None = None
    site_signature_url: str | None = None
    images_link: str | None = None

    @classmethod
    def from_dict(cls, data: object) -> ReportRecord:
        """Build a record from a camelCase (or snake_case) mapping."""
        d = _mapping(data)

        def text(*keys: str) -> str:
            return _text(_pick(d, *keys))

        def opt(*keys: str) -> str | None:
            return _opt_text(_pick(d, *keys))

        def seq(*keys: str) -> list[Any]:
            value = _pick(d, *keys)
            return list(value) if isinstance(value, (list, tuple)) else []

        return cls(
            cinema_name=text("cinemaName", "cinema_name"),
            date=text("date"),
            address=text("address"),
            contact_details=text("contactDetails", "contact_details"),
            location=text("location"),
            screen_no=text("screenNo", "screen_no"),
            service_visit=text("serviceVisit", "service_visit"),
            projector_model=text("projectorModel", "projector_model"),
            serial_no=text("serialNo", "serial_no"),
            running_hours=text("runningHours", "running_hours"),
            projector_environment=opt("projectorEnvironment", "projector_environment"),
            start_time=opt("startTime", "start_time"),
            end_time=opt("endTime", "end_time"),
            opticals=Opticals.from_dict(_pick(d, "opticals")),
            electronics=Electronics.from_dict(_pick(d, "electronics")),
            serial_verified=StatusItem.from_dict(_pick(d, "serialVerified", "serial_verified")),
            disposable_consumables=StatusItem.from_dict(
                _pick(d, "AirIntakeLadRad", "disposableConsumables", "disposable_consumables")
            ),
            coolant=StatusItem.from_dict(_pick(d, "coolant")),
            light_engine_test=LightEngineTest.from_dict(
                _pick(d, "lightEngineTest", "light_engine_test")
            ),
            mechanical=Mechanical.from_dict(_pick(d, "mechanical")),
            lamp_loc=StatusItem.from_dict(_pick(d, "lampLOC", "lamp_loc")),
            lamp_make=text("lampMake", "lamp_make"),
            lamp_hours=text("lampHours", "lamp_hours"),
            current_lamp_hours=text("currentLampHours", "current_lamp_hours"),
            voltage_params=VoltageParams.from_dict(_pick(d, "voltageParams", "voltage_params")),
            fl_before=text("flBefore", "fl_before"),
            fl_after=text("flAfter", "fl_after"),
            content_player=text("contentPlayer", "content_player"),
            ac_status=text("acStatus", "ac_status"),
            le_status=_le_status(_pick(d, "leStatus", "le_status")),
            remarks=text("remarks"),
            le_serial_no=text("leSerialNo", "le_serial_no"),
            software_version=text("softwareVersion", "software_version"),
            screen_info=ScreenInfo.from_dict(_pick(d, "screenInfo", "screen_info")),
            throw_distance=text("throwDistance", "throw_distance"),
            mcgd=McgdData.from_dict(_pick(d, "mcgdData", "mcgd")),
            cie_xyz_2k=ColorReading.from_dict(_pick(d, "cieXyz2K", "cie_xyz_2k")),
            cie_xyz_4k=ColorReading.from_dict(_pick(d, "cieXyz4K", "cie_xyz_4k")),
            image_evaluation=ImageEvaluation.from_dict(
                _pick(d, "imageEvaluation", "image_evaluation")
            ),
            air_pollution=AirPollution.from_dict(_pick(d, "airPollution", "air_pollution")),
            recommended_parts=tuple(
                RecommendedPart.from_dict(p) for p in seq("recommendedParts", "recommended_parts")
            ),
            issue_notes=tuple(IssueNote.from_dict(n) for n in seq("issueNotes", "issue_notes")),
            detected_issues=tuple(
                DetectedIssue.from_dict(i) for i in seq("detectedIssues", "detected_issues")
            ),
            report_generated=bool(_pick(d, "reportGenerated", "report_generated")),
            report_url=opt("reportUrl", "report_url"),
            engineer_signature_url=opt("engineerSignatureUrl", "engineer_signature_url"),
            site_signature_url=opt("siteSignatureUrl", "site_signature_url"),
            images_link=opt("imagesLink", "images_link"),
        )


def _le_status(value: object) -> StatusItem:
    # LE status arrives either as plain text or as {status, remarks}.
    if isinstance(value, str):
        return StatusItem(status=value)
    return StatusItem.from_dict(value)
