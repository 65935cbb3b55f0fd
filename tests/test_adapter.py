"""Service-record payload -> ReportRecord mapping."""

from __future__ import annotations

from typing import Any

import pytest

from pmreport.adapter import (
    build_report_record,
    format_report_date,
    images_link,
    map_status,
    record_from_raw,
    sanitize_status_value,
    service_visit_label,
)
from pmreport.errors import ServiceRecordFetchError, ServiceRecordNotFoundError
from pmreport.report.pdf_builder import compose_report
from pmreport.report.report_data import ColorReading, StatusItem
from pmreport.service_models import ServiceRecordPayload


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": "svc-42",
        "date": "2025-03-14T09:00:00.000Z",
        "engineerName": "Ravi Kumar",
        "serviceNumber": 3,
        "projectorRunningHours": 18250,
        "remarks": "Filters replaced.",
        "site": {
            "name": "PVR Saket",
            "address": "Saket, New Delhi",
            "contactDetails": "011-0000000",
            "screenNo": "4",
        },
        "projector": {"model": "CP4230", "serialNo": "CH-4411"},
        "signatures": {"engineer": "https://blob.example.com/eng.png", "site": None},
        "workDetails": {
            "reflector": "OK (Part is Ok)",
            "reflectorNote": "Cleaned",
            "uvFilter": "YES (Needs Replacement) - cracked edge",
            "coolantLevelColor": "Concern - low level",
            "exhaustCfm": "350",
            "lampMakeModel": "Ushio 3kW",
            "lampTotalRunningHours": 1200,
            "pvVsN": "230",
            "leStatus": "Working",
            "leStatusNote": "no alarms",
            "white2Kfl": "",
            "white4Kfl": "14",
            "white4Kx": "0.314",
            "white4Ky": "0.351",
            "red2Kfl": "7.1",
            "red2Kx": "0.68",
            "red2Ky": "0.32",
            "BW_Step_10_4Kx": "0.3",
            "BW_Step_10_4Ky": "0.31",
            "BW_Step_10_4Kfl": "1.2",
            "screenHeight": 6.5,
            "screenWidth": 15.2,
            "screenGain": 1.3,
            "flatHeight": 5.6,
            "flatWidth": 12.4,
            "screenCroppingOk": "YES",
            "screenCroppingNote": "checked",
            "pm1": 3,
            "pm2_5": 5,
            "projectorPlacementEnvironment": "Booth clean",
            "recommendedParts": [
                {"name": "Air filter", "partNumber": "003-001"},
                {"description": "Cold mirror", "part_number": "003-002"},
            ],
        },
    }
    payload.update(overrides)
    return payload


class _DictStore:
    def __init__(self, records: dict[str, dict[str, Any]]) -> None:
        self.records = records

    def fetch(self, service_id: str) -> dict[str, Any]:
        try:
            return self.records[service_id]
        except KeyError:
            raise ServiceRecordNotFoundError(service_id) from None


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("OK - cleaned lens", "OK"),
        ("YES (Needs Replacement) - cracked", "YES (Needs Replacement)"),
        ("Not Working - fan noise", "Not Working"),
        ("false - n/a", "false"),
        ("Replaced - see notes", "Replaced - see notes"),
        ("OK", "OK"),
        ("", ""),
        (None, None),
    ],
)
def test_sanitize_status_value(value: str | None, expected: str | None) -> None:
    assert sanitize_status_value(value) == expected


def test_map_status_splits_value_and_note() -> None:
    assert map_status("YES (Needs Replacement)", "cracked") == StatusItem(
        status="cracked", yes_no="YES"
    )
    assert map_status("OK - legacy note", None) == StatusItem(status="", yes_no="OK")
    assert map_status(None, None) == StatusItem()
    assert map_status(True, "") == StatusItem(yes_no="true")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2025-03-14T09:00:00.000Z", "14/03/2025"),
        ("2025-01-01", "01/01/2025"),
        ("14/03/2025", "14/03/2025"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_report_date(value: str | None, expected: str) -> None:
    assert format_report_date(value) == expected


def test_service_visit_label() -> None:
    assert service_visit_label("Ravi", 2) == "Ravi - Second"
    assert service_visit_label("", 2) == "2"
    assert service_visit_label(None, None) == ""


def test_images_link_prefers_drive_link() -> None:
    payload = ServiceRecordPayload.from_response(
        _payload(images=["a.jpg"], workDetails={"photosDriveLink": "https://drive/x"})
    )
    assert images_link(payload, "svc-42", "https://portal") == "https://drive/x"


def test_images_link_from_image_arrays() -> None:
    payload = ServiceRecordPayload.from_response(_payload(afterImages=["b.jpg"]))
    assert images_link(payload, "svc-42") == "/admin/services/svc-42/images"
    assert (
        images_link(payload, "svc-42", "https://portal.example.com/")
        == "https://portal.example.com/admin/services/svc-42/images"
    )


def test_images_link_absent_without_images() -> None:
    payload = ServiceRecordPayload.from_response(_payload(images=[], brokenImages=None))
    assert images_link(payload, "svc-42") is None


# ---------------------------------------------------------------------------
# Record mapping
# ---------------------------------------------------------------------------


def test_record_from_raw_maps_fields() -> None:
    record = record_from_raw({"service": _payload()})

    assert record.cinema_name == "PVR Saket"
    assert record.address == "Saket, New Delhi"
    assert record.screen_no == "4"
    assert record.date == "14/03/2025"
    assert record.service_visit == "Ravi Kumar - Third"
    assert record.projector_model == "CP4230"
    assert record.running_hours == "18250"
    assert record.opticals.reflector == StatusItem(status="Cleaned", yes_no="OK")
    assert record.opticals.uv_filter.yes_no == "YES"
    assert record.coolant.yes_no == "Concern"
    assert record.mechanical.exhaust_cfm == StatusItem(status="350", yes_no="OK")
    assert record.lamp_hours == "1200"
    assert record.le_status == StatusItem(status="Working", note="no alarms")
    assert record.image_evaluation.screen_cropping == StatusItem(status="checked", yes_no="YES")
    assert record.screen_info.flat.gain == "1.3"
    assert record.air_pollution.pm1 == "3"
    assert record.air_pollution.pm25 == "5"
    assert record.projector_environment == "Booth clean"
    assert [(p.part_number, p.description) for p in record.recommended_parts] == [
        ("003-001", "Air filter"),
        ("003-002", "Cold mirror"),
    ]
    assert record.engineer_signature_url == "https://blob.example.com/eng.png"
    assert record.site_signature_url is None
    assert record.images_link is None


def test_2k_readings_fall_back_to_4k() -> None:
    record = record_from_raw(_payload())
    assert record.mcgd.white_2k == ColorReading(fl="14", x="0.314", y="0.351")
    assert record.mcgd.white_4k == record.mcgd.white_2k
    assert record.mcgd.red_2k == ColorReading(fl="7.1", x="0.68", y="0.32")
    assert record.mcgd.red_4k.is_blank
    assert record.cie_xyz_2k == ColorReading(fl="1.2", x="0.3", y="0.31")


def test_top_level_fields_win_over_site() -> None:
    record = record_from_raw(_payload(cinemaName="INOX Nehru Place", screenNumber=2))
    assert record.cinema_name == "INOX Nehru Place"
    assert record.screen_no == "2"


def test_empty_payload_maps_to_blank_record() -> None:
    record = record_from_raw({})
    assert record.cinema_name == ""
    assert record.recommended_parts == ()
    assert compose_report(record).stats.page_count == 2


def test_malformed_payload_raises_fetch_error() -> None:
    with pytest.raises(ServiceRecordFetchError, match="malformed service record"):
        record_from_raw({"workDetails": "not a mapping"})


def test_build_report_record_uses_store() -> None:
    store = _DictStore({"svc-42": _payload(images=["x.jpg"])})
    record = build_report_record("svc-42", store, images_base_url="https://portal")
    assert record.cinema_name == "PVR Saket"
    assert record.images_link == "https://portal/admin/services/svc-42/images"


def test_build_report_record_propagates_store_errors() -> None:
    with pytest.raises(ServiceRecordNotFoundError):
        build_report_record("missing", _DictStore({}))
