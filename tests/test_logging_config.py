import json
import logging
from decimal import Decimal

from car_service_estimator.logging_config import StructuredFormatter, get_estimate_id, set_estimate_id
from car_service_estimator.models.order import OrderDraft
from car_service_estimator.pricing import compute_cost


def make_record(message: str, *args) -> logging.LogRecord:
    return logging.LogRecord(
        name="car_service_estimator.pricing",
        level=logging.WARNING,
        pathname=__file__,
        lineno=12,
        msg=message,
        args=args,
        exc_info=None,
    )


def test_formatter_emits_json_with_estimate_id():
    set_estimate_id("est_test_1")
    try:
        payload = json.loads(StructuredFormatter().format(make_record("No price for repair %s", "acService")))
    finally:
        set_estimate_id(None)

    assert payload["severity"] == "WARNING"
    assert payload["message"] == "No price for repair acService"
    assert payload["logger"] == "car_service_estimator.pricing"
    assert payload["estimate_id"] == "est_test_1"


def test_formatter_omits_estimate_id_when_unset():
    set_estimate_id(None)
    assert get_estimate_id() is None

    payload = json.loads(StructuredFormatter().format(make_record("Priced draft")))

    assert "estimate_id" not in payload


def test_formatter_merges_structured_fields():
    set_estimate_id(None)
    record = make_record("Priced draft v%s", 3)
    record.fields = {"draft_version": 3, "pre_tax": Decimal("42750.00"), "total": 50445}

    payload = json.loads(StructuredFormatter().format(record))

    assert payload["message"] == "Priced draft v3"
    assert payload["draft_version"] == 3
    assert payload["pre_tax"] == "42750.00"
    assert payload["total"] == 50445


def test_pricing_logs_its_intermediates(caplog):
    draft = OrderDraft(
        customer_name="Anita Rao",
        car_model="maruti_swift",
        service_type="basic",
        repairs=["oilChange"],
        car_type="hatchback",
    )

    with caplog.at_level(logging.INFO, logger="car_service_estimator.pricing"):
        compute_cost(draft)

    record = next(r for r in caplog.records if r.name == "car_service_estimator.pricing")
    assert record.fields["subtotal"] == 2300
    assert record.fields["total"] == 2714
    assert record.fields["gst"] == Decimal("414")
