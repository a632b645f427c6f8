import pytest

from car_service_estimator.dictionaries import DEFAULT_PRICE_TABLES
from car_service_estimator.logging_config import get_estimate_id
from car_service_estimator.models.order import CarModel, CarType, OrderDraft, RepairKind, ServiceType, Urgency
from car_service_estimator.pricing import PricingEngine
from car_service_estimator.session import EstimateSession


def fill_form(session: EstimateSession) -> None:
    session.update(
        customer_name="Farhan Ali",
        car_model=CarModel.kia_seltos,
        service_type=ServiceType.premium,
        car_type=CarType.suv,
        urgency=Urgency.express,
    )
    session.toggle_repair(RepairKind.engine_tuning, checked=True)
    session.toggle_repair(RepairKind.brake_service, checked=True)


def test_submit_prices_a_valid_form():
    session = EstimateSession()
    fill_form(session)

    breakdown = session.submit()

    assert breakdown is not None
    assert breakdown.total == 50445
    assert session.breakdown is breakdown
    assert session.validation is not None and session.validation.is_valid
    assert breakdown.draft_version == session.draft.version
    assert get_estimate_id() == session.id


def test_invalid_form_never_reaches_the_engine():
    class ExplodingEngine(PricingEngine):
        def compute(self, draft):
            raise AssertionError("engine must not run for invalid drafts")

    session = EstimateSession(engine=ExplodingEngine())
    session.update(customer_name="Al")

    assert session.submit() is None
    assert session.breakdown is None
    assert set(session.validation.errors) == {"customer_name", "car_model", "service_type", "car_type", "repairs"}


def test_failed_submit_clears_a_previous_breakdown():
    session = EstimateSession()
    fill_form(session)
    assert session.submit() is not None

    session.toggle_repair(RepairKind.engine_tuning, checked=False)
    session.toggle_repair(RepairKind.brake_service, checked=False)

    assert session.submit() is None
    assert session.breakdown is None
    assert session.validation.messages() == {"repairs": "Please select at least one repair service"}


def test_resubmitting_supersedes_the_breakdown():
    session = EstimateSession()
    fill_form(session)
    first = session.submit()

    session.update(urgency=Urgency.normal)
    second = session.submit()

    assert second is not first
    assert first.total == 50445
    assert second.total == 33630
    assert second.draft_version > first.draft_version


def test_reset_restores_defaults_and_clears_results():
    session = EstimateSession()
    fill_form(session)
    session.submit()
    version_before_reset = session.draft.version

    session.reset()

    assert session.draft == OrderDraft(version=version_before_reset + 1)
    assert session.draft.model_dump(exclude={"version"}) == OrderDraft().model_dump(exclude={"version"})
    assert session.breakdown is None
    assert session.validation is None


def test_versions_keep_increasing_across_reset():
    session = EstimateSession()
    fill_form(session)
    before = session.submit()

    session.reset()
    fill_form(session)
    after = session.submit()

    assert after.total == before.total
    assert after.draft_version > before.draft_version


def test_session_uses_injected_tables():
    tables = DEFAULT_PRICE_TABLES.model_copy(update={"gst_rate": 0.0})
    session = EstimateSession(engine=PricingEngine(tables=tables))
    fill_form(session)

    breakdown = session.submit()

    assert breakdown.total == 42750


@pytest.mark.parametrize("checked,expected", [(True, (RepairKind.ac_service,)), (False, ())])
def test_toggle_repair(checked, expected):
    session = EstimateSession()

    session.toggle_repair(RepairKind.ac_service, checked=checked)

    assert session.draft.repairs == expected
