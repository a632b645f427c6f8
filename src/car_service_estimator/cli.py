"""Command-line front end for the car service cost estimator."""

from __future__ import annotations

import argparse
import logging
import uuid
from pathlib import Path
from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Settings
from .dictionaries import (
    CAR_MODEL_LABELS,
    CAR_TYPE_LABELS,
    REPAIR_LABELS,
    SERVICE_PACKAGES,
    URGENCY_LABELS,
)
from .logging_config import set_estimate_id, setup_logging
from .models.estimate import CostBreakdown
from .models.order import CarModel, CarType, OrderDraft, RepairKind, ServiceType, Urgency
from .models.price_tables import PriceTables
from .models.validation import ValidationResult
from .price_table_repository import load_price_tables
from .pricing import PricingEngine, format_rupees, render_summary
from .session import EstimateSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_INVALID_ORDER = 2

FIELD_LABELS = {
    "customer_name": "Customer Name",
    "car_model": "Car Model",
    "service_type": "Service Package",
    "car_type": "Car Type",
    "repairs": "Repairs",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="car-service-estimate",
        description="Calculate a car service cost from the repair type and service package",
    )
    parser.add_argument(
        "--price-tables",
        type=Path,
        default=None,
        help="JSON file with substitute price tables (defaults to $PRICE_TABLES_PATH or built-in prices)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    estimate = subparsers.add_parser("estimate", help="Validate an order and print its cost breakdown")
    estimate.add_argument("--draft-file", type=Path, help="JSON order draft; options below override its fields")
    estimate.add_argument("--customer", dest="customer_name", help="Customer full name")
    estimate.add_argument("--car-model", choices=[m.value for m in CarModel])
    estimate.add_argument("--service-type", choices=[s.value for s in ServiceType])
    estimate.add_argument(
        "--repair",
        dest="repairs",
        action="append",
        choices=[r.value for r in RepairKind],
        help="Add-on repair; repeat for several",
    )
    estimate.add_argument("--car-type", choices=[c.value for c in CarType])
    estimate.add_argument("--urgency", choices=[u.value for u in Urgency])
    estimate.add_argument("--format", choices=("table", "markdown", "json"), default="table")
    estimate.add_argument(
        "--strict",
        action="store_true",
        help="Refuse to price incomplete drafts instead of pricing missing fields at zero",
    )

    subparsers.add_parser("catalog", help="List service packages, repairs and multipliers")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    setup_logging(environment=settings.environment, project_id=settings.project_id)
    set_estimate_id(uuid.uuid4().hex[:12])

    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    try:
        tables = load_price_tables(args.price_tables or settings.price_tables_path)
    except (OSError, ValueError) as exc:
        logger.error("Could not load price tables: %s", exc)
        err_console.print(f"[red]Could not load price tables:[/red] {escape(str(exc))}")
        return EXIT_BAD_INPUT

    if args.command == "catalog":
        _print_catalog(console, tables)
        return EXIT_OK

    try:
        draft = _load_draft(args)
    except (OSError, ValueError) as exc:
        logger.error("Could not read order draft: %s", exc)
        err_console.print(f"[red]Could not read order draft:[/red] {escape(str(exc))}")
        return EXIT_BAD_INPUT

    session = EstimateSession(engine=PricingEngine(tables=tables, strict=args.strict), draft=draft)
    breakdown = session.submit()
    if breakdown is None:
        _print_errors(err_console, session.validation)
        return EXIT_INVALID_ORDER

    if args.format == "json":
        console.print_json(breakdown.model_dump_json(), highlight=False)
    elif args.format == "markdown":
        console.print(render_summary(session.draft, breakdown), markup=False)
    else:
        _print_breakdown(console, session.draft, breakdown)
    return EXIT_OK


def _load_draft(args: argparse.Namespace) -> OrderDraft:
    draft = OrderDraft()
    if args.draft_file is not None:
        draft = OrderDraft.model_validate_json(args.draft_file.read_text(encoding="utf-8"))

    overrides: dict[str, Any] = {
        field: getattr(args, field)
        for field in ("customer_name", "car_model", "service_type", "repairs", "car_type", "urgency")
        if getattr(args, field) is not None
    }
    if overrides:
        draft = draft.updated(**overrides)
    return draft


def _print_errors(console: Console, result: ValidationResult | None) -> None:
    if result is None:
        return
    console.print("[bold red]The order could not be priced:[/bold red]")
    for field, error in result.errors.items():
        console.print(f"  {FIELD_LABELS.get(field, field)}: {error.message}", markup=False)


def _print_breakdown(console: Console, draft: OrderDraft, breakdown: CostBreakdown) -> None:
    table = Table(title="Cost Breakdown")
    table.add_column("Item")
    table.add_column("Amount", justify="right")

    package = SERVICE_PACKAGES.get(draft.service_type) if draft.service_type else None
    service_label = f"Base Service ({package.label})" if package else "Base Service"
    table.add_row(service_label, format_rupees(breakdown.base_service))
    for charge in breakdown.repairs:
        table.add_row(REPAIR_LABELS[charge.name].label, format_rupees(charge.amount))
    table.add_row("Subtotal", format_rupees(breakdown.subtotal), end_section=True)
    if breakdown.car_type_multiplier > 1:
        table.add_row("Car Type Multiplier", f"×{breakdown.car_type_multiplier}")
    if breakdown.urgency_multiplier > 1:
        table.add_row("Express Service", f"×{breakdown.urgency_multiplier}")
    table.add_row(f"GST ({breakdown.gst_rate:.0%})", f"₹{breakdown.gst:,.2f}", end_section=True)
    table.add_row("Total Amount", format_rupees(breakdown.total), style="bold green")

    console.print(table)


def _print_catalog(console: Console, tables: PriceTables) -> None:
    packages = Table(title="Service Packages")
    packages.add_column("Key")
    packages.add_column("Package")
    packages.add_column("Includes")
    packages.add_column("Price", justify="right")
    for service_type, package in SERVICE_PACKAGES.items():
        price = tables.service_prices.get(service_type)
        packages.add_row(
            service_type.value,
            package.label,
            package.description,
            format_rupees(price) if price is not None else "-",
        )
    console.print(packages)

    repairs = Table(title="Repairs")
    repairs.add_column("Key")
    repairs.add_column("Repair")
    repairs.add_column("Price", justify="right")
    for kind, option in REPAIR_LABELS.items():
        price = tables.repair_prices.get(kind)
        repairs.add_row(kind.value, option.label, format_rupees(price) if price is not None else "-")
    console.print(repairs)

    tiers = Table(title="Car Types & Urgency")
    tiers.add_column("Key")
    tiers.add_column("Option")
    tiers.add_column("Multiplier", justify="right")
    for car_type, option in CAR_TYPE_LABELS.items():
        tiers.add_row(car_type.value, option.label, f"×{tables.car_type_multipliers.get(car_type, 1.0)}")
    for urgency, option in URGENCY_LABELS.items():
        tiers.add_row(urgency.value, option.label, f"×{tables.urgency_multipliers.get(urgency, 1.0)}")
    console.print(tiers)

    console.print("Car models: " + ", ".join(option.label for option in CAR_MODEL_LABELS.values()), soft_wrap=True)
    console.print(f"GST: {tables.gst_rate:.0%}")


__all__ = ["main", "build_parser"]
