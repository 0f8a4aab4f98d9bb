"""
Command-line front end for the service ledger.

Every command opens the local store (installing the example customers on
the very first run), applies at most one change, and prints the result.

Usage:
    python main.py add --name "Rajesh Kumar" --phone "98765 43210" \\
        --address "123 MG Road" --type Sump --price 1200
    python main.py list --search raj
    python main.py upcoming
    python main.py remind <customer-id>
    python main.py stats
    python main.py export csv customers.csv
"""

import argparse
import logging
import sys
from typing import Optional

from suraksha.analytics.insights import dashboard_summary
from suraksha.analytics.report import format_amount, format_report
from suraksha.config import settings
from suraksha.logging_context import new_run_id, set_run_id
from suraksha.schemas.customer_schema import CustomerRecord, ServiceType
from suraksha.store.persistence import CustomerRepository, LocalStorage
from suraksha.store.record_store import RecordStore, new_service_record, open_store
from suraksha.tools.export import export_csv, export_pdf
from suraksha.tools.reminders import InvalidPhoneError, send_reminder, upcoming_services
from suraksha.tools.search import ALL_TYPES, CustomerFilter, filter_customers
from suraksha.tools.sync import sync_customer
from suraksha.utils import normalize_phone

logger = logging.getLogger(__name__)

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

SERVICE_CHOICES = [t.value for t in ServiceType]


def _print_customer(customer: CustomerRecord) -> None:
    reminder = f"{GREEN}reminder sent{RESET}" if customer.reminder_sent else f"{DIM}no reminder{RESET}"
    print(f"{BOLD}{customer.name}{RESET}  {DIM}[{customer.id}]{RESET}")
    print(f"  {customer.phone}  {customer.address}")
    print(
        f"  {customer.service_date}  {customer.label}  {format_amount(customer.price)}"
        f"  next: {customer.next_service_date or '-'}  {reminder}"
    )
    if customer.notes:
        print(f"  {DIM}{customer.notes}{RESET}")
    if customer.history:
        print(f"  Service history ({len(customer.history)}):")
        for entry in customer.history:
            print(
                f"    {entry.date}  {entry.label}  {format_amount(entry.price)}"
                f"  {entry.payment_status.value}"
            )


def _sync_and_report(customer: Optional[CustomerRecord]) -> None:
    if customer is None:
        return
    if sync_customer(customer):
        print(f"{GREEN}Data synced with automation.{RESET}")
    else:
        print(f"{YELLOW}Changes saved locally, but automation sync failed.{RESET}")


def cmd_list(store: RecordStore, args: argparse.Namespace) -> int:
    flt = CustomerFilter(
        search=args.search or "",
        service_type=args.type or ALL_TYPES,
        date_from=args.date_from or "",
        date_to=args.date_to or "",
    )
    matches = filter_customers(store.customers, flt)
    if not matches:
        print("No service records found.")
        return 0
    for customer in matches:
        _print_customer(customer)
    return 0


def cmd_add(store: RecordStore, args: argparse.Namespace) -> int:
    record = new_service_record(
        name=args.name,
        phone=args.phone,
        address=args.address,
        service_type=args.type,
        price=args.price,
        service_date=args.date,
        custom_service_type=args.custom_type,
        notes=args.notes,
        next_service_date=args.next,
    )
    store.log_visit(record)
    saved = store.customers[0]
    print(f"{GREEN}Service recorded for {saved.name} [{saved.id}].{RESET}")
    if args.sync:
        _sync_and_report(saved)
    return 0


def cmd_edit(store: RecordStore, args: argparse.Namespace) -> int:
    if store.get(args.id) is None:
        print(f"{RED}No customer with id {args.id}.{RESET}")
        return 1
    changes = {
        key: value
        for key, value in [
            ("name", args.name),
            ("phone", normalize_phone(args.phone) if args.phone is not None else None),
            ("address", args.address),
            ("service_date", args.date),
            ("service_type", args.type),
            ("custom_service_type", args.custom_type),
            ("price", args.price),
            ("notes", args.notes),
            ("next_service_date", args.next),
        ]
        if value is not None
    }
    store.update_visit(args.id, changes)
    print(f"{GREEN}Service record for {store.get(args.id).name} updated.{RESET}")
    _sync_and_report(store.get(args.id))
    return 0


def cmd_delete(store: RecordStore, args: argparse.Namespace) -> int:
    customer = store.get(args.id)
    store.delete_record(args.id)
    if customer is None:
        print(f"{DIM}Nothing to delete for id {args.id}.{RESET}")
    else:
        print(f"Service record for {customer.name} deleted.")
    return 0


def cmd_upcoming(store: RecordStore, args: argparse.Namespace) -> int:
    due = upcoming_services(store.customers, window_days=args.days)
    if not due:
        print("No upcoming services.")
        return 0
    for customer in due:
        _print_customer(customer)
    return 0


def cmd_remind(store: RecordStore, args: argparse.Namespace) -> int:
    try:
        links = send_reminder(store, args.id, message=args.message)
    except InvalidPhoneError as exc:
        print(f"{RED}{exc}{RESET}")
        return 1
    if links is None:
        print(f"{RED}No customer with id {args.id}.{RESET}")
        return 1
    print(f"Open to send: {links.primary}")
    print(f"{DIM}App fallback: {links.fallback}{RESET}")
    return 0


def cmd_stats(store: RecordStore, args: argparse.Namespace) -> int:
    stats = store.stats()
    summary = dashboard_summary(store.customers, stats)
    print(f"{BOLD}Total income:{RESET}      {format_amount(stats.total_income)}")
    print(f"{BOLD}This month:{RESET}        {format_amount(summary.month_income)}")
    print(f"{BOLD}This week:{RESET}         {format_amount(stats.weekly_income)}")
    print(f"{BOLD}Today:{RESET}             {format_amount(stats.daily_income)}")
    print(f"{BOLD}Customers:{RESET}         {len(store)}")
    print(f"{BOLD}Top service:{RESET}       {summary.top_service_type}")
    return 0


def cmd_report(store: RecordStore, args: argparse.Namespace) -> int:
    print(format_report(store.customers, store.stats()))
    return 0


def cmd_export(store: RecordStore, args: argparse.Namespace) -> int:
    if args.format == "csv":
        with open(args.path, "w", newline="", encoding="utf-8") as fh:
            export_csv(store.customers, fh)
    else:
        with open(args.path, "wb") as fh:
            export_pdf(store.customers, store.stats(), fh)
    print(f"Exported {len(store)} customers to {args.path}")
    return 0


def cmd_sync(store: RecordStore, args: argparse.Namespace) -> int:
    customer = store.get(args.id)
    if customer is None:
        print(f"{RED}No customer with id {args.id}.{RESET}")
        return 1
    _sync_and_report(customer)
    return 0


def _add_visit_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--name", required=required)
    parser.add_argument("--phone", required=required)
    parser.add_argument("--address", required=required)
    parser.add_argument("--type", choices=SERVICE_CHOICES, required=required)
    parser.add_argument("--custom-type", help="Label for service type Other")
    parser.add_argument("--price", type=int, required=required)
    parser.add_argument("--date", help="Service date, YYYY-MM-DD (default today)")
    parser.add_argument("--next", help="Next service date, YYYY-MM-DD")
    parser.add_argument("--notes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{settings.business.name} service ledger")
    parser.add_argument(
        "--storage", default=None, help="Storage file (default from STORAGE_PATH)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List customers")
    p.add_argument("--search", help="Name or phone contains")
    p.add_argument("--type", choices=SERVICE_CHOICES)
    p.add_argument("--from", dest="date_from")
    p.add_argument("--to", dest="date_to")
    p.set_defaults(handler=cmd_list)

    p = sub.add_parser("add", help="Log a service visit")
    _add_visit_arguments(p, required=True)
    p.add_argument("--sync", action="store_true", help="Push the record to automation")
    p.set_defaults(handler=cmd_add)

    p = sub.add_parser("edit", help="Edit a customer's current visit")
    p.add_argument("id")
    _add_visit_arguments(p, required=False)
    p.set_defaults(handler=cmd_edit)

    p = sub.add_parser("delete", help="Delete a customer record")
    p.add_argument("id")
    p.set_defaults(handler=cmd_delete)

    p = sub.add_parser("upcoming", help="Services due soon")
    p.add_argument("--days", type=int, default=None)
    p.set_defaults(handler=cmd_upcoming)

    p = sub.add_parser("remind", help="Prepare a WhatsApp reminder")
    p.add_argument("id")
    p.add_argument("--message")
    p.set_defaults(handler=cmd_remind)

    p = sub.add_parser("stats", help="Income figures")
    p.set_defaults(handler=cmd_stats)

    p = sub.add_parser("report", help="Full analytics report")
    p.set_defaults(handler=cmd_report)

    p = sub.add_parser("export", help="Export CSV or PDF")
    p.add_argument("format", choices=["csv", "pdf"])
    p.add_argument("path")
    p.set_defaults(handler=cmd_export)

    p = sub.add_parser("sync", help="Push one record to automation")
    p.add_argument("id")
    p.set_defaults(handler=cmd_sync)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_run_id(new_run_id())
    store = open_store(CustomerRepository(LocalStorage(args.storage)))
    logger.debug("Running '%s' with %d records", args.command, len(store))
    try:
        return args.handler(store, args)
    except ValueError as exc:
        print(f"{RED}{exc}{RESET}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
