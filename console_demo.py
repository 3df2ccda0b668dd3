"""
Offline console demo: walks through a clinician's day without any database.

Uses the real classifier, conflict detector, predicate builder and the
availability facade against an in-memory schedule, printing what a
booking form would see.

Usage:
    python console_demo.py
    python console_demo.py --scenario reschedule
    python console_demo.py --scenario sql
    python console_demo.py --bookings day.json --time 10:30 --duration 30
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from booking_engine.scheduling.status import StatusCategory, category
from booking_engine.scheduling.query import (
    conflict_candidate_predicate,
    excluded_statuses_for_conflict_check,
    to_sql_exclusion_clause,
    to_sql_inclusion_clause,
)
from booking_engine.schemas.booking_schema import AppointmentRecord, AvailabilityRequest
from booking_engine.service import check_availability

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

DAY = "2025-01-15"
RESOURCE_ID = 4

SAMPLE_DAY: list[dict] = [
    {"id": 1, "scheduled_date": f"{DAY}T09:00:00", "status": "agendada"},
    {"id": 2, "scheduled_date": f"{DAY}T10:00:00", "status": "cancelada"},
    {"id": 3, "scheduled_date": f"{DAY}T11:00:00", "status": "cancelada_paciente"},
    {"id": 4, "scheduled_date": f"{DAY}T14:00:00", "status": "confirmada"},
    {"id": 5, "scheduled_date": f"{DAY}T15:00:00", "status": "faltou"},
]

ATTEMPTS = ["09:00", "10:00", "11:00", "14:00", "15:00", "16:00"]

_CATEGORY_COLORS = {
    StatusCategory.BLOCKING: RED,
    StatusCategory.FREED: GREEN,
    StatusCategory.UNKNOWN: YELLOW,
}


def load_records(path: Optional[Path]) -> list[AppointmentRecord]:
    rows = json.loads(path.read_text()) if path else SAMPLE_DAY
    return [
        AppointmentRecord(
            resource_id=row.get("resource_id", RESOURCE_ID),
            duration_minutes=row.get("duration_minutes", 60),
            doctor_name=row.get("doctor_name", "Dr. João Silva"),
            **{k: row[k] for k in ("id", "scheduled_date", "status")},
        )
        for row in rows
    ]


def print_schedule(records: list[AppointmentRecord]) -> None:
    print(f"\n{BOLD}Schedule for resource {RESOURCE_ID} ({DAY}){RESET}")
    for record in sorted(records, key=lambda r: r.scheduled_date):
        cat = category(record.status)
        color = _CATEGORY_COLORS[cat]
        print(
            f"  {record.scheduled_date:%H:%M}  {record.status or '-':<20}"
            f"{color}{cat.value.upper()}{RESET}"
        )


def print_attempt(label: str, request: AvailabilityRequest, records: list[AppointmentRecord]) -> None:
    response = check_availability(request, records)
    if response.available:
        verdict = f"{GREEN}AVAILABLE{RESET}"
    else:
        verdict = f"{RED}{response.conflict_type.value.upper()}{RESET}"
    print(f"  {label:<6} {verdict}")
    for conflict in response.conflicts:
        print(
            f"{DIM}         booking #{conflict.booking_id} ({conflict.status}) "
            f"overlaps {conflict.overlap_start:%H:%M}-{conflict.overlap_end:%H:%M}{RESET}"
        )
    if response.needs_review:
        print(f"{YELLOW}         review statuses on {response.unknown_status_booking_ids}{RESET}")


def run_day(records: list[AppointmentRecord], times: list[str], duration: int) -> None:
    print_schedule(records)
    print(f"\n{BOLD}New booking attempts ({duration} min){RESET}")
    for hhmm in times:
        start = datetime.fromisoformat(f"{DAY}T{hhmm}:00")
        request = AvailabilityRequest(
            resource_id=RESOURCE_ID, start=start, duration_minutes=duration
        )
        print_attempt(hhmm, request, records)


def run_reschedule(records: list[AppointmentRecord]) -> None:
    print_schedule(records)
    print(f"\n{BOLD}Moving booking #1 (09:00){RESET}")
    for hhmm in ["09:00", "09:30", "13:30"]:
        start = datetime.fromisoformat(f"{DAY}T{hhmm}:00")
        request = AvailabilityRequest(
            resource_id=RESOURCE_ID, start=start, duration_minutes=60, exclude_booking_id=1
        )
        print_attempt(hhmm, request, records)


def run_sql() -> None:
    print(f"\n{BOLD}Persistence predicates{RESET}")
    print(f"  excluded statuses:   {BLUE}{excluded_statuses_for_conflict_check()}{RESET}")
    print(f"  freed literal:       {BLUE}{to_sql_inclusion_clause(excluded_statuses_for_conflict_check())}{RESET}")
    print(f"  exclusion clause:    {BLUE}{to_sql_exclusion_clause()}{RESET}")
    print(f"  candidate predicate: {BLUE}{conflict_candidate_predicate()}{RESET}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Booking engine console demo")
    parser.add_argument(
        "--scenario", choices=["day", "reschedule", "sql"], default="day",
        help="Which walkthrough to run",
    )
    parser.add_argument("--bookings", type=Path, help="JSON file of appointment rows")
    parser.add_argument("--time", action="append", help="HH:MM to try (repeatable)")
    parser.add_argument("--duration", type=int, default=60, help="Duration in minutes")
    args = parser.parse_args()

    if args.bookings and not args.bookings.exists():
        print(f"{RED}Bookings file not found: {args.bookings}{RESET}")
        return 1

    records = load_records(args.bookings)
    if args.scenario == "reschedule":
        run_reschedule(records)
    elif args.scenario == "sql":
        run_sql()
    else:
        run_day(records, args.time or ATTEMPTS, args.duration)
    return 0


if __name__ == "__main__":
    sys.exit(main())
