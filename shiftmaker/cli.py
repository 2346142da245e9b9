"""Command-line interface for the shift scheduler."""

from __future__ import annotations

import argparse
import logging
from datetime import date

from shiftmaker.config import load_config
from shiftmaker.domain.db import DEFAULT_DB_URL, get_session, init_database, reset_database
from shiftmaker.domain.repositories import (
    AssignmentRepository,
    SettingsRepository,
    StaffRepository,
)
from shiftmaker.engine.orchestrator import (
    apply_manual_edit,
    audit_stored_month,
    build_month_schedule,
    remove_assignment,
)
from shiftmaker.io.import_csv import import_requests_csv, import_staff_csv
from shiftmaker.io.seed import seed_database
from shiftmaker.services.summary import summarize_schedule


def _db_url(args: argparse.Namespace) -> str:
    if args.db:
        return args.db
    if getattr(args, "config", None):
        return load_config(args.config).db_url
    return DEFAULT_DB_URL


def _print_warnings(warnings) -> None:
    if not warnings:
        print("[OK] No warnings")
        return
    print(f"[WARN] {len(warnings)} warning(s):")
    for warning in warnings:
        print(f"  - {warning}")


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = _db_url(args)
    if args.reset:
        reset_database(db_url)
    else:
        init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_seed(args: argparse.Namespace) -> None:
    """Load the sample roster, settings and requests."""
    db_url = _db_url(args)
    init_database(db_url)
    session = get_session(db_url)

    try:
        seed_database(session)
        session.close()
        print("[OK] Seed data loaded")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Seeding failed: {e}")
        raise


def _cmd_settings(args: argparse.Namespace) -> None:
    """Store slots and requirements from a config file."""
    session = get_session(_db_url(args))

    try:
        cfg = load_config(args.config)
        today = date.today()
        settings = SettingsRepository.save(session, cfg.to_month_settings(today.year, today.month))
        session.close()
        print(f"[OK] Saved {len(settings.slots)} slots and {len(settings.requirements)} requirements")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Saving settings failed: {e}")
        raise


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    session = get_session(_db_url(args))

    try:
        if args.staff:
            count = import_staff_csv(session, args.staff)
            print(f"[OK] Imported {count} staff")

        if args.requests:
            count = import_requests_csv(session, args.requests)
            print(f"[OK] Imported {count} requests")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate the schedule for a month."""
    session = get_session(_db_url(args))

    try:
        cfg = load_config(args.config)
        result = build_month_schedule(
            session, args.year, args.month, cfg, persist=True, overwrite=not args.keep_existing
        )
        print(f"[OK] Generated {len(result.assignments)} assignments for {args.year:04d}-{args.month:02d}")
        _print_warnings(result.warnings)
        session.close()

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Generation failed: {e}")
        raise


def _cmd_assign(args: argparse.Namespace) -> None:
    """Assign one staff member to a slot by hand."""
    session = get_session(_db_url(args))

    try:
        assignment, warnings = apply_manual_edit(session, args.date, args.slot, args.staff, args.id)
        print(f"[OK] Saved {assignment.id}: {assignment.date} {assignment.slot_id} -> {assignment.staff_id}")
        _print_warnings(warnings)
        session.close()

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Assignment failed: {e}")
        raise


def _cmd_unassign(args: argparse.Namespace) -> None:
    """Delete one assignment."""
    session = get_session(_db_url(args))

    try:
        if remove_assignment(session, args.id):
            print(f"[OK] Deleted {args.id}")
        else:
            print(f"[WARN] Assignment {args.id} not found")
        session.close()

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Delete failed: {e}")
        raise


def _cmd_audit(args: argparse.Namespace) -> None:
    """Re-run the month audits over the stored schedule."""
    session = get_session(_db_url(args))

    try:
        cfg = load_config(args.config)
        warnings = audit_stored_month(session, args.year, args.month, cfg)
        _print_warnings(warnings)
        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Audit failed: {e}")
        raise


def _cmd_show(args: argparse.Namespace) -> None:
    """Print a summary of the stored month."""
    session = get_session(_db_url(args))

    try:
        assignments = AssignmentRepository.get_by_month(session, args.year, args.month)
        staff = StaffRepository.get_all(session)
        settings = SettingsRepository.get_or_default(session, args.year, args.month)
        print(summarize_schedule(assignments, staff, settings.slots))
        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Show failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="shiftmaker",
        description="Restaurant shift scheduler",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.add_argument("--reset", action="store_true", help="Drop and recreate all tables")
    init.set_defaults(func=_cmd_init_db)

    # seed command
    seed = sub.add_parser("seed", help="Load sample data for 2026-02")
    seed.set_defaults(func=_cmd_seed)

    # settings command
    st = sub.add_parser("settings", help="Store slots and requirements from a config file")
    st.add_argument("--config", required=True, help="Path to config YAML or JSON")
    st.set_defaults(func=_cmd_settings)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--staff", help="Path to staff CSV")
    imp.add_argument("--requests", help="Path to availability requests CSV")
    imp.set_defaults(func=_cmd_import_csv)

    # generate command
    gen = sub.add_parser("generate", help="Generate the schedule for a month")
    gen.add_argument("--year", type=int, required=True)
    gen.add_argument("--month", type=int, required=True)
    gen.add_argument("--config", help="Optional: config YAML or JSON")
    gen.add_argument(
        "--keep-existing",
        action="store_true",
        help="Keep stored assignments and only add new ones",
    )
    gen.set_defaults(func=_cmd_generate)

    # assign command
    asg = sub.add_parser("assign", help="Assign a staff member to a slot by hand")
    asg.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    asg.add_argument("--slot", required=True, help="Slot id")
    asg.add_argument("--staff", required=True, help="Staff id")
    asg.add_argument("--id", help="Existing assignment id to change")
    asg.set_defaults(func=_cmd_assign)

    # unassign command
    una = sub.add_parser("unassign", help="Delete an assignment")
    una.add_argument("--id", required=True, help="Assignment id")
    una.set_defaults(func=_cmd_unassign)

    # audit command
    aud = sub.add_parser("audit", help="Check weekly limits and consecutive days for a stored month")
    aud.add_argument("--year", type=int, required=True)
    aud.add_argument("--month", type=int, required=True)
    aud.add_argument("--config", help="Optional: config YAML or JSON")
    aud.set_defaults(func=_cmd_audit)

    # show command
    show = sub.add_parser("show", help="Summarize a stored month")
    show.add_argument("--year", type=int, required=True)
    show.add_argument("--month", type=int, required=True)
    show.set_defaults(func=_cmd_show)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
