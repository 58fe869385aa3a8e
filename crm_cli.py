#!/usr/bin/env python3
from __future__ import annotations

"""
Command-line client for the Service CRM API.

Responsibilities:
- Configure logging to both console and `logs/crm.log`
- Load settings (`crm.yaml`, `CRM_*` environment variables, `--api-url`)
- Sign in with `--username` and the `CRM_PASSWORD` environment variable
- Run one subcommand against the remote service:
  * `stats` prints the appointment/client/worker counters (`--plot` saves charts)
  * `clients`, `workers`, `appointments` print filtered tables (`--export` writes CSV)
  * `complete ID`, `cancel ID` change an appointment's status
  * `conflicts --date D --worker ID` shows scheduling conflicts for a worker

Exit codes: 0 on success, 1 when settings cannot be loaded, sign-in is
incomplete or the service rejects a request, 2 on usage errors (argparse).
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional, Sequence

import pandas as pd
import yaml

from crm.api_client import ApiClient, ApiError
from crm.config import load_settings
from crm.filters import (
    ALL,
    DateFacet,
    fetch_appointments,
    filter_appointments,
    filter_clients,
    filter_workers,
    status_params,
)
from crm.io_paths import LOGS_DIR
from crm.models import APPOINTMENT_STATUS_LABELS, CLIENT_STATUS_LABELS, WORKER_STATUS_LABELS
from crm.session import AuthSession
from crm.status_workflow import request_status_change
from crm.tables import appointments_frame, clients_frame, export_csv, workers_frame
from crm.utils_logging import configure_logging

PASSWORD_ENV = "CRM_PASSWORD"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Global options come before the subcommand, e.g.
    ``crm --username alice appointments --date today``.
    """
    p = argparse.ArgumentParser(prog="crm", description="Service CRM – command-line client")
    p.add_argument("--config", type=str, help="Path to a settings YAML file (default: crm.yaml if present)")
    p.add_argument("--api-url", type=str, help="Override the API base URL")
    p.add_argument("--username", type=str, help=f"Account to sign in with; the password is read from ${PASSWORD_ENV}")
    p.add_argument("--debug", action="store_true")

    sub = p.add_subparsers(dest="command", required=True)

    stats = sub.add_parser("stats", help="Print summary counters")
    stats.add_argument("--plot", action="store_true", help="Save bar charts under output/plots/")

    for name, labels in (("clients", CLIENT_STATUS_LABELS), ("workers", WORKER_STATUS_LABELS)):
        sp = sub.add_parser(name, help=f"List {name}")
        sp.add_argument("--search", type=str, default="", help="Match name, email or phone")
        sp.add_argument("--status", choices=[ALL, *labels], default=ALL)
        sp.add_argument("--export", action="store_true", help="Write the table as CSV under output/exports/")

    appts = sub.add_parser("appointments", help="List appointments")
    appts.add_argument("--search", type=str, default="", help="Match client, worker or description")
    appts.add_argument("--status", choices=[ALL, *APPOINTMENT_STATUS_LABELS], default=ALL)
    appts.add_argument("--date", choices=[f.value for f in DateFacet], default=DateFacet.ALL.value)
    appts.add_argument("--export", action="store_true", help="Write the table as CSV under output/exports/")

    complete = sub.add_parser("complete", help="Mark an appointment completed")
    complete.add_argument("id", type=int)
    complete.add_argument("--notes", type=str, default="", help="Completion notes")

    cancel = sub.add_parser("cancel", help="Cancel an appointment")
    cancel.add_argument("id", type=int)
    cancel.add_argument("--notes", type=str, default="", help="Reason for cancellation")

    conflicts = sub.add_parser("conflicts", help="Check a worker's conflicts on a date")
    conflicts.add_argument("--date", type=str, required=True, help="YYYY-MM-DD")
    conflicts.add_argument("--worker", type=int, required=True, help="Service worker id")

    return p.parse_args(argv)


def _print_frame(df: pd.DataFrame, empty: str) -> None:
    if df.empty:
        print(empty)
    else:
        print(df.to_string())


def _maybe_export(df: pd.DataFrame, name: str, enabled: bool, log: logging.Logger) -> None:
    if enabled:
        path = export_csv(df, name)
        log.info("Exported %d rows to %s", len(df), path)


def run_command(args: argparse.Namespace, api: ApiClient, log: logging.Logger) -> int:
    """Execute the parsed subcommand with an authenticated client."""
    if args.command == "stats":
        a = api.get_appointment_stats()
        c = api.get_client_stats()
        w = api.get_worker_stats()
        print(f"Appointments: total {a.total}, scheduled {a.scheduled}, completed {a.completed}, "
              f"cancelled {a.cancelled}, today {a.today}, upcoming {a.upcoming}")
        print(f"Clients: total {c.total}, active {c.active}, inactive {c.inactive}, potential {c.potential}")
        print(f"Workers: total {w.total}, active {w.active}, inactive {w.inactive}, on leave {w.on_leave}")
        if args.plot:
            from viz.plots import save_all_plots

            paths = save_all_plots(a, c, w)
            log.info("Saved %d charts under %s", len(paths), paths[0].parent)
        return 0

    if args.command == "clients":
        rows = filter_clients(api.get_clients(status_params(args.status)), search=args.search)
        df = clients_frame(rows)
        _print_frame(df, "No clients found")
        _maybe_export(df, "clients", args.export, log)
        return 0

    if args.command == "workers":
        rows = filter_workers(api.get_workers(status_params(args.status)), search=args.search)
        df = workers_frame(rows)
        _print_frame(df, "No service workers found")
        _maybe_export(df, "workers", args.export, log)
        return 0

    if args.command == "appointments":
        rows = filter_appointments(fetch_appointments(api, args.status, args.date), search=args.search)
        df = appointments_frame(rows)
        _print_frame(df, "No appointments found")
        _maybe_export(df, "appointments", args.export, log)
        return 0

    if args.command in ("complete", "cancel"):
        status = "completed" if args.command == "complete" else "cancelled"
        request_status_change(api, args.id, status, args.notes.strip() or None)
        print(f"Appointment {args.id} {status}")
        return 0

    if args.command == "conflicts":
        result = api.check_conflicts(args.date, args.worker)
        print(json.dumps(result, indent=2, default=str))
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        configure_logging(LOGS_DIR, debug=args.debug)
        logging.getLogger("crm_cli").error("Could not load settings: %s", exc)
        return 1
    if args.api_url:
        settings.api_url = args.api_url.rstrip("/")
    configure_logging(LOGS_DIR, debug=args.debug or settings.debug)
    log = logging.getLogger("crm_cli")

    password = os.environ.get(PASSWORD_ENV, "")
    if not args.username or not password:
        log.error("Sign-in needs --username and the %s environment variable", PASSWORD_ENV)
        return 1

    session = AuthSession()
    api = ApiClient(settings.api_url, session=session, timeout=settings.timeout)
    try:
        user = session.login(api, args.username, password)
        log.info("Signed in as %s (%s) at %s", user.username, session.role.value, settings.api_url)
        return run_command(args, api, log)
    except ApiError as exc:
        log.error("%s", exc.user_message("Request failed"))
        return 1
    finally:
        session.logout()


if __name__ == "__main__":
    sys.exit(main())
