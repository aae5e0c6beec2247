"""
Terminal Kanban board for the job application tracker.

Usage:
    python -m src.board.cli list
    python -m src.board.cli show <job_id>
    python -m src.board.cli add --company "Acme" --role "Engineer" --date 2024-01-15
    python -m src.board.cli edit <job_id> --role "Senior Engineer"
    python -m src.board.cli move <job_id> "Interviewing"    # drop on a column
    python -m src.board.cli move <job_id> <other_job_id>    # drop on another card
    python -m src.board.cli delete <job_id> [--yes]
"""

import argparse
import sys
from typing import List, Optional

from src.board.client import TrackerClient
from src.board.state import BoardState
from src.common.config import Config
from src.common.job_model import STATUSES
from src.common.logger import set_global_debug_mode, setup_logging


def print_board(board: BoardState) -> None:
    """Print one block per column with its cards."""
    columns = board.by_status()
    print("=" * 80)
    for status in STATUSES:
        jobs = columns.get(status, [])
        print(f"{status} ({len(jobs)})")
        print("-" * 80)
        for job in jobs:
            print(f"  {job['_id']:<24} | {job['dateApplied']:<10} | {job['company'][:18]:<18} | {job['role'][:20]}")
        if not jobs:
            print("  (empty)")
        print("=" * 80)


def ask_yes_no(question: str) -> bool:
    answer = input(f"{question} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def warn(message: str) -> None:
    print(f"⚠️  {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job application Kanban board")
    parser.add_argument("--api-url", default=None, help=f"Tracker API root (default: {Config.TRACKER_API_URL})")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Show the board")

    show = sub.add_parser("show", help="Show one job application")
    show.add_argument("job_id")

    add = sub.add_parser("add", help="Add a job application")
    add.add_argument("--company", required=True)
    add.add_argument("--role", required=True)
    add.add_argument("--date", help="Date applied, YYYY-MM-DD (default: today)")
    add.add_argument("--status", choices=STATUSES, help="Column (default: Applied)")

    edit = sub.add_parser("edit", help="Edit a job application")
    edit.add_argument("job_id")
    edit.add_argument("--company")
    edit.add_argument("--role")
    edit.add_argument("--date")
    edit.add_argument("--status", choices=STATUSES)

    move = sub.add_parser("move", help="Move a card onto a column or another card")
    move.add_argument("job_id")
    move.add_argument("target", help="Status name or id of the card to drop onto")

    delete = sub.add_parser("delete", help="Delete a job application")
    delete.add_argument("job_id")
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    return parser


def run(args: argparse.Namespace, client: Optional[TrackerClient] = None) -> int:
    """Execute a parsed command. Returns the process exit code."""
    confirm = (lambda question: True) if getattr(args, "yes", False) else ask_yes_no
    board = BoardState(client or TrackerClient(base_url=args.api_url), notify=warn, confirm=confirm)
    if not board.reload():
        return 1

    if args.command == "list":
        print_board(board)
        return 0

    if args.command == "show":
        card = board.refresh(args.job_id)
        if card is None:
            return 1
        for label, key in (("Company", "company"), ("Role", "role"), ("Applied", "dateApplied"),
                           ("Status", "status"), ("Updated", "updatedAt")):
            print(f"{label + ':':<9} {card.get(key, '-')}")
        return 0

    if args.command == "add":
        form = board.open_form()
        form.company, form.role = args.company, args.role
        if args.date:
            form.date_applied = args.date
        if args.status:
            form.status = args.status
        saved = board.save(form)
        if saved is None:
            return 1
        print(f"✅ Added {saved['_id']}")
        return 0

    if board.find(args.job_id) is None:
        warn(f"Job not found: {args.job_id}")
        return 1

    if args.command == "edit":
        form = board.open_form(args.job_id)
        for attr, value in (("company", args.company), ("role", args.role),
                            ("date_applied", args.date), ("status", args.status)):
            if value is not None:
                setattr(form, attr, value)
        if board.save(form) is None:
            return 1
        print(f"✅ Updated {args.job_id}")
        return 0

    if args.command == "move":
        if board.resolve_drop_status(args.target) is None:
            warn(f"Unknown drop target: {args.target}")
            return 1
        if board.move(args.job_id, args.target):
            print(f"✅ Moved {args.job_id} to {board.find(args.job_id)['status']}")
            return 0
        # Same column (no-op) or a failed request (already reported)
        return 0 if board.find(args.job_id)["status"] == board.resolve_drop_status(args.target) else 1

    if args.command == "delete":
        if board.delete(args.job_id):
            print(f"✅ Deleted {args.job_id}")
            return 0
        return 1

    return 2


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.debug else "WARNING", format=Config.LOG_FORMAT)
    set_global_debug_mode(args.debug)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
