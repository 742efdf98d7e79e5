from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import Callable, Optional, Sequence

from .bootstrap import configure_logging
from .config import get_settings
from .services import (
    PlanningService,
    TaskNotFoundError,
    TaskValidationError,
    render_plan_preview,
    render_task_list,
    render_week,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prep Planner command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("add", "Plan a new task and store it after approval."),
        ("preview", "Show the planned slots for a task without storing it."),
    ):
        task_parser = subparsers.add_parser(command, help=help_text)
        task_parser.add_argument("name")
        task_parser.add_argument("--prep", required=True, help="Preparation time in minutes.")
        task_parser.add_argument("--deadline", required=True, help="Deadline as YYYY-MM-DD.")
        task_parser.add_argument("--description", default="")
        if command == "add":
            task_parser.add_argument("--yes", action="store_true", help="Approve without prompting.")

    subparsers.add_parser("list", help="List stored tasks.")

    week_parser = subparsers.add_parser("week", help="Show the week calendar.")
    week_parser.add_argument("--date", dest="anchor", default=None, help="Any day of the week to show.")

    delete_parser = subparsers.add_parser("delete", help="Delete a stored task.")
    delete_parser.add_argument("task_id")

    subparsers.add_parser("regenerate", help="Replan every stored task.")

    import_parser = subparsers.add_parser("import", help="Import tasks from an exported JSON file.")
    import_parser.add_argument("path")

    settings = get_settings()
    api_parser = subparsers.add_parser("api", help="Start the FastAPI server exposing the planner functions.")
    api_parser.add_argument("--host", default=settings.api.host)
    api_parser.add_argument("--port", type=int, default=settings.api.port)

    return parser


def _confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in {"y", "yes"}


def _print_preview(service: PlanningService, args: argparse.Namespace) -> None:
    preview = service.preview(args.name, args.prep, args.deadline, args.description)
    print(render_plan_preview(preview.task.slots))
    for day in preview.fail_safe_days:
        print(f"Note: no free time before {service.context.settings.planner.cutoff_hour}:00 on {day.isoformat()}.")


def run(
    argv: Optional[Sequence[str]] = None,
    *,
    service: Optional[PlanningService] = None,
    confirm: Callable[[str], bool] = _confirm,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
        return 0

    service = service or PlanningService()
    locale = service.locale
    try:
        if args.command == "preview":
            _print_preview(service, args)
        elif args.command == "add":
            preview = service.preview(args.name, args.prep, args.deadline, args.description)
            print(render_plan_preview(preview.task.slots))
            if not (args.yes or confirm("Approve this plan?")):
                print("Plan discarded.")
                return 1
            task = service.approve(preview.task)
            print(f"Saved '{task.name}' ({task.id}).")
        elif args.command == "list":
            print(render_task_list(service.list_tasks()))
        elif args.command == "week":
            anchor = date.fromisoformat(args.anchor) if args.anchor else None
            print(render_week(service.week(anchor), locale))
        elif args.command == "delete":
            task = service.delete_task(args.task_id)
            print(f"Deleted '{task.name}'.")
        elif args.command == "regenerate":
            tasks = service.regenerate()
            print(f"Regenerated {len(tasks)} task(s).")
        elif args.command == "import":
            tasks = service.import_tasks(args.path)
            print(f"Imported; {len(tasks)} task(s) stored.")
        else:  # pragma: no cover - argparse enforces choices
            parser.print_help()
    except (TaskValidationError, TaskNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 0


def main() -> None:
    configure_logging()
    logger.info("Prep Planner CLI starting")
    sys.exit(run())


if __name__ == "__main__":
    main()
