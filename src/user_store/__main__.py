"""CLI entry point: ``python -m user_store`` or ``user-store``."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from pydantic import ValidationError

from user_store.menu import MenuSession
from user_store.models import StoreConfig, load_config
from user_store.render import format_stats, format_table
from user_store.repository import UserRepository
from user_store.schemas.user import UserInput, UserPatch
from user_store.stats import summarize

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 1
EXIT_INVALID = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="user-store",
        description="Manage user records kept in a tab-separated text file.",
    )
    parser.add_argument("-c", "--config", help="Path to a YAML config file.")
    parser.add_argument(
        "-f", "--file",
        help="User data file (overrides the config and USER_STORE_FILE).",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log at DEBUG level.",
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("menu", help="Interactive menu (default).")
    sub.add_parser("list", help="Print all users.")
    sub.add_parser("report", help="Print all users plus statistics.")

    show = sub.add_parser("show", help="Print one user.")
    show.add_argument("id", type=int)

    add = sub.add_parser("add", help="Add a user.")
    add.add_argument("--name", required=True)
    add.add_argument("--email", required=True)
    add.add_argument("--age", required=True, type=int)
    add.add_argument("--salary", type=float, default=0.0)
    add.add_argument("--gender", required=True)

    update = sub.add_parser("update", help="Update a user; omitted fields keep their value.")
    update.add_argument("id", type=int)
    update.add_argument("--name")
    update.add_argument("--email")
    update.add_argument("--age", type=int)
    update.add_argument("--salary", type=float)
    update.add_argument("--gender")

    delete = sub.add_parser("delete", help="Delete a user.")
    delete.add_argument("id", type=int)

    clear = sub.add_parser("clear", help="Delete every user and reset ids.")
    clear.add_argument(
        "--yes",
        action="store_true",
        default=False,
        help="Confirm the deletion.",
    )
    return parser


def _print_errors(exc: ValidationError) -> None:
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        print(f"{field}: {error['msg']}", file=sys.stderr)


def _cmd_add(repo: UserRepository, args: argparse.Namespace) -> int:
    try:
        data = UserInput(
            name=args.name,
            email=args.email,
            age=args.age,
            salary=args.salary,
            gender=args.gender,
        )
    except ValidationError as exc:
        _print_errors(exc)
        return EXIT_INVALID
    record = repo.add(**data.model_dump())
    print(f"Added with id {record.id}")
    return 0


def _cmd_update(repo: UserRepository, args: argparse.Namespace) -> int:
    current = repo.get(args.id)
    if current is None:
        print("Not found.", file=sys.stderr)
        return EXIT_NOT_FOUND

    # Only supplied options are validated; stored values are kept as they are.
    supplied = {
        key: getattr(args, key)
        for key in ("name", "email", "age", "salary", "gender")
        if getattr(args, key) is not None
    }
    try:
        patch = UserPatch.model_validate(supplied)
    except ValidationError as exc:
        _print_errors(exc)
        return EXIT_INVALID

    fields = current.model_dump(exclude={"id"})
    fields.update(patch.model_dump(exclude_unset=True))
    repo.update(args.id, **fields)
    print(f"Updated user {args.id}")
    return 0


def run(config: StoreConfig, args: argparse.Namespace) -> int:
    """Execute *args.command* against the configured data file."""
    repo = UserRepository(config.data_file)
    command = args.command or "menu"

    if command == "menu":
        MenuSession(repo, email_width=config.email_width).run()
        return 0

    if command in ("list", "report"):
        records = repo.list_users()
        if records:
            print(format_table(records, email_width=config.email_width))
        else:
            print("(no records)")
        if command == "report":
            print()
            print(format_stats(summarize(records)))
        return 0

    if command == "show":
        record = repo.get(args.id)
        if record is None:
            print("Not found.", file=sys.stderr)
            return EXIT_NOT_FOUND
        print(format_table([record], email_width=config.email_width))
        return 0

    if command == "add":
        return _cmd_add(repo, args)

    if command == "update":
        return _cmd_update(repo, args)

    if command == "delete":
        if not repo.delete(args.id):
            print("Not found.", file=sys.stderr)
            return EXIT_NOT_FOUND
        print(f"Deleted user {args.id}")
        return 0

    if command == "clear":
        if not args.yes:
            print("Refusing to clear without --yes.", file=sys.stderr)
            return EXIT_INVALID
        repo.clear()
        print("All records deleted.")
        return 0

    raise ValueError(f"Unknown command {command!r}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (ValueError, OSError) as exc:
        parser.error(f"invalid configuration: {exc}")
    if args.file:
        config = config.model_copy(update={"data_file": args.file})

    logging.basicConfig(
        level="DEBUG" if args.verbose else config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Using data file %s", config.data_file)

    return run(config, args)


if __name__ == "__main__":
    sys.exit(main())
