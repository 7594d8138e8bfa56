import argparse
import logging
import sys
from pathlib import Path

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.app_shell.config import validate_ops_rules
from src.app_shell.context import ServiceContext
from src.components.social_share import run_regenerate
from src.rules.loader import default_rules_path, load_rules
from src.rules.models import Rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

DB_PATH = "data/social_share.db"
MIGRATIONS_DIR = "migrations"


def get_rules(path: Path) -> Rules:
    try:
        rules = load_rules(path)
        validate_ops_rules(rules)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        sys.exit(1)
    return rules


def handle_migrate(args: argparse.Namespace) -> None:
    Path(args.db).parent.mkdir(parents=True, exist_ok=True)
    migrator = SQLiteMigrator(args.db, args.migrations)

    if args.dry_run:
        for filename in migrator.pending():
            print(f"pending: {filename}")
        return

    applied = migrator.run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_regenerate(args: argparse.Namespace) -> None:
    rules = get_rules(Path(args.rules))

    ctx = ServiceContext.from_db(args.db, rules, site_id=rules.site_id)
    try:
        result = run_regenerate(args.post_id, ctx.post_repo, ctx.link_service, rules)
    finally:
        ctx.close()

    for err in result.errors:
        logger.warning("%s: %s", err.code, err.message)

    if not result.success:
        logger.error("No share links generated for post %s", args.post_id)
        sys.exit(1)

    for provider, link in sorted(result.links.items()):
        print(f"{provider}: {link}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Social Share Links CLI")
    parser.add_argument("--db", default=DB_PATH, help="SQLite database path")
    parser.add_argument("--rules", default=str(default_rules_path()), help="Rules file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    migrate_parser = subparsers.add_parser("migrate", help="Apply database migrations")
    migrate_parser.add_argument("--migrations", default=MIGRATIONS_DIR)
    migrate_parser.add_argument(
        "--dry-run", action="store_true", help="List pending migrations without applying"
    )

    # regenerate
    regen_parser = subparsers.add_parser("regenerate", help="Regenerate a post's share links")
    regen_parser.add_argument("post_id", type=int, help="Post ID")

    args = parser.parse_args()

    if args.command == "migrate":
        handle_migrate(args)
    elif args.command == "regenerate":
        handle_regenerate(args)


if __name__ == "__main__":
    main()
