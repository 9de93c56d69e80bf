"""Command line entry point for the skill exchange matching engine.

Usage:
    python -m src.main init-db
    python -m src.main seed fixtures.yaml
    python -m src.main matches <user_id> [--category Music] [--min-rating 4] [--location Berlin]
    python -m src.main similar <user_id> [--limit 5]
    python -m src.main recommend <user_id>
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError

from config.settings import settings
from src.logging_config import setup_logging
from src.matching import NotFoundError, SkillCategory, get_engine
from src.persistence.database import get_session, init_db
from src.persistence.profile_store import SqlProfileStore
from src.persistence.seed import load_fixture

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Skill exchange matching engine.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables.")

    seed = sub.add_parser("seed", help="Load users and skills from a YAML fixture.")
    seed.add_argument("path", help="Path to the fixture file.")

    matches = sub.add_parser("matches", help="Find exchange partners for a user.")
    matches.add_argument("user_id")
    matches.add_argument(
        "--category",
        choices=[c.value for c in SkillCategory],
        help="Only partners with a complementary skill in this category.",
    )
    matches.add_argument("--min-rating", type=float, help="Minimum partner rating (0-5).")
    matches.add_argument("--location", help="Partner city or country.")

    similar = sub.add_parser("similar", help="Find users offering skills in the same categories.")
    similar.add_argument("user_id")
    similar.add_argument("--limit", type=int, default=None, help="Maximum results.")

    recommend = sub.add_parser("recommend", help="Recommend popular skills new to a user.")
    recommend.add_argument("user_id")

    return parser


def run(args: argparse.Namespace) -> list[dict] | dict:
    """Execute a parsed command and return its JSON-serializable output."""
    if args.command == "init-db":
        init_db()
        return {"status": "ok"}

    with get_session() as session:
        if args.command == "seed":
            return load_fixture(session, args.path)

        engine = get_engine(SqlProfileStore(session), settings)

        if args.command == "matches":
            filters = {
                "category": args.category,
                "min_rating": args.min_rating,
                "location": args.location,
            }
            results = engine.find_matches(args.user_id, filters)
        elif args.command == "similar":
            results = engine.find_similar_users(args.user_id, limit=args.limit)
        else:
            results = engine.get_skill_recommendations(args.user_id)

        return [r.to_dict() for r in results]


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    setup_logging(settings.log_level, settings.log_file, settings.matching_log_level)
    args = build_parser().parse_args(argv)

    try:
        output = run(args)
    except NotFoundError as e:
        logger.error("%s", e)
        return 1
    except (ValidationError, ValueError) as e:
        logger.error("Invalid input: %s", e)
        return 2

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
