"""Command line entry point for the skill matching engine."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from skillmatch.categorization import (
    BatchClassifier,
    Categorizer,
    CategoryLexicon,
    get_default_lexicon,
    load_lexicon,
)
from skillmatch.config.environment import EnvironmentConfig
from skillmatch.config.exceptions import ConfigurationError
from skillmatch.config.loader import load_config
from skillmatch.config.models import AppConfig
from skillmatch.domain.models import UserSkills
from skillmatch.logging import get_logger
from skillmatch.logging.config import configure_logging
from skillmatch.logging.context import log_context
from skillmatch.matching import MatchRanker
from skillmatch.persistence.database import close_database, init_database
from skillmatch.registry import SkillRegistry

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file (None for the default locations)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with env_config.log_level resolved

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Apply log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def resolve_lexicon(
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    lexicon_override: Optional[Path] = None,
) -> CategoryLexicon:
    """
    Pick the lexicon to classify with.

    Path priority: CLI > LEXICON_PATH > categorization.lexicon_path > built-in.
    categorization.acceptance_threshold, when set, replaces the lexicon's own.

    Raises:
        ConfigurationError: If the chosen lexicon file is missing or invalid
    """
    path = lexicon_override or env_config.lexicon_path or app_config.categorization.lexicon_path

    lexicon = load_lexicon(path) if path else get_default_lexicon()
    return lexicon.with_threshold(app_config.categorization.acceptance_threshold)


def load_users(users_path: Path) -> List[UserSkills]:
    """
    Read a YAML list of users ({id, skills_to_teach, skills_to_learn}).

    Raises:
        ConfigurationError: If the file cannot be read or does not validate
    """
    try:
        with open(users_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to read users file {users_path}: {e}",
            suggestions=["Provide a YAML list of users with id, skills_to_teach and skills_to_learn"],
        ) from e

    if not isinstance(data, list):
        raise ConfigurationError(
            f"Users file {users_path} must contain a YAML list",
            suggestions=["Provide a YAML list of users with id, skills_to_teach and skills_to_learn"],
        )

    try:
        return [UserSkills.model_validate(entry) for entry in data]
    except ValidationError as e:
        errors = [
            f"{' -> '.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(f"Invalid users file {users_path}", errors=errors) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Skill matching engine - categorize skills and rank compatible users"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml or config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--lexicon",
        type=Path,
        default=None,
        help="Path to a YAML lexicon (overrides config and LEXICON_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    categorize = subparsers.add_parser("categorize", help="Classify skill names")
    categorize.add_argument("names", nargs="+", help="Skill names")

    stats = subparsers.add_parser("stats", help="Count skill names per category")
    stats.add_argument("names", nargs="+", help="Skill names")
    stats.add_argument(
        "--include-empty", action="store_true", help="Also list categories with no names"
    )

    register = subparsers.add_parser("register", help="Store skills in the registry")
    register.add_argument("names", nargs="+", help="Skill names")

    rank = subparsers.add_parser("rank", help="Rank compatible users for one user")
    rank.add_argument("--users", type=Path, required=True, help="YAML file with the user pool")
    rank.add_argument("--user-id", type=int, required=True, help="User to rank candidates for")

    return parser


def run_categorize(categorizer: Categorizer, names: Sequence[str]) -> int:
    for name, prediction in zip(names, BatchClassifier(categorizer).iter_categorize(names)):
        line = f"{name}\t{prediction.category}\t{prediction.confidence:.2f}"
        if prediction.reasoning:
            line += f"\t{prediction.reasoning}"
        print(line)
    return 0


def run_stats(categorizer: Categorizer, names: Sequence[str], include_empty: bool) -> int:
    stats = BatchClassifier(categorizer).get_category_stats(names, include_empty=include_empty)
    for category, count in sorted(stats.items(), key=lambda item: (-item[1], item[0])):
        print(f"{category}\t{count}")
    return 0


def run_register(registry: SkillRegistry, names: Sequence[str]) -> int:
    skills = registry.get_or_create(names)
    for skill in skills:
        print(f"{skill.display_name}\t{skill.category}\t{skill.confidence:.2f}")
    return 0


def run_rank(ranker: MatchRanker, users: List[UserSkills], user_id: int, limit: int) -> int:
    """Print ranked candidates for user_id; exit code 1 if the user is not in the pool."""
    for_user = next((user for user in users if user.id == user_id), None)
    if for_user is None:
        print(f"User {user_id} not found in users file", file=sys.stderr)
        return 1

    ranked = ranker.rank(for_user, users)
    if limit:
        ranked = ranked[:limit]

    for entry in ranked:
        teaches = ", ".join(entry.breakdown.a_teaches_b) or "-"
        learns = ", ".join(entry.breakdown.b_teaches_a) or "-"
        print(f"{entry.candidate_id}\t{entry.score:.3f}\tyou teach: {teaches}\tyou learn: {learns}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the skill matching engine.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        # Load configuration early (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        log_format = app_config.logging.format if app_config.logging else "key-value"
        configure_logging(
            level=env_config.log_level, format_type=log_format, environment=env_config.environment
        )

        with log_context(command=args.command):
            logger.info(
                "Configuration loaded",
                extra={
                    "event": "config.loaded",
                    "config_path": str(args.config) if args.config else None,
                    "log_level": env_config.log_level,
                    "log_format": log_format,
                },
            )

            if args.command in ("categorize", "stats", "register"):
                categorizer = Categorizer(resolve_lexicon(app_config, env_config, args.lexicon))

                if args.command == "categorize":
                    return run_categorize(categorizer, args.names)
                if args.command == "stats":
                    return run_stats(categorizer, args.names, args.include_empty)

                init_database(env_config.database_url)
                try:
                    return run_register(SkillRegistry(categorizer), args.names)
                finally:
                    close_database()

            # rank
            users = load_users(args.users)
            init_database(env_config.database_url)
            try:
                return run_rank(
                    MatchRanker(), users, args.user_id, app_config.matching.candidate_limit
                )
            finally:
                close_database()

    except ConfigurationError as e:
        # Configuration errors are already formatted nicely
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1
    except Exception as e:
        # Unexpected fatal error
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "cli.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
