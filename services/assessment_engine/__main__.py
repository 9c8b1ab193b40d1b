"""
Command-line scoring of a single response set.

    python -m services.assessment_engine answers.json [--catalog PATH] [--mode trait_aggregate]

The answers file is a JSON object of question ID to answer value. The scored
result is printed to stdout as JSON.
"""
import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .config import get_settings
from .engine import AssessmentEngine
from .loader import load_catalog_from_file
from .logging_config import setup_logging
from .models import ArchetypeMode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m services.assessment_engine",
        description="Score a completed pillar assessment.",
    )
    parser.add_argument("answers", help="Path to a JSON file mapping question IDs to answers")
    parser.add_argument("--catalog", help="Question catalog YAML (overrides ASSESSMENT_CATALOG_PATH)")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ArchetypeMode],
        help="Archetype scoring mode (overrides ASSESSMENT_ARCHETYPE_MODE)",
    )
    parser.add_argument("--log-level", help="Log level (overrides ASSESSMENT_LOG_LEVEL)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    try:
        catalog = load_catalog_from_file(args.catalog or settings.catalog_path)
        with open(args.answers, 'r', encoding='utf-8') as f:
            answers = json.load(f)
    except (ValueError, OSError, ValidationError) as e:
        # json.JSONDecodeError and CatalogValidationError are both ValueErrors
        logger.error(f"Could not load assessment input: {e}")
        return 1

    if not isinstance(answers, dict):
        logger.error(f"Answers file must contain a JSON object, got {type(answers).__name__}")
        return 1

    engine = AssessmentEngine(catalog, default_mode=settings.archetype_mode)
    result = engine.score(answers, mode=args.mode)
    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
