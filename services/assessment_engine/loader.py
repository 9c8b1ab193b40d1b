import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from services.assessment_engine.models import QuestionCatalog, Section

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "assets" / "assessment_questions.yml"


class CatalogValidationError(ValueError):
    """Custom exception for catalog validation errors not covered by Pydantic."""
    pass


def load_catalog_data(data: Dict[str, Any]) -> QuestionCatalog:
    """
    Validates the raw dictionary data against the QuestionCatalog model
    and performs additional custom validations.
    """
    try:
        catalog = QuestionCatalog.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    question_ids = set()
    for question in catalog.questions:
        if question.id in question_ids:
            raise CatalogValidationError(f"Duplicate question ID found: {question.id}")
        question_ids.add(question.id)

        if question.section == Section.PILLAR and question.pillar is None:
            raise CatalogValidationError(f"Pillar question '{question.id}' has no pillar")

        option_values = set()
        for option in question.options:
            if option.value in option_values:
                raise CatalogValidationError(
                    f"Duplicate option value {option.value} in question '{question.id}'"
                )
            option_values.add(option.value)

    if not catalog.questions:
        logger.warning(f"Question catalog version {catalog.version} contains no questions")

    return catalog


def load_catalog_from_file(file_path: Union[str, Path]) -> QuestionCatalog:
    """
    Loads a question catalog from a YAML file, validates it,
    and returns a QuestionCatalog object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CatalogValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise CatalogValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise CatalogValidationError(f"YAML file is empty or invalid: {file_path}")

    catalog = load_catalog_data(data)
    logger.info(f"Loaded question catalog {catalog.version} ({len(catalog.questions)} questions) from {file_path}")
    return catalog
