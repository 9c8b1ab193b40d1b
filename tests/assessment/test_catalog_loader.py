import copy

import pytest
import yaml
from pydantic import ValidationError

from services.assessment_engine.loader import (
    DEFAULT_CATALOG_PATH,
    CatalogValidationError,
    load_catalog_data,
    load_catalog_from_file,
)
from services.assessment_engine.models import Pillar, QuestionCatalog, Section

# Minimal valid structure for testing
MINIMAL_VALID_CATALOG = {
    "version": "test-1",
    "questions": [
        {
            "id": "arch-1",
            "section": "archetype",
            "text": "What drives you?",
            "options": [
                {"value": 1, "label": "Targets"},
                {"value": 2, "label": "Systems"},
            ],
        },
        {
            "id": "id-1",
            "section": "pillar",
            "pillar": "identity",
            "text": "I know my values",
            "options": [{"value": v, "label": str(v)} for v in range(1, 8)],
        },
    ],
}


def test_load_valid_catalog_data():
    catalog = load_catalog_data(copy.deepcopy(MINIMAL_VALID_CATALOG))
    assert isinstance(catalog, QuestionCatalog)
    assert catalog.version == "test-1"
    assert catalog.questions[1].pillar == Pillar.IDENTITY


def test_duplicate_question_id():
    data = copy.deepcopy(MINIMAL_VALID_CATALOG)
    data["questions"].append(copy.deepcopy(data["questions"][0]))
    with pytest.raises(CatalogValidationError) as excinfo:
        load_catalog_data(data)
    assert "Duplicate question ID found: arch-1" in str(excinfo.value)


def test_duplicate_option_value():
    data = copy.deepcopy(MINIMAL_VALID_CATALOG)
    data["questions"][0]["options"].append({"value": 1, "label": "Again"})
    with pytest.raises(CatalogValidationError) as excinfo:
        load_catalog_data(data)
    assert "Duplicate option value 1 in question 'arch-1'" in str(excinfo.value)


def test_pillar_question_without_pillar():
    data = copy.deepcopy(MINIMAL_VALID_CATALOG)
    del data["questions"][1]["pillar"]
    with pytest.raises(CatalogValidationError) as excinfo:
        load_catalog_data(data)
    assert "has no pillar" in str(excinfo.value)


def test_unknown_section_is_schema_error():
    data = copy.deepcopy(MINIMAL_VALID_CATALOG)
    data["questions"][0]["section"] = "lifestyle"
    with pytest.raises(ValidationError):
        load_catalog_data(data)


def test_unknown_pillar_is_schema_error():
    data = copy.deepcopy(MINIMAL_VALID_CATALOG)
    data["questions"][1]["pillar"] = "finance"
    with pytest.raises(ValidationError):
        load_catalog_data(data)


def test_catalog_error_is_value_error():
    assert issubclass(CatalogValidationError, ValueError)


def test_load_from_file(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(yaml.safe_dump(MINIMAL_VALID_CATALOG), encoding="utf-8")
    catalog = load_catalog_from_file(path)
    assert len(catalog.questions) == 2


def test_load_missing_file(tmp_path):
    with pytest.raises(CatalogValidationError) as excinfo:
        load_catalog_from_file(tmp_path / "missing.yml")
    assert "File not found" in str(excinfo.value)


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(CatalogValidationError) as excinfo:
        load_catalog_from_file(path)
    assert "empty or invalid" in str(excinfo.value)


def test_load_malformed_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("questions: [unclosed", encoding="utf-8")
    with pytest.raises(CatalogValidationError) as excinfo:
        load_catalog_from_file(path)
    assert "Error parsing YAML file" in str(excinfo.value)


def test_shipped_catalog():
    catalog = load_catalog_from_file(DEFAULT_CATALOG_PATH)

    assert len(catalog.questions) == 25
    assert len(catalog.by_section(Section.BACKGROUND)) == 4
    assert len(catalog.by_section(Section.ARCHETYPE)) == 6

    pillar_questions = catalog.by_section(Section.PILLAR)
    assert len(pillar_questions) == 15
    for pillar in Pillar:
        assert sum(1 for q in pillar_questions if q.pillar == pillar) == 3
    assert all([o.value for o in q.options] == list(range(1, 8)) for q in pillar_questions)
