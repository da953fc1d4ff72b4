import yaml
from pydantic import ValidationError
from typing import Dict, Any

from services.profile_scoring.models import CatalogConfig, CatalogValidationError


def load_catalog_data(data: Dict[str, Any]) -> CatalogConfig:
    """
    Validates the raw dictionary data against the CatalogConfig model
    and performs additional custom validations.
    """
    try:
        config = CatalogConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    component_keys = set()
    for component in config.components:
        if component.key in component_keys:
            raise CatalogValidationError(f"Duplicate component key found: {component.key}")
        component_keys.add(component.key)

    question_ids = set()
    for question in config.questions:
        if question.id in question_ids:
            raise CatalogValidationError(f"Duplicate question ID found: {question.id}")
        question_ids.add(question.id)

        option_ids = set()
        for option in question.options:
            if option.id in option_ids:
                raise CatalogValidationError(f"Duplicate option ID '{option.id}' in question '{question.id}'")
            option_ids.add(option.id)

        for key in question.components:
            if key not in component_keys:
                raise CatalogValidationError(f"Question '{question.id}' links to unknown component '{key}'")

    return config


def load_catalog_from_file(file_path: str) -> CatalogConfig:
    """
    Loads a quiz catalog from a YAML file, validates it,
    and returns a CatalogConfig object.
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

    return load_catalog_data(data)
