"""
YAML data loader with schema validation.

Loads feature templates, marketing channels, funding paths, hiring roles
and the candidate name pool from YAML files and validates them against
JSON schemas.
"""

import yaml
import json
from pathlib import Path
from typing import Dict, List, Optional
import jsonschema

from .data_types import (
    Catalog, FeatureTemplate, ChannelTemplate, StartingTerms, HireRole
)


DATA_ROOT = Path(__file__).parent / "data"
SCHEMA_DIR = DATA_ROOT / "schemas"


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Parse one catalog file. Empty documents are rejected."""
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}") from e

    if data is None:
        raise DataLoadError(f"Empty catalog file: {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """
    Check a parsed catalog file against its *.schema.json.

    Catalog directories without a schema file are accepted as-is. Errors
    name the offending entry, e.g. `channels/2/cost`.
    """
    if not schema_path.exists():
        return

    try:
        schema = json.loads(schema_path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}") from e

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise DataLoadError(f"Validation error in {data_path} at {where}: {e.message}") from e


def load_feature_templates(file_path: Path, schema_dir: Optional[Path] = None) -> Dict[str, List[FeatureTemplate]]:
    """Load per-startup-type feature templates from YAML"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "features.schema.json", file_path)

    templates = {}
    for startup_type, entries in data['startup_types'].items():
        templates[startup_type] = [FeatureTemplate(**entry) for entry in entries]

    # Prerequisites must reference features of the same startup type
    for startup_type, features in templates.items():
        known = {f.id for f in features}
        for feature in features:
            missing = [p for p in feature.prerequisites if p not in known]
            if missing:
                raise DataLoadError(
                    f"Feature '{feature.id}' ({startup_type}) has unknown prerequisites: {missing}"
                )

    return templates


def load_marketing_channels(file_path: Path, schema_dir: Optional[Path] = None) -> List[ChannelTemplate]:
    """Load marketing channel catalog from YAML"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "marketing.schema.json", file_path)

    return [ChannelTemplate(**c) for c in data['channels']]


def load_starting_paths(file_path: Path, schema_dir: Optional[Path] = None) -> Dict[str, StartingTerms]:
    """Load funding path terms from YAML"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "paths.schema.json", file_path)

    paths = {}
    for path_data in data['paths']:
        terms = StartingTerms(**path_data)
        paths[terms.path] = terms

    return paths


def load_hire_roles(file_path: Path, schema_dir: Optional[Path] = None) -> List[HireRole]:
    """Load hiring board roles from YAML"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "roles.schema.json", file_path)

    return [HireRole(**r) for r in data.get('roles', [])]


def load_name_pool(file_path: Path, schema_dir: Optional[Path] = None) -> List[str]:
    """Load candidate name pool from YAML"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "names.schema.json", file_path)

    return list(data['names'])


def load_all_data(data_root: Path = DATA_ROOT, schema_dir: Optional[Path] = SCHEMA_DIR) -> Catalog:
    """Load the complete data pack from a data directory

    Expects a catalog/ subdirectory with features, marketing, paths,
    roles and names YAML files.
    """
    catalog_dir = Path(data_root) / "catalog"
    if not catalog_dir.exists():
        raise DataLoadError(f"Catalog directory not found: {catalog_dir}")

    return Catalog(
        features=load_feature_templates(catalog_dir / "features.yaml", schema_dir),
        channels=load_marketing_channels(catalog_dir / "marketing.yaml", schema_dir),
        paths=load_starting_paths(catalog_dir / "paths.yaml", schema_dir),
        roles=load_hire_roles(catalog_dir / "roles.yaml", schema_dir),
        names=load_name_pool(catalog_dir / "names.yaml", schema_dir),
    )


_default_catalog: Optional[Catalog] = None


def default_catalog() -> Catalog:
    """Bundled data pack, loaded once per process"""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = load_all_data()
    return _default_catalog
