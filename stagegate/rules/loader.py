import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from stagegate.rules.models import PipelineRules

logger = logging.getLogger(__name__)

# Default rules file name (relative to project root)
DEFAULT_RULES_PATH = "pipeline_rules.yaml"
RULES_PATH_ENV = "STAGEGATE_RULES_PATH"


def load_rules(path: Path) -> PipelineRules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    try:
        return PipelineRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def _find_project_root() -> Path:
    """Find project root by looking for marker files."""
    current = Path.cwd()

    for parent in [current, *current.parents]:
        if (parent / "pyproject.toml").exists() or (parent / ".git").exists():
            return parent

    return current


def resolve_rules(path: Path | str | None = None) -> PipelineRules:
    """
    Locate and load rules.

    Order: explicit path, $STAGEGATE_RULES_PATH, project root file,
    built-in defaults.
    """
    if path is not None:
        return load_rules(Path(path))

    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        return load_rules(Path(env_path))

    default_path = _find_project_root() / DEFAULT_RULES_PATH
    if default_path.exists():
        return load_rules(default_path)

    logger.debug("No rules file found, using built-in defaults")
    return PipelineRules()
