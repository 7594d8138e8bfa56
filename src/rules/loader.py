import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules

RULES_PATH_ENV = "SOCIAL_SHARE_RULES"
DEFAULT_RULES_PATH = "rules.yaml"


def default_rules_path() -> Path:
    return Path(os.environ.get(RULES_PATH_ENV, DEFAULT_RULES_PATH))


def load_rules(path: Path) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    # Rules may live inside a ```yaml fence of a markdown document
    lines = content.splitlines()
    yaml_lines = []
    in_block = False
    found_block = False

    for line in lines:
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break

        if in_block:
            yaml_lines.append(line)

    clean_content = "\n".join(yaml_lines) if found_block else content

    try:
        data = yaml.safe_load(clean_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    # The feature's settings sit under a top-level 'social_share' key
    if isinstance(data, dict) and "social_share" in data:
        data = data["social_share"]

    try:
        return Rules.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
