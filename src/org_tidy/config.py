from pathlib import Path

import orjson
from pydantic import ValidationError

from org_tidy.schemas import StyleConfig

DEFAULT_CONFIG = StyleConfig()


def load_config(path: Path) -> StyleConfig:
    """
    Read a StyleConfig from a JSON file.

    Keys missing from the file keep their defaults. An ``org_tidy`` object at
    the top level is used when present, so the settings can live in a shared
    configuration file.
    """
    try:
        data = orjson.loads(Path(path).read_bytes())
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    data = data.get("org_tidy", data)
    try:
        return StyleConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid org-tidy configuration in {path}: {e}") from e
