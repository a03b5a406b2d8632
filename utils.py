from logging import Logger
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, TypeVar, Union

import yaml

from exceptions import ConfigurationError

T = TypeVar("T")

TRUE_VALUES = ("true", "1", "yes")
FALSE_VALUES = ("false", "0", "no")


def load_yaml(file_path: Union[str, Path]) -> Dict:
    with open(file_path, "r") as file:
        data = yaml.safe_load(file)
    return data or {}


def validate_config_paths(config_paths: Dict[str, Path], logger: Logger) -> bool:
    """Validate that all configuration paths exist."""
    for config_name, path in config_paths.items():
        if not path.exists():
            logger.error(f"Configuration file not found: {config_name} at {path}")
            raise ConfigurationError(
                f"Configuration file not found: {config_name} at {path}"
            )
    return True


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def read_bool(settings: Dict[str, Any], name: str, default: bool) -> bool:
    value = settings.get(name)
    if is_empty(value):
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be True or False: {value}")


def read_int(settings: Dict[str, Any], name: str, default: int) -> int:
    value = settings.get(name)
    if is_empty(value):
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number: {value}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number: {value}")


def read_string(
    settings: Dict[str, Any], name: str, default: Optional[str] = None
) -> Optional[str]:
    value = settings.get(name)
    if is_empty(value):
        return default
    return str(value).strip()


def read_string_list(
    settings: Dict[str, Any], name: str, default: Optional[List[str]] = None
) -> Optional[List[str]]:
    """Accept either a YAML list or a comma separated string."""
    value = settings.get(name)
    if is_empty(value):
        return default
    items = value.split(",") if isinstance(value, str) else value
    if not isinstance(items, (list, tuple)):
        raise ConfigurationError(f"{name} must be a list or comma separated string")
    return [str(item).strip() for item in items if not is_empty(item)]


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most `size` items, in order."""
    if size < 1:
        raise ValueError("Chunk size must be at least 1")
    for i in range(0, len(items), size):
        yield list(items[i : i + size])
