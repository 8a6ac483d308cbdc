import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Type

import yaml
from pydantic import BaseModel, create_model

CONFIG_FILE_PATH = Path(__file__).parent / 'config.yaml'

_PLACEHOLDER = re.compile(r'\$\{([^}]+)\}')


def load_yaml(file_path: Path) -> Dict[str, Any]:
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file '{file_path}' does not exist.")

    with file_path.open('r') as f:
        config_data = yaml.safe_load(f)

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file '{file_path}' must contain a mapping at the root.")
    return config_data


def _lookup(root: Dict[str, Any], dotted: str) -> Any:
    node: Any = root
    for part in dotted.split('.'):
        if not isinstance(node, dict) or part not in node:
            raise ValueError(f"Config variable '{dotted}' is not defined.")
        node = node[part]
    return node


def _expand(value: str, root: Dict[str, Any], resolving: Set[str]) -> Any:
    whole = _PLACEHOLDER.fullmatch(value)

    def substitute(name: str) -> Any:
        if name in resolving:
            raise ValueError(f"Circular reference in config variable '{name}'.")
        target = _lookup(root, name)
        if isinstance(target, str):
            return _expand(target, root, resolving | {name})
        if isinstance(target, (dict, list)):
            raise ValueError(f"Config variable '{name}' must resolve to a scalar.")
        return target

    # A value that is only a placeholder keeps the referenced type
    if whole:
        return substitute(whole.group(1))
    return _PLACEHOLDER.sub(lambda m: str(substitute(m.group(1))), value)


def interpolate_config(node: Any, root: Optional[Dict[str, Any]] = None) -> Any:
    """
    Resolve ${Section.KEY} references against the whole document.
    Returns a new structure; the input is left untouched.
    """
    if root is None:
        root = node
    if isinstance(node, dict):
        return {key: interpolate_config(value, root) for key, value in node.items()}
    if isinstance(node, list):
        return [interpolate_config(item, root) for item in node]
    if isinstance(node, str):
        return _expand(node, root, set())
    return node


def _field_type(model_name: str, key: str, value: Any) -> Any:
    if isinstance(value, dict):
        return generate_pydantic_model(f"{model_name}_{key}", value)
    if isinstance(value, list):
        if value and isinstance(value[0], dict):
            return List[generate_pydantic_model(f"{model_name}_{key}Item", value[0])]
        return List[type(value[0])] if value else List[Any]
    if value is None:
        return Optional[Any]
    return type(value)


def generate_pydantic_model(model_name: str, data: Dict[str, Any]) -> Type[BaseModel]:
    """Build a pydantic model mirroring the shape of a nested config mapping"""
    fields = {
        key: (_field_type(model_name, key, value), ...)
        for key, value in data.items()
    }
    return create_model(model_name, **fields)


def load_settings(file_path: Path = CONFIG_FILE_PATH) -> BaseModel:
    config_data = interpolate_config(load_yaml(file_path))
    return generate_pydantic_model("AppConfig", config_data)(**config_data)


settings = load_settings()
