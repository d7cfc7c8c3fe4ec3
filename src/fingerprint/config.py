"""
Layered config loading shared by the fingerprint config dataclasses:
dataclass defaults < YAML file < environment variables < explicit overrides.
"""
from __future__ import annotations
import logging
import os
from dataclasses import fields
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T")


def field_names(cls: type) -> set:
    return {f.name for f in fields(cls)}


def load_config(cls: Type[T],
                yaml_path: Optional[str] = None,
                env_prefix: str = "",
                converters: Optional[Mapping[str, Callable[[str], Any]]] = None,
                **overrides) -> T:
    """
    Build `cls` from the layered sources. Only keys naming dataclass fields are
    taken from YAML; env vars are `<env_prefix><FIELD_NAME>` and are passed
    through `converters[field]` (str if absent).
    """
    names = field_names(cls)
    config_dict: Dict[str, Any] = {}

    if yaml_path and os.path.exists(yaml_path):
        with open(yaml_path, 'r') as f:
            yaml_config = yaml.safe_load(f) or {}
        config_dict.update({k: v for k, v in yaml_config.items() if k in names})
        logger.debug("loaded %s keys from %s", sorted(config_dict), yaml_path)

    converters = converters or {}
    for name in sorted(names):
        env_var = f"{env_prefix}{name.upper()}"
        value = os.getenv(env_var)
        if value is not None:
            config_dict[name] = converters.get(name, str)(value)
            logger.debug("config %s taken from %s", name, env_var)

    config_dict.update(overrides)

    return cls(**config_dict)
