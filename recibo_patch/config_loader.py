from __future__ import annotations

import os
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .patcher import PatchConfig


_ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)(:-([^}]*))?\}")

_PATCH_KEYS = {f.name for f in fields(PatchConfig)}


def _expand_env(value: str) -> str:
    def repl(m: re.Match) -> str:
        var = m.group(1)
        default = m.group(3) if m.group(2) else ""
        return os.getenv(var, default)
    return _ENV_PATTERN.sub(repl, value)


def _walk_expand(obj: Any) -> Any:
    if isinstance(obj, str):
        return _expand_env(obj)
    if isinstance(obj, list):
        return [_walk_expand(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _walk_expand(v) for k, v in obj.items()}
    return obj


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", ""):
        return False
    raise ValueError(f"patch.{key} must be a boolean, got {value!r}")


def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("config root must be a mapping")
    return _walk_expand(data)


def load_config(path: Optional[str | Path] = None) -> PatchConfig:
    """
    Build a PatchConfig from the `patch:` section of a YAML file.
    No path yields the built-in defaults; a path that does not exist raises.
    """
    if path is None:
        return PatchConfig()

    raw = load_yaml(path)
    section = raw.get("patch") or {}
    if not isinstance(section, dict):
        raise ValueError("'patch' section must be a mapping")

    unknown = sorted(set(section) - _PATCH_KEYS)
    if unknown:
        raise ValueError(f"Unknown keys in patch config: {unknown}")

    kwargs: Dict[str, Any] = dict(section)
    if "skip_if_present" in kwargs:
        kwargs["skip_if_present"] = _as_bool("skip_if_present", kwargs["skip_if_present"])
    if "target_path" in kwargs:
        if not str(kwargs["target_path"]).strip():
            raise ValueError("patch.target_path must not be empty")
        kwargs["target_path"] = str(kwargs["target_path"])
    if kwargs.get("class_name") == "":
        kwargs["class_name"] = None
    return PatchConfig(**kwargs)
