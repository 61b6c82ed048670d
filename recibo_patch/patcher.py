from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .template import CLOSING_SUFFIX, FROM_MAP_METHOD, FROM_MAP_SIGNATURE

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "lib/models/recibo.dart"


class PatchError(RuntimeError):
    pass


class InsertionPointNotFound(PatchError):
    pass


class PatchStepError(PatchError):
    def __init__(self, step: str, path: str, cause: BaseException):
        super().__init__(f"{step} failed for {path}: {cause}")
        self.step = step
        self.path = path
        self.cause = cause


@dataclass(frozen=True)
class PatchConfig:
    target_path: str = DEFAULT_TARGET
    encoding: str = "utf-8"
    class_name: Optional[str] = None
    skip_if_present: bool = False


@dataclass(frozen=True)
class PatchResult:
    target_path: str
    insert_at: int
    bytes_before: int
    bytes_after: int
    applied: bool = True


def load_target(path: str | Path, encoding: str = "utf-8") -> str:
    return Path(path).read_text(encoding=encoding)


def find_insertion_point(text: str, class_name: Optional[str] = None) -> int:
    """
    Index of the last '}' in text, taken as the end of the class body.
    Braces are not balanced: a trailing map literal or nested block wins
    if it closes last. Raises instead of returning the -1 sentinel.
    """
    idx = text.rfind("}")
    if idx < 0:
        raise InsertionPointNotFound("no closing brace '}' found in target text")

    if class_name:
        decl = re.compile(rf"\bclass\s+{re.escape(class_name)}\b")
        if not decl.search(text, 0, idx):
            raise InsertionPointNotFound(
                f"class {class_name} is not declared before the last closing brace (index {idx})"
            )
    return idx


def inject_template(text: str, index: int, template: str = FROM_MAP_METHOD) -> str:
    # Anything after the located brace is replaced by the closing suffix.
    if index < 0:
        raise InsertionPointNotFound(f"invalid insertion index {index}")
    return text[:index] + template + CLOSING_SUFFIX


def write_target(path: str | Path, text: str, encoding: str = "utf-8") -> None:
    # In place: no backup, no temp file + rename.
    Path(path).write_text(text, encoding=encoding)


def is_applied(text: str) -> bool:
    return FROM_MAP_SIGNATURE in text


def apply_patch(cfg: PatchConfig) -> PatchResult:
    """
    Load -> locate -> inject -> write, once.

    Not idempotent unless cfg.skip_if_present is set: a second run inserts a
    second copy of the template before the brace written by the first.
    """
    path = cfg.target_path
    log_ctx = {"target_path": path}

    try:
        text = load_target(path, cfg.encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read {path}: {e}", extra={**log_ctx, "step": "load"})
        raise PatchStepError("load", path, e) from e
    logger.info(f"Loaded {len(text)} chars", extra={**log_ctx, "step": "load"})

    if cfg.skip_if_present and is_applied(text):
        logger.info(
            "fromMap already present, skipping",
            extra={**log_ctx, "step": "check", "json": {"signature": FROM_MAP_SIGNATURE}},
        )
        return PatchResult(
            target_path=path,
            insert_at=-1,
            bytes_before=len(text),
            bytes_after=len(text),
            applied=False,
        )

    idx = find_insertion_point(text, cfg.class_name)
    logger.info("Located insertion point", extra={**log_ctx, "step": "locate", "insert_at": idx})

    new_text = inject_template(text, idx)
    logger.info(
        f"Template injected ({len(new_text) - len(text):+d} chars)",
        extra={**log_ctx, "step": "inject", "insert_at": idx},
    )

    try:
        write_target(path, new_text, cfg.encoding)
    except OSError as e:
        logger.error(f"Could not write {path}: {e}", extra={**log_ctx, "step": "write"})
        raise PatchStepError("write", path, e) from e
    logger.info("Target written", extra={**log_ctx, "step": "write", "insert_at": idx})

    return PatchResult(
        target_path=path,
        insert_at=idx,
        bytes_before=len(text),
        bytes_after=len(new_text),
    )
