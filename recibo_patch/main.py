from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config_loader import load_config
from .logging_config import configure_logging
from .patcher import InsertionPointNotFound, PatchError, PatchStepError, apply_patch
from .template import SUCCESS_MESSAGE

logger = logging.getLogger(__name__)

# Shipped with the package so it is found from any working directory.
DEFAULT_CONFIG = Path(__file__).resolve().parent / "config" / "config.yaml"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Add Recibo.fromMap to the Recibo model")
    ap.add_argument("--config", default=DEFAULT_CONFIG)
    ap.add_argument("--target", default=None, help="Override patch.target_path")
    ap.add_argument(
        "--skip-if-present",
        action="store_true",
        help="Do nothing if Recibo.fromMap is already in the target",
    )
    ap.add_argument("--log-level", default="INFO")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(service="recibo_patch", level=args.log_level)

    try:
        cfg = load_config(args.config)
    except (ValueError, OSError) as e:
        print(f"Config Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.target:
        cfg = dataclasses.replace(cfg, target_path=args.target)
    if args.skip_if_present:
        cfg = dataclasses.replace(cfg, skip_if_present=True)

    try:
        res = apply_patch(cfg)
    except PatchStepError as e:
        print(f"I/O Error during {e.step}: {e.cause}", file=sys.stderr)
        sys.exit(1)
    except InsertionPointNotFound as e:
        print(f"Patch Error: insertion point not found in {cfg.target_path}: {e}", file=sys.stderr)
        sys.exit(2)
    except PatchError as e:
        print(f"Patch Error: {e}", file=sys.stderr)
        sys.exit(2)

    if res.applied:
        print(SUCCESS_MESSAGE)
    else:
        print(f"fromMap ja presente em {res.target_path}, nada a fazer.")
    sys.exit(0)


if __name__ == "__main__":
    main()
