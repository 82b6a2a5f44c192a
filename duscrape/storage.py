"""
Result files.

Every scraper writes exactly one JSON document into the output directory
(results/ by default). Files are overwritten on each run; there is no merging
with earlier results.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def write_json(payload: Any, path: str | Path) -> Path:
    """
    Write payload as pretty-printed JSON (2-space indent) to path.

    Creates parent directories if needed. OSError is left to the caller.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return out


def read_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))
