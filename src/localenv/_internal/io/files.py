"""Filesystem IO helpers with atomic writes."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_text_atomic(path: Path, content: str, mode: Optional[int] = None) -> None:
    """Write content to path via a temp file in the same directory and os.replace.

    Readers see either the old file or the new one, never a partial write.
    """
    ensure_dir(path.parent)
    fd, temp_name = tempfile.mkstemp(prefix=".tmp-", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(temp_name, mode)
        os.replace(temp_name, path)
    finally:
        if os.path.exists(temp_name):
            os.unlink(temp_name)


def write_json_atomic(path: Path, data: Dict[str, Any], mode: Optional[int] = None) -> None:
    payload = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
    write_text_atomic(path, payload, mode=mode)
