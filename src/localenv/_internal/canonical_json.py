"""Canonical JSON serialization for machine-readable reports.

`localenv status --json` output goes through here so that two reports of
the same state are byte-identical and can be diffed or hashed by scripts.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization.

    Rules:
    - UTF-8 (no ASCII escaping)
    - Sorted keys
    - Stable separators (",", ":")
    - Lists keep their order (command order is meaningful)

    Args:
        obj: JSON-compatible Python object

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )
