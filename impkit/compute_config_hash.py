"""Logic for computing stable hashes of configuration objects."""

import hashlib
import json
from collections.abc import Iterable, Mapping
from typing import Any


def compute_config_hash(
    config: Mapping[str, Any], sections: Iterable[str] | None = None
) -> str:
    """Compute a stable hash of the configuration.

    With ``sections`` only those top-level sections take part, so settings
    that cannot change a result (for example ``exports`` for a migration
    report) do not change its hash. Missing sections hash as empty.
    Uses canonical JSON (sorted keys); paths and other non-JSON values are
    serialized with ``str``.
    """
    if sections is not None:
        config = {name: config.get(name) or {} for name in sections}
    config_json = json.dumps(config, sort_keys=True, ensure_ascii=True, default=str)
    return hashlib.sha256(config_json.encode("utf-8")).hexdigest()
