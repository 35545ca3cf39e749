"""Docker-style KEY=VALUE environment pairs."""

import json
import logging
from typing import Dict, Iterable, Optional

log = logging.getLogger(__name__)


def parse_env_pairs(pairs: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Convert ``KEY=VALUE`` strings into a dict.

    Splits on the first ``=`` so values may contain ``=``. Entries without a
    key are skipped. When a key repeats, the last value wins.

    Args:
        pairs: Strings such as ``NODE_ENV=production``

    Returns:
        Insertion-ordered mapping of keys to values
    """
    env: Dict[str, str] = {}
    for pair in pairs or ():
        key, sep, value = pair.partition("=")
        if not sep or not key:
            log.warning(f"Ignoring malformed env pair (expected KEY=VALUE): {pair!r}")
            continue
        env[key] = value
    return env


def env_pairs_to_json(pairs: Optional[Iterable[str]]) -> Optional[str]:
    """JSON object string for the ``env_vars`` form field, or None when empty."""
    env = parse_env_pairs(pairs)
    if not env:
        return None
    return json.dumps(env)
