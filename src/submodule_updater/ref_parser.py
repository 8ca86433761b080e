"""
Parsing of `path=ref` command-line tokens.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple


logger = logging.getLogger(__name__)


def parse_ref_token(token: str) -> Optional[Tuple[str, str]]:
    """Return ``(path, ref)`` for a ``path=ref`` token, or None if it has no ``=``.

    Only the first ``=`` separates; anything after it is the ref.
    """
    path, sep, ref = token.partition("=")
    if not sep:
        return None
    return path, ref


def split_ref_args(tokens: Iterable[str]) -> Tuple[Dict[str, str], List[str]]:
    """Split raw tokens into a path -> ref mapping and the list of invalid tokens.

    A later token for the same path replaces the ref of an earlier one while
    keeping its original position. Tokens without ``=`` are skipped and
    returned in the second element.
    """
    refs: Dict[str, str] = {}
    invalid: List[str] = []
    for token in tokens:
        parsed = parse_ref_token(token)
        if parsed is None:
            logger.warning(f"Ignoring invalid argument: {token}")
            invalid.append(token)
            continue
        path, ref = parsed
        if path in refs:
            logger.debug(f"Overriding ref for {path}: {refs[path]} -> {ref}")
        refs[path] = ref
    return refs, invalid


def parse_ref_args(tokens: Iterable[str]) -> Dict[str, str]:
    """Return the path -> ref mapping for the given tokens."""
    refs, _ = split_ref_args(tokens)
    return refs
