"""Provider id selection and change-detection hashing."""
import hashlib
from typing import Iterable, Mapping, NamedTuple

from metarenamer.utils.constants import EMPTY_PROVIDER_HASH

# Unit/record separators cannot appear in provider labels or ids
_PAIR_SEPARATOR = "\x1f"
_ENTRY_SEPARATOR = "\x1e"


class ProviderMatch(NamedTuple):
    """The provider chosen for naming: original key, lower-case label, trimmed id."""
    key: str
    label: str
    id: str


def select_best(provider_ids: Mapping[str, str] | None, preference_order: Iterable[str]) -> ProviderMatch | None:
    """
    Return the first preferred provider the item has a non-blank id for.

    Keys match case-insensitively ("tvdb" finds "Tvdb"). Providers outside
    ``preference_order`` are never chosen, even when no preferred one is present.
    """
    if not provider_ids:
        return None
    by_key = {key.strip().lower(): (key, value) for key, value in provider_ids.items()}
    for preferred in preference_order:
        found = by_key.get(preferred.strip().lower())
        if found is None:
            continue
        key, value = found
        if value is not None and str(value).strip():
            return ProviderMatch(key, key.strip().lower(), str(value).strip())
    return None


def provider_hash(provider_ids: Mapping[str, str] | None) -> str:
    """
    Stable digest of a provider id mapping, independent of entry order.

    Entries are sorted by label (ordinal) and joined with fixed separators before
    hashing with SHA-256. An empty mapping hashes to ``EMPTY_PROVIDER_HASH``.
    """
    if not provider_ids:
        return EMPTY_PROVIDER_HASH
    entries = sorted(
        (str(key).strip(), "" if value is None else str(value).strip())
        for key, value in provider_ids.items()
    )
    canonical = _ENTRY_SEPARATOR.join(f"{key}{_PAIR_SEPARATOR}{value}" for key, value in entries)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
