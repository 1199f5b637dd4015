"""Biolink predicate hierarchy utilities for edge reversal.

This module provides functions to:
- Load and cache the biolink model from GitHub (version-aware)
- Parse predicate slots (is_a, inverse, symmetric) from the model
- Look up the inverse of a predicate so records can be reversed

The biolink model defines predicates in a tree structure rooted at 'related_to'.
Directional predicates declare an ``inverse`` (e.g., 'treats' / 'treated_by');
symmetric predicates (e.g., 'interacts_with') are their own inverse.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Set

import requests
import yaml

from biograph_records.config.settings import get_settings

logger = logging.getLogger(__name__)

BIOLINK_PREFIX = "biolink:"
GITHUB_REPO = "biolink/biolink-model"
BIOLINK_MODEL_FILENAME = "biolink-model.yaml"
BIOLINK_VERSION_FILENAME = "biolink-model-version.txt"

# Module-level caches to avoid reloading
_predicates_cache: Optional[Dict[str, Dict]] = None
_inverse_cache: Optional[Dict[str, str]] = None


def _normalize_predicate_name(name: str) -> str:
    """Normalize predicate name: spaces to underscores, lowercase.

    Biolink model uses spaces in slot names (e.g., "related to"),
    but the API uses underscores (e.g., "related_to").
    """
    return name.replace(" ", "_").lower().strip()


def _strip_prefix(predicate: str) -> str:
    return predicate.replace(BIOLINK_PREFIX, "").strip()


def get_latest_biolink_version(timeout: int = 10) -> Optional[str]:
    """Fetch latest release tag from GitHub API."""
    try:
        resp = requests.get(
            f"https://api.github.com/repos/{GITHUB_REPO}/releases/latest",
            timeout=timeout
        )
        if resp.status_code == 200:
            return resp.json().get("tag_name")
        else:
            logger.warning(f"GitHub API returned status {resp.status_code}")
    except requests.RequestException as e:
        logger.warning(f"Could not check GitHub for updates: {e}")
    return None


def get_local_version(cache_dir: Path) -> Optional[str]:
    """Read cached version if exists."""
    version_path = cache_dir / BIOLINK_VERSION_FILENAME
    if version_path.exists():
        return version_path.read_text().strip()
    return None


def _fetch_biolink_model(version: str, timeout: int) -> str:
    """Fetch biolink-model.yaml for specific version/tag."""
    url = f"https://raw.githubusercontent.com/{GITHUB_REPO}/{version}/{BIOLINK_MODEL_FILENAME}"
    logger.info(f"Fetching biolink model from: {url}")
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def load_biolink_model(cache_dir: Optional[Path] = None, version: Optional[str] = None) -> dict:
    """Load biolink model, updating cache if a newer (or pinned) version is available.

    Args:
        cache_dir: Cache directory (default: settings.biolink_cache_dir)
        version: Release tag to pin (default: settings.biolink_version, else latest)

    Returns:
        Parsed biolink model as dict

    Raises:
        RuntimeError: If no local cache and cannot download
    """
    settings = get_settings()
    cache_dir = cache_dir or settings.biolink_cache_dir
    version = version or settings.biolink_version
    cache_dir.mkdir(parents=True, exist_ok=True)
    model_path = cache_dir / BIOLINK_MODEL_FILENAME

    local_version = get_local_version(cache_dir)
    wanted_version = version or get_latest_biolink_version()

    need_update = False

    if wanted_version:
        if local_version is None:
            logger.info(f"No local cache found. Downloading {wanted_version}...")
            need_update = True
        elif wanted_version != local_version:
            logger.info(f"Update available: {local_version} -> {wanted_version}")
            need_update = True
        else:
            logger.debug(f"Local cache is current: {local_version}")
    else:
        logger.warning("Could not check for updates. Using local cache if available.")

    if need_update and wanted_version:
        try:
            yaml_content = _fetch_biolink_model(wanted_version, settings.biolink_timeout)
            model_path.write_text(yaml_content)
            (cache_dir / BIOLINK_VERSION_FILENAME).write_text(wanted_version)
            logger.info(f"Successfully cached biolink model version {wanted_version}")
        except requests.RequestException as e:
            logger.warning(f"Failed to download update: {e}")
            if not model_path.exists():
                raise RuntimeError("No local cache and cannot download biolink model") from e
            logger.info("Falling back to existing cache.")

    if not model_path.exists():
        raise RuntimeError(
            f"No {BIOLINK_MODEL_FILENAME} found at {model_path}. "
            "Check network connection."
        )

    return yaml.safe_load(model_path.read_text())


def _extract_predicates(model: dict) -> Dict[str, Dict]:
    """Extract predicates (slots) with their inverse and symmetry information.

    Filters to only include slots that are part of the predicate hierarchy
    (those that eventually trace back to 'related_to' via is_a).
    """
    slots = model.get("slots") or {}
    predicates = {}

    # First pass: collect all slots with is_a relationships
    for name, definition in slots.items():
        if definition is None:
            continue

        normalized_name = _normalize_predicate_name(name)
        is_a_raw = definition.get("is_a")
        is_a = _normalize_predicate_name(is_a_raw) if is_a_raw else None

        # Always include 'related_to' as root, plus any slot with is_a
        if normalized_name == "related_to" or is_a:
            inverse_raw = definition.get("inverse")
            predicates[normalized_name] = {
                "is_a": is_a,
                "description": definition.get("description", ""),
                "inverse": _normalize_predicate_name(inverse_raw) if inverse_raw else None,
                "symmetric": bool(definition.get("symmetric", False)),
                "original_name": name,
            }

    # Second pass: filter to only predicates in the related_to hierarchy
    def traces_to_related_to(name: str, visited: Optional[Set[str]] = None) -> bool:
        """Check if predicate eventually inherits from related_to."""
        if visited is None:
            visited = set()
        if name in visited:
            return False  # Cycle detection
        visited.add(name)

        if name == "related_to":
            return True
        if name not in predicates:
            return False
        parent = predicates[name].get("is_a")
        if parent:
            return traces_to_related_to(parent, visited)
        return False

    related_to_predicates = {
        name: info for name, info in predicates.items() if traces_to_related_to(name)
    }

    logger.debug(f"Extracted {len(related_to_predicates)} predicates in related_to hierarchy")
    return related_to_predicates


def _build_inverse_index(predicates: Dict[str, Dict]) -> Dict[str, str]:
    """Index inverses in both directions.

    Some slots only declare ``inverse`` on one side of the pair.
    """
    inverses: Dict[str, str] = {}
    for name, info in predicates.items():
        inverse = info.get("inverse")
        if inverse:
            inverses[name] = inverse
            inverses.setdefault(inverse, name)
    return inverses


def set_biolink_model(model: dict) -> None:
    """Populate the predicate caches from an already-parsed biolink model."""
    global _predicates_cache, _inverse_cache
    _predicates_cache = _extract_predicates(model)
    _inverse_cache = _build_inverse_index(_predicates_cache)
    logger.info(
        f"Loaded {len(_predicates_cache)} biolink predicates "
        f"({len(_inverse_cache)} with inverses)"
    )


def reset_biolink_cache() -> None:
    """Clear predicate caches (useful for testing)."""
    global _predicates_cache, _inverse_cache
    _predicates_cache = None
    _inverse_cache = None


def _get_predicates() -> Dict[str, Dict]:
    if _predicates_cache is None:
        set_biolink_model(load_biolink_model())
    return _predicates_cache


def get_predicate_info(predicate_name: str) -> Optional[Dict]:
    """Get info about a specific predicate.

    Args:
        predicate_name: Predicate name (with or without biolink: prefix)

    Returns:
        Dict with is_a, description, inverse, symmetric or None if not found
    """
    predicates = _get_predicates()
    name = _normalize_predicate_name(_strip_prefix(predicate_name))
    if name in predicates:
        return predicates[name].copy()
    return None


def canonical_predicate(predicate: str) -> str:
    """Spell a predicate the way the biolink model names it.

    Known predicates are normalized (e.g. 'Treats' -> 'treats'), so a
    predicate and the inverse of its inverse are spelled the same. Unknown
    predicates are returned unchanged. Already-normalized names need no
    model lookup.

    Args:
        predicate: Predicate (with or without biolink: prefix)

    Returns:
        Predicate without the biolink: prefix
    """
    bare = _strip_prefix(predicate)
    name = _normalize_predicate_name(bare)
    if name == bare:
        return bare
    if name in _get_predicates():
        return name
    return bare


def get_reversed_predicate(predicate: str) -> str:
    """Get the biolink inverse of a predicate.

    Symmetric predicates are returned as-is. Predicates that are unknown to
    the model, or that declare no inverse, are returned unchanged.

    Args:
        predicate: Predicate (with or without biolink: prefix)

    Returns:
        Inverse predicate without the biolink: prefix
    """
    predicates = _get_predicates()
    bare = _strip_prefix(predicate)
    name = _normalize_predicate_name(bare)

    info = predicates.get(name)
    if info is None:
        logger.debug(f"Predicate '{bare}' not in biolink model; keeping it when reversing")
        return bare
    if info["symmetric"]:
        return name

    inverse = _inverse_cache.get(name)
    if inverse is None:
        logger.debug(f"Predicate '{bare}' declares no inverse; keeping it when reversing")
        return bare
    return inverse
