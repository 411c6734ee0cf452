"""Bundled solver profiles.

A profile file is a YAML mapping of SolverProfile fields. Its first line is
a comment that doubles as the profile's description:

    # N-Queens-square: classic rules plus at most one queen per 3x3 sub-square
    mode: square
    region_size: 3

The same text format is accepted inline (``parse_profile``), so callers can
send a profile with a request instead of naming a bundled one.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..errors import InvalidArgumentError, ProfileNotFoundError
from ..models.profile import SolverProfile

logger = logging.getLogger(__name__)

# Shipped as package data next to this module
PROFILES_DIR = Path(__file__).parent
PROFILE_SUFFIX = ".yaml"


def profile_names() -> list[str]:
    """Names of the bundled profiles, sorted."""
    return sorted(path.stem for path in PROFILES_DIR.glob(f"*{PROFILE_SUFFIX}"))


def get_profile_path(name: str = "classic") -> Path:
    """Locate a bundled profile.

    Raises:
        ProfileNotFoundError: If no bundled profile has this name
    """
    path = PROFILES_DIR / f"{name}{PROFILE_SUFFIX}"
    if not path.is_file():
        raise ProfileNotFoundError(
            f"Unknown profile '{name}'. Available: {', '.join(profile_names())}"
        )
    return path


def parse_profile(content: str) -> tuple[str | None, SolverProfile]:
    """Parse profile text into its description and settings.

    An empty document gives the default (classic) profile.

    Returns:
        (description from the leading comment or None, SolverProfile)

    Raises:
        InvalidArgumentError: If the text is not YAML, not a mapping, or
            holds unknown or invalid settings
    """
    description = None
    first_line = content.lstrip().split("\n", 1)[0].strip()
    if first_line.startswith("#"):
        description = first_line.lstrip("#").strip() or None

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidArgumentError(f"Profile is not valid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidArgumentError(
            f"Profile must be a mapping of settings, got {type(data).__name__}"
        )

    try:
        return description, SolverProfile.model_validate(data)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid profile settings: {e}") from e


def read_profile(name: str) -> tuple[str, SolverProfile]:
    """Read a bundled profile by name."""
    path = get_profile_path(name)
    description, profile = parse_profile(path.read_text(encoding="utf-8"))
    return description or f"{name} profile", profile


def list_profiles() -> list[dict[str, Any]]:
    """Describe every bundled profile.

    Returns:
        One dict per profile with name, description, mode and the settings
        that differ from the defaults
    """
    entries = []
    for name in profile_names():
        description, profile = read_profile(name)
        entries.append({
            "name": name,
            "description": description,
            "mode": profile.mode.value,
            "settings": profile.changed_settings(),
        })
    return entries


def load_profile(
    name: str = "classic",
    override: dict[str, Any] | None = None,
) -> SolverProfile:
    """Load a bundled profile and apply request overrides.

    Raises:
        ProfileNotFoundError: If the profile does not exist
        pydantic.ValidationError: If an override is unknown or invalid
    """
    _, profile = read_profile(name)
    if override:
        profile = profile.with_overrides(override)
        logger.debug(f"Profile '{name}' overridden: {sorted(override)}")
    return profile
