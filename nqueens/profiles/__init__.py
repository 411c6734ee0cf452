"""Solver profile loading."""

from .loader import get_profile_path, list_profiles, load_profile, parse_profile, profile_names

__all__ = ["load_profile", "list_profiles", "parse_profile", "profile_names", "get_profile_path"]
