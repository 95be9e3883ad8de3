from .registry import CollectionProps, TargetProfile, load_profiles, default_profile_path

__all__ = ["CollectionProps", "TargetProfile", "load_profiles", "default_profile_path"]
