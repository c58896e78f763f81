"""Service layer: credential handling and per-resource operations."""
