"""YAML-backed tax regime configuration."""
