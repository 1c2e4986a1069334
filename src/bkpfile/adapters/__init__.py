"""Filesystem and YAML adapters."""
