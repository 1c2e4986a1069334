"""Backup data model and naming rules."""
