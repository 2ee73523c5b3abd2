"""Preset simulation scenarios."""
