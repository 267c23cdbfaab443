"""Procedural generators for Luminite levels."""
