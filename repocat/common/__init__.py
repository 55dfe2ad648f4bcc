"""Shared helpers used across repocat packages."""
