"""Bundled JSON manifests (model catalogue)."""
