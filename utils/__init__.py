"""Utility helpers shared across llm-relay."""
