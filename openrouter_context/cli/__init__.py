"""CLI module for openrouter-context."""
