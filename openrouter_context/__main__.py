"""
Entry point for running openrouter-context as a module: python -m openrouter_context
"""

from openrouter_context.cli.commands import app

if __name__ == "__main__":
    app()
