"""Build portable registry blocks from changed files in a web-app project."""

__version__ = "0.1.0"
