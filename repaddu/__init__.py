"""Numbered Markdown bundles, tree listings, language and analysis reports, and config files."""

__version__ = "0.1.0"