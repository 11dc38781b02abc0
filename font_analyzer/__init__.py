"""Font Analyzer: AI-suggested Google Fonts for titles."""

__version__ = "0.1.0"
