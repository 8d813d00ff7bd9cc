"""Domain-restricted Gemini proxy for the virtual herbal garden."""

__version__ = "1.0.0"
