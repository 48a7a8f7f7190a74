"""Clinical consultation copilot: live question suggestions and end-of-visit summaries."""

__version__ = "1.0.0"
