"""apimetrics: LLM API request metrics, charts and provider adapters."""

__version__ = "0.1.0"
