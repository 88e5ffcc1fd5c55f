"""Portfolio dashboard: live market-data enrichment for a static holdings list."""

__version__ = "0.1.0"
