"""Core selection, caching and orchestration logic."""
