"""Core engine services, runtime settings and diagnostics."""
