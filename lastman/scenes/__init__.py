"""Scene-level controllers and cutscene actions."""
