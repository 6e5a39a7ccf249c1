"""Runtime settings loaded from YAML."""
