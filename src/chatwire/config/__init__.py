"""Configuration: TOML + env settings and structured logging."""
