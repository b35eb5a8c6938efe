from restic_sync.core.config.loader import ENV_VARS, load_config, resolve_config

__all__ = ["ENV_VARS", "load_config", "resolve_config"]
