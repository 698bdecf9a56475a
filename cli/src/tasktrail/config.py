"""Config module - loads settings, initializes DB lazily."""

_config = None
_db_initialized = False


def get_config():
    """Load config and initialize DB on first access."""
    global _config, _db_initialized
    if _config is None:
        from storage.settings import load_config
        _config = load_config()
    if not _db_initialized and _config.get('database_url'):
        from storage.database.base import init_db
        init_db(_config['database_url'])
        _db_initialized = True
    return _config


def reset_config():
    """Forget loaded settings so the next access re-reads the environment."""
    global _config, _db_initialized
    _config = None
    _db_initialized = False

