from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    `filespyder` settings management using
    [pydantic-settings](https://docs.pydantic.dev/latest/concepts/pydantic_settings/)

    Note:
        All settings can be set via environment variables, prepending
        `FILESPYDER_` (except for those with a given prefix)
    """

    model_config = SettingsConfigDict(
        env_prefix="filespyder_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "info"
    """Log level (debug, info, warning, error)"""

    log_json: bool = False
    """Render log lines as json"""

    suppress_errors: bool = False
    """Silently skip directories that can't be enumerated"""

    large_fetch: bool = False
    """Hint the host to use a larger buffer for directory queries"""

    strict: bool = True
    """Raise on unanticipated enumeration failures instead of recording them"""

    max_workers: int | None = None
    """Worker pool size for parallel traversal (default: python's executor default)"""

    parallel_depth: int | None = None
    """Deepest directory level that is still dispatched concurrently (default: any)"""

    follow_symlinks: bool = False
    """Recurse into symlinked (reparse point) directories"""
