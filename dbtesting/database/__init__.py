from .connection import default_connect, get_connection_string, parse_dsn, ping
from .statements import LifecycleFunc, create_all, drop_all, noop, sql

__all__ = [
    "LifecycleFunc",
    "default_connect",
    "get_connection_string",
    "parse_dsn",
    "ping",
    "noop",
    "sql",
    "create_all",
    "drop_all",
]
