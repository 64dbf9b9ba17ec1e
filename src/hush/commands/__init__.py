"""
Hush CLI command modules.

Each module exposes register_parsers(subparsers) and cmd_* handlers that
return JSON-serializable result dicts.
"""
