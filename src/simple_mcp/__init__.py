from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("simple-mcp")
except PackageNotFoundError:
    # Package not installed (e.g. running from source without pip install)
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]

import logging

# Library convention: attach a NullHandler so logging calls inside simple_mcp
# are discarded unless the application (CLI, MCP server, tests) configures
# handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())
