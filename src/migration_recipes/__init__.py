"""Migration map to OpenRewrite recipe converter package."""

import importlib.metadata

__license__ = "MIT"
__version__ = importlib.metadata.version("migration-recipes")
