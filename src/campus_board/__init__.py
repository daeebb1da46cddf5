"""Anonymous, ephemeral campus message board."""

__version__ = "0.1.0"
