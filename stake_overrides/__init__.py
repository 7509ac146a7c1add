"""
stake_overrides package initializer.

Kept lightweight: importing the package does not start any thread or touch
the network. Import submodules directly when needed.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
