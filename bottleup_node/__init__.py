"""
BottleUp Node package initializer

Keep this module lightweight. Do not import the executor or FastAPI here,
so the runtime can be used without booting the HTTP surface.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
