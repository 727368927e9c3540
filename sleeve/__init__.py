"""sleeve - build-tool helpers around Java-style properties files.

Converts between dicts and the Java .properties text format, and bundles the
small platform, path and process helpers that build scripts tend to need.
"""

__version__ = "1.0.0"
__author__ = "Equitania Software GmbH"
__email__ = "info@equitania.de"

__all__ = [
    "__version__",
    "to_properties",
    "from_properties",
    "ParseError",
    "PropertiesError",
    "run_python",
    "CommandError",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("to_properties", "from_properties", "ParseError", "PropertiesError"):
        from sleeve import properties

        return getattr(properties, name)
    if name in ("run_python", "CommandError"):
        from sleeve import runner

        return getattr(runner, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
