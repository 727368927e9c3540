# Sleeve Output Module
# Rich console output

from sleeve.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
