# Sleeve Default Configuration
# Default configuration as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "runner": {
        "interpreter": None,
        "sudo": False,
        "verbose": False,
    },
    "properties": {
        "encoding": "utf-8",
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# sleeve configuration
#
# runner:
#   interpreter: Python used by `sleeve run` (empty = the running interpreter)
#   sudo: run as the interpreter's owner when the current user doesn't own it
#   verbose: echo commands before running them
#
# properties:
#   encoding: encoding used to read and write .properties files

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
