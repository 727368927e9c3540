# Sleeve Platform Detection Utilities
# Host OS detection for path and process helpers

import platform
import re
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

# Platform name mapping: system name -> sleeve platform name
_PLATFORM_MAP: dict[str, str] = {
    "Darwin": "macos",
    "Linux": "linux",
    "Windows": "windows",
}

WINDOWS_OS_PATTERN = re.compile(r"windows|cygwin|bccwin|djgpp|mingw|mswin|wince", re.IGNORECASE)


@dataclass(frozen=True)
class HostPlatform:
    """Snapshot of the host the current process runs on."""

    host_os: str
    name: str
    windows: bool
    java: bool = False


def get_host_os() -> str:
    """Get the host configuration string used for OS checks."""
    return platform.system()


def get_current_platform() -> str:
    """
    Get the current platform identifier.

    Returns:
        Platform string: "macos", "linux", "windows", or the lowercased system name.
    """
    system = platform.system()
    return _PLATFORM_MAP.get(system, system.lower())


def is_windows_os(host_os: str) -> bool:
    """
    Check whether a host configuration string names a Windows-family OS.

    Cygwin and MinGW environments count as Windows since they run on a
    Windows kernel and use its path conventions.

    Args:
        host_os: Host configuration string, e.g. "Windows" or "CYGWIN_NT-10.0".

    Returns:
        True if any Windows identifier appears in the string.
    """
    return WINDOWS_OS_PATTERN.search(host_os) is not None


def is_java_platform() -> bool:
    """Check whether the interpreter is hosted on a JVM."""
    return sys.platform.startswith("java")


def detect_host_platform(host_os: Optional[str] = None) -> HostPlatform:
    """
    Build a HostPlatform for the given host string, or for this process.

    Args:
        host_os: Host configuration string. Detected when omitted.

    Returns:
        HostPlatform snapshot.
    """
    if host_os is None:
        host_os = get_host_os()
        name = get_current_platform()
    else:
        name = _PLATFORM_MAP.get(host_os, host_os.lower())
    return HostPlatform(
        host_os=host_os,
        name=name,
        windows=is_windows_os(host_os),
        java=is_java_platform(),
    )


@lru_cache(maxsize=1)
def current_host() -> HostPlatform:
    """Return the HostPlatform of this process, detected once."""
    return detect_host_platform()
