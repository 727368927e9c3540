# Sleeve Utilities Module
# Helper functions for platform detection, paths and mappings

from sleeve.utils.mapping import (
    OpenObject,
    exclude,
    only,
)
from sleeve.utils.paths import (
    atomic_write,
    ensure_dir,
    expand_path,
    normalize_path,
    recursive_with_dot_files,
    relative_path,
    replace_extension,
    windows_path,
)
from sleeve.utils.platform import (
    HostPlatform,
    current_host,
    detect_host_platform,
    get_current_platform,
    is_java_platform,
    is_windows_os,
)

__all__ = [
    # Platform
    "HostPlatform",
    "current_host",
    "detect_host_platform",
    "get_current_platform",
    "is_java_platform",
    "is_windows_os",
    # Paths
    "expand_path",
    "ensure_dir",
    "atomic_write",
    "normalize_path",
    "windows_path",
    "relative_path",
    "recursive_with_dot_files",
    "replace_extension",
    # Mappings
    "only",
    "exclude",
    "OpenObject",
]
