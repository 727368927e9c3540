# Sleeve Path Utilities
# Path normalization, extension rewriting and dotfile-aware listings

import os
import posixpath
import re
import tempfile
from pathlib import Path
from typing import Optional

from sleeve.utils.platform import HostPlatform, current_host

_DRIVE_PREFIX = re.compile(r"^[a-zA-Z]+:")


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path object.
    """
    path_str = str(path)
    # Expand ~ first, then environment variables
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(path_str).resolve()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename. The file gets the mode a plain open()
    would give it (0o666 masked by the process umask).

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    # Temp file lives next to the target so the rename stays on one filesystem
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.chmod(temp_path, 0o666 & ~_current_umask())
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def _current_umask() -> int:
    # umask can only be read by setting it
    umask = os.umask(0)
    os.umask(umask)
    return umask


def windows_path(path: str) -> str:
    """
    Rewrite a path with Windows conventions.

    Forward slashes become backslashes and the drive letter is uppercased.

    Args:
        path: Path string.

    Returns:
        Rewritten path string.
    """
    path = path.replace("/", "\\")
    return _DRIVE_PREFIX.sub(lambda m: m.group(0).upper(), path)


def normalize_path(path: str | Path, *dirs: str | Path, host: Optional[HostPlatform] = None) -> str:
    """
    Make path absolute, resolving it against dirs when given.

    Like os.path.abspath, but ~ is expanded in path and dirs, and on
    Windows-family hosts the result uses backslashes and an uppercase drive.

    Args:
        path: Path to normalize.
        *dirs: Base directory components, joined in order. Defaults to the
            working directory.
        host: Host platform. Detected when omitted.

    Returns:
        Normalized absolute path string.
    """
    if host is None:
        host = current_host()

    base = os.path.join(*(os.path.expanduser(str(d)) for d in dirs)) if dirs else os.getcwd()
    result = os.path.abspath(os.path.join(base, os.path.expanduser(str(path))))

    if host.windows:
        return windows_path(result)
    return result


def relative_path(to: str | Path, from_: Optional[str | Path] = ".") -> str:
    """
    Return the path to `to`, starting from `from_`.

    Both paths are interpreted as rooted at "/", so relative inputs behave as
    if they sat directly under the root.

    For example:
        relative_path("foo/bar", "foo")  -> "bar"
        relative_path("foo/bar", "baz")  -> "../foo/bar"
        relative_path("foo/bar")         -> "foo/bar"

    Args:
        to: Target path.
        from_: Starting path. None returns the cleaned target.

    Returns:
        Relative path string.
    """
    cleaned = posixpath.normpath(str(to))
    if from_ is None:
        return cleaned
    to_path = posixpath.normpath(posixpath.join("/", cleaned))
    from_path = posixpath.normpath(posixpath.join("/", str(from_)))
    return posixpath.relpath(to_path, from_path)


def recursive_with_dot_files(*dirs: str | Path) -> list[Path]:
    """
    List everything below dirs, dotfiles and dot directories included.

    Dot directories are descended into, so .git/config is listed along with
    .git itself. A glob such as dir/**/{*,.*} would list .git but none of
    its contents.

    Args:
        *dirs: Directories to walk. Missing directories are ignored.

    Returns:
        Sorted list of file and directory paths.
    """
    results: set[Path] = set()
    for directory in dirs:
        root = Path(directory)
        if not root.is_dir():
            continue
        for current, subdirs, files in os.walk(root):
            base = Path(current)
            results.update(base / name for name in subdirs)
            results.update(base / name for name in files)
    return sorted(results)


def replace_extension(filename: str, new_ext: str) -> str:
    """
    Replace the file extension.

    For example:
        replace_extension("foo.zip", "txt")  -> "foo.txt"
        replace_extension("foo", "txt")      -> "foo.txt"
        replace_extension("foo.", "txt")     -> "foo.txt"
        replace_extension(".bashrc", "bak")  -> ".bashrc.bak"

    Args:
        filename: File name or path.
        new_ext: Extension without the leading dot.

    Returns:
        Filename with the new extension.
    """
    if filename.endswith("."):
        return filename + new_ext
    root, ext = os.path.splitext(filename)
    if not ext:
        return f"{filename}.{new_ext}"
    return f"{root}.{new_ext}"
