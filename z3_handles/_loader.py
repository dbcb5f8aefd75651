"""
Native library loader.

This module locates libz3, loads it once per resolved path and declares
the prototypes of every entry point the runtime calls.
"""

import ctypes
import importlib.util
import os
import sys
import threading
from ctypes import CDLL, byref, c_uint
from ctypes.util import find_library
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

from ._logging import get_logger
from ._runtime.errors import NativeFailure
from ._z3.functions import bind_prototypes
from ._z3.types import Z3_error_code
from .config import LIBRARY_PATH_ENV

logger = get_logger(__name__)

if sys.platform == "win32":
    LIBRARY_NAMES = ("libz3.dll", "z3.dll")
elif sys.platform == "darwin":
    LIBRARY_NAMES = ("libz3.dylib",)
else:
    LIBRARY_NAMES = ("libz3.so",)

# Loaded libraries by resolved path
_libraries: Dict[str, CDLL] = {}
_lock = threading.Lock()


def _from_location(location: Union[str, Path]) -> Optional[str]:
    """Resolve a file, or a directory holding one of LIBRARY_NAMES."""
    location = Path(location)
    if location.is_file():
        return str(location)
    if location.is_dir():
        for name in LIBRARY_NAMES:
            candidate = location / name
            if candidate.is_file():
                return str(candidate)
    return None


def _wheel_directories() -> Iterator[Path]:
    """Directories of an installed z3-solver distribution that may hold libz3."""
    try:
        spec = importlib.util.find_spec("z3")
    except (ImportError, ValueError):
        return
    if spec is None or not spec.submodule_search_locations:
        return
    for package_dir in spec.submodule_search_locations:
        yield Path(package_dir) / "lib"
        yield Path(package_dir) / "bin"


def find_library_path(path: Optional[Union[str, Path]] = None) -> str:
    """
    Locate libz3.

    Search order: explicit path, the Z3_LIBRARY_PATH environment variable,
    the z3-solver distribution, then the system loader search path.
    """
    if path is not None:
        found = _from_location(path)
        if found is None:
            raise FileNotFoundError(f"Z3 library not found: {path}")
        return found

    env_path = os.environ.get(LIBRARY_PATH_ENV)
    if env_path:
        found = _from_location(env_path)
        if found is not None:
            return found
        logger.warning("%s=%s does not name a Z3 library", LIBRARY_PATH_ENV, env_path)

    for directory in _wheel_directories():
        found = _from_location(directory)
        if found is not None:
            return found

    system = find_library("z3")
    if system is not None:
        return system

    raise FileNotFoundError(
        f"Z3 library not found; install z3-solver or set {LIBRARY_PATH_ENV}"
    )


def load_library(path: Optional[Union[str, Path]] = None) -> CDLL:
    """
    Load libz3 and declare its prototypes.

    Each resolved path is loaded once; later calls return the cached library.
    """
    resolved = find_library_path(path)

    with _lock:
        lib = _libraries.get(resolved)
        if lib is not None:
            return lib

        try:
            lib = CDLL(resolved, mode=ctypes.RTLD_GLOBAL)
        except OSError as e:
            raise NativeFailure(
                Z3_error_code.Z3_EXCEPTION, f"Failed to load Z3 library: {e}"
            ) from e

        missing = bind_prototypes(lib)
        if missing:
            logger.debug("%s lacks %d entry point(s): %s", resolved, len(missing), ", ".join(missing))

        _libraries[resolved] = lib

    logger.debug("Loaded Z3 %s from %s", ".".join(map(str, library_version(lib))), resolved)
    return lib


def library_version(lib: CDLL) -> Tuple[int, int, int, int]:
    """Native (major, minor, build, revision)."""
    major, minor, build, revision = c_uint(), c_uint(), c_uint(), c_uint()
    lib.Z3_get_version(byref(major), byref(minor), byref(build), byref(revision))
    return major.value, minor.value, build.value, revision.value
