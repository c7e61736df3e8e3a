#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/devapps/utils/decorators.py
"""Decorators and context managers shared by the devapps parsers.

PyMuPDF is an optional extra: decoding pre-extracted pages needs nothing
beyond the core install, while opening PDF files does. Methods that open
files are guarded with :func:`requires_dependencies`.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from importlib import metadata
from typing import Any, Callable, Generator, Optional

from packaging.specifiers import SpecifierSet
from packaging.version import Version

from devapps.exceptions import DependencyError

Requirement = tuple[str, str, str]


def _installed_version(install_name: str) -> Optional[str]:
    try:
        return metadata.version(install_name)
    except metadata.PackageNotFoundError:
        return None


def requires_dependencies(extra: str, packages: list[Requirement]) -> Callable:
    """Check that an extra's packages import and meet their versions before a call.

    Parameters
    ----------
    extra : str
        Name of the optional extra providing the packages (e.g., "pdf")
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` for each package, for
        example ``("pymupdf", "fitz", ">=1.26.4")``. An empty version spec
        accepts any version.

    Raises
    ------
    DependencyError
        If a package is missing or its installed version is outside the spec

    Examples
    --------
        >>> @requires_dependencies("pdf", DEPS_PDF)
        ... def parse(self, input_data):
        ...     import fitz

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing: list[tuple[str, str]] = []
            mismatches: list[tuple[str, str, str]] = []
            import_error: Optional[ImportError] = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    import_error = import_error or e
                    continue

                if not version_spec:
                    continue
                installed = _installed_version(install_name)
                if installed is None or Version(installed) not in SpecifierSet(version_spec):
                    mismatches.append((install_name, version_spec, installed or "unknown"))

            if missing or mismatches:
                raise DependencyError(
                    extra=extra,
                    missing_packages=missing,
                    version_mismatches=mismatches,
                    original_import_error=import_error,
                ) from import_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the block took at DEBUG level.

    Examples
    --------
        >>> with debug_timer(logger, "Decoding 3 pages"):
        ...     pages = [decode_page(...) for source in sources]
        ... # Logs: "Decoding 3 pages completed in 0.02s"

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    start_time = time.perf_counter()
    yield
    logger.debug(f"{operation} completed in {time.perf_counter() - start_time:.2f}s")
