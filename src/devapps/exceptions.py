#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the devapps library.

This module defines specialized exception classes for the error conditions
that can occur while opening a register document, loading reference data and
reconstructing application records from page geometry.

Exception Hierarchy
-------------------
- DevAppsError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser)
    - PageRangeError (page range parsing errors)

  - FileError (file access and I/O)
    - MalformedFileError (corrupted/invalid file structure)

  - ParsingError (input document parsing failures)
    - PasswordProtectedError (password-protected files)
    - PageLayoutError (a page has no recognizable table; skipped)

  - ReferenceDataError (malformed street/suburb dictionaries)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class DevAppsError(Exception):
    """Base exception class for all devapps-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(DevAppsError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided to a parser.

    Parameters
    ----------
    parser_name : str
        Name of the parser that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        parser_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error with type information."""
        if message is None:
            message = (
                f"Invalid options type for '{parser_name}' parser. "
                f"Expected {expected_type.__name__}, but received {received_type.__name__}."
            )

        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.parser_name = parser_name
        self.expected_type = expected_type
        self.received_type = received_type


class PageRangeError(ValidationError):
    """Exception raised for invalid page range specifications."""

    def __init__(self, message: str, parameter_value: Any = None, original_error: Exception | None = None):
        """Initialize the page range error."""
        super().__init__(
            message, parameter_name="pages", parameter_value=parameter_value, original_error=original_error
        )


class FileError(DevAppsError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class MalformedFileError(FileError):
    """Exception raised when a file has invalid or corrupted structure."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the malformed file error."""
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(DevAppsError):
    """Exception raised when document parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class PasswordProtectedError(ParsingError):
    """Exception raised when a file requires a password for access.

    Parameters
    ----------
    message : str, optional
        Custom error message. If not provided, uses default message
    filename : str, optional
        Name of the file that requires a password

    """

    def __init__(
        self, message: str | None = None, filename: str | None = None, original_error: Exception | None = None
    ):
        """Initialize the password protected error."""
        if message is None:
            if filename:
                message = f"File '{filename}' is password-protected and requires authentication"
            else:
                message = "File is password-protected and requires a password for access"

        super().__init__(message, parsing_stage="authentication", original_error=original_error)
        self.filename = filename


class PageLayoutError(ParsingError):
    """Exception raised when no table can be reconstructed from a page.

    The register parser catches this error, logs it together with the page's
    text dump and continues with the next page.

    Parameters
    ----------
    message : str
        Why the page could not be parsed
    page_number : int, optional
        1-based number of the offending page
    element_summary : str, default ""
        Every text run on the page, each wrapped in square brackets

    """

    def __init__(self, message: str, page_number: int | None = None, element_summary: str = ""):
        """Initialize the page layout error."""
        super().__init__(message, parsing_stage="page_layout")
        self.page_number = page_number
        self.element_summary = element_summary

    def __str__(self) -> str:
        """Return the message followed by the page's element dump."""
        if self.element_summary:
            return f"{self.message}  Elements: {self.element_summary}"
        return self.message


class ReferenceDataError(DevAppsError):
    """Exception raised when a reference dictionary file cannot be read.

    Parameters
    ----------
    message : str
        Description of the problem
    file_path : str, optional
        Dictionary file that failed to load
    line_number : int, optional
        1-based line number of the malformed entry

    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line_number: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the reference data error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path
        self.line_number = line_number


class DependencyError(DevAppsError):
    """Exception raised when an optional extra's packages are not available.

    Parameters
    ----------
    extra : str
        Optional extra that provides the packages, e.g. ``"pdf"``
    missing_packages : list[tuple[str, str]]
        ``(package_name, version_spec)`` for packages that failed to import
    version_mismatches : list[tuple[str, str, str]], optional
        ``(package_name, required_version, installed_version)`` for packages
        whose installed version is outside the requirement
    original_import_error : ImportError, optional
        The first import failure

    """

    def __init__(
        self,
        extra: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []

        message_parts = []
        if missing_packages:
            names = ", ".join(f"'{name}{spec}'" for name, spec in missing_packages)
            message_parts.append(f"The '{extra}' extra requires packages that are not installed: {names}")
        if version_mismatches:
            mismatches = ", ".join(
                f"'{name}' (requires {required}, but {installed} is installed)"
                for name, required, installed in version_mismatches
            )
            message_parts.append(f"The '{extra}' extra has version mismatches: {mismatches}")
        message_parts.append(f'Install with: pip install --upgrade "devapps[{extra}]"')

        super().__init__("\n".join(message_parts))
        self.extra = extra
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error
