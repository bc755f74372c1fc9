class ComChemKitError(Exception):
    """Base class for exceptions in the comchemkit package."""

    pass


class NotSupportedError(ComChemKitError):
    """Exception raised for programs or features that are not available."""

    pass


class ValidationError(ComChemKitError):
    """Exception raised for errors during input validation."""

    pass


class InputGenerationError(ComChemKitError):
    """Exception raised for errors during input file generation."""

    pass


class ParsingError(ComChemKitError):
    """Exception raised for errors during file parsing."""

    pass


class ExtractionError(ComChemKitError):
    """Exception raised when energies cannot be extracted from an output file.

    Covers unreadable files as well as extracted values that fail the
    physical plausibility checks.
    """

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Failed to extract energies from '{file_path}': {reason}")


class InternalCodeError(ComChemKitError):
    """Exception raised for errors in the internal code."""

    pass
