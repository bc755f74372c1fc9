from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Literal, get_args

from comchemkit.constants import DEFAULT_CONCENTRATION, DEFAULT_TEMPERATURE, MAX_FILE_SIZE_MB
from comchemkit.exceptions import ValidationError
from comchemkit.thermo import SUMMARY_COLUMNS
from comchemkit.typing import CalculationMetadata, EnergyComponents, JobStatus

OutputFormat = Literal["text", "csv", "json"]


class CommandType(Enum):
    """Commands a program module can be asked to execute."""

    NONE = "none"
    HELP = "help"
    VERSION = "version"
    EXTRACT = "extract"
    CHECK_DONE = "check-done"
    CHECK_ERRORS = "check-errors"
    CHECK_PCM = "check-pcm"
    CHECK_ALL = "check-all"
    HIGH_LEVEL_KJ = "high-level-kj"
    HIGH_LEVEL_AU = "high-level-au"


@dataclass(frozen=True)
class CommandContext:
    """Parameters handed over by the command-line layer to ``QMProgram.execute_command``.

    Attributes:
        command: Command to execute.
        input_dir: Directory holding the output files to process.
        temperature: Temperature in Kelvin used for thermochemistry summaries.
        concentration: Standard-state concentration in mol/L.
        thread_count: Requested worker count, -1 lets the caller decide.
        sort_column: 1-based summary column used to order extract results; out
            of range falls back to 2 and adds an entry to ``warnings``.
        format: Output format requested by the user.
        extension: Output file extension to process, always starting with ".".
        quiet: Suppress per-file report lines.
        max_file_size_mb: Files larger than this are skipped.
        warnings: Warnings accumulated while the context was built.
    """

    command: CommandType = CommandType.EXTRACT
    input_dir: Path = field(default_factory=Path.cwd)
    temperature: float = DEFAULT_TEMPERATURE
    concentration: float = DEFAULT_CONCENTRATION
    thread_count: int = -1
    sort_column: int = 2
    format: OutputFormat = "text"
    extension: str = ".log"
    quiet: bool = False
    max_file_size_mb: int = MAX_FILE_SIZE_MB
    warnings: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.temperature <= 0:
            raise ValidationError(f"Temperature must be positive, got {self.temperature} K.")
        if self.concentration <= 0:
            raise ValidationError(f"Concentration must be positive, got {self.concentration} mol/L.")
        if self.format not in get_args(OutputFormat):
            raise ValidationError(f"Format must be one of {get_args(OutputFormat)}, got '{self.format}'.")
        if self.max_file_size_mb <= 0:
            raise ValidationError("Maximum file size must be a positive number of MB.")

        if not self.extension.startswith("."):
            object.__setattr__(self, "extension", f".{self.extension}")
        object.__setattr__(self, "input_dir", Path(self.input_dir))
        object.__setattr__(self, "warnings", tuple(self.warnings))

        # the fallback is reported through warnings, which dispatch logs
        if not 1 <= self.sort_column <= len(SUMMARY_COLUMNS):
            message = f"Sort column must be between 1 and {len(SUMMARY_COLUMNS)}, got {self.sort_column}. Using 2."
            object.__setattr__(self, "sort_column", 2)
            object.__setattr__(self, "warnings", (*self.warnings, message))

    def with_warning(self, message: str) -> "CommandContext":
        """Returns a copy with ``message`` appended to the accumulated warnings."""
        return replace(self, warnings=(*self.warnings, message))


class QMProgram(ABC):
    """
    Abstract base class for quantum chemistry program adapters.

    An adapter knows how to recognise, read and interpret the output files of
    one program so that calling code can stay program-agnostic. Adapters hold
    no per-file state: every operation is a function of the file path and the
    file's current content, so a single instance can be shared across threads.
    """

    @abstractmethod
    def get_program_name(self) -> str:
        """Stable display name of the program (e.g. "Gaussian")."""
        pass

    @abstractmethod
    def is_valid_output_file(self, file_path: str | Path) -> bool:
        """
        Cheap check that the file was written by this program.

        Must return False instead of raising when the file cannot be read.
        """
        pass

    @abstractmethod
    def extract_energies(self, file_path: str | Path) -> EnergyComponents:
        """
        Extracts energy components from an output file.

        Raises:
            ExtractionError: If the file cannot be read or the extracted values
                fail validation.
        """
        pass

    @abstractmethod
    def get_metadata(self, file_path: str | Path) -> CalculationMetadata:
        """
        Best-effort metadata about the calculation.

        Failures are logged and reported as ``JobStatus.ERROR`` in the returned
        record, never raised.
        """
        pass

    @abstractmethod
    def check_job_status(self, file_path: str | Path) -> JobStatus:
        """Classifies the job; returns ``JobStatus.UNKNOWN`` when the file cannot be read."""
        pass

    @abstractmethod
    def create_input_file(self, file_path: str | Path, method: str, keywords: Sequence[str]) -> bool:
        """Writes a minimal input template. Returns False on any failure."""
        pass

    @abstractmethod
    def execute_command(self, context: CommandContext) -> int:
        """Runs a program-specific command, returning a process exit code."""
        pass

    @abstractmethod
    def get_supported_extensions(self) -> set[str]:
        """Output file extensions handled by this program, including the leading dot."""
        pass

    @abstractmethod
    def register_commands(self) -> None:
        """Registers program-specific commands with the command layer."""
        pass

    @abstractmethod
    def _parse_output_file(self, file_path: str | Path) -> str:
        """Reads the output file into a single string for pattern matching."""
        pass

    @abstractmethod
    def _validate_results(self, energies: EnergyComponents) -> bool:
        """Returns True if the extracted energies are physically reasonable."""
        pass

    # --- Public access to the parsing hooks --- #

    def parse_output_file(self, file_path: str | Path) -> str:
        return self._parse_output_file(file_path)

    def validate_results(self, energies: EnergyComponents) -> bool:
        return self._validate_results(energies)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(program='{self.get_program_name()}')"
