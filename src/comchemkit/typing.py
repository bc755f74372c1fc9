from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from comchemkit.constants import DEFAULT_PRESSURE, DEFAULT_TEMPERATURE, STATUS_LABELS


class JobStatus(Enum):
    """Completion state of a calculation, recomputed from the file on every check."""

    UNKNOWN = "unknown"
    COMPLETED = "completed"
    ERROR = "error"
    RUNNING = "running"
    INTERRUPTED = "interrupted"

    @property
    def label(self) -> str:
        """Short label used in status reports (DONE, ERROR, UNDONE, ...)."""
        return STATUS_LABELS[self.name]

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class VibrationalMode:
    """A single normal mode with its IR intensity."""

    frequency: float  # cm^-1, negative for imaginary modes
    ir_intensity: float  # km/mol


@dataclass(frozen=True)
class EnergyComponents:
    """Energies extracted from one output file.

    All energies are in Hartree except ``entropy`` (cal/mol-K, as printed by the
    program). Fields that were not found in the file keep their 0.0 default;
    optional components stay ``None`` unless the program reports them.
    """

    electronic_energy: float = 0.0
    zero_point_energy: float = 0.0
    thermal_correction: float = 0.0
    enthalpy_correction: float = 0.0
    gibbs_correction: float = 0.0
    entropy: float = 0.0
    nuclear_repulsion: float = 0.0
    frequencies: Sequence[float] = field(default_factory=tuple)
    has_imaginary_freq: bool = False

    dispersion_correction: float | None = None
    solvation_energy: float | None = None
    counterpoise_correction: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "frequencies", tuple(self.frequencies))

    @property
    def imaginary_frequencies(self) -> tuple[float, ...]:
        return tuple(f for f in self.frequencies if f < 0)

    def with_electronic_energy(self, electronic_energy: float) -> "EnergyComponents":
        """Returns a copy with only the electronic energy replaced."""
        return replace(self, electronic_energy=electronic_energy)

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}(electronic_energy={self.electronic_energy:.8f}, "
            f"zero_point_energy={self.zero_point_energy:.6f}, gibbs_correction={self.gibbs_correction:.6f}, "
            f"n_frequencies={len(self.frequencies)}, has_imaginary_freq={self.has_imaginary_freq})"
        )


@dataclass(frozen=True)
class CalculationMetadata:
    """Descriptive context for one output file."""

    file_path: str
    program_version: str = ""
    method: str = ""
    basis_set: str = ""
    keywords: Sequence[str] = field(default_factory=tuple)
    solvent: str | None = None
    temperature: float = DEFAULT_TEMPERATURE  # K
    pressure: float = DEFAULT_PRESSURE  # atm
    status: JobStatus = JobStatus.UNKNOWN

    def __post_init__(self) -> None:
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def level_of_theory(self) -> str:
        """Method/basis string such as ``B3LYP/6-31G(d)``; empty parts are dropped."""
        return "/".join(part for part in (self.method, self.basis_set) if part)
