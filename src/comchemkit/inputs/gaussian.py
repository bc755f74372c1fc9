from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TypeVar

from comchemkit.exceptions import InputGenerationError, ValidationError
from comchemkit.utils import logger

T_GaussianInput = TypeVar("T_GaussianInput", bound="GaussianInput")

PLACEHOLDER_GEOMETRY = "C 0.0 0.0 0.0"
DEFAULT_TITLE = "Generated by ComChemKit"


@dataclass(frozen=True)
class GaussianInput:
    """Minimal Gaussian input template.

    The geometry defaults to a single placeholder atom; callers that want a
    runnable job must supply their own coordinates.

    Attributes:
        method (str): Method or method/basis string placed on the route line (e.g. "B3LYP/6-31G(d)").
        keywords (Sequence[str]): Additional route keywords (e.g. ["opt", "freq"]).
        charge (int): Molecular charge. Defaults to 0.
        spin_multiplicity (int): Spin multiplicity. Defaults to 1.
        memory_gb (int): Value of the %mem directive in GB. Defaults to 4.
        n_cores (int): Value of the %nprocshared directive. Defaults to 4.
        title (str): Title line.
        checkpoint (str | None): Checkpoint file name. Derived from the input file name when None.
    """

    method: str
    keywords: Sequence[str] = field(default_factory=tuple)
    charge: int = 0
    spin_multiplicity: int = 1
    memory_gb: int = 4
    n_cores: int = 4
    title: str = DEFAULT_TITLE
    checkpoint: str | None = None

    def __post_init__(self) -> None:
        """
        Validates the template parameters.

        Raises:
            ValidationError: If the method is empty, a keyword is not a string,
                the multiplicity is not a positive integer, or memory/cores
                are not positive.
        """
        if not isinstance(self.method, str) or not self.method.strip():
            raise ValidationError("A method must be given for the route line.")
        if not isinstance(self.spin_multiplicity, int) or self.spin_multiplicity < 1:
            raise ValidationError("Spin multiplicity must be a positive integer (e.g., 1 for singlet, 2 for doublet).")
        if not isinstance(self.charge, int):
            raise ValidationError("Charge must be an integer.")
        if self.memory_gb < 1:
            raise ValidationError("Memory must be at least 1 GB.")
        if self.n_cores < 1:
            raise ValidationError("Number of cores must be a positive integer.")
        if any(not isinstance(kw, str) for kw in self.keywords):
            raise ValidationError(f"Route keywords must be strings, got {list(self.keywords)}.")
        object.__setattr__(self, "keywords", tuple(self.keywords))

    @property
    def route_line(self) -> str:
        return " ".join(["#p", self.method.strip(), *self.keywords])

    def set_memory(self: T_GaussianInput, memory_gb: int) -> T_GaussianInput:
        return replace(self, memory_gb=memory_gb)

    def set_cores(self: T_GaussianInput, n_cores: int) -> T_GaussianInput:
        return replace(self, n_cores=n_cores)

    def set_charge_and_multiplicity(self: T_GaussianInput, charge: int, spin_multiplicity: int) -> T_GaussianInput:
        if spin_multiplicity > 1:
            logger.debug(f"Open-shell template requested (multiplicity {spin_multiplicity}).")
        return replace(self, charge=charge, spin_multiplicity=spin_multiplicity)

    def export_input_file(self, input_path: str | Path, geometry: str | None = None) -> str:
        """
        Builds the input file text.

        Args:
            input_path: Path the input will be written to, used for the default checkpoint name.
            geometry: Cartesian coordinate block ("Symbol x y z" lines). Uses a placeholder atom when None.

        Returns:
            str: Input file content, terminated by the blank line Gaussian expects.
        """
        checkpoint = self.checkpoint or f"{Path(input_path).stem}.chk"
        geometry_block = (geometry or PLACEHOLDER_GEOMETRY).strip("\n")
        lines = [
            f"%chk={checkpoint}",
            f"%mem={self.memory_gb}GB",
            f"%nprocshared={self.n_cores}",
            self.route_line,
            "",
            self.title,
            "",
            f"{self.charge} {self.spin_multiplicity}",
            geometry_block,
            "",
        ]
        return "\n".join(lines) + "\n"

    def write(self, input_path: str | Path, geometry: str | None = None, overwrite: bool = False) -> Path:
        """
        Writes the input file to disk.

        Raises:
            InputGenerationError: If the file exists and ``overwrite`` is False, or cannot be written.
        """
        path = Path(input_path)
        content = self.export_input_file(path, geometry)
        try:
            with path.open("w" if overwrite else "x") as f:
                f.write(content)
        except FileExistsError as e:
            raise InputGenerationError(f"Refusing to overwrite existing file '{path}'.") from e
        except (OSError, ValueError) as e:
            raise InputGenerationError(f"Could not write input file '{path}': {e}") from e
        logger.info(f"Wrote Gaussian input file: {path}")
        return path
