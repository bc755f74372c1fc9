"""Gaussian implementation of the QMProgram contract.

Every public operation reads the output file afresh, so results always reflect
the file content at call time and instances can be shared between threads.
"""

import math
from collections.abc import Sequence
from itertools import islice
from pathlib import Path

from comchemkit.constants import (
    DEFAULT_PRESSURE,
    DEFAULT_TEMPERATURE,
    HEADER_SCAN_LINES,
    MIN_ELECTRONIC_ENERGY,
)
from comchemkit.core import CommandContext, QMProgram
from comchemkit.exceptions import ExtractionError, InputGenerationError, ValidationError
from comchemkit.inputs.gaussian import GaussianInput
from comchemkit.parsers.gaussian import patterns as pat
from comchemkit.parsers.gaussian.commands import COMMAND_TABLE, dispatch_command
from comchemkit.parsers.gaussian.route import parse_route_section
from comchemkit.parsers.pattern import extract_all_values
from comchemkit.typing import CalculationMetadata, EnergyComponents, JobStatus, VibrationalMode
from comchemkit.utils import logger

SUPPORTED_EXTENSIONS = frozenset({".log", ".out", ".LOG", ".OUT"})


class GaussianProgram(QMProgram):
    """Reads Gaussian log files."""

    def get_program_name(self) -> str:
        return "Gaussian"

    def get_supported_extensions(self) -> set[str]:
        return set(SUPPORTED_EXTENSIONS)

    def register_commands(self) -> None:
        # executors live in the module-level COMMAND_TABLE
        logger.debug(f"Gaussian commands available: {[c.value for c in COMMAND_TABLE]}")

    # --- File access --- #

    def is_valid_output_file(self, file_path: str | Path) -> bool:
        """Checks the first 50 lines for the Gaussian signature next to a version marker."""
        try:
            with open(file_path, encoding="latin-1", errors="ignore") as f:
                for line in islice(f, HEADER_SCAN_LINES):
                    if pat.SIGNATURE_TOKEN in line and any(marker in line for marker in pat.VERSION_MARKERS):
                        return True
        except (OSError, ValueError) as e:
            logger.debug(f"Could not read '{file_path}' while checking for a Gaussian header: {e}")
        return False

    def _parse_output_file(self, file_path: str | Path) -> str:
        """Reads the whole file into memory; multi-line patterns need the full text."""
        with open(file_path, encoding="latin-1", errors="ignore") as f:
            return f.read()

    # --- Energies --- #

    def _energies_from_content(self, content: str) -> EnergyComponents:
        values: dict[str, float | None] = {}
        for definition in pat.ENERGY_PATTERNS:
            values[definition.field_name] = definition.extract(content, default=0.0)
        for definition in pat.OPTIONAL_ENERGY_PATTERNS:
            values[definition.field_name] = definition.extract(content)

        frequencies = extract_all_values(pat.FREQUENCY_PATTERN, content)
        return EnergyComponents(
            **values,  # type: ignore[arg-type]
            frequencies=tuple(frequencies),
            has_imaginary_freq=any(f < 0 for f in frequencies),
        )

    def extract_energies(self, file_path: str | Path) -> EnergyComponents:
        """
        Extracts energy components from a Gaussian output file.

        Single-value fields use the first match in the file; fields that are
        not found stay 0.0. Every frequency line is collected in order and
        negative (imaginary) frequencies are kept.

        Raises:
            ExtractionError: If the file cannot be read or the values are not
                physically plausible.
        """
        try:
            content = self._parse_output_file(file_path)
        except (OSError, ValueError) as e:
            raise ExtractionError(str(file_path), f"could not open file ({e})") from e

        energies = self._energies_from_content(content)
        if not self._validate_results(energies):
            raise ExtractionError(
                str(file_path),
                "extracted energy components failed validation "
                f"(electronic_energy={energies.electronic_energy}, zero_point_energy={energies.zero_point_energy})",
            )
        logger.debug(f"Extracted energies from {file_path}: {energies}")
        return energies

    def _validate_results(self, energies: EnergyComponents) -> bool:
        e = energies.electronic_energy
        if math.isnan(e) or math.isinf(e):
            logger.warning(f"Electronic energy is not finite: {e}")
            return False
        if not MIN_ELECTRONIC_ENERGY < e < 0.0:
            logger.warning(f"Electronic energy {e} outside the plausible range ({MIN_ELECTRONIC_ENERGY}, 0).")
            return False
        if energies.zero_point_energy < 0.0:
            logger.warning(f"Negative zero-point energy: {energies.zero_point_energy}")
            return False
        return True

    def calculate_high_level_energy(
        self, low_level_path: str | Path, high_level_path: str | Path
    ) -> EnergyComponents:
        """
        Combines a low-level frequency run with a high-level single point.

        The low-level record supplies the thermal corrections, entropy and
        frequencies; only the electronic energy is taken from the high-level
        file. The two files are not checked for matching geometries.

        Raises:
            ExtractionError: If either file fails extraction.
        """
        low_level = self.extract_energies(low_level_path)
        high_level = self.extract_energies(high_level_path)
        logger.debug(
            f"Combining {low_level_path} (E={low_level.electronic_energy}) with "
            f"{high_level_path} (E={high_level.electronic_energy})"
        )
        return low_level.with_electronic_energy(high_level.electronic_energy)

    def extract_frequencies(self, file_path: str | Path) -> list[VibrationalMode]:
        """Frequency / IR intensity pairs; an empty list when nothing can be read."""
        try:
            content = self._parse_output_file(file_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not extract frequency data from {file_path}: {e}")
            return []

        modes: list[VibrationalMode] = []
        for block in pat.MODE_BLOCK_PAT.finditer(content):
            text = block.group(0)
            freq_match = pat.FREQUENCIES_PAT.search(text)
            inten_match = pat.IR_INTENSITY_PAT.search(text)
            if not freq_match or not inten_match:
                continue
            try:
                for freq, inten in zip(freq_match.groups(), inten_match.groups()):
                    if freq is not None and inten is not None:
                        modes.append(VibrationalMode(frequency=float(freq), ir_intensity=float(inten)))
            except ValueError:
                logger.warning(f"Could not parse normal-mode block in {file_path}: '{freq_match.group(0).strip()}'")
        return modes

    # --- Status --- #

    def check_job_status(self, file_path: str | Path) -> JobStatus:
        """
        Classifies a job from its output file.

        Checked in order, first hit wins: normal termination (COMPLETED),
        generic error termination (ERROR), PCM convergence failure (ERROR),
        otherwise INTERRUPTED. An unreadable file gives UNKNOWN.
        """
        try:
            content = self._parse_output_file(file_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {file_path} for status check: {e}")
            return JobStatus.UNKNOWN

        if pat.NORMAL_TERM_PAT.search(content):
            return JobStatus.COMPLETED
        if pat.ERROR_TERM_PAT.search(content):
            return JobStatus.ERROR
        if pat.PCM_ERROR_PAT.search(content):
            return JobStatus.ERROR
        return JobStatus.INTERRUPTED

    def check_pcm_convergence(self, file_path: str | Path) -> bool:
        """True if the file reports a PCM convergence failure."""
        try:
            content = self._parse_output_file(file_path)
        except (OSError, ValueError):
            return False
        return bool(pat.PCM_ERROR_PAT.search(content))

    def get_error_type(self, file_path: str | Path) -> str | None:
        """Names the first recognised error in the file, or None."""
        try:
            content = self._parse_output_file(file_path)
        except (OSError, ValueError):
            return None
        for marker, label in pat.ERROR_TYPES:
            if marker in content:
                return label
        return None

    # --- Metadata --- #

    def get_metadata(self, file_path: str | Path) -> CalculationMetadata:
        """
        Best-effort metadata. Any failure is logged and reported through
        ``status=JobStatus.ERROR`` instead of being raised.
        """
        try:
            content = self._parse_output_file(file_path)

            version = ""
            version_match = pat.VERSION_PAT.search(content)
            if version_match:
                version = f"Gaussian {version_match.group(1)} {version_match.group(2)}"

            route = parse_route_section(content)
            solvent = route.solvent if route else None
            if solvent is None:
                pcm_match = pat.PCM_SOLVENT_PAT.search(content)
                solvent = pcm_match.group(1).strip() if pcm_match else None

            temperature, pressure = DEFAULT_TEMPERATURE, DEFAULT_PRESSURE
            conditions = pat.CONDITIONS_PAT.search(content)
            if conditions:
                temperature, pressure = float(conditions.group(1)), float(conditions.group(2))

            return CalculationMetadata(
                file_path=str(file_path),
                program_version=version,
                method=route.method if route else "",
                basis_set=route.basis_set if route else "",
                keywords=route.keywords if route else (),
                solvent=solvent,
                temperature=temperature,
                pressure=pressure,
                status=self.check_job_status(file_path),
            )
        except Exception as e:
            logger.warning(f"Could not extract complete metadata from {file_path}: {e}", exc_info=True)
            return CalculationMetadata(file_path=str(file_path), status=JobStatus.ERROR)

    def get_dispersion_type(self, file_path: str | Path) -> str | None:
        """Dispersion correction requested in the route (D3BJ, D3 or D2), if any."""
        try:
            content = self._parse_output_file(file_path)
        except (OSError, ValueError):
            return None
        route = parse_route_section(content)
        return route.dispersion if route else None

    def validate_calculation_type(self, metadata: CalculationMetadata) -> bool:
        """True if the method was recognised, i.e. the energies can be attributed to a level of theory."""
        return bool(metadata.method)

    # --- Input generation and commands --- #

    def create_input_file(self, file_path: str | Path, method: str, keywords: Sequence[str]) -> bool:
        """Writes a minimal input template with a placeholder geometry; never overwrites."""
        try:
            GaussianInput(method=method, keywords=tuple(keywords)).write(file_path)
        except (InputGenerationError, ValidationError) as e:
            logger.error(f"Error creating input file: {e}")
            return False
        return True

    def execute_command(self, context: CommandContext) -> int:
        """Runs ``context.command`` and returns its exit code (0 when every file succeeded)."""
        return dispatch_command(self, context)
