"""Thermochemistry summaries built from extracted energy components."""

import math
from dataclasses import dataclass, replace
from typing import Literal

from comchemkit.constants import (
    BOLTZMANN_HARTREE,
    DECIMAL_PRECISION,
    DEFAULT_CONCENTRATION,
    DEFAULT_TEMPERATURE,
    GAS_CONSTANT,
    HARTREE_TO_KCAL,
    HARTREE_TO_KJ,
    STANDARD_PRESSURE_PA,
)
from comchemkit.exceptions import NotSupportedError, ValidationError
from comchemkit.typing import EnergyComponents

EnergyUnit = Literal["au", "kj", "kcal"]

UNIT_FACTORS: dict[str, float] = {"au": 1.0, "kj": HARTREE_TO_KJ, "kcal": HARTREE_TO_KCAL}
UNIT_LABELS: dict[str, str] = {"au": "Eh", "kj": "kJ/mol", "kcal": "kcal/mol"}


def standard_state_correction(
    temperature: float = DEFAULT_TEMPERATURE, concentration: float = DEFAULT_CONCENTRATION
) -> float:
    """Free-energy change from a 1 atm ideal gas to ``concentration`` mol/L, in Hartree.

    RT ln(c RT / P0); about 1.89 kcal/mol at 298.15 K and 1 mol/L.
    """
    if temperature <= 0 or concentration <= 0:
        raise ValidationError("Temperature and concentration must be positive.")
    # mol/L -> mol/m^3
    ratio = concentration * 1000.0 * GAS_CONSTANT * temperature / STANDARD_PRESSURE_PA
    return BOLTZMANN_HARTREE * temperature * math.log(ratio)


@dataclass(frozen=True)
class ThermoSummary:
    """Electronic energy and derived thermodynamic quantities for one structure."""

    name: str
    electronic_energy: float
    zpe_corrected_energy: float
    enthalpy: float
    gibbs_free_energy: float
    entropy: float  # cal/mol-K, never converted
    lowest_frequency: float | None
    n_imaginary: int
    unit: EnergyUnit = "au"

    def in_units(self, unit: EnergyUnit) -> "ThermoSummary":
        """Returns a copy with the energies converted to ``unit``."""
        if unit not in UNIT_FACTORS:
            raise NotSupportedError(f"Unknown energy unit '{unit}'. Allowed: {list(UNIT_FACTORS)}")
        factor = UNIT_FACTORS[unit] / UNIT_FACTORS[self.unit]
        return replace(
            self,
            electronic_energy=self.electronic_energy * factor,
            zpe_corrected_energy=self.zpe_corrected_energy * factor,
            enthalpy=self.enthalpy * factor,
            gibbs_free_energy=self.gibbs_free_energy * factor,
            unit=unit,
        )

    def as_row(self) -> tuple[str, float, float, float, float, float, float | None, int]:
        return (
            self.name,
            self.electronic_energy,
            self.zpe_corrected_energy,
            self.enthalpy,
            self.gibbs_free_energy,
            self.entropy,
            self.lowest_frequency,
            self.n_imaginary,
        )


SUMMARY_COLUMNS = ("Name", "E", "E+ZPE", "H", "G", "S", "LowFreq", "NImag")


def summarize(
    name: str,
    energies: EnergyComponents,
    temperature: float = DEFAULT_TEMPERATURE,
    concentration: float = DEFAULT_CONCENTRATION,
) -> ThermoSummary:
    """Builds a Hartree summary; the Gibbs energy includes the standard-state correction."""
    e = energies.electronic_energy
    return ThermoSummary(
        name=name,
        electronic_energy=e,
        zpe_corrected_energy=e + energies.zero_point_energy,
        enthalpy=e + energies.enthalpy_correction,
        gibbs_free_energy=e + energies.gibbs_correction + standard_state_correction(temperature, concentration),
        entropy=energies.entropy,
        lowest_frequency=min(energies.frequencies) if energies.frequencies else None,
        n_imaginary=len(energies.imaginary_frequencies),
    )


def format_summary_table(summaries: list[ThermoSummary], decimals: int = DECIMAL_PRECISION) -> list[str]:
    """Renders summaries as fixed-width text lines, header first."""
    unit = UNIT_LABELS[summaries[0].unit] if summaries else UNIT_LABELS["au"]
    header = f"{SUMMARY_COLUMNS[0]:<30}" + "".join(f"{c:>18}" for c in SUMMARY_COLUMNS[1:5])
    header += f"{'S':>12}{'LowFreq':>12}{'NImag':>7}   ({unit})"
    lines = [header]
    for s in summaries:
        low = f"{s.lowest_frequency:12.2f}" if s.lowest_frequency is not None else f"{'N/A':>12}"
        energies = "".join(
            f"{v:18.{decimals}f}" for v in (s.electronic_energy, s.zpe_corrected_energy, s.enthalpy, s.gibbs_free_energy)
        )
        lines.append(f"{s.name:<30}{energies}{s.entropy:12.3f}{low}{s.n_imaginary:7d}")
    return lines
