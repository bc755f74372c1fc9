"""Regex patterns and extraction rules for Gaussian output files."""

import re

from comchemkit.constants import HARTREE_TO_KCAL
from comchemkit.parsers.pattern import PatternDefinition, groups_to_floats

# --- Header / identity --- #
SIGNATURE_TOKEN = "Gaussian"
VERSION_MARKERS = ("Revision", "Inc.")
VERSION_PAT = re.compile(r"Gaussian\s+(\d+),?\s+Revision\s+([A-Z]\.\d+)")

# --- Termination / status --- #
NORMAL_TERM_PAT = re.compile(r"Normal termination of Gaussian")
ERROR_TERM_PAT = re.compile(
    r"Error termination|Fatal Error|Erroneous write|File lengths|Error in internal coordinate system"
)
PCM_ERROR_PAT = re.compile(r"Convergence failure -- run terminated|PCM cycles did not converge|PCM optimization failed")

# Ordered most specific first; the first hit names the error.
ERROR_TYPES: tuple[tuple[str, str], ...] = (
    ("Error termination", "Error termination"),
    ("Convergence failure", "Convergence failure"),
    ("File lengths do not match", "File length mismatch"),
    ("Fatal Error", "Fatal error"),
)

# --- Energies --- #
SCF_ENERGY_PAT = re.compile(r"SCF Done:\s+E\([^)]+\)\s*=\s*([-\d.]+)")
ZPE_PAT = re.compile(r"Zero-point correction=\s*([-\d.]+)")
THERMAL_ENERGY_PAT = re.compile(r"Thermal correction to Energy=\s*([-\d.]+)")
THERMAL_ENTHALPY_PAT = re.compile(r"Thermal correction to Enthalpy=\s*([-\d.]+)")
THERMAL_GIBBS_PAT = re.compile(r"Thermal correction to Gibbs Free Energy=\s*([-\d.]+)")
NUCLEAR_REPULSION_PAT = re.compile(r"nuclear repulsion energy\s+([-\d.]+)\s+Hartrees")
# " Total    15.011    6.008    45.099" row of the E (Thermal) / CV / S table
ENTROPY_PAT = re.compile(r"^ Total\s+[-\d.]+\s+[-\d.]+\s+([-\d.]+)\s*$", re.MULTILINE)
DISPERSION_PAT = re.compile(r"Dispersion energy=\s*([-\d.]+)\s+Hartrees")
SMD_CDS_PAT = re.compile(r"SMD-CDS \(non-electrostatic\) energy\s+\(kcal/mol\)\s*=\s*([-\d.]+)")
BSSE_PAT = re.compile(r"BSSE energy =\s*([-\d.]+)")

# --- Frequencies --- #
# Up to three values per line; "Frequencies ---" (HPModes block) is excluded.
FREQUENCIES_PAT = re.compile(r"Frequencies --(?!-)[ \t]*([-\d.]+)(?:[ \t]+([-\d.]+))?(?:[ \t]+([-\d.]+))?")
IR_INTENSITY_PAT = re.compile(r"IR Inten[ \t]+--[ \t]*([-\d.]+)(?:[ \t]+([-\d.]+))?(?:[ \t]+([-\d.]+))?")
# One normal-mode block: the Frequencies line through the IR Inten line.
MODE_BLOCK_PAT = re.compile(r"^ +Frequencies --(?!-).*?^ +IR Inten +--.*?$", re.MULTILINE | re.DOTALL)

# --- Route section and conditions --- #
# From the first line starting with '#' up to the next dashed separator.
ROUTE_SECTION_PAT = re.compile(r"^ ?(#.*?)\n\s*-{5,}", re.MULTILINE | re.DOTALL)
ROUTE_SOLVENT_PAT = re.compile(r"solvent\s*=\s*([\w\-]+)", re.IGNORECASE)
PCM_SOLVENT_PAT = re.compile(r"^\s*Solvent\s+:\s+([^,\n]+)", re.MULTILINE)
CONDITIONS_PAT = re.compile(r"Temperature\s+([\d.]+)\s+Kelvin\.\s+Pressure\s+([\d.]+)\s+Atm\.")


def _kcal_to_hartree(match: re.Match[str]) -> float:
    return float(match.group(1)) / HARTREE_TO_KCAL


# --- Extraction rules --- #
ENERGY_PATTERNS: tuple[PatternDefinition, ...] = (
    PatternDefinition("electronic_energy", SCF_ENERGY_PAT, description="SCF energy"),
    PatternDefinition("zero_point_energy", ZPE_PAT, description="Zero-point correction"),
    PatternDefinition("thermal_correction", THERMAL_ENERGY_PAT, description="Thermal correction to energy"),
    PatternDefinition("enthalpy_correction", THERMAL_ENTHALPY_PAT, description="Thermal correction to enthalpy"),
    PatternDefinition("gibbs_correction", THERMAL_GIBBS_PAT, description="Thermal correction to Gibbs free energy"),
    PatternDefinition("entropy", ENTROPY_PAT, description="Total entropy, cal/mol-K"),
    PatternDefinition("nuclear_repulsion", NUCLEAR_REPULSION_PAT, description="Nuclear repulsion energy"),
)

OPTIONAL_ENERGY_PATTERNS: tuple[PatternDefinition, ...] = (
    PatternDefinition("dispersion_correction", DISPERSION_PAT, description="Empirical dispersion energy"),
    PatternDefinition(
        "solvation_energy", SMD_CDS_PAT, transform=_kcal_to_hartree, description="SMD non-electrostatic energy"
    ),
    PatternDefinition("counterpoise_correction", BSSE_PAT, description="Counterpoise BSSE energy"),
)

FREQUENCY_PATTERN = PatternDefinition(
    "frequencies",
    FREQUENCIES_PAT,
    occurrence="all",
    transform=groups_to_floats,
    description="Vibrational frequencies, cm^-1",
)
