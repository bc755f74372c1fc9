"""Physical constants, defaults and limits shared by all program modules."""

from typing import Final

# --- Physical constants --- #
BOLTZMANN_HARTREE: Final = 3.166811563e-6  # Hartree/K
GAS_CONSTANT: Final = 8.314462618  # J/(mol K)
STANDARD_PRESSURE_PA: Final = 101325.0
HARTREE_TO_KCAL: Final = 627.509474
HARTREE_TO_KJ: Final = 2625.5002

# --- Calculation defaults --- #
DEFAULT_TEMPERATURE: Final = 298.15  # K
DEFAULT_PRESSURE: Final = 1.0  # atm
DEFAULT_CONCENTRATION: Final = 1.0  # mol/L
MIN_FREQ_THRESHOLD: Final = -50.0  # cm^-1, smaller values flag a real imaginary mode
DECIMAL_PRECISION: Final = 6

# --- Plausibility bounds for extracted results --- #
MIN_ELECTRONIC_ENERGY: Final = -10000.0  # Hartree, exclusive

# --- Limits --- #
MAX_FILE_SIZE_MB: Final = 100
HEADER_SCAN_LINES: Final = 50

# --- Programs --- #
DEFAULT_PROGRAM: Final = "gaussian"
PROGRAM_ENV: Final = "COMCHEMKIT_PROGRAM"
ENABLED_PROGRAMS: Final = ("gaussian",)
PLACEHOLDER_PROGRAMS: Final = {"orca": "ORCA", "nwchem": "NWChem", "qchem": "Q-Chem"}

# --- Report labels for job status --- #
STATUS_LABELS: Final = {
    "COMPLETED": "DONE",
    "ERROR": "ERROR",
    "RUNNING": "RUNNING",
    "INTERRUPTED": "UNDONE",
    "UNKNOWN": "UNKNOWN",
}
