"""Initialize the comchemkit package and register the enabled program modules."""

from comchemkit.core import CommandContext, CommandType, QMProgram
from comchemkit.exceptions import ExtractionError, NotSupportedError, ValidationError
from comchemkit.registry import (
    create_qm_program,
    get_default_program,
    get_supported_programs,
    is_program_supported,
    register_qm_program,
    register_qm_programs,
)
from comchemkit.typing import CalculationMetadata, EnergyComponents, JobStatus, VibrationalMode

# Fills the registry so that create_qm_program("gaussian") works right after import.
register_qm_programs()

__all__ = [
    "CalculationMetadata",
    "CommandContext",
    "CommandType",
    "EnergyComponents",
    "ExtractionError",
    "JobStatus",
    "NotSupportedError",
    "QMProgram",
    "ValidationError",
    "VibrationalMode",
    "create_qm_program",
    "get_default_program",
    "get_supported_programs",
    "is_program_supported",
    "register_qm_program",
    "register_qm_programs",
]
