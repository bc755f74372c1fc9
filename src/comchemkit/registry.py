"""Central registry mapping program names to QMProgram factories."""

import os
import threading
from collections.abc import Callable, Iterable

from comchemkit.constants import DEFAULT_PROGRAM, ENABLED_PROGRAMS, PLACEHOLDER_PROGRAMS, PROGRAM_ENV
from comchemkit.core import QMProgram
from comchemkit.exceptions import NotSupportedError, ValidationError
from comchemkit.utils import logger

ProgramFactory = Callable[[], QMProgram]

# Central storage: {program_name_lower: factory}
_PROGRAM_REGISTRY: dict[str, ProgramFactory] = {}
_REGISTRY_LOCK = threading.Lock()


def _normalize_program_name(name: str) -> str:
    return name.strip().lower()


def _gaussian_factory() -> QMProgram:
    from comchemkit.parsers.gaussian.program import GaussianProgram

    return GaussianProgram()


def _placeholder_factory(display_name: str) -> ProgramFactory:
    """Factory for programs that have a registry slot but no adapter yet."""

    def factory() -> QMProgram:
        raise NotSupportedError(f"{display_name} support is not yet implemented")

    return factory


def register_qm_program(name: str, factory: ProgramFactory) -> None:
    """Registers a program factory under a case-insensitive name.

    Later registrations for the same normalized name replace earlier ones.

    Args:
        name: Program name, e.g. "gaussian".
        factory: Zero-argument callable returning a QMProgram instance.

    Raises:
        ValidationError: If the name is empty.
        TypeError: If the factory is not callable.
    """
    key = _normalize_program_name(name)
    if not key:
        raise ValidationError("Program name cannot be empty.")
    if not callable(factory):
        raise TypeError(f"Factory for program '{key}' must be callable, got {type(factory)}.")

    with _REGISTRY_LOCK:
        if key in _PROGRAM_REGISTRY:
            logger.debug(f"Replacing existing factory for program '{key}'")
        _PROGRAM_REGISTRY[key] = factory
    logger.debug(f"Registered QM program: '{key}'")


def register_qm_programs(enabled: Iterable[str] | None = None) -> None:
    """Registers every enabled program module.

    Args:
        enabled: Program names to enable. Defaults to ``ENABLED_PROGRAMS``.
            Names with a placeholder slot (orca, nwchem, qchem) register a
            factory that raises NotSupportedError when called.

    Raises:
        NotSupportedError: If a requested name has no module at all.
    """
    names = [_normalize_program_name(n) for n in (ENABLED_PROGRAMS if enabled is None else enabled)]
    for name in names:
        if name == "gaussian":
            register_qm_program(name, _gaussian_factory)
        elif name in PLACEHOLDER_PROGRAMS:
            register_qm_program(name, _placeholder_factory(PLACEHOLDER_PROGRAMS[name]))
        else:
            raise NotSupportedError(f"No program module available for '{name}'.")
    logger.info(f"Registered QM programs: {names}")


def create_qm_program(name: str) -> QMProgram:
    """Creates an adapter instance for a registered program.

    Args:
        name: Program name (case-insensitive).

    Raises:
        NotSupportedError: If the program is not registered.
    """
    key = _normalize_program_name(name)
    with _REGISTRY_LOCK:
        factory = _PROGRAM_REGISTRY.get(key)
    if factory is None:
        raise NotSupportedError(f"Unsupported quantum chemistry program: {name}")
    return factory()


def is_program_supported(name: str) -> bool:
    with _REGISTRY_LOCK:
        return _normalize_program_name(name) in _PROGRAM_REGISTRY


def get_supported_programs() -> list[str]:
    """Returns the sorted normalized names of all registered programs."""
    with _REGISTRY_LOCK:
        return sorted(_PROGRAM_REGISTRY)


def get_default_program() -> str:
    """Program used when the caller does not name one.

    Read from the ``COMCHEMKIT_PROGRAM`` environment variable, falling back to
    ``DEFAULT_PROGRAM``.
    """
    value = os.environ.get(PROGRAM_ENV, "").strip()
    return _normalize_program_name(value) if value else DEFAULT_PROGRAM
