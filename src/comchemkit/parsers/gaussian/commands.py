"""Command executors for Gaussian output files.

Each executor processes the files of ``context.input_dir`` one at a time,
writes a short report to stdout and returns a process exit code. A bad file
is reported and skipped; it never stops the batch.
"""

import csv
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from comchemkit.constants import MIN_FREQ_THRESHOLD
from comchemkit.core import CommandContext, CommandType
from comchemkit.exceptions import ExtractionError, NotSupportedError
from comchemkit.thermo import SUMMARY_COLUMNS, EnergyUnit, ThermoSummary, format_summary_table, summarize
from comchemkit.typing import JobStatus
from comchemkit.utils import logger

if TYPE_CHECKING:
    from comchemkit.parsers.gaussian.program import GaussianProgram

CommandExecutor = Callable[["GaussianProgram", CommandContext, TextIO], int]


def collect_output_files(context: CommandContext) -> list[Path]:
    """Files in ``input_dir`` with the requested extension and within the size limit."""
    if not context.input_dir.is_dir():
        logger.error(f"Input directory does not exist: {context.input_dir}")
        return []

    limit_bytes = context.max_file_size_mb * 1024 * 1024
    files: list[Path] = []
    for path in sorted(context.input_dir.iterdir()):
        if not path.is_file() or path.suffix.lower() != context.extension.lower():
            continue
        if path.stat().st_size > limit_bytes:
            logger.warning(f"Skipping {path.name}: larger than {context.max_file_size_mb} MB.")
            continue
        files.append(path)
    logger.info(f"Found {len(files)} '{context.extension}' files in {context.input_dir}")
    return files


def _write_summaries(summaries: list[ThermoSummary], context: CommandContext, out: TextIO) -> None:
    if context.quiet and context.format == "text":
        return
    key_index = context.sort_column - 1
    # None (no frequencies) sorts last
    summaries = sorted(summaries, key=lambda s: (s.as_row()[key_index] is None, s.as_row()[key_index] or 0))

    if context.format == "json":
        json.dump([dict(zip(SUMMARY_COLUMNS, s.as_row())) for s in summaries], out, indent=2)
        out.write("\n")
    elif context.format == "csv":
        writer = csv.writer(out)
        writer.writerow(SUMMARY_COLUMNS)
        writer.writerows(s.as_row() for s in summaries)
    else:
        for line in format_summary_table(summaries):
            out.write(line + "\n")


def execute_extract_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    summaries: list[ThermoSummary] = []
    failed = 0
    for path in collect_output_files(context):
        if not program.is_valid_output_file(path):
            logger.warning(f"Skipping {path.name}: not a Gaussian output file.")
            continue
        try:
            energies = program.extract_energies(path)
        except ExtractionError as e:
            logger.error(str(e))
            failed += 1
            continue
        if any(f < MIN_FREQ_THRESHOLD for f in energies.frequencies):
            logger.warning(f"{path.name} has imaginary frequencies {energies.imaginary_frequencies}")
        summaries.append(summarize(path.stem, energies, context.temperature, context.concentration))

    _write_summaries(summaries, context, out)
    if failed:
        logger.error(f"{failed} file(s) could not be extracted.")
    return 1 if failed else 0


def _status_report(
    program: "GaussianProgram",
    context: CommandContext,
    out: TextIO,
    select: Callable[[Path, JobStatus], bool],
    with_error_type: bool = False,
) -> int:
    matched = 0
    for path in collect_output_files(context):
        status = program.check_job_status(path)
        if not select(path, status):
            continue
        matched += 1
        if context.quiet:
            continue
        line = f"{path.name:<40}{status.label:>10}"
        if with_error_type:
            line += f"  {program.get_error_type(path) or ''}"
        out.write(line.rstrip() + "\n")
    logger.info(f"{matched} file(s) matched {context.command.value}")
    return 0


def execute_check_done_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    return _status_report(program, context, out, lambda _p, status: status is JobStatus.COMPLETED)


def execute_check_errors_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    return _status_report(
        program, context, out, lambda _p, status: status is JobStatus.ERROR, with_error_type=True
    )


def execute_check_pcm_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    return _status_report(program, context, out, lambda path, _s: program.check_pcm_convergence(path))


def execute_check_all_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    return _status_report(program, context, out, lambda _p, _s: True, with_error_type=True)


def _execute_high_level(program: "GaussianProgram", context: CommandContext, out: TextIO, unit: EnergyUnit) -> int:
    """High-level single points in ``input_dir``, matching frequency runs in its parent."""
    low_level_dir = context.input_dir.parent
    summaries: list[ThermoSummary] = []
    failed = 0
    for high_path in collect_output_files(context):
        low_path = low_level_dir / high_path.name
        if not low_path.is_file():
            logger.error(f"No low-level output for {high_path.name} in {low_level_dir}")
            failed += 1
            continue
        try:
            combined = program.calculate_high_level_energy(low_path, high_path)
        except ExtractionError as e:
            logger.error(str(e))
            failed += 1
            continue
        summary = summarize(high_path.stem, combined, context.temperature, context.concentration)
        summaries.append(summary.in_units(unit))

    _write_summaries(summaries, context, out)
    return 1 if failed else 0


def execute_high_level_kj_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    return _execute_high_level(program, context, out, "kj")


def execute_high_level_au_command(program: "GaussianProgram", context: CommandContext, out: TextIO) -> int:
    return _execute_high_level(program, context, out, "au")


COMMAND_TABLE: dict[CommandType, CommandExecutor] = {
    CommandType.EXTRACT: execute_extract_command,
    CommandType.CHECK_DONE: execute_check_done_command,
    CommandType.CHECK_ERRORS: execute_check_errors_command,
    CommandType.CHECK_PCM: execute_check_pcm_command,
    CommandType.CHECK_ALL: execute_check_all_command,
    CommandType.HIGH_LEVEL_KJ: execute_high_level_kj_command,
    CommandType.HIGH_LEVEL_AU: execute_high_level_au_command,
}


def dispatch_command(program: "GaussianProgram", context: CommandContext, out: TextIO | None = None) -> int:
    """Runs the executor registered for ``context.command``.

    Raises:
        NotSupportedError: If the command has no Gaussian executor.
    """
    executor = COMMAND_TABLE.get(context.command)
    if executor is None:
        raise NotSupportedError(f"Command '{context.command.value}' is not supported for Gaussian.")
    for warning in context.warnings:
        logger.warning(warning)
    logger.info(f"Executing Gaussian command '{context.command.value}' in {context.input_dir}")
    return executor(program, context, out or sys.stdout)
