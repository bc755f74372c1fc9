import dataclasses
from pathlib import Path

import pytest

from comchemkit.core import CommandContext, CommandType
from comchemkit.exceptions import ComChemKitError, ExtractionError, ValidationError
from comchemkit.typing import CalculationMetadata, EnergyComponents, JobStatus


class TestEnergyComponents:
    def test_defaults_are_zero_and_none(self) -> None:
        energies = EnergyComponents()
        assert energies.electronic_energy == 0.0
        assert energies.entropy == 0.0
        assert energies.frequencies == ()
        assert energies.has_imaginary_freq is False
        assert energies.dispersion_correction is None
        assert energies.solvation_energy is None
        assert energies.counterpoise_correction is None

    def test_frequencies_are_stored_as_tuple(self) -> None:
        energies = EnergyComponents(frequencies=[-15.2, 300.1, 450.7], has_imaginary_freq=True)
        assert energies.frequencies == (-15.2, 300.1, 450.7)
        assert energies.imaginary_frequencies == (-15.2,)

    def test_is_frozen(self) -> None:
        energies = EnergyComponents(electronic_energy=-1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            energies.electronic_energy = -2.0  # type: ignore[misc]

    def test_with_electronic_energy_replaces_only_that_field(self) -> None:
        low = EnergyComponents(
            electronic_energy=-100.0,
            zero_point_energy=0.02,
            gibbs_correction=0.003,
            entropy=45.0,
            frequencies=(100.0, 200.0),
            dispersion_correction=-0.001,
        )
        combined = low.with_electronic_energy(-100.5)
        assert combined.electronic_energy == -100.5
        assert dataclasses.replace(combined, electronic_energy=low.electronic_energy) == low
        assert low.electronic_energy == -100.0

    def test_str_is_compact(self) -> None:
        text = str(EnergyComponents(electronic_energy=-100.123456, frequencies=(1.0, 2.0)))
        assert "electronic_energy=-100.12345600" in text
        assert "n_frequencies=2" in text


class TestJobStatus:
    @pytest.mark.parametrize(
        "status, label",
        [
            (JobStatus.COMPLETED, "DONE"),
            (JobStatus.ERROR, "ERROR"),
            (JobStatus.RUNNING, "RUNNING"),
            (JobStatus.INTERRUPTED, "UNDONE"),
            (JobStatus.UNKNOWN, "UNKNOWN"),
        ],
    )
    def test_labels(self, status: JobStatus, label: str) -> None:
        assert status.label == label
        assert str(status) == label


class TestCalculationMetadata:
    def test_defaults(self) -> None:
        metadata = CalculationMetadata(file_path="job.log")
        assert metadata.temperature == 298.15
        assert metadata.pressure == 1.0
        assert metadata.status is JobStatus.UNKNOWN
        assert metadata.keywords == ()
        assert metadata.level_of_theory == ""

    def test_level_of_theory(self) -> None:
        metadata = CalculationMetadata(file_path="job.log", method="B3LYP", basis_set="6-31G(d)", keywords=["opt"])
        assert metadata.level_of_theory == "B3LYP/6-31G(d)"
        assert metadata.keywords == ("opt",)


class TestCommandContext:
    def test_defaults(self) -> None:
        context = CommandContext()
        assert context.command is CommandType.EXTRACT
        assert context.input_dir == Path.cwd()
        assert context.extension == ".log"
        assert context.sort_column == 2
        assert context.warnings == ()

    def test_extension_gets_leading_dot(self) -> None:
        assert CommandContext(extension="out").extension == ".out"

    def test_input_dir_is_a_path(self, tmp_path: Path) -> None:
        assert CommandContext(input_dir=str(tmp_path)).input_dir == tmp_path  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"temperature": 0.0}, "Temperature"),
            ({"temperature": -10.0}, "Temperature"),
            ({"concentration": 0.0}, "Concentration"),
            ({"format": "xml"}, "Format"),
            ({"max_file_size_mb": 0}, "file size"),
        ],
    )
    def test_invalid_values(self, kwargs: dict, match: str) -> None:
        with pytest.raises(ValidationError, match=match):
            CommandContext(**kwargs)

    @pytest.mark.parametrize("column", [0, 9, 42])
    def test_out_of_range_sort_column_falls_back(self, column: int) -> None:
        context = CommandContext(sort_column=column)
        assert context.sort_column == 2
        assert len(context.warnings) == 1
        assert "between 1 and 8" in context.warnings[0]

    def test_last_summary_column_is_accepted(self) -> None:
        context = CommandContext(sort_column=8)
        assert context.sort_column == 8
        assert context.warnings == ()

    def test_fallback_keeps_earlier_warnings(self) -> None:
        context = CommandContext(sort_column=9, warnings=["unknown flag -x"])
        assert context.warnings[0] == "unknown flag -x"
        assert "Sort column" in context.warnings[1]

    def test_with_warning_accumulates(self) -> None:
        context = CommandContext().with_warning("first").with_warning("second")
        assert context.warnings == ("first", "second")

    def test_command_values(self) -> None:
        assert CommandType("check-done") is CommandType.CHECK_DONE
        assert CommandType.HIGH_LEVEL_KJ.value == "high-level-kj"


class TestExceptions:
    def test_extraction_error_names_the_file(self) -> None:
        error = ExtractionError("/data/job.log", "could not open file")
        assert isinstance(error, ComChemKitError)
        assert error.file_path == "/data/job.log"
        assert error.reason == "could not open file"
        assert "/data/job.log" in str(error)
