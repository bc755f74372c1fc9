import threading
from collections.abc import Generator

import pytest

from comchemkit import registry
from comchemkit.core import QMProgram
from comchemkit.exceptions import NotSupportedError, ValidationError
from comchemkit.parsers.gaussian import GaussianProgram


@pytest.fixture(autouse=True)
def clear_registry_fixture() -> Generator[None, None, None]:
    """Run every test against an empty registry and restore the import-time state afterwards."""
    saved = dict(registry._PROGRAM_REGISTRY)
    registry._PROGRAM_REGISTRY.clear()
    yield
    registry._PROGRAM_REGISTRY.clear()
    registry._PROGRAM_REGISTRY.update(saved)


class TestRegisterQmPrograms:
    def test_default_registers_gaussian_only(self) -> None:
        registry.register_qm_programs()
        assert registry.get_supported_programs() == ["gaussian"]

    @pytest.mark.parametrize("name", ["GAUSSIAN", "Gaussian", "gaussian", "  gaussian "])
    def test_create_is_case_insensitive(self, name: str) -> None:
        registry.register_qm_programs()
        program = registry.create_qm_program(name)
        assert isinstance(program, GaussianProgram)
        assert program.get_program_name() == "Gaussian"

    def test_each_call_returns_a_new_instance(self) -> None:
        registry.register_qm_programs()
        assert registry.create_qm_program("gaussian") is not registry.create_qm_program("gaussian")

    def test_unregistered_program_names_the_request(self) -> None:
        registry.register_qm_programs()
        with pytest.raises(NotSupportedError, match="orca"):
            registry.create_qm_program("orca")

    def test_placeholder_programs_raise_on_creation(self) -> None:
        registry.register_qm_programs(["gaussian", "orca", "qchem", "nwchem"])
        assert registry.get_supported_programs() == ["gaussian", "nwchem", "orca", "qchem"]
        with pytest.raises(NotSupportedError, match="ORCA support is not yet implemented"):
            registry.create_qm_program("ORCA")
        with pytest.raises(NotSupportedError, match="Q-Chem"):
            registry.create_qm_program("qchem")

    def test_unknown_module_name_raises(self) -> None:
        with pytest.raises(NotSupportedError, match="psi4"):
            registry.register_qm_programs(["psi4"])


class TestRegisterQmProgram:
    def test_last_registration_wins(self) -> None:
        first, second = GaussianProgram(), GaussianProgram()
        registry.register_qm_program("gaussian", lambda: first)
        registry.register_qm_program("Gaussian", lambda: second)
        assert registry.create_qm_program("gaussian") is second
        assert registry.get_supported_programs() == ["gaussian"]

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValidationError, match="cannot be empty"):
            registry.register_qm_program("   ", GaussianProgram)

    def test_non_callable_factory_raises(self) -> None:
        with pytest.raises(TypeError, match="must be callable"):
            registry.register_qm_program("gaussian", "not a factory")  # type: ignore[arg-type]

    def test_is_program_supported(self) -> None:
        assert not registry.is_program_supported("gaussian")
        registry.register_qm_program("gaussian", GaussianProgram)
        assert registry.is_program_supported("GAUSSIAN")
        assert not registry.is_program_supported("orca")

    def test_concurrent_registration(self) -> None:
        def register(i: int) -> None:
            registry.register_qm_program(f"program{i}", GaussianProgram)

        threads = [threading.Thread(target=register, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(registry.get_supported_programs()) == 20


class TestDefaultProgram:
    def test_falls_back_to_gaussian(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("COMCHEMKIT_PROGRAM", raising=False)
        assert registry.get_default_program() == "gaussian"

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMCHEMKIT_PROGRAM", " ORCA ")
        assert registry.get_default_program() == "orca"


def test_abstract_contract_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        QMProgram()  # type: ignore[abstract]
