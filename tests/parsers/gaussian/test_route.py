import pytest

from comchemkit.parsers.gaussian.route import find_route_section, parse_route_section, split_route_keywords


def _log(route_lines: str) -> str:
    separator = " " + "-" * 70
    return f" %chk=job.chk\n{separator}\n{route_lines}\n{separator}\n 1/18=20,19=15/1,3;\n"


class TestFindRouteSection:
    def test_single_line(self) -> None:
        assert find_route_section(_log(" #p opt freq b3lyp/6-31g(d)")) == "#p opt freq b3lyp/6-31g(d)"

    def test_wrapped_route_is_joined(self) -> None:
        content = _log(" #p opt freq b3lyp/6-31g(d) scrf=(smd,solvent=dichlorom\n ethane)")
        assert find_route_section(content) == "#p opt freq b3lyp/6-31g(d) scrf=(smd,solvent=dichloromethane)"

    def test_no_route(self) -> None:
        assert find_route_section(" Normal termination of Gaussian 16\n") is None
        assert parse_route_section(" Normal termination of Gaussian 16\n") is None


class TestSplitRouteKeywords:
    def test_parentheses_keep_spaces(self) -> None:
        assert split_route_keywords("#p opt scrf=(smd, solvent=water) freq") == [
            "opt",
            "scrf=(smd, solvent=water)",
            "freq",
        ]

    @pytest.mark.parametrize("marker", ["#", "#p", "#P", "#n", "#t"])
    def test_markers_are_dropped(self, marker: str) -> None:
        assert split_route_keywords(f"{marker} sp hf/sto-3g") == ["sp", "hf/sto-3g"]

    def test_glued_marker(self) -> None:
        assert split_route_keywords("#opt freq") == ["opt", "freq"]


class TestParseRouteSection:
    @pytest.mark.parametrize(
        "route, method, basis",
        [
            ("#p opt freq b3lyp/6-31g(d)", "B3LYP", "6-31G(d)"),
            ("#p ub3lyp/6-311+g(d,p)", "B3LYP", "6-311+G(d,p)"),
            ("#p rob3lyp/6-31g*", "B3LYP", "6-31G*"),
            ("#p cam-b3lyp/def2-tzvpp", "CAM-B3LYP", "def2-TZVPP"),
            ("#p m062x/def2tzvp", "M062X", "def2TZVP"),
            ("#p M06-2X/aug-cc-pVTZ", "M06-2X", "aug-cc-pVTZ"),
            ("#p wb97xd/cc-pvdz", "wB97XD", "cc-pVDZ"),
            ("#p ccsd(t)/cc-pvtz", "CCSD(T)", "cc-pVTZ"),
            ("#p hf/sto-3g", "HF", "STO-3G"),
            ("#p tpssh/lanl2dz", "", ""),
        ],
    )
    def test_method_and_basis(self, route: str, method: str, basis: str) -> None:
        info = parse_route_section(_log(f" {route}"))
        assert info is not None
        assert info.method == method
        assert info.basis_set == basis

    def test_solvent_and_dispersion(self) -> None:
        info = parse_route_section(_log(" #p b3lyp/6-31g(d) empiricaldispersion=gd3bj scrf=(smd,solvent=n-hexane)"))
        assert info is not None
        assert info.solvent == "n-hexane"
        assert info.dispersion == "D3BJ"

    @pytest.mark.parametrize("keyword, label", [("GD3BJ", "D3BJ"), ("GD3", "D3"), ("GD2", "D2")])
    def test_dispersion_labels(self, keyword: str, label: str) -> None:
        info = parse_route_section(_log(f" #p b3lyp/6-31g(d) EmpiricalDispersion={keyword}"))
        assert info is not None
        assert info.dispersion == label

    def test_gas_phase(self) -> None:
        info = parse_route_section(_log(" #p b3lyp/6-31g(d) opt"))
        assert info is not None
        assert info.solvent is None
        assert info.dispersion is None
        assert info.keywords == ("b3lyp/6-31g(d)", "opt")
