"""Parsing of the Gaussian route section ("#p opt freq b3lyp/6-31g(d) ...")."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from comchemkit.parsers.gaussian.patterns import ROUTE_SECTION_PAT, ROUTE_SOLVENT_PAT
from comchemkit.utils import logger

# fmt:off
KNOWN_METHODS = (
    "B3LYP", "CAM-B3LYP", "M06", "M062X", "M06-2X", "PBE0", "PBE1PBE", "wB97XD", "wB97X-D",
    "B2PLYPD3", "MP2", "CCSD", "CCSD(T)", "G4", "HF",
)
KNOWN_BASIS_SETS = (
    "STO-3G", "3-21G", "6-31G", "6-31+G", "6-31++G", "6-311G", "6-311+G", "6-311++G",
    "cc-pVDZ", "cc-pVTZ", "cc-pVQZ", "aug-cc-pVDZ", "aug-cc-pVTZ", "aug-cc-pVQZ",
    "def2-SVP", "def2-TZVP", "def2-TZVPP", "def2-QZVP", "def2SVP", "def2TZVP", "def2TZVPP", "def2QZVP",
)
# fmt:on

# Checked in order so that "gd3bj" is not reported as plain D3.
DISPERSION_KEYWORDS: tuple[tuple[str, str], ...] = (("gd3bj", "D3BJ"), ("gd3", "D3"), ("gd2", "D2"))


def _alternation(names: Sequence[str]) -> str:
    # longest first so "def2-TZVPP" is not cut to "def2-TZVP"
    return "|".join(re.escape(name) for name in sorted(names, key=len, reverse=True))


METHOD_PAT = re.compile(rf"(?<![\w-])(?:RO|R|U)?({_alternation(KNOWN_METHODS)})(?![\w+-])", re.IGNORECASE)
BASIS_PAT = re.compile(
    rf"(?<![\w+-])({_alternation(KNOWN_BASIS_SETS)})(\(\w+(?:,\w+)?\)|\*{{1,2}})?(?![\w+-])", re.IGNORECASE
)
ROUTE_MARKER_PAT = re.compile(r"^#[pnt]?$", re.IGNORECASE)

_CANONICAL_METHODS = {name.lower(): name for name in KNOWN_METHODS}
_CANONICAL_BASIS_SETS = {name.lower(): name for name in KNOWN_BASIS_SETS}


@dataclass(frozen=True)
class RouteInfo:
    """Information recovered from a route section.

    Unrecognised methods or basis sets are left empty rather than rejected.
    """

    route: str
    keywords: Sequence[str] = field(default_factory=tuple)
    method: str = ""
    basis_set: str = ""
    solvent: str | None = None
    dispersion: str | None = None


def find_route_section(content: str) -> str | None:
    """Returns the route text, with Gaussian's 70-column line wrapping undone."""
    match = ROUTE_SECTION_PAT.search(content)
    if not match:
        return None
    # Gaussian prefixes every route line with one space and breaks mid-token.
    lines = match.group(1).splitlines()
    return "".join(line[1:] if line.startswith(" ") else line for line in lines).strip()


def split_route_keywords(route: str) -> list[str]:
    """Splits a route on whitespace outside parentheses and drops the leading # marker.

    ``"#p opt scrf=(smd, solvent=water)"`` gives ``["opt", "scrf=(smd, solvent=water)"]``.
    """
    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    for char in route:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        if char.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)
    if current:
        tokens.append("".join(current))

    if tokens and ROUTE_MARKER_PAT.match(tokens[0]):
        tokens = tokens[1:]
    elif tokens and tokens[0].startswith("#"):
        # "#opt" style: marker glued to the first keyword
        tokens[0] = tokens[0].lstrip("#")
    return tokens


def _match_method(route: str) -> str:
    match = METHOD_PAT.search(route)
    return _CANONICAL_METHODS[match.group(1).lower()] if match else ""


def _match_basis_set(route: str) -> str:
    match = BASIS_PAT.search(route)
    if not match:
        return ""
    polarization = (match.group(2) or "").lower()
    return f"{_CANONICAL_BASIS_SETS[match.group(1).lower()]}{polarization}"


def _match_dispersion(route: str) -> str | None:
    lowered = route.lower()
    for token, label in DISPERSION_KEYWORDS:
        if token in lowered:
            return label
    return None


def parse_route_section(content: str) -> RouteInfo | None:
    """Parses the route section of a Gaussian output.

    Args:
        content: Full text of the output file.

    Returns:
        RouteInfo, or None when the file has no route section.
    """
    route = find_route_section(content)
    if route is None:
        logger.debug("No route section found.")
        return None

    solvent_match = ROUTE_SOLVENT_PAT.search(route)
    info = RouteInfo(
        route=route,
        keywords=tuple(split_route_keywords(route)),
        method=_match_method(route),
        basis_set=_match_basis_set(route),
        solvent=solvent_match.group(1) if solvent_match else None,
        dispersion=_match_dispersion(route),
    )
    logger.debug(f"Parsed route section: {info}")
    return info
