from comchemkit.parsers.gaussian.commands import COMMAND_TABLE, dispatch_command
from comchemkit.parsers.gaussian.program import GaussianProgram
from comchemkit.parsers.gaussian.route import RouteInfo, parse_route_section

__all__ = [
    "COMMAND_TABLE",
    "GaussianProgram",
    "RouteInfo",
    "dispatch_command",
    "parse_route_section",
]
