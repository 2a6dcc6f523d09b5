"""Fuel system parameters: validation and the text file reader."""

from dynfuels.params.parameters import InputParameters, replace_template_vars
from dynfuels.params.parser import load_parameters, parse_parameters

__all__ = ["InputParameters", "load_parameters", "parse_parameters", "replace_template_vars"]
