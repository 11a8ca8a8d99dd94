"""Configuration, argument parsing and external steps for stylecheck."""

from stylecheck.lint.args_parser import parse_lint_args
from stylecheck.lint.config import StyleCheckConfig, load_config
from stylecheck.lint.external_steps import ExternalStep, run_external_steps
from stylecheck.util.exceptions import ConfigurationError


__all__ = [
    "parse_lint_args",
    "ConfigurationError",
    "StyleCheckConfig",
    "load_config",
    "ExternalStep",
    "run_external_steps",
]
