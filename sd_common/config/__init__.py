"""Configuration helpers shared across settings-dashboard layers."""

from sd_common.config.env import parse_bool_env, parse_int_env

__all__ = ["parse_bool_env", "parse_int_env"]
