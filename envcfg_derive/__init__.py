"""
envcfg Model Glue.

Derives record declarations from pydantic models and attaches from_env().
"""

from envcfg_derive.model import EnvField, env_config, record_spec_from_model

__all__ = ["EnvField", "env_config", "record_spec_from_model"]
