"""Configuration loading and validation."""

import logging
import os
import re
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from ..report.aggregator import DEFAULT_OVERLAP_THRESHOLD, DEFAULT_SECTION_ORDER
from ..report.subchecker import SUB_CHECKER_PATTERN, compile_pattern

logger = logging.getLogger(__name__)


class GolangciLintConfig(BaseModel):
    """How golangci-lint is invoked."""
    executable: str = "golangci-lint"
    config_file: str = ".golangci-testdrive.yml"
    extra_args: List[str] = Field(default_factory=list)
    timeout: Optional[int] = None  # seconds, None waits forever

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class ReportConfig(BaseModel):
    """Report aggregation settings."""
    overlap_threshold: float = DEFAULT_OVERLAP_THRESHOLD
    sub_checker_pattern: str = SUB_CHECKER_PATTERN
    section_order: List[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_ORDER))

    # Section for checkers found in the output but missing from the catalog.
    # Unset means their findings are dropped like deprecated ones.
    unknown_checker_section: Optional[str] = None

    @field_validator('overlap_threshold')
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"overlap_threshold must be within [0, 1], got {v}")
        return v

    @field_validator('sub_checker_pattern')
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            compile_pattern(v)
        except re.error as e:
            raise ValueError(f"sub_checker_pattern is not a valid regex: {e}") from e
        return v

    @field_validator('section_order')
    @classmethod
    def validate_section_order(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("section_order must not be empty")
        duplicates = sorted({s for s in v if v.count(s) > 1})
        if duplicates:
            raise ValueError(f"section_order has duplicate labels: {duplicates}")
        return v

    @model_validator(mode='after')
    def validate_unknown_section(self) -> 'ReportConfig':
        if self.unknown_checker_section and self.unknown_checker_section not in self.section_order:
            raise ValueError(
                f"unknown_checker_section '{self.unknown_checker_section}' "
                f"is not one of section_order {self.section_order}"
            )
        return self


class CheckerDefinition(BaseModel):
    """Catalog entry for one checker."""
    name: str
    enabled_by_default: bool = False
    presets: List[str] = Field(default_factory=list)
    deprecated: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("checker name must not be empty")
        return v


class LintTestdriveConfig(BaseSettings):
    """Main configuration."""
    golangci_lint: GolangciLintConfig = Field(default_factory=GolangciLintConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    checkers: List[CheckerDefinition] = Field(default_factory=list)

    class Config:
        env_prefix = "TESTDRIVE_"
        env_nested_delimiter = "__"
        extra = "allow"


def _expand_env_vars(data: Any, _path: str = "") -> Any:
    """Recursively expand ``${VAR}`` references in config data.

    Args:
        data: Config data to process
        _path: Internal tracking for error messages (e.g., "golangci_lint.executable")
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v, f"{_path}.{k}" if _path else k) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item, f"{_path}[{i}]") for i, item in enumerate(data)]
    elif isinstance(data, str) and data.startswith("${") and data.endswith("}"):
        env_var = data[2:-1]
        value = os.environ.get(env_var)
        if value is None:
            logger.warning(
                f"Environment variable '{env_var}' not set (referenced at config path: {_path or 'root'}). "
                f"The literal string '{data}' will be used, which may cause errors."
            )
            return data
        return value
    return data


def load_config(config_path: Path = Path("testdrive.yaml")) -> LintTestdriveConfig:
    """Load configuration from a YAML file.

    A missing file is not an error: defaults are used and a warning logged.
    """
    if not config_path.exists():
        logger.warning(
            f"Config file not found: {config_path}. Using default configuration. "
            "Without a checker catalog every finding is excluded unless "
            "report.unknown_checker_section is set."
        )
        return LintTestdriveConfig()

    with open(config_path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {config_path} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping at the top level")

    data = _expand_env_vars(data)
    return LintTestdriveConfig(**data)
