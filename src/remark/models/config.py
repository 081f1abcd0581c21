"""Pydantic configuration models for remark."""

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..conversion.tags import DEFAULT_MASK


class FetchMethod(str, Enum):
    """How HTML is obtained for a URL."""

    DEFAULT = "default"  # plain HTTP GET
    INTERACTIVE = "interactive"  # headless browser with JavaScript


class ConversionConfig(BaseModel):
    """Configuration for HTML to Markdown conversion."""

    mask: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MASK),
        description="Tags removed with their subtrees before conversion",
    )
    section_level: int = Field(1, ge=1, le=6, description="Deepest heading level that starts a section")

    model_config = {"extra": "forbid"}


class FetchConfig(BaseModel):
    """Configuration for fetching HTML."""

    method: FetchMethod = Field(FetchMethod.INTERACTIVE, description="Fetch method")
    timeout: float = Field(15.0, gt=0, description="Fetch timeout in seconds")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra request headers")
    blocked_resources: list[str] = Field(
        default_factory=lambda: ["nonessential"],
        description="Resource types or groups the browser does not load",
    )
    check_interval: float = Field(0.2, gt=0, description="Seconds between content stability checks")
    stable_checks: int = Field(3, ge=1, description="Identical snapshots needed to call content stable")
    max_retries: int = Field(3, ge=0, description="Maximum retry attempts for failed HTTP requests")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")

    model_config = {"extra": "forbid"}

    @field_validator("blocked_resources")
    @classmethod
    def _known_resource_types(cls, value: list[str]) -> list[str]:
        from ..fetch.resources import parse_resource_types

        parse_resource_types(value)
        return value


class RemarkConfig(BaseModel):
    """
    Root configuration model for remark.

    Example:
        config = RemarkConfig(
            url="https://example.com/article",
            fetch=FetchConfig(method=FetchMethod.DEFAULT, timeout=10),
        )

    YAML format:
        url: https://example.com/article
        conversion:
          mask: [header, footer, nav]
        fetch:
          method: interactive
          timeout: 20
          blocked_resources: [visual, style]
    """

    url: Optional[str] = Field(None, description="Page URL to fetch")
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "RemarkConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "RemarkConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
