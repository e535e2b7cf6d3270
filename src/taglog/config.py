"""
Pydantic configuration schema for taglog.

Declarative equivalent of the construction options, loadable from YAML:

    logger:
      level: DEBUG
      template: full_debug
      level_braces: true
      caller_depth: 1

Usage:
    config = LoggerConfig.from_yaml("logging.yaml")
    log = config.build(out(buf))        # extra options are applied last
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from taglog import options as opts
from taglog.core import Logger
from taglog.formatters import Preset
from taglog.records import Level


class LoggerConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: int | str = "INFO"
    template: Optional[str] = None      # preset name or literal template
    msec: bool = False
    level_braces: bool = False
    caller_file: bool = False
    caller_func: bool = False
    caller_pkg: bool = False
    caller_depth: int = Field(0, ge=0)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: int | str) -> int | str:
        Level.from_value(v)
        return v

    @field_validator("template")
    @classmethod
    def validate_template(cls, v: Optional[str]) -> Optional[str]:
        # Literal templates are compiled (and validated) in build()
        if v is not None and "{" not in v:
            Preset.from_name(v)
        return v

    @property
    def min_level(self) -> Level:
        return Level.from_value(self.level)

    @property
    def template_source(self) -> Preset | str | None:
        """The Preset named by `template`, the literal template, or None."""
        if self.template is None or "{" in self.template:
            return self.template
        return Preset.from_name(self.template)

    def to_options(self) -> list[opts.Option]:
        """Equivalent option list, in application order."""
        result: list[opts.Option] = [opts.level(self.min_level)]
        flags = {
            "msec": opts.MSEC,
            "level_braces": opts.LEVEL_BRACES,
            "caller_file": opts.CALLER_FILE,
            "caller_func": opts.CALLER_FUNC,
            "caller_pkg": opts.CALLER_PKG,
        }
        for name, flag in flags.items():
            if getattr(self, name):
                result.append(flag)
        if self.template_source is not None:
            result.append(opts.template(self.template_source))
        if self.caller_depth:
            result.append(opts.caller_depth(self.caller_depth))
        return result

    def build(self, *extra: opts.Option) -> Logger:
        """Build a Logger. `extra` (sinks, clock, fatal action) is applied last."""
        return Logger(*self.to_options(), *extra)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggerConfig":
        """Load and validate from a YAML file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.from_yaml_string(raw)

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggerConfig":
        """Load and validate from a YAML string."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoggerConfig":
        """Load and validate from a dict; a top-level 'logger' key is unwrapped."""
        if isinstance(data, dict) and set(data) == {"logger"}:
            data = data["logger"] or {}
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        return self.model_dump(exclude_none=exclude_none)
