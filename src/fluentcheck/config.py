from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, TYPE_CHECKING

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from fluentcheck.rendering.base import Renderer

ENHANCED_OUTPUT_ENV = "FLUENTCHECK_ENHANCED_OUTPUT"
_TRUTHY = frozenset({"true", "1", "yes"})


def enhanced_output_from_env() -> bool:
    return os.environ.get(ENHANCED_OUTPUT_ENV, "").strip().lower() in _TRUTHY


class Config(BaseModel):
    """Output options shared by every thread of the process."""

    model_config = ConfigDict(extra="forbid", frozen=True)
    use_colors: bool = True
    use_unicode_symbols: bool = True
    show_success_details: bool = True
    enhanced_output: bool = Field(default_factory=enhanced_output_from_env)
    junit_path: str | None = None

    @model_validator(mode="before")
    @classmethod
    def expand_environment(cls, data: Any) -> Any:
        """Expand ``${VAR}`` references in string values.

        Raises ValueError listing every variable that is unset and has no
        default.
        """
        if not isinstance(data, dict):
            return data
        missing: list[str] = []
        expanded: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str):
                try:
                    value = expandvars(value, nounset=True)
                except Exception:
                    missing.append(f"  {key}={value}")
            expanded[key] = value
        if missing:
            details = "\n".join(missing)
            raise ValueError(f"Config has missing environment variables:\n{details}")
        return expanded

    @property
    def enhanced_output_enabled(self) -> bool:
        """``enhanced_output`` if it was set, else the current environment."""
        if "enhanced_output" in self.model_fields_set:
            return self.enhanced_output
        return enhanced_output_from_env()


class ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ConfigStore:
    """Holds the process-wide Config and the renderer results are sent to.

    ``renderer`` is ``None`` until one is installed; the reporter then falls
    back to a console renderer built from the current config.
    """

    def __init__(self, config: Config | None = None) -> None:
        self._lock = ReadWriteLock()
        self._config = config if config is not None else Config()
        self._renderer: Renderer | None = None

    def get(self) -> Config:
        with self._lock.read_locked():
            return self._config

    def set(self, config: Config) -> None:
        with self._lock.write_locked():
            self._config = config

    def snapshot(self) -> tuple[Config, Renderer | None]:
        with self._lock.read_locked():
            return self._config, self._renderer

    def set_renderer(self, renderer: Renderer | None) -> None:
        with self._lock.write_locked():
            self._renderer = renderer

    def reset(self) -> None:
        with self._lock.write_locked():
            self._config = Config()
            self._renderer = None


STORE = ConfigStore()


class ConfigBuilder:
    """Fluent builder: ``config().use_colors(False).enhanced_output(True).apply()``."""

    def __init__(self, base: Config | None = None) -> None:
        # unset options stay unset so environment defaults keep applying
        self._values: dict[str, Any] = (base or STORE.get()).model_dump(exclude_unset=True)

    def _with(self, key: str, value: Any) -> ConfigBuilder:
        self._values[key] = value
        return self

    def use_colors(self, enable: bool) -> ConfigBuilder:
        return self._with("use_colors", enable)

    def use_unicode_symbols(self, enable: bool) -> ConfigBuilder:
        return self._with("use_unicode_symbols", enable)

    def show_success_details(self, enable: bool) -> ConfigBuilder:
        return self._with("show_success_details", enable)

    def enhanced_output(self, enable: bool) -> ConfigBuilder:
        return self._with("enhanced_output", enable)

    def junit_path(self, path: str | Path | None) -> ConfigBuilder:
        return self._with("junit_path", None if path is None else str(path))

    def build(self) -> Config:
        return Config(**self._values)

    def apply(self) -> Config:
        built = self.build()
        STORE.set(built)
        return built


def config() -> ConfigBuilder:
    return ConfigBuilder()


def load_config(path: Path) -> Config:
    """Load and validate output options from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise TypeError(f"{path}: expected a mapping of options, got {type(raw).__name__}")

    loaded = Config(**raw)

    # Resolve a relative junit path against the config file location
    if loaded.junit_path is not None and not Path(loaded.junit_path).is_absolute():
        loaded = loaded.model_copy(
            update={"junit_path": str((config_dir / loaded.junit_path).resolve())}
        )

    return loaded
