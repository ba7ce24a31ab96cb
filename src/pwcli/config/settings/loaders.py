"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import logging
import os
import types
import typing
from typing import Any, TypeVar

from pwcli.config.settings.base import Settings
from pwcli.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)

logger = logging.getLogger(__name__)

_OPTIONAL_SUFFIX = "| None"


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    The variable name is ``<PREFIX>_<FIELD>`` upper-cased.  *prefix* replaces
    the class-level ``_prefix`` so one settings class can be read under
    several namespaces (one per retry preset, for instance).

    A value that cannot be coerced to its field type is skipped with a
    warning when the field has a default, so the remaining variables still
    apply.  With *strict* it raises :class:`InvalidSettingValueError`.
    """

    def __init__(
        self,
        prefix: str | None = None,
        environ: dict[str, str] | None = None,
        strict: bool = False,
    ) -> None:
        self._prefix = prefix
        self._environ = environ
        self._strict = strict

    def load(self, settings_class: type[T]) -> T:
        prefix = self._prefix if self._prefix is not None else getattr(settings_class, "_prefix", "")
        environ = self._environ if self._environ is not None else os.environ
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                required = (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                )
                if self._strict or required:
                    raise InvalidSettingValueError(env_key, raw, str(exc)) from exc
                logger.warning("settings value skipped key=%s value=%r error=%s", env_key, raw, exc)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    @staticmethod
    def _type_name(type_hint: Any) -> str:
        """Reduce a field annotation to ``bool``/``int``/``float``/``list``/``str``.

        Handles both evaluated annotations and the strings produced under
        ``from __future__ import annotations``; ``Optional`` is unwrapped.
        """
        if isinstance(type_hint, str):
            name = type_hint.strip()
            if name.endswith(_OPTIONAL_SUFFIX):
                name = name[: -len(_OPTIONAL_SUFFIX)].strip()
            if name.startswith("Optional[") and name.endswith("]"):
                name = name[len("Optional["):-1]
            return "list" if name.startswith(("list[", "tuple[")) else name
        origin = typing.get_origin(type_hint)
        if origin in (typing.Union, types.UnionType):
            args = [arg for arg in typing.get_args(type_hint) if arg is not type(None)]
            if len(args) == 1:
                return EnvSettingsLoader._type_name(args[0])
        if origin in (list, tuple):
            return "list"
        return getattr(type_hint, "__name__", str(type_hint))

    def _coerce(self, value: str, type_hint: Any) -> Any:
        name = self._type_name(type_hint)
        if name == "bool":
            return value.lower() in ("1", "true", "yes", "on")
        if name == "int":
            return int(value)
        if name == "float":
            return float(value)
        if name == "list":
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
