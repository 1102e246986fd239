"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import NoReturn

from mp_callpush.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Dataclass whose fields map to ``<PREFIX>_<FIELD>`` environment variables.

    Subclasses set ``_prefix`` and override :meth:`_validate` for checks that
    span several fields; instances are validated on construction.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _reject(self, field_name: str, reason: str) -> NoReturn:
        raise InvalidSettingValueError(self.env_key(field_name), getattr(self, field_name), reason)

    def _validate(self) -> None:
        pass


__all__ = ["Settings"]
