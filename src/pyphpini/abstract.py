# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/09/21 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn


class RemoteConfigService(metaclass=ABCMeta):
    """The other side of the call boundary, which owns the real `php.ini`.

    Every method is blocking. Implementations report failures by raising;
    the session wraps whatever they raise into `RemoteOperationFailed`.
    """

    @abstractmethod
    def fetch_settings(self) -> Sequence[Any]:
        """Current settings as `(name, value, section)` triples."""
        raise NotImplementedError

    @abstractmethod
    def push_settings(self, batch: Sequence[Any]) -> None:
        """Upsert by name. Applying the same batch twice must be harmless."""
        raise NotImplementedError

    @abstractmethod
    def remove_setting(self, ref: Any) -> None:
        """Remove exactly the occurrence `ref` (a `SettingRef`) points at."""
        raise NotImplementedError

    @abstractmethod
    def get_physical_path(self) -> str:
        raise NotImplementedError
