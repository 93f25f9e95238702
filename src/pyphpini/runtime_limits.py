# -*- encoding: utf-8 -*-
# @File   : runtime_limits.py
# @Time   : 2026/09/25 00:12:09
# @Author : Kariko Lin

"""The "runtime limits" page: six well-known directives
projected onto typed fields.

Slot `i` always means `RUNTIME_LIMIT_NAMES[i]`. A directive missing from
`php.ini` leaves its slot `None`, it is *not* filled with php's default.
Saving always upserts all six, in `[PHP]` when they have to be created.
"""

from typing import Iterator

from .ini.model import PHPIniFile, PHPIniSetting
from .session import PHPIniSession

# If adding names here, also add the property below.
RUNTIME_LIMIT_NAMES: tuple[str, ...] = (
    'max_execution_time',
    'max_input_time',
    'memory_limit',
    'post_max_size',
    'upload_max_filesize',
    'max_file_uploads',
)

RUNTIME_LIMITS_SECTION = 'PHP'


def _slot(index: int) -> property:
    def fget(self: 'RuntimeLimits') -> str | None:
        return self[index]

    def fset(self: 'RuntimeLimits', value: str | None) -> None:
        self[index] = value

    return property(fget, fset, doc=RUNTIME_LIMIT_NAMES[index])


class RuntimeLimits:
    max_execution_time = _slot(0)
    max_input_time = _slot(1)
    memory_limit = _slot(2)
    post_max_size = _slot(3)
    upload_max_filesize = _slot(4)
    max_file_uploads = _slot(5)

    def __init__(self, values: list[str | None] | None = None) -> None:
        self.__values: list[str | None] = [None] * len(RUNTIME_LIMIT_NAMES)
        if values is not None:
            if len(values) != len(RUNTIME_LIMIT_NAMES):
                raise ValueError(
                    f'expected {len(RUNTIME_LIMIT_NAMES)} values, '
                    f'got {len(values)}')
            self.__values[:] = values

    @classmethod
    def project(cls, file: PHPIniFile) -> 'RuntimeLimits':
        ret = cls()
        for idx, name in enumerate(RUNTIME_LIMIT_NAMES):
            if (setting := file.get_setting(name)) is not None:
                ret[idx] = setting.value
        return ret

    def __getitem__(self, index: int) -> str | None:
        return self.__values[index]

    def __setitem__(self, index: int, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise TypeError(
                f'{RUNTIME_LIMIT_NAMES[index]} takes a string, got {value!r}')
        self.__values[index] = value

    def __len__(self) -> int:
        return len(self.__values)

    def __iter__(self) -> Iterator[str | None]:
        return iter(self.__values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuntimeLimits):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return 'RuntimeLimits(%s)' % ', '.join(
            f'{k}={v!r}' for k, v in zip(RUNTIME_LIMIT_NAMES, self))

    def clone(self) -> 'RuntimeLimits':
        return RuntimeLimits(list(self.__values))

    def to_batch(self) -> list[PHPIniSetting]:
        # unset slots are still written, as empty values.
        return [PHPIniSetting(name, value or '', RUNTIME_LIMITS_SECTION)
                for name, value in zip(RUNTIME_LIMIT_NAMES, self)]


class RuntimeLimitsEditor:
    """Keeps what was loaded and an editable clone of it.

    The clone is only dropped once a save went through,
    so a failed save does not cost the user their edits.
    """

    def __init__(self, session: PHPIniSession) -> None:
        self._session = session
        self._bag = RuntimeLimits()
        self._clone = self._bag.clone()

    @property
    def loaded(self) -> RuntimeLimits:
        return self._bag

    @property
    def values(self) -> RuntimeLimits:
        """The editable copy."""
        return self._clone

    @property
    def is_dirty(self) -> bool:
        return self._clone != self._bag

    def load(self) -> RuntimeLimits:
        self._process(RuntimeLimits.project(self._session.refresh()))
        return self._clone

    def _process(self, bag: RuntimeLimits) -> None:
        self._bag = bag
        self._clone = bag.clone()

    def save(self) -> RuntimeLimits:
        self._session.add_or_update_batch(self._clone.to_batch())
        self._process(self._clone)
        return self._bag
