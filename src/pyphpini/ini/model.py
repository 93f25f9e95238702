# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/09/21 21:15:40
# @Author : Kariko Lin

"""
Client-side view of a `php.ini`: an ordered list of settings.

The text itself (comments, blank lines, header layout) lives on the
service side, see `ini.document`. What gets here is just the directives,
in file order, as `(name, value, section)` triples.

About duplicates: `php.ini` happily takes the same directive twice.
We keep every occurrence, but whenever *one* setting has to be picked
for a name, the earliest in file order wins.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from ..errors import InvalidConfigData, NotFound


class SettingRecord(NamedTuple):
    """Wire form of one directive."""
    name: str
    value: str
    section: str = ''


class SettingRef(NamedTuple):
    """Points at the `ordinal`-th directive equal to the given triple.

    Two duplicates can be identical in all three fields, so a triple alone
    is not enough to tell the service which one to delete.
    """
    name: str
    value: str
    section: str
    ordinal: int = 0

    @property
    def record(self) -> SettingRecord:
        return SettingRecord(self.name, self.value, self.section)


class SearchField(str, Enum):
    NAME = 'Name'
    VALUE = 'Value'
    SECTION = 'Section'


# eq=False: two duplicate directives are different settings even when
# every field matches. Identity is what `remove()` goes by.
@dataclass(frozen=True, eq=False)
class PHPIniSetting:
    name: str
    value: str
    section: str = ''

    @property
    def record(self) -> SettingRecord:
        return SettingRecord(self.name, self.value, self.section)

    def get(self, field: SearchField) -> str:
        match field:
            case SearchField.NAME:
                return self.name
            case SearchField.VALUE:
                return self.value
            case SearchField.SECTION:
                return self.section
        raise ValueError(field)

    def with_value(self, value: str) -> 'PHPIniSetting':
        return PHPIniSetting(self.name, value, self.section)

    def __repr__(self) -> str:
        return f'PHPIniSetting({self.name!r}={self.value!r} [{self.section}])'


def _to_record(entry: Any, index: int) -> SettingRecord:
    if isinstance(entry, PHPIniSetting):
        return entry.record
    if isinstance(entry, Mapping):
        try:
            name, value = entry['name'], entry['value']
        except KeyError as e:
            raise InvalidConfigData(
                f'entry #{index} has no {e.args[0]!r} field') from e
        section = entry.get('section')
    elif isinstance(entry, Sequence) and not isinstance(entry, str):
        if len(entry) not in (2, 3):
            raise InvalidConfigData(
                f'entry #{index} should be (name, value, section), '
                f'got {len(entry)} fields')
        name, value = entry[0], entry[1]
        section = entry[2] if len(entry) == 3 else None
    else:
        raise InvalidConfigData(f'entry #{index} is not a setting: {entry!r}')

    if not isinstance(name, str) or not name.strip():
        raise InvalidConfigData(f'entry #{index} has an empty name')
    if not isinstance(value, str):
        raise InvalidConfigData(
            f'entry #{index} ({name}) has a non-string value {value!r}')
    if section is None:
        section = ''
    elif not isinstance(section, str):
        raise InvalidConfigData(
            f'entry #{index} ({name}) has a non-string section {section!r}')
    return SettingRecord(name, value, section)


class PHPIniFile(Sequence[PHPIniSetting]):
    """Ordered, in-memory snapshot of the settings of one `php.ini`."""

    def __init__(self, settings: Iterable[PHPIniSetting] = ()) -> None:
        self.__settings: list[PHPIniSetting] = list(settings)

    def set_data(self, raw: Any) -> None:
        """(Re)load from raw triples.

        All or nothing: the first malformed entry fails the whole load
        and the current content is left as it was.
        """
        if raw is None or isinstance(raw, (str, bytes, Mapping)) \
                or not isinstance(raw, Iterable):
            raise InvalidConfigData(
                f'expected a sequence of settings, got {type(raw).__name__}')
        loaded = [PHPIniSetting(*_to_record(entry, i))
                  for i, entry in enumerate(raw)]
        self.__settings = loaded

    @classmethod
    def from_data(cls, raw: Any) -> 'PHPIniFile':
        ret = cls()
        ret.set_data(raw)
        return ret

    def get_data(self) -> list[SettingRecord]:
        return [i.record for i in self.__settings]

    def copy(self) -> 'PHPIniFile':
        # settings are frozen, sharing them is fine.
        return PHPIniFile(self.__settings)

    @property
    def settings(self) -> list[PHPIniSetting]:
        return list(self.__settings)

    @property
    def sections(self) -> list[str]:
        """Distinct non-empty sections, first seen first."""
        ret: dict[str, None] = {}
        for i in self.__settings:
            if i.section:
                ret.setdefault(i.section, None)
        return list(ret.keys())

    def __getitem__(self, index):
        return self.__settings[index]

    def __len__(self) -> int:
        return len(self.__settings)

    def __iter__(self) -> Iterator[PHPIniSetting]:
        return iter(self.__settings)

    def __contains__(self, item: object) -> bool:
        return any(i is item for i in self.__settings)

    def __repr__(self) -> str:
        return '<PHPIniFile { .cnt = %d }>' % len(self.__settings)

    def index_of(self, setting: PHPIniSetting) -> int:
        for idx, i in enumerate(self.__settings):
            if i is setting:
                return idx
        raise NotFound(f'{setting!r} is not in the current php.ini snapshot')

    def get_setting(self, name: str) -> PHPIniSetting | None:
        """The effective setting for `name` (case-sensitive), if any."""
        for i in self.__settings:
            if i.name == name:
                return i
        return None

    def find_all(self, name: str) -> list[PHPIniSetting]:
        return [i for i in self.__settings if i.name == name]

    def filter(self, field: SearchField | str,
               text: str) -> Iterator[PHPIniSetting]:
        field = SearchField(field)
        needle = text.casefold()
        return (i for i in self.__settings
                if needle in i.get(field).casefold())

    def ref_of(self, setting: PHPIniSetting) -> SettingRef:
        """Build the reference the service needs to delete `setting`."""
        ordinal = 0
        for i in self.__settings:
            if i is setting:
                return SettingRef(*setting.record, ordinal)
            if i.record == setting.record:
                ordinal += 1
        raise NotFound(f'{setting!r} is not in the current php.ini snapshot')

    def add_or_update(self, batch: Iterable[PHPIniSetting]) -> None:
        """Apply an upsert batch locally, in order.

        An existing name keeps its position and section, only the value
        changes; unknown names are appended with their own section.
        """
        for new in batch:
            for idx, old in enumerate(self.__settings):
                if old.name == new.name:
                    self.__settings[idx] = old.with_value(new.value)
                    break
            else:
                self.__settings.append(
                    PHPIniSetting(new.name, new.value, new.section))

    def remove(self, setting: PHPIniSetting) -> None:
        del self.__settings[self.index_of(setting)]
