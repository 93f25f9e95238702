# -*- encoding: utf-8 -*-
# @File   : views.py
# @Time   : 2026/09/24 22:35:50
# @Author : Kariko Lin

"""What the "all settings" page shows: search and grouping state
on top of a session. Nothing here is stored besides the filter,
so every call reflects the session's current snapshot."""

from dataclasses import dataclass
from enum import Enum

from .ini.model import PHPIniSetting, SearchField
from .session import PHPIniSession


class Grouping(str, Enum):
    SECTION = 'Section'


@dataclass(frozen=True)
class Filtered:
    field: SearchField
    text: str


# the other state of the search machine.
Unfiltered = None

SearchState = Filtered | None


class SettingsView:
    def __init__(self, session: PHPIniSession) -> None:
        self._session = session
        self._state: SearchState = Unfiltered

    @property
    def state(self) -> SearchState:
        return self._state

    def search(self, field: SearchField | str, text: str) -> None:
        """Replace the current filter (filters never stack)."""
        self._state = Filtered(SearchField(field), text)

    def show_all(self) -> None:
        self._state = Unfiltered

    def items(self) -> list[PHPIniSetting]:
        if self._state is Unfiltered:
            return self._session.settings()
        return list(self._session.filter(self._state.field, self._state.text))

    def groups(
        self, grouping: Grouping = Grouping.SECTION
    ) -> dict[str, list[PHPIniSetting]]:
        """Visible settings by section, first seen first.
        Settings without a section are left out, see `self.ungrouped()`."""
        Grouping(grouping)
        ret: dict[str, list[PHPIniSetting]] = {}
        for i in self.items():
            if i.section:
                ret.setdefault(i.section, []).append(i)
        return ret

    def ungrouped(self) -> list[PHPIniSetting]:
        return [i for i in self.items() if not i.section]
