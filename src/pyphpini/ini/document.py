# -*- encoding: utf-8 -*-
# @File   : document.py
# @Time   : 2026/09/22 00:41:27
# @Author : Kariko Lin

"""Line-preserving `php.ini` text.

Unlike the game INIs, a `php.ini` is mostly comments,
and admins get upset when a tool eats them.
So the document keeps *every* line and only re-renders
the ones that actually changed:

    ```ini
    ; comment, kept as-is
    [PHP]
    memory_limit = 128M  ; trailing comment, kept on update
    ;extension=gd         ; commented-out directive, re-enabled on demand
    ```
"""

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from re import compile as regex
from typing import Iterable, Iterator

from ..errors import InvalidSetting, NotFound
from .model import SettingRecord, SettingRef

# roughly what php accepts as a directive name,
# also used to tell `;extension=gd` from prose comments.
_DIRECTIVE_NAME = regex(r'^[A-Za-z0-9_.\-\[\]]+$')


class LineKind(IntEnum):
    BLANK = 0
    COMMENT = 1
    SECTION = 2
    DIRECTIVE = 3


@dataclass(frozen=True)
class IniLine:
    kind: LineKind
    raw: str
    section: str = ''
    name: str = ''
    value: str = ''
    # directive written as `;name = value`
    commented: bool = False
    # `; ...` after the value
    trailing: str = ''

    @property
    def is_active(self) -> bool:
        return self.kind == LineKind.DIRECTIVE and not self.commented

    @property
    def record(self) -> SettingRecord:
        return SettingRecord(self.name, self.value, self.section)


def split_value(text: str) -> tuple[str, str]:
    """Cut `value ; comment` into its parts. `;` inside quotes stays."""
    quoted = False
    for idx, ch in enumerate(text):
        if ch == '"':
            quoted = not quoted
        elif ch == ';' and not quoted:
            return text[:idx].strip(), text[idx:].strip()
    return text.strip(), ''


def parse_line(raw: str, section: str) -> IniLine:
    text = raw.strip()
    if not text:
        return IniLine(LineKind.BLANK, raw, section)
    if text[0] == '[':
        end = text.find(']')
        name = text[1:end if end > 0 else None].strip()
        return IniLine(LineKind.SECTION, raw, name, name)

    commented = False
    body = text
    if text[0] in ';#':
        commented = True
        body = text.lstrip(';#').lstrip()
    if '=' in body:
        key, val = body.split('=', 1)
        key = key.strip()
        if _DIRECTIVE_NAME.match(key):
            value, trailing = split_value(val)
            return IniLine(LineKind.DIRECTIVE, raw, section,
                           key, value, commented, trailing)
    if commented:
        return IniLine(LineKind.COMMENT, raw, section)
    # neither comment nor `key = value`: php would complain,
    # we just carry it along untouched.
    logging.debug(f'php.ini: unrecognised line kept as-is: {raw!r}')
    return IniLine(LineKind.COMMENT, raw, section)


def check_directive(name: str, value: str, section: str = '') -> None:
    """Raise `InvalidSetting` unless the directive reads back as written."""
    if not _DIRECTIVE_NAME.fullmatch(name):
        raise InvalidSetting(f'{name!r} is not a valid directive name')
    if '\r' in value or '\n' in value:
        raise InvalidSetting(f'value of {name} must be a single line')
    if split_value(value) != (value, ''):
        raise InvalidSetting(
            f'value of {name} would not read back as {value!r}, '
            'quote it if it contains ";"')
    if section != section.strip() or any(c in section for c in '[]\r\n'):
        raise InvalidSetting(f'{section!r} is not a valid section name')


def render_directive(line: IniLine) -> str:
    ret = f'{line.name} = {line.value}'.rstrip()
    if line.trailing:
        ret += f' {line.trailing}'
    return ret


class PHPIniDocument:
    """All lines of one `php.ini`, in order."""

    def __init__(self, lines: Iterable[IniLine] = ()) -> None:
        self.__lines: list[IniLine] = list(lines)
        self.final_newline = True

    @classmethod
    def from_lines(cls, raw_lines: Iterable[str]) -> 'PHPIniDocument':
        ret = cls()
        section = ''
        raw = ''
        for raw in raw_lines:
            line = parse_line(raw.rstrip('\r\n'), section)
            if line.kind == LineKind.SECTION:
                section = line.section
            ret.__lines.append(line)
        ret.final_newline = raw.endswith('\n') or not ret.__lines
        return ret

    @property
    def lines(self) -> list[IniLine]:
        return list(self.__lines)

    def __len__(self) -> int:
        return len(self.__lines)

    def __iter__(self) -> Iterator[IniLine]:
        return iter(self.__lines)

    def to_text(self, newline: str = '\n') -> str:
        if not self.__lines:
            return ''
        ret = newline.join(i.raw for i in self.__lines)
        return ret + newline if self.final_newline else ret

    def settings(self) -> list[SettingRecord]:
        """Active directives only, file order."""
        return [i.record for i in self.__lines if i.is_active]

    def duplicates(self) -> dict[str, int]:
        seen: dict[str, int] = {}
        for i in self.__lines:
            if i.is_active:
                seen[i.name] = seen.get(i.name, 0) + 1
        return {k: v for k, v in seen.items() if v > 1}

    def __find(self, name: str, *, commented: bool = False) -> int:
        for idx, i in enumerate(self.__lines):
            if i.kind == LineKind.DIRECTIVE and i.name == name \
                    and i.commented == commented:
                return idx
        return -1

    def __section_end(self, section: str) -> int:
        """Index right after the last directive that belongs to `section`,
        -1 if the section is not there.

        The header-less area always "exists": it ends at the first
        section header (or at EOF).
        """
        last = -1
        for idx, i in enumerate(self.__lines):
            if i.kind == LineKind.SECTION:
                if section == '':
                    return last if last >= 0 else idx
                if i.section == section:
                    last = idx + 1
            elif i.kind == LineKind.DIRECTIVE and i.section == section:
                last = idx + 1
        if section == '' and last < 0:
            return len(self.__lines)
        return last

    def set_value(self, record: SettingRecord) -> None:
        """Upsert one directive.

        - active directive: value replaced in place;
        - commented-out directive: re-enabled in place;
        - otherwise: inserted at the end of its section,
          or under a new section header at the end of file.
        """
        if (idx := self.__find(record.name)) >= 0:
            old = self.__lines[idx]
            if old.value == record.value:
                return
            new = replace(old, value=record.value)
            self.__lines[idx] = replace(new, raw=render_directive(new))
            return

        if (idx := self.__find(record.name, commented=True)) >= 0:
            old = self.__lines[idx]
            new = replace(old, value=record.value, commented=False)
            self.__lines[idx] = replace(new, raw=render_directive(new))
            logging.info(f'php.ini: re-enabled commented-out {record.name}')
            return

        new = IniLine(LineKind.DIRECTIVE, '', record.section,
                      record.name, record.value)
        new = replace(new, raw=render_directive(new))
        if (idx := self.__section_end(record.section)) >= 0:
            self.__lines.insert(idx, new)
            return
        if self.__lines and self.__lines[-1].kind != LineKind.BLANK:
            self.__lines.append(IniLine(LineKind.BLANK, '', record.section))
        self.__lines.append(IniLine(
            LineKind.SECTION, f'[{record.section}]',
            record.section, record.section))
        self.__lines.append(new)
        self.final_newline = True

    def add_or_update(self, batch: Iterable[SettingRecord]) -> None:
        for i in batch:
            self.set_value(i)

    def remove(self, ref: SettingRef) -> None:
        ordinal = ref.ordinal
        for idx, i in enumerate(self.__lines):
            if not i.is_active or i.record != ref.record:
                continue
            if ordinal == 0:
                del self.__lines[idx]
                return
            ordinal -= 1
        raise NotFound(
            f'no directive {ref.name} = {ref.value} '
            f'(occurrence #{ref.ordinal}) in [{ref.section}]')
