# -*- encoding: utf-8 -*-
# @File   : cli.py
# @Time   : 2026/09/26 13:40:21
# @Author : Kariko Lin

"""`python -m pyphpini path/to/php.ini <command>`"""

import argparse
import sys
from typing import Sequence

from .config import ManagerConfig, load_config
from .errors import InvalidSetting, NotFound, PHPIniError, user_message
from .ini.model import PHPIniSetting, SearchField
from .runtime_limits import (
    RUNTIME_LIMIT_NAMES,
    RUNTIME_LIMITS_SECTION,
    RuntimeLimitsEditor
)
from .service import LocalPHPIniService
from .session import PHPIniSession
from .views import SettingsView


def _row(setting: PHPIniSetting) -> str:
    return f'{setting.name} = {setting.value}' + (
        f'  [{setting.section}]' if setting.section else '')


def cmd_list(session: PHPIniSession, args) -> None:
    view = SettingsView(session)
    if args.field is not None:
        view.search(SearchField(args.field.capitalize()), args.text)
    if not args.group:
        for i in view.items():
            print(_row(i))
        return
    for i in view.ungrouped():
        print(_row(i))
    for section, items in view.groups().items():
        print(f'\n[{section}]')
        for i in items:
            print(f'{i.name} = {i.value}')


def cmd_get(session: PHPIniSession, args) -> None:
    if (setting := session.find_by_name(args.name)) is None:
        raise NotFound(f'{args.name} is not set')
    print(setting.value)


def cmd_set(session: PHPIniSession, args) -> None:
    session.add_setting(args.name, args.value, args.section)


def cmd_remove(session: PHPIniSession, args) -> None:
    candidates = session.file.find_all(args.name)
    if args.section is not None:
        candidates = [i for i in candidates if i.section == args.section]
    if not candidates:
        raise NotFound(f'{args.name} is not set')
    if len(candidates) > 1:
        raise InvalidSetting(
            f'{args.name} is set {len(candidates)} times, '
            'pick one with --section')
    session.remove(candidates[0])


def cmd_limits(session: PHPIniSession, args) -> None:
    editor = RuntimeLimitsEditor(session)
    editor.load()
    for pair in args.set or ():
        name, sep, value = pair.partition('=')
        if not sep or name not in RUNTIME_LIMIT_NAMES:
            raise InvalidSetting(
                f'expected NAME=VALUE with NAME one of '
                f'{", ".join(RUNTIME_LIMIT_NAMES)}; got {pair!r}')
        editor.values[RUNTIME_LIMIT_NAMES.index(name)] = value
    if editor.is_dirty:
        editor.save()
    for name, value in zip(RUNTIME_LIMIT_NAMES, editor.loaded):
        print(f'{name} = {"(not set)" if value is None else value}')


def cmd_path(session: PHPIniSession, args) -> None:
    if (path := session.physical_path()) is None:
        raise NotFound('no php.ini path')
    print(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pyphpini', description='Inspect and edit php.ini settings.')
    parser.add_argument('inifile')
    parser.add_argument('-c', '--config', help='YAML config file')
    parser.add_argument('--encoding')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('list', help='list settings')
    p.add_argument('--field', choices=[i.value.lower() for i in SearchField])
    p.add_argument('--text')
    p.add_argument('--group', action='store_true', help='group by section')
    p.set_defaults(func=cmd_list)

    p = sub.add_parser('get', help='print the effective value')
    p.add_argument('name')
    p.set_defaults(func=cmd_get)

    p = sub.add_parser('set', help='add or update a setting')
    p.add_argument('name')
    p.add_argument('value')
    p.add_argument('--section', default=RUNTIME_LIMITS_SECTION)
    p.set_defaults(func=cmd_set)

    p = sub.add_parser('remove', help='remove one setting')
    p.add_argument('name')
    p.add_argument('--section')
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser('limits', help='show or change runtime limits')
    p.add_argument('--set', action='append', metavar='NAME=VALUE')
    p.set_defaults(func=cmd_limits)

    p = sub.add_parser('path', help='print the php.ini path')
    p.set_defaults(func=cmd_path)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'list' and (args.field is None) != (args.text is None):
        parser.error('list: --field and --text go together')
    config = load_config(args.config) if args.config else ManagerConfig()
    config.apply_logging()
    service = LocalPHPIniService(args.inifile, args.encoding or config.encoding)
    with PHPIniSession(service, read_only=config.read_only,
                       messages=config.messages) as session:
        try:
            if args.command != 'path':
                session.refresh()
            args.func(session, args)
        except PHPIniError as e:
            print(user_message(e, session.messages), file=sys.stderr)
            return 1
    return 0
