# -*- encoding: utf-8 -*-
# @File   : config.py
# @Time   : 2026/09/23 16:02:18
# @Author : Kariko Lin

"""Runtime options and the user-facing message table.

Everything is passed around explicitly, there is no global state.
A YAML file may override any of it:

    ```yaml
    encoding: cp1252
    log_level: DEBUG
    messages:
      read_only: "Ask your server admin."
    ```
"""

import logging
from dataclasses import dataclass, field
from os import PathLike

import yaml

DEFAULT_MESSAGES: dict[str, str] = {
    'getting_settings': 'Retrieving PHP settings...',
    'delete_confirmation':
        'Are you sure you want to remove the PHP setting "{name}"?',
    'ini_file_does_not_exist': 'The php.ini file "{path}" does not exist.',
    'invalid_config_data': 'The PHP settings could not be read: {detail}',
    'invalid_setting': 'The PHP setting is not valid: {detail}',
    'not_found':
        'The PHP setting no longer exists. Refresh and try again. ({detail})',
    'read_only': 'PHP settings are read-only for this connection.',
    'remote_failure': 'The server could not complete the request: {cause}',
    'unexpected_error': 'Unexpected error: {detail}',
}


@dataclass(kw_only=True)
class ManagerConfig:
    # `None` lets the parser try utf-8 first and then guess with chardet.
    encoding: str | None = None
    log_level: str = 'INFO'
    read_only: bool = False
    messages: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_MESSAGES))

    def apply_logging(self) -> None:
        logging.getLogger().setLevel(self.log_level.upper())


def load_config(path: str | PathLike[str]) -> ManagerConfig:
    """Read a YAML config. Missing keys keep their defaults."""
    with open(path, 'r', encoding='utf-8') as fp:
        src = yaml.safe_load(fp) or {}
    if not isinstance(src, dict):
        raise ValueError(f'{path}: top level should be a mapping')

    ret = ManagerConfig()
    if 'encoding' in src:
        ret.encoding = src['encoding']
    if 'log_level' in src:
        ret.log_level = str(src['log_level'])
    if 'read_only' in src:
        ret.read_only = bool(src['read_only'])
    for k, v in (src.get('messages') or {}).items():
        ret.messages[str(k)] = str(v)
    unknown = set(src) - {'encoding', 'log_level', 'read_only', 'messages'}
    if unknown:
        logging.warning(f'{path}: ignoring unknown keys {sorted(unknown)}')
    return ret
