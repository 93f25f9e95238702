# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/09/21 21:03:11
# @Author : Kariko Lin

from collections.abc import Mapping


class PHPIniError(Exception):
    """Base of everything this package raises on purpose."""
    pass


class InvalidConfigData(PHPIniError):
    """Raw settings from the service are malformed. Nothing was loaded."""
    pass


class InvalidSetting(PHPIniError):
    """A caller-supplied setting failed validation before any remote call."""
    pass


class NotFound(PHPIniError):
    """The setting (or the whole snapshot) is not there anymore."""
    pass


class ReadOnlyError(PHPIniError):
    pass


class RemoteOperationFailed(PHPIniError):
    def __init__(self, cause: BaseException, operation: str = '') -> None:
        super().__init__(f'{operation or "remote call"} failed: {cause}')
        self.cause = cause
        self.operation = operation


# key into the message table for each error type.
_MESSAGE_KEYS: dict[type[PHPIniError], str] = {
    InvalidConfigData: 'invalid_config_data',
    InvalidSetting: 'invalid_setting',
    NotFound: 'not_found',
    ReadOnlyError: 'read_only',
    RemoteOperationFailed: 'remote_failure',
}


def user_message(exc: BaseException, messages: Mapping[str, str]) -> str:
    """Render one line for the user out of `messages`.

    Templates may use `{detail}`; `remote_failure` also gets `{cause}`.
    Errors not raised by this package fall back to `unexpected_error`.
    """
    key = 'unexpected_error'
    for cls in type(exc).__mro__:
        if cls in _MESSAGE_KEYS:
            key = _MESSAGE_KEYS[cls]
            break
    template = messages.get(key, '{detail}')
    cause = exc.cause if isinstance(exc, RemoteOperationFailed) else exc
    return template.format(detail=exc, cause=cause)
