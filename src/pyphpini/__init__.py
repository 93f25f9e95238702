# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/09/21 20:01:52
# @Author : Kariko Lin

import logging

from .abstract import RemoteConfigService
from .config import DEFAULT_MESSAGES, ManagerConfig, load_config
from .errors import (
    InvalidConfigData,
    InvalidSetting,
    NotFound,
    PHPIniError,
    ReadOnlyError,
    RemoteOperationFailed,
    user_message
)
from .ini import (
    PHPIniDocument,
    PHPIniFile,
    PHPIniParser,
    PHPIniSetting,
    SearchField,
    SettingRecord,
    SettingRef
)
from .runtime_limits import (
    RUNTIME_LIMIT_NAMES,
    RUNTIME_LIMITS_SECTION,
    RuntimeLimits,
    RuntimeLimitsEditor
)
from .service import LocalPHPIniService
from .session import PHPIniSession
from .views import Grouping, SettingsView

__all__ = [
    'RemoteConfigService', 'LocalPHPIniService',
    'DEFAULT_MESSAGES', 'ManagerConfig', 'load_config',
    'PHPIniError', 'InvalidConfigData', 'InvalidSetting', 'NotFound',
    'ReadOnlyError', 'RemoteOperationFailed', 'user_message',
    'PHPIniDocument', 'PHPIniFile', 'PHPIniParser', 'PHPIniSetting',
    'SearchField', 'SettingRecord', 'SettingRef',
    'RUNTIME_LIMIT_NAMES', 'RUNTIME_LIMITS_SECTION',
    'RuntimeLimits', 'RuntimeLimitsEditor',
    'PHPIniSession', 'Grouping', 'SettingsView'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
