# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/09/21 21:16:53
# @Author : Kariko Lin

from .model import (
    PHPIniFile,
    PHPIniSetting,
    SearchField,
    SettingRecord,
    SettingRef
)
from .document import IniLine, LineKind, PHPIniDocument
from .parser import PHPIniParser
