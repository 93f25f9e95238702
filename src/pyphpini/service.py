# -*- encoding: utf-8 -*-
# @File   : service.py
# @Time   : 2026/09/22 14:30:02
# @Author : Kariko Lin

"""Server side of the call boundary, backed by a `php.ini` on disk."""

import logging
import threading
from collections.abc import Sequence
from typing import Any

from .abstract import RemoteConfigService
from .ini.document import check_directive
from .ini.model import PHPIniFile, SettingRecord, SettingRef
from .ini.parser import PHPIniParser


class LocalPHPIniService(RemoteConfigService):
    """Re-reads the file on every call, so edits made by hand
    between two calls are never lost."""

    def __init__(self, inipath: str, encoding: str | None = None) -> None:
        self._parser = PHPIniParser(inipath, encoding)
        self._path = inipath
        self.lock = threading.Lock()

    def fetch_settings(self) -> list[SettingRecord]:
        return self._parser.read().settings()

    def push_settings(self, batch: Sequence[Any]) -> None:
        # same checks the client session makes before calling us.
        records = PHPIniFile.from_data(batch).get_data()
        for i in records:
            check_directive(*i)
        with self.lock:
            doc = self._parser.read()
            doc.add_or_update(records)
            self._parser.write(doc)
        logging.info(
            f'{self._path}: updated {", ".join(i.name for i in records)}')

    def remove_setting(self, ref: SettingRef) -> None:
        ref = SettingRef(*ref)
        with self.lock:
            doc = self._parser.read()
            doc.remove(ref)
            self._parser.write(doc)
        logging.info(f'{self._path}: removed {ref.name} from [{ref.section}]')

    def get_physical_path(self) -> str:
        return self._path
