# -*- encoding: utf-8 -*-
# @File   : conftest.py
# @Time   : 2026/09/27 10:12:33
# @Author : Kariko Lin

import threading

import pytest

from pyphpini import PHPIniSession, RemoteConfigService, SettingRef


class TransportError(Exception):
    pass


class FakeService(RemoteConfigService):
    """In-memory stand-in for the server, upserting by name
    the same way `php.ini` on the other side would."""

    def __init__(self, records=()) -> None:
        self.records: list[tuple[str, str, str]] = [tuple(i) for i in records]
        self.path = 'C:\\PHP\\php.ini'
        self.fail = False
        self.pushed: list[list] = []
        self.removed: list[SettingRef] = []
        # set `gate` to hold fetches until the test releases them.
        self.gate: threading.Event | None = None
        self.fetch_started = threading.Event()

    def __check(self) -> None:
        if self.fail:
            raise TransportError('connection reset')

    def fetch_settings(self):
        self.fetch_started.set()
        if self.gate is not None:
            self.gate.wait(5)
        self.__check()
        return list(self.records)

    def push_settings(self, batch) -> None:
        self.__check()
        self.pushed.append(list(batch))
        for name, value, section in batch:
            for idx, rec in enumerate(self.records):
                if rec[0] == name:
                    self.records[idx] = (rec[0], value, rec[2])
                    break
            else:
                self.records.append((name, value, section))

    def remove_setting(self, ref) -> None:
        self.__check()
        self.removed.append(ref)
        ordinal = ref.ordinal
        for idx, rec in enumerate(self.records):
            if rec != tuple(ref.record):
                continue
            if ordinal == 0:
                del self.records[idx]
                return
            ordinal -= 1
        raise KeyError(ref)

    def get_physical_path(self) -> str:
        self.__check()
        return self.path


@pytest.fixture
def service() -> FakeService:
    return FakeService([
        ('max_execution_time', '30', 'PHP'),
        ('memory_limit', '128M', 'PHP'),
        ('display_errors', 'On', ''),
        ('date.timezone', 'UTC', 'Date'),
    ])


@pytest.fixture
def session(service):
    with PHPIniSession(service) as ret:
        ret.refresh()
        yield ret
