# -*- encoding: utf-8 -*-
# @File   : session.py
# @Time   : 2026/09/23 19:11:45
# @Author : Kariko Lin

"""Lookup/update engine over one remotely owned `php.ini`.

Rules of the game:
- reads go against the current snapshot, no locking;
- mutations are serialized by `self._write_lock`;
- the snapshot is only swapped *after* the service acknowledged,
  so a failed call leaves everything as it was;
- every fetch carries the generation it was started in,
  results from an older generation are dropped.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from multiprocessing.pool import AsyncResult, ThreadPool
from os.path import splitext
from typing import Any

from .abstract import RemoteConfigService
from .config import DEFAULT_MESSAGES
from .errors import (
    InvalidConfigData,
    InvalidSetting,
    NotFound,
    ReadOnlyError,
    RemoteOperationFailed
)
from .ini.document import check_directive
from .ini.model import PHPIniFile, PHPIniSetting, SearchField


class PHPIniSession:
    def __init__(
        self, service: RemoteConfigService, *,
        read_only: bool = False,
        messages: Mapping[str, str] | None = None
    ) -> None:
        self._service = service
        self._read_only = read_only
        self.messages = dict(DEFAULT_MESSAGES)
        if messages:
            self.messages.update(messages)
        self._file: PHPIniFile | None = None
        self._generation = 0
        self._gen_lock = threading.Lock()
        self._write_lock = threading.RLock()
        self._pool: ThreadPool | None = None

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def file(self) -> PHPIniFile | None:
        """Last known good snapshot, `None` before the first fetch."""
        return self._file

    @property
    def generation(self) -> int:
        return self._generation

    # --- fetching ---

    def __next_generation(self) -> int:
        with self._gen_lock:
            self._generation += 1
            return self._generation

    def __call(self, operation: str, func: Callable[..., Any], *args) -> Any:
        try:
            return func(*args)
        except Exception as e:
            logging.warning(f'{operation} failed: {e}')
            raise RemoteOperationFailed(e, operation) from e

    def _fetch(self, generation: int) -> tuple[int, PHPIniFile]:
        logging.info(self.messages['getting_settings'])
        raw = self.__call('fetch_settings', self._service.fetch_settings)
        return generation, PHPIniFile.from_data(raw)

    def _apply_fetched(self, generation: int, file: PHPIniFile) -> bool:
        with self._gen_lock:
            if generation != self._generation:
                logging.debug(
                    f'dropping stale php.ini fetch (gen {generation}, '
                    f'now {self._generation})')
                return False
            self._file = file
            return True

    def refresh(self) -> PHPIniFile:
        """Fetch synchronously and replace the snapshot.

        Supersedes every fetch still in flight.
        """
        generation, file = self._fetch(self.__next_generation())
        self._apply_fetched(generation, file)
        return file

    def refresh_async(
        self,
        callback: Callable[[PHPIniFile], Any] | None = None,
        error_callback: Callable[[BaseException], Any] | None = None
    ) -> AsyncResult:
        """Fetch on the worker thread.

        `callback` only fires if the result was applied, i.e. nothing
        newer (`refresh()`, `discard()`, another `refresh_async()`)
        happened in between.
        """
        if self._pool is None:
            self._pool = ThreadPool(1)

        def _done(result: tuple[int, PHPIniFile]) -> None:
            if self._apply_fetched(*result) and callback is not None:
                callback(result[1])

        return self._pool.apply_async(
            self._fetch, (self.__next_generation(),),
            callback=_done, error_callback=error_callback)

    def discard(self) -> None:
        """Forget the snapshot. Late fetch results get ignored."""
        with self._gen_lock:
            self._generation += 1
            self._file = None

    def close(self) -> None:
        self.discard()
        if self._pool is not None:
            self._pool.close()
            self._pool.join()
            self._pool = None

    def __enter__(self) -> 'PHPIniSession':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- reading ---

    def _require_file(self) -> PHPIniFile:
        if (file := self._file) is None:
            raise NotFound('no php.ini snapshot loaded, refresh first')
        return file

    def settings(self) -> list[PHPIniSetting]:
        return self._require_file().settings

    def find_by_name(self, name: str) -> PHPIniSetting | None:
        return self._require_file().get_setting(name)

    def filter(self, field: SearchField | str,
               text: str) -> Iterator[PHPIniSetting]:
        return self._require_file().filter(field, text)

    def known_sections(self) -> list[str]:
        """Sections offered when adding a setting, sorted."""
        return sorted(self._require_file().sections)

    def physical_path(self) -> str | None:
        """Path of the `php.ini` on the service side,
        `None` if it does not look like one."""
        path = self.__call('get_physical_path',
                           self._service.get_physical_path)
        if not path or splitext(path)[1].lower() != '.ini':
            logging.info(
                self.messages['ini_file_does_not_exist'].format(path=path))
            return None
        return path

    # --- mutating ---

    def __swap(self, base: PHPIniFile, updated: PHPIniFile) -> None:
        with self._gen_lock:
            # a refresh (or discard) got in while we were talking to the
            # service; what it brought is newer than `updated`.
            if self._file is not base:
                logging.debug('php.ini snapshot replaced during mutation')
                return
            self._file = updated

    def __check_writable(self) -> None:
        if self._read_only:
            raise ReadOnlyError('php.ini is read-only for this connection')

    @staticmethod
    def _validate(settings: Iterable[Any]) -> list[PHPIniSetting]:
        ret = []
        for i in settings:
            if not isinstance(i, PHPIniSetting):
                try:
                    i = PHPIniFile.from_data([i])[0]
                except InvalidConfigData as e:
                    raise InvalidSetting(str(e)) from e
            if not isinstance(i.name, str) or not i.name.strip():
                raise InvalidSetting('setting name must not be empty')
            if not isinstance(i.value, str):
                raise InvalidSetting(
                    f'value of {i.name} must be a string, got {i.value!r}')
            if not isinstance(i.section, str):
                raise InvalidSetting(
                    f'section of {i.name} must be a string, '
                    f'got {i.section!r}')
            check_directive(i.name, i.value, i.section)
            ret.append(i)
        return ret

    def add_or_update_batch(
        self, settings: Iterable[PHPIniSetting]
    ) -> PHPIniFile:
        """Upsert a batch: all of it, or none of it.

        Names already present keep their place and section;
        new names are appended with the section they were given.
        """
        self.__check_writable()
        batch = self._validate(settings)
        if not batch:
            return self._require_file()
        with self._write_lock:
            base = self._require_file()
            updated = base.copy()
            updated.add_or_update(batch)
            self.__call('push_settings', self._service.push_settings,
                        [i.record for i in batch])
            self.__swap(base, updated)
        logging.debug(f'php.ini: upserted {len(batch)} setting(s)')
        return updated

    def add_setting(self, name: str, value: str,
                    section: str = '') -> PHPIniFile:
        return self.add_or_update_batch([PHPIniSetting(name, value, section)])

    def edit(self, setting: PHPIniSetting, value: str) -> PHPIniFile:
        """Change the value of one specific setting.

        Only the effective (first) occurrence of a name can be edited,
        since the service upserts by name.
        """
        self.__check_writable()
        # reentrant, the upsert below takes it again.
        with self._write_lock:
            file = self._require_file()
            file.index_of(setting)
            if file.get_setting(setting.name) is not setting:
                raise InvalidSetting(
                    f'{setting.name} in [{setting.section}] is shadowed by an '
                    'earlier directive of the same name; '
                    'remove one of them first')
            return self.add_or_update_batch([setting.with_value(value)])

    def remove(self, setting: PHPIniSetting) -> PHPIniFile:
        """Remove exactly this instance, never "everything named so"."""
        self.__check_writable()
        with self._write_lock:
            file = self._require_file()
            ref = file.ref_of(setting)
            base, updated = file, file.copy()
            updated.remove(setting)
            self.__call('remove_setting', self._service.remove_setting, ref)
            self.__swap(base, updated)
        logging.debug(f'php.ini: removed {setting!r}')
        return updated
