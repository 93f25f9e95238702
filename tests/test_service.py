# -*- encoding: utf-8 -*-
# @File   : test_service.py
# @Time   : 2026/09/27 17:40:30
# @Author : Kariko Lin

import pytest

from pyphpini import (
    InvalidSetting,
    LocalPHPIniService,
    NotFound,
    PHPIniSession,
    RemoteOperationFailed,
    RuntimeLimitsEditor,
    SettingRef
)

PHP_INI = """\
; Production php.ini
[PHP]
max_execution_time = 30
memory_limit = 128M  ; per script
;extension=curl
display_errors = Off

[Date]
date.timezone = UTC
"""


@pytest.fixture
def inifile(tmp_path):
    path = tmp_path / 'php.ini'
    path.write_text(PHP_INI, encoding='utf-8')
    return path


def test_fetch(inifile):
    service = LocalPHPIniService(str(inifile))
    assert service.fetch_settings() == [
        ('max_execution_time', '30', 'PHP'),
        ('memory_limit', '128M', 'PHP'),
        ('display_errors', 'Off', 'PHP'),
        ('date.timezone', 'UTC', 'Date'),
    ]
    assert service.get_physical_path() == str(inifile)


def test_push_edits_file_in_place(inifile):
    service = LocalPHPIniService(str(inifile))
    service.push_settings([
        ('memory_limit', '256M', 'PHP'),
        ('extension', 'curl', 'PHP'),
        ('date.default_latitude', '0', 'Date'),
    ])
    assert inifile.read_text(encoding='utf-8') == """\
; Production php.ini
[PHP]
max_execution_time = 30
memory_limit = 256M ; per script
extension = curl
display_errors = Off

[Date]
date.timezone = UTC
date.default_latitude = 0
"""


def test_push_twice_is_idempotent(inifile):
    service = LocalPHPIniService(str(inifile))
    batch = [('upload_max_filesize', '64M', 'PHP'), ('a', 'b', 'New')]
    service.push_settings(batch)
    once = inifile.read_text(encoding='utf-8')
    service.push_settings(batch)
    assert inifile.read_text(encoding='utf-8') == once


def test_remove_missing_raises(inifile):
    service = LocalPHPIniService(str(inifile))
    with pytest.raises(NotFound):
        service.remove_setting(SettingRef('nope', '1', 'PHP', 0))
    assert inifile.read_text(encoding='utf-8') == PHP_INI


def test_session_over_file(inifile):
    with PHPIniSession(LocalPHPIniService(str(inifile))) as session:
        session.refresh()
        session.remove(session.find_by_name('display_errors'))
        session.edit(session.find_by_name('date.timezone'), 'Asia/Tokyo')

        editor = RuntimeLimitsEditor(session)
        editor.load()
        editor.values.max_file_uploads = '5'
        editor.save()

        # the local snapshot and the file agree.
        # new names sit at the end locally, inside [PHP] in the file.
        local = sorted(session.file.get_data())
        assert local == sorted(session.refresh().get_data())

    text = inifile.read_text(encoding='utf-8')
    assert 'display_errors' not in text
    assert 'date.timezone = Asia/Tokyo' in text
    assert 'max_file_uploads = 5' in text
    assert text.startswith('; Production php.ini\n[PHP]\n')


def test_missing_file_is_a_remote_failure(tmp_path):
    service = LocalPHPIniService(str(tmp_path / 'missing.ini'))
    with PHPIniSession(service) as session:
        with pytest.raises(RemoteOperationFailed) as exc:
            session.refresh()
        assert isinstance(exc.value.cause, FileNotFoundError)


@pytest.mark.parametrize('record', [
    ('foo', 'a;b', 'PHP'),
    ('my setting', '1', 'PHP'),
    ('foo', '1\nallow_url_include = On', 'PHP'),
])
def test_push_rejects_what_would_not_read_back(inifile, record):
    service = LocalPHPIniService(str(inifile))
    with pytest.raises(InvalidSetting):
        service.push_settings([record])
    assert inifile.read_text(encoding='utf-8') == PHP_INI


def test_quoted_semicolon_survives_repeated_pushes(inifile):
    service = LocalPHPIniService(str(inifile))
    batch = [('error_log', '"C:\\logs\\php;errors.log"', 'PHP')]
    service.push_settings(batch)
    once = inifile.read_text(encoding='utf-8')
    service.push_settings(batch)
    assert inifile.read_text(encoding='utf-8') == once
    assert ('error_log', '"C:\\logs\\php;errors.log"', 'PHP') \
        in service.fetch_settings()


def test_bom_file_keeps_its_sections(tmp_path):
    path = tmp_path / 'php.ini'
    path.write_bytes(b'\xef\xbb\xbf[PHP]\nmemory_limit = 128M\n')
    service = LocalPHPIniService(str(path))
    assert service.fetch_settings() == [('memory_limit', '128M', 'PHP')]
