# -*- encoding: utf-8 -*-
# @File   : test_model.py
# @Time   : 2026/09/27 10:30:02
# @Author : Kariko Lin

import pytest

from pyphpini import (
    InvalidConfigData,
    NotFound,
    PHPIniFile,
    PHPIniSetting,
    SearchField,
    SettingRecord
)

RAW = [
    ('extension_dir', '"ext"', 'PHP'),
    ('x', '1', 's1'),
    ('display_errors', 'On', ''),
    ('x', '2', 's2'),
    ('session.save_path', '/tmp', 'Session'),
    ('engine', 'On', 'PHP'),
]


def test_round_trip_keeps_order():
    file = PHPIniFile.from_data(RAW)
    assert len(file) == len(RAW)
    assert file.get_data() == RAW
    assert all(isinstance(i, SettingRecord) for i in file.get_data())


def test_accepts_mappings_and_missing_section():
    file = PHPIniFile.from_data([
        {'name': 'a', 'value': '1', 'section': 'S'},
        {'name': 'b', 'value': '2'},
        {'name': 'c', 'value': '3', 'section': None},
        ('d', '4'),
    ])
    assert file.get_data() == [
        ('a', '1', 'S'), ('b', '2', ''), ('c', '3', ''), ('d', '4', '')]


@pytest.mark.parametrize('raw', [
    None,
    'name=value',
    {'name': 'a', 'value': '1'},
    [('a', '1', 'S'), {'value': 'no name'}],
    [('a', '1', 'S'), {'name': 'no value'}],
    [('', '1', 'S')],
    [('   ', '1', 'S')],
    [(42, '1', 'S')],
    [('a', 1, 'S')],
    [('a', '1', 'S', 'extra')],
    [object()],
])
def test_malformed_data_fails_whole_load(raw):
    file = PHPIniFile.from_data([('keep', 'me', '')])
    with pytest.raises(InvalidConfigData):
        file.set_data(raw)
    assert file.get_data() == [('keep', 'me', '')]


def test_sections_first_seen_and_non_empty():
    file = PHPIniFile.from_data(RAW + [('y', '0', 'S1')])
    # case-sensitive: 's1' and 'S1' are different sections.
    assert file.sections == ['PHP', 's1', 's2', 'Session', 'S1']


def test_get_setting_first_duplicate_wins():
    file = PHPIniFile.from_data(RAW)
    found = file.get_setting('x')
    assert found is file[1]
    assert found.value == '1'
    assert file.get_setting('X') is None
    assert file.get_setting('nope') is None


@pytest.mark.parametrize('order', [
    [('x', 'a', 's'), ('x', 'b', 's'), ('x', 'c', 's')],
    [('x', 'a', ''), ('y', '-', ''), ('x', 'b', 'S')],
    [('x', 'same', 's'), ('x', 'same', 's')],
])
def test_duplicates_resolve_to_earliest(order):
    file = PHPIniFile.from_data(order)
    assert file.get_setting('x') is file.find_all('x')[0]
    assert file.get_setting('x').value == order[0][1]


def test_filter_is_case_insensitive_on_one_field():
    file = PHPIniFile.from_data([('a', 'On', 's1'), ('b', 'off', 's2')])
    assert [i.name for i in file.filter(SearchField.VALUE, 'on')] == ['a']
    assert [i.name for i in file.filter('Section', 'S')] == ['a', 'b']
    assert [i.name for i in file.filter(SearchField.NAME, 'B')] == ['b']
    assert list(file.filter(SearchField.NAME, 'zzz')) == []


def test_filter_is_lazy():
    file = PHPIniFile.from_data(RAW)
    it = file.filter(SearchField.NAME, 'x')
    assert next(it).name == 'extension_dir'
    assert [i.value for i in it] == ['1', '2']


def test_settings_compare_by_identity():
    a = PHPIniSetting('x', '1', 's')
    b = PHPIniSetting('x', '1', 's')
    assert a != b
    assert a.record == b.record


def test_ref_of_counts_identical_triples():
    file = PHPIniFile.from_data([
        ('x', '1', 's'), ('y', '0', ''), ('x', '1', 's'), ('x', '2', 's')])
    assert file.ref_of(file[0]).ordinal == 0
    assert file.ref_of(file[2]).ordinal == 1
    assert file.ref_of(file[3]).ordinal == 0
    with pytest.raises(NotFound):
        file.ref_of(PHPIniSetting('x', '1', 's'))


def test_add_or_update_in_place_and_append():
    file = PHPIniFile.from_data(RAW)
    file.add_or_update([
        PHPIniSetting('engine', 'Off', 'elsewhere'),
        PHPIniSetting('new_one', 'v', 'New'),
    ])
    assert file[5].record == ('engine', 'Off', 'PHP')
    assert file[-1].record == ('new_one', 'v', 'New')
    assert len(file) == len(RAW) + 1


def test_add_or_update_updates_first_duplicate_only():
    file = PHPIniFile.from_data(RAW)
    file.add_or_update([PHPIniSetting('x', '9', 'ignored')])
    assert [i.record for i in file.find_all('x')] == [
        ('x', '9', 's1'), ('x', '2', 's2')]


def test_add_or_update_is_idempotent():
    batch = [PHPIniSetting('x', '5', ''), PHPIniSetting('fresh', '1', 'F')]
    once = PHPIniFile.from_data(RAW)
    once.add_or_update(batch)
    twice = PHPIniFile.from_data(RAW)
    twice.add_or_update(batch)
    twice.add_or_update(batch)
    assert once.get_data() == twice.get_data()


def test_remove_by_identity():
    file = PHPIniFile.from_data([('x', '1', 's1'), ('x', '2', 's2')])
    second = file[1]
    file.remove(second)
    assert file.get_data() == [('x', '1', 's1')]
    with pytest.raises(NotFound):
        file.remove(second)


def test_copy_is_independent():
    file = PHPIniFile.from_data(RAW)
    clone = file.copy()
    clone.remove(clone[0])
    assert len(file) == len(RAW)
    assert file[1] is clone[0]
