import json

import pytest

from shared import config as config_module
from shared.config import ElfSizeConfig
from shared.console import ElfSizeConsole
from shared.logger import ElfSizeLogger


def test_config_defaults_when_default_file_absent(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, '_DEFAULT_CONFIG_PATH', tmp_path / "absent.toml")

    config = ElfSizeConfig.load()

    assert config.elfsize.zero_on_error is False
    assert config.global_settings.log_level == 'WARNING'


def test_config_from_toml(tmp_path):
    path = tmp_path / "elfsize.toml"
    path.write_text(
        '[global]\n'
        'log_level = "DEBUG"\n'
        'log_json = true\n'
        'unknown_key = 1\n'
        '[elfsize]\n'
        'zero_on_error = true\n'
        'json_indent = 4\n'
    )

    config = ElfSizeConfig.load(path)

    assert config.global_settings.log_level == 'DEBUG'
    assert config.global_settings.log_json is True
    assert config.global_settings.log_file is None
    assert config.elfsize.zero_on_error is True
    assert config.elfsize.json_indent == 4
    assert config.to_dict()['elfsize']['json_indent'] == 4


def test_config_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ElfSizeConfig.load(tmp_path / "nope.toml")


def test_config_invalid_toml(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text('[elfsize\n')

    with pytest.raises(ValueError):
        ElfSizeConfig.load(path)


def test_logger_json_file(tmp_path):
    log_file = tmp_path / "logs" / "elfsize.jsonl"
    log = ElfSizeLogger('test', log_level='DEBUG', log_file=log_file, json_logs=True, console_output=False)

    try:
        with log.operation('compute_size'):
            log.debug('reading %s', 'header', offset=16)
        log.warning('outside')
    finally:
        for handler in log.underlying.handlers:
            handler.close()

    first, second = [json.loads(line) for line in log_file.read_text().splitlines()]

    assert first['message'] == 'reading header'
    assert first['level'] == 'DEBUG'
    assert first['logger'] == 'elfsize.test'
    assert first['component'] == 'test'
    assert first['operation'] == 'compute_size'
    assert first['extra'] == {'offset': 16}
    assert 'operation' not in second


def test_logger_level_filters(tmp_path):
    log_file = tmp_path / "elfsize.log"
    log = ElfSizeLogger('filtered', log_level='WARNING', log_file=log_file, console_output=False)

    try:
        log.debug('hidden')
        log.error('shown')
    finally:
        for handler in log.underlying.handlers:
            handler.close()

    text = log_file.read_text()
    assert 'hidden' not in text
    assert 'shown' in text


def test_console_table_and_messages():
    console = ElfSizeConsole(record=True)

    console.table('ELF Size', ['Field', 'Value'], [('Class', 'ELFCLASS64')])
    console.error('not an ELF file')

    text = console.export_text()
    assert 'ELFCLASS64' in text
    assert 'ERROR: not an ELF file' in text
