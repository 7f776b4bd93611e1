"""Tests for the command line entry point."""

import json
import logging

import pytest

from style_engine.main import main, parse_args


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger('style_engine')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / 'config.json')


def test_declarations(capsys, config_path):
    assert main(['--config', config_path, 'margin: 1px 2px; float: LEFT']) == 0
    assert capsys.readouterr().out.splitlines() == [
        'margin-top: 1px',
        'margin-right: 2px',
        'float: left',
    ]


def test_important_flag(capsys, config_path):
    assert main(['--config', config_path, '--important', 'clear: both']) == 0
    assert capsys.readouterr().out.strip() == 'clear: both !important'


def test_json_output(capsys, config_path):
    assert main(['--config', config_path, '--json', 'flex: none !important']) == 0
    assert json.loads(capsys.readouterr().out) == {
        'flex-grow': {'value': '0', 'important': True},
        'flex-shrink': {'value': '0', 'important': True},
        'flex-basis': {'value': 'auto', 'important': True},
    }


def test_nothing_accepted(capsys, config_path):
    assert main(['--config', config_path, 'float: sideways']) == 1
    assert capsys.readouterr().out == ''


def test_legacy_box_shorthands_switch(capsys, config_path):
    assert main(['--config', config_path, '--legacy-box-shorthands', 'margin: 1px 2px']) == 0
    assert 'margin-right: 1px' in capsys.readouterr().out


def test_strict_integers_from_config(capsys, tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'parser': {'strict_integers': True}}))
    assert main(['--config', str(path), 'flex: 1px 1 auto']) == 1


def test_stylesheet(capsys, config_path, tmp_path):
    stylesheet = tmp_path / 'page.css'
    stylesheet.write_text('p { clear: both; float: sideways }')
    assert main(['--config', config_path, '--stylesheet', str(stylesheet)]) == 0
    assert capsys.readouterr().out.splitlines() == ['p {', '    clear: both;', '}']


def test_stylesheet_json(capsys, config_path, tmp_path):
    stylesheet = tmp_path / 'page.css'
    stylesheet.write_text('.a { border-radius: 1px 2px }')
    assert main(['--config', config_path, '--json', '--stylesheet', str(stylesheet)]) == 0
    assert json.loads(capsys.readouterr().out) == {
        '.a': {'border-top-left-radius': '1px', 'border-top-right-radius': '2px'}}


def test_missing_stylesheet(config_path, tmp_path):
    assert main(['--config', config_path, '--stylesheet', str(tmp_path / 'nope.css')]) == 2


def test_arguments_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_null_log_levels_in_config(capsys, tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'logging': {'console_level': None, 'file_level': None}}))
    assert main(['--config', str(path), 'clear: both']) == 0
    assert logging.getLogger('style_engine').handlers[0].level == logging.WARNING
