"""Tests for the configuration manager."""

import json
import logging

from style_engine.css.properties import ParserOptions
from style_engine.utils.config import Config


class TestConfig:
    def test_defaults_when_file_missing(self, tmp_path):
        path = tmp_path / 'missing.json'
        config = Config(str(path))
        assert config.get('parser.strict_integers') is False
        assert config.get('parser.legacy_box_shorthands') is False
        assert config.get('logging.console_level') == 'WARNING'
        assert not path.exists()

    def test_file_overrides_are_merged(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'parser': {'strict_integers': True}}))
        config = Config(str(path))
        assert config.get('parser.strict_integers') is True
        assert config.get('parser.legacy_box_shorthands') is False

    def test_invalid_json_falls_back_to_defaults(self, tmp_path, caplog):
        path = tmp_path / 'config.json'
        path.write_text('{not json')
        with caplog.at_level(logging.ERROR, logger='style_engine.utils.config'):
            config = Config(str(path))
        assert config.get('parser.strict_integers') is False
        assert 'Error loading configuration' in caplog.text

    def test_non_object_root_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('[1, 2]')
        assert Config(str(path)).get('logging.file_level') == 'DEBUG'

    def test_set_get_remove(self, tmp_path):
        config = Config(str(tmp_path / 'config.json'))
        config.set('parser.legacy_box_shorthands', True)
        config.set('extra.nested.key', 'value')
        assert config.get('parser.legacy_box_shorthands') is True
        assert config.get('extra.nested.key') == 'value'
        assert config.remove('extra.nested.key')
        assert not config.remove('extra.nested.key')
        assert config.get('extra.nested.key', 'fallback') == 'fallback'
        assert config.get('unknown') is None

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / 'sub' / 'config.json'
        config = Config(str(path))
        config.set('parser.strict_integers', True)
        config.save()
        assert path.exists()
        assert Config(str(path)).get('parser.strict_integers') is True

    def test_get_all_is_a_copy(self, tmp_path):
        config = Config(str(tmp_path / 'config.json'))
        snapshot = config.get_all()
        snapshot['parser']['strict_integers'] = True
        assert config.get('parser.strict_integers') is False

    def test_parser_options_from_config(self, tmp_path):
        config = Config(str(tmp_path / 'config.json'))
        config.set('parser.legacy_box_shorthands', True)
        assert ParserOptions.from_config(config) == ParserOptions(legacy_box_shorthands=True)

    def test_parser_options_require_real_booleans(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'parser': {'strict_integers': 'false', 'legacy_box_shorthands': 1}}))
        assert ParserOptions.from_config(Config(str(path))) == ParserOptions()
