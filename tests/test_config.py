"""
Tests for the configuration system.

CRITICAL TESTS:
1. test_missing_input_fails_validation - main.input is required
2. test_env_var_substitution - ${VAR} must be replaced
"""

from pathlib import Path

import pytest
import yaml

from tick_median.config import (
    MedianConfig,
    MainConfig,
    EstimatorConfig,
    load_config,
    generate_default_config,
)
from tick_median.core.errors import ConfigError, ErrorCode, ExitCode


class TestMainConfig:

    def test_default_output_dir_is_cwd_output(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        main = MainConfig(input='data')
        assert main.output_dir == tmp_path / 'output'
        assert main.output_path == tmp_path / 'output' / 'median_result.csv'

    def test_explicit_output(self):
        main = MainConfig(input='data', output='/tmp/results', output_file='m.csv')
        assert main.output_path == Path('/tmp/results/m.csv')

    def test_input_dir(self):
        assert MainConfig().input_dir is None
        assert MainConfig(input='data').input_dir == Path('data')


class TestEstimatorConfig:

    def test_defaults(self):
        estimator = EstimatorConfig()
        assert estimator.strategy == 'exact'
        assert estimator.seed_threshold == 64


class TestMedianConfig:
    """Test root configuration."""

    def test_from_dict(self):
        config = MedianConfig.from_dict({
            'main': {'input': 'data', 'filename_mask': ['btc']},
            'estimator': {'strategy': 'hybrid', 'seed_threshold': 16},
        })
        assert config.main.input == 'data'
        assert config.main.filename_mask == ['btc']
        assert config.estimator.strategy == 'hybrid'
        assert config.estimator.seed_threshold == 16
        assert config.validate() == []

    def test_empty_sections_use_defaults(self):
        config = MedianConfig.from_dict({'main': {'input': 'data'}, 'estimator': None})
        assert config.estimator.strategy == 'exact'

    def test_unknown_key_rejected(self):
        with pytest.raises(ConfigError) as exc:
            MedianConfig.from_dict({'main': {'input': 'data', 'inptu': 'x'}})
        assert exc.value.exit_code == ExitCode.CONFIG_ERROR

    def test_unknown_section_rejected(self):
        with pytest.raises(ConfigError) as exc:
            MedianConfig.from_dict({'main': {'input': 'd'}, 'estimatr': {'strategy': 'hybrid'}})
        assert exc.value.code == ErrorCode.E3002_CONFIG_PARSE_FAILED
        assert 'estimatr' in exc.value.message

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError):
            MedianConfig.from_dict({'main': ['data']})

    def test_to_dict_roundtrip(self):
        original = MedianConfig.from_dict({'main': {'input': 'data'}})
        restored = MedianConfig.from_dict(original.to_dict())
        assert restored == original

    def test_to_yaml(self):
        yaml_str = MedianConfig.from_dict({'main': {'input': 'data'}}).to_yaml()
        assert 'main:' in yaml_str
        assert 'estimator:' in yaml_str


class TestValidation:
    """Test configuration validation."""

    def test_missing_input_fails_validation(self):
        """
        CRITICAL TEST: main.input is required.
        """
        errors = MedianConfig().validate()
        assert any('main.input' in e for e in errors)

    def test_input_must_be_string(self):
        errors = MedianConfig.from_dict({'main': {'input': 5}}).validate()
        assert any('must be a string' in e for e in errors)

    def test_mask_must_be_list_of_strings(self):
        config = MedianConfig.from_dict({'main': {'input': 'd', 'filename_mask': 'btc'}})
        assert any('filename_mask' in e for e in config.validate())

    def test_unknown_strategy(self):
        config = MedianConfig.from_dict({'main': {'input': 'd'}, 'estimator': {'strategy': 'mean'}})
        assert any('strategy' in e for e in config.validate())

    @pytest.mark.parametrize("threshold", [-1, 'ten', True])
    def test_invalid_seed_threshold(self, threshold):
        config = MedianConfig.from_dict({
            'main': {'input': 'd'},
            'estimator': {'seed_threshold': threshold},
        })
        assert any('seed_threshold' in e for e in config.validate())

    def test_unresolved_env_var_in_input(self):
        config = MedianConfig.from_dict({'main': {'input': '${PRICE_DATA_DIR}'}})
        assert any('PRICE_DATA_DIR' in e for e in config.validate())

    def test_invalid_log_level(self):
        config = MedianConfig.from_dict({'main': {'input': 'd'}, 'logging': {'level': 'LOUD'}})
        assert any('logging level' in e for e in config.validate())

    def test_ensure_valid_raises(self):
        with pytest.raises(ConfigError) as exc:
            MedianConfig().ensure_valid()
        assert exc.value.code == ErrorCode.E3003_VALIDATION_FAILED


class TestLoading:
    """YAML loading."""

    def test_load(self, write_config):
        path = write_config({'main': {'input': 'data'}})
        assert MedianConfig.load(path).main.input == 'data'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc:
            MedianConfig.load(tmp_path / 'nope.yml')
        assert exc.value.code == ErrorCode.E3001_CONFIG_NOT_FOUND

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'bad.yml'
        path.write_text("main: [unclosed\n")
        with pytest.raises(ConfigError) as exc:
            MedianConfig.load(path)
        assert exc.value.code == ErrorCode.E3002_CONFIG_PARSE_FAILED

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / 'list.yml'
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            MedianConfig.load(path)

    def test_env_var_substitution(self, write_config, monkeypatch):
        """
        CRITICAL TEST: ${VAR} is replaced from the environment.
        """
        monkeypatch.setenv('PRICE_DATA_DIR', '/data/prices')
        path = write_config({'main': {'input': '${PRICE_DATA_DIR}'}})
        assert MedianConfig.load(path).main.input == '/data/prices'

    def test_unset_env_var_kept(self, write_config, monkeypatch):
        monkeypatch.delenv('PRICE_DATA_DIR', raising=False)
        path = write_config({'main': {'input': '${PRICE_DATA_DIR}'}})
        assert MedianConfig.load(path).main.input == '${PRICE_DATA_DIR}'

    def test_load_config_explicit_path(self, write_config):
        path = write_config({'main': {'input': 'x'}}, name='custom.yml')
        assert load_config(path).main.input == 'x'

    def test_load_config_search_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / 'tick_median.yml').write_text("main:\n  input: found\n")
        assert load_config().main.input == 'found'

    def test_load_config_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(
            'tick_median.config.schema.SEARCH_PATHS', [Path('./tick_median.yml')]
        )
        with pytest.raises(ConfigError) as exc:
            load_config()
        assert exc.value.code == ErrorCode.E3001_CONFIG_NOT_FOUND

    def test_default_config_parses(self):
        data = yaml.safe_load(generate_default_config())
        config = MedianConfig.from_dict(data)
        assert config.main.filename_mask == []
        assert config.estimator.seed_threshold == 64


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
