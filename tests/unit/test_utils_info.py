"""
Unit tests for package information utilities.

Tests the system and package information collection and the csemit-info
command-line entry point.
"""

import platform
import sys
from unittest.mock import patch

import pytest
import yaml

from csemit.utils.info import get_csemit_info, get_system_info, main, print_info


class TestSystemInfo:
    """Test system information collection."""

    def test_get_system_info_basic(self):
        """Test getting basic system information."""
        info = get_system_info()

        assert info['python_version'] == sys.version
        assert info['platform'] == platform.platform()
        assert info['architecture'] == platform.architecture()
        assert info['processor'] == platform.processor()
        assert info['yaml_version'] == yaml.__version__


class TestCsEmitInfo:
    """Test csemit-specific information collection."""

    @patch('csemit.__version__', '1.0.0')
    @patch('csemit.__author__', 'Test Author')
    def test_get_csemit_info_basic(self):
        """Test getting basic csemit information."""
        info = get_csemit_info()

        assert info['version'] == '1.0.0'
        assert info['author'] == 'Test Author'
        assert info['config']['formatting']['column_limit'] == 100
        assert isinstance(info['config_file_exists'], bool)

    def test_get_csemit_info_from_env_config(self, tmp_path, monkeypatch):
        """Test that the active configuration file is reported."""
        config_file = tmp_path / "csemit_config.yaml"
        config_file.write_text("formatting:\n  column_limit: 80\n")
        monkeypatch.setenv("CSEMIT_CONFIG", str(config_file))

        info = get_csemit_info()
        assert info['config_file'] == str(config_file)
        assert info['config_file_exists'] is True
        assert info['config']['formatting']['column_limit'] == 80

    @patch('csemit.utils.info.get_config', side_effect=Exception("Config error"))
    def test_get_csemit_info_config_error(self, mock_get_config):
        """Test csemit info when the configuration cannot be read."""
        info = get_csemit_info()

        assert info['config_error'] == 'Config error'
        assert 'config' not in info


class TestPrintInfo:
    """Test information printing functionality."""

    @patch('csemit.utils.info.get_csemit_info')
    @patch('csemit.utils.info.get_system_info')
    @patch('builtins.print')
    def test_print_info_basic(self, mock_print, mock_system_info, mock_csemit_info):
        """Test basic information printing."""
        mock_csemit_info.return_value = {
            'version': '1.0.0',
            'author': 'Test Author',
            'config_file': '/tmp/csemit_config.yaml',
            'config_file_exists': False,
            'config': {
                'formatting': {'indent': '\t', 'column_limit': 100, 'file_scoped_namespace': False},
                'imports': {'skip_system_usings': True, 'system_namespace': 'System'},
            },
        }
        mock_system_info.return_value = {
            'python_version': '3.10.12 (main, ...)',
            'platform': 'Linux-5.15.0',
            'architecture': ('64bit', 'ELF'),
            'yaml_version': '6.0.1',
        }

        print_info()

        printed_text = ' '.join([str(call[0][0]) for call in mock_print.call_args_list])
        assert 'csemit Version: 1.0.0' in printed_text
        assert 'Author: Test Author' in printed_text
        assert 'Configuration: defaults' in printed_text
        assert "Indent: '\\t'" in printed_text
        assert 'Skip System Usings: True' in printed_text
        assert 'Python Version: 3.10.12' in printed_text
        assert 'PyYAML Version: 6.0.1' in printed_text

    @patch('csemit.utils.info.get_csemit_info')
    @patch('csemit.utils.info.get_system_info')
    @patch('builtins.print')
    def test_print_info_with_errors(self, mock_print, mock_system_info, mock_csemit_info):
        """Test information printing with a configuration error."""
        mock_csemit_info.return_value = {
            'version': '1.0.0',
            'author': 'Test Author',
            'config_error': 'bad file',
        }
        mock_system_info.return_value = {
            'python_version': '3.10.12 (main, ...)',
            'platform': 'Linux-5.15.0',
            'architecture': ('64bit', 'ELF'),
            'yaml_version': '6.0.1',
        }

        print_info()

        printed_text = ' '.join([str(call[0][0]) for call in mock_print.call_args_list])
        assert 'Configuration Error: bad file' in printed_text

    def test_print_info_output(self, capsys):
        """Test the real output header."""
        print_info()
        captured = capsys.readouterr()
        assert captured.out.startswith("csemit C# Source Emitter\n")


class TestMainFunction:
    """Test main entry point functionality."""

    @patch('csemit.utils.info.print_info')
    def test_main_success(self, mock_print_info):
        """Test successful main execution."""
        main()
        mock_print_info.assert_called_once()

    @patch('csemit.utils.info.print_info', side_effect=Exception("Test error"))
    @patch('builtins.print')
    def test_main_with_error(self, mock_print, mock_print_info):
        """Test main execution exits on error."""
        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        mock_print.assert_called_with("Error getting system information: Test error")
