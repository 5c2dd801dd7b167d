"""Tests for the launcher."""

import subprocess
import sys
from unittest.mock import patch

import pytest


def _command(argv):
    from spline_mcp.cli import build_command, build_parser

    return build_command(build_parser().parse_args(argv))


class TestBuildCommand:

    def test_mcp_defaults(self):
        command, _ = _command([])
        assert command == [sys.executable, '-m', 'spline_mcp.server', '--transport', 'stdio', '--port', '3000']

    def test_mcp_http_with_config(self):
        command, _ = _command(['--transport', 'http', '-p', '8080', '-c', 'prod.env', '-v'])
        assert command[3:] == ['--transport', 'http', '--port', '8080', '--config', 'prod.env', '--verbose']

    def test_webhook_passes_port_in_env(self):
        command, env = _command(['--mode', 'webhook', '--port', '4000'])
        assert command == [sys.executable, '-m', 'spline_webhooks.server']
        assert env['PORT'] == '4000'

    def test_minimal(self):
        command, _ = _command(['-m', 'minimal'])
        assert command == [sys.executable, '-m', 'spline_mcp.minimal']

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match='Unknown mode: bogus'):
            _command(['--mode', 'bogus'])


class TestMain:

    def test_unknown_mode_exits_1(self):
        from spline_mcp.cli import main

        with patch('spline_mcp.cli.subprocess.run') as run:
            assert main(['--mode', 'bogus']) == 1
            run.assert_not_called()

    def test_child_exit_code_is_returned(self):
        from spline_mcp.cli import main

        with patch('spline_mcp.cli.subprocess.run') as run:
            run.return_value = subprocess.CompletedProcess(args=[], returncode=3)
            assert main(['--mode', 'minimal']) == 3
            command = run.call_args.args[0]
            assert command[-1] == 'spline_mcp.minimal'

    def test_missing_module_exits_1(self):
        from spline_mcp.cli import main

        with patch('spline_mcp.cli.module_available', return_value=False), \
                patch('spline_mcp.cli.subprocess.run') as run:
            assert main([]) == 1
            run.assert_not_called()

    def test_spawn_failure_exits_1(self):
        from spline_mcp.cli import main

        with patch('spline_mcp.cli.subprocess.run', side_effect=OSError('exec failed')):
            assert main([]) == 1

    def test_interrupt_exits_130(self):
        from spline_mcp.cli import main

        with patch('spline_mcp.cli.subprocess.run', side_effect=KeyboardInterrupt):
            assert main([]) == 130

    def test_module_available(self):
        from spline_mcp.cli import module_available

        assert module_available('spline_mcp.server')
        assert not module_available('spline_missing.server')
