#!/usr/bin/env python3
"""
Demo program tests
"""
import io
import json
import logging
import os
import subprocess
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from fibo_add import cli
from fibo_add.config import CONFIG_ENV_VAR, reset_config

EXPECTED_DEFAULT_OUTPUT = (
    "a = 1, b = 2\n"
    "a + b = 3\n"
    "fibo(1) = 1\n"
    "fibo(2) = 1\n"
    "fibo(3) = 2\n"
    "fibo(4) = 3\n"
    "fibo(5) = 5\n"
    "fibo(6) = 8\n"
    "fibo(7) = 13\n"
    "fibo(8) = 21\n"
    "fibo(9) = 34\n"
    "fibo(10) = 55\n"
)


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    """Fresh config, no env override, and the root logger put back afterwards"""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_config()
    root = logging.getLogger()
    package_logger = logging.getLogger("fibo_add")
    handlers, level, package_level = list(root.handlers), root.level, package_logger.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    package_logger.setLevel(package_level)
    reset_config()


class TestDemoOutput:

    def test_default_output_matches_reference(self, capsys):
        assert cli.main([]) == 0
        assert capsys.readouterr().out == EXPECTED_DEFAULT_OUTPUT

    def test_run_demo_to_stream(self):
        out = io.StringIO()
        cli.run_demo(5, -7, 3, out=out)
        assert out.getvalue() == (
            "a = 5, b = -7\n"
            "a + b = -2\n"
            "fibo(1) = 1\n"
            "fibo(2) = 1\n"
            "fibo(3) = 2\n"
        )

    def test_operands_and_count_from_args(self, capsys):
        assert cli.main(["-a", "100", "-b", "100", "-n", "4"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:2] == ["a = 100, b = 100", "a + b = 200"]
        assert lines[-1] == "fibo(4) = 3"
        assert len(lines) == 6

    def test_zero_count_prints_only_sum(self, capsys):
        assert cli.main(["--count", "0"]) == 0
        assert capsys.readouterr().out == "a = 1, b = 2\na + b = 3\n"

    def test_negative_count_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--count", "-1"])
        assert excinfo.value.code == 2
        assert "must be >= 0" in capsys.readouterr().err


class TestDemoConfig:

    def test_values_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "demo.yaml"
        path.write_text("demo:\n  a: 4\n  b: 5\n  count: 2\n", encoding='utf-8')

        assert cli.main(["--config", str(path)]) == 0
        assert capsys.readouterr().out == "a = 4, b = 5\na + b = 9\nfibo(1) = 1\nfibo(2) = 1\n"

    def test_args_override_config(self, tmp_path, capsys):
        path = tmp_path / "demo.yaml"
        path.write_text("demo:\n  a: 4\n  count: 2\n", encoding='utf-8')

        assert cli.main(["--config", str(path), "-a", "10", "-n", "1"]) == 0
        assert capsys.readouterr().out == "a = 10, b = 2\na + b = 12\nfibo(1) = 1\n"

    def test_config_from_environment(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "env.yaml"
        path.write_text("demo:\n  count: 1\n", encoding='utf-8')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert cli.main([]) == 0
        assert capsys.readouterr().out.splitlines()[-1] == "fibo(1) = 1"

    def test_malformed_config_exits_1(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("demo: [unclosed\n", encoding='utf-8')

        assert cli.main(["--config", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "ERROR: cannot load config" in captured.err

    def test_negative_count_in_config_exits_1(self, tmp_path, capsys):
        path = tmp_path / "neg.yaml"
        path.write_text("demo:\n  count: -3\n", encoding='utf-8')

        assert cli.main(["--config", str(path)]) == 1
        assert "demo.count must be >= 0" in capsys.readouterr().err


class TestDemoLogging:

    def test_logs_stay_off_stdout(self, capsys):
        assert cli.main(["--debug", "--timing"]) == 0
        captured = capsys.readouterr()
        assert captured.out == EXPECTED_DEFAULT_OUTPUT
        assert "timing" in captured.err

    def test_json_logs(self, capsys):
        assert cli.main(["--json-logs", "--timing"]) == 0
        err_lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        events = [json.loads(line) for line in err_lines]
        timing = [e for e in events if e.get("event") == "timing"]
        assert timing and timing[0]["function"] == "print_fibonacci_table"

    def test_placeholder_false_keeps_plain_logs(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "logs.yaml"
        path.write_text("logging:\n  json: ${FIBO_TEST_JSON:-false}\n", encoding='utf-8')
        monkeypatch.setenv("FIBO_TEST_JSON", "false")

        assert cli.main(["--config", str(path), "--timing"]) == 0
        err = capsys.readouterr().err
        assert "timing" in err
        assert not err.lstrip().startswith("{")

    def test_placeholder_true_enables_json_logs(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "logs.yaml"
        path.write_text("logging:\n  json: ${FIBO_TEST_JSON:-false}\n", encoding='utf-8')
        monkeypatch.setenv("FIBO_TEST_JSON", "yes")

        assert cli.main(["--config", str(path), "--timing"]) == 0
        err_lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        assert any(json.loads(line).get("event") == "timing" for line in err_lines)

    def test_bad_json_flag_in_config_exits_1(self, tmp_path, capsys):
        path = tmp_path / "logs.yaml"
        path.write_text("logging:\n  json: sometimes\n", encoding='utf-8')

        assert cli.main(["--config", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "logging.json must be a boolean" in captured.err


class TestDemoConfigSections:

    @pytest.mark.parametrize("body,section", [
        ("logging:\n", "logging"),
        ("logging: [1]\n", "logging"),
        ("demo:\n", "demo"),
    ])
    def test_non_mapping_section_exits_1(self, tmp_path, capsys, body, section):
        path = tmp_path / "section.yaml"
        path.write_text(body, encoding='utf-8')

        assert cli.main(["--config", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert f"ERROR: cannot load config {path}: {section} must be a mapping" in captured.err


class TestModuleEntryPoint:

    def test_python_dash_m(self, tmp_path):
        src_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
        env = dict(os.environ)
        env.pop(CONFIG_ENV_VAR, None)
        env["PYTHONPATH"] = os.pathsep.join(filter(None, [src_dir, env.get("PYTHONPATH")]))

        result = subprocess.run(
            [sys.executable, "-m", "fibo_add"],
            capture_output=True, text=True, env=env, cwd=str(tmp_path), timeout=60,
        )
        assert result.returncode == 0, result.stderr
        assert result.stdout == EXPECTED_DEFAULT_OUTPUT
