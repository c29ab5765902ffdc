"""Unit tests for the modelboard command line"""
from unittest.mock import patch

import pytest

from conftest import run
from modelboard.client.errors import DeleteFailed
from modelboard.core.config import DashboardConfig
from modelboard.main import build_parser, run_command


def run_cli(store, argv, is_admin=False):
    args = build_parser().parse_args(argv)
    config = DashboardConfig(is_admin=is_admin or args.admin)
    with patch("modelboard.main.create_store", return_value=store):
        return run(run_command(config, args))


class TestListCommand:

    def test_list_prints_models_and_chart(self, store, capsys):
        code = run_cli(store, ["list"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Total Models: 3" in out
        assert "[1] RF" in out
        assert "Comparison of Evaluation Metrics Across Models" in out
        assert "92.50%" in out

    def test_list_empty_shows_placeholders(self, empty_store, capsys):
        code = run_cli(empty_store, ["list"])

        out = capsys.readouterr().out
        assert code == 0
        assert "No models found." in out
        assert "No models available to display" in out


class TestMutationCommands:

    def test_add_requires_admin(self, store, capsys):
        code = run_cli(store, ["add", "--name", "SVM", "--accuracy", "0.9", "--precision", "0.9",
                               "--recall", "0.9", "--f1-score", "0.9"])

        assert code == 2
        assert store.count("create") == 0
        assert "require admin" in capsys.readouterr().err

    def test_add_as_admin(self, store):
        code = run_cli(store, ["--admin", "add", "--name", "SVM", "--accuracy", "0.9", "--precision", "0.9",
                               "--recall", "0.9", "--f1-score", "0.9"])

        assert code == 0
        assert store.calls[-2:] == [("create", "SVM"), ("list",)]

    def test_add_rejects_non_numeric_metric(self, store):
        code = run_cli(store, ["--admin", "add", "--name", "SVM", "--accuracy", "high", "--precision", "0.9",
                               "--recall", "0.9", "--f1-score", "0.9"])

        assert code == 2
        assert store.count("create") == 0

    def test_edit_unknown_id(self, store):
        code = run_cli(store, ["--admin", "edit", "42", "--name", "SVM", "--accuracy", "0.9",
                               "--precision", "0.9", "--recall", "0.9", "--f1-score", "0.9"])

        assert code == 1
        assert store.count("update") == 0

    def test_delete_prompts_and_respects_no(self, store, capsys):
        with patch("builtins.input", return_value="n"):
            code = run_cli(store, ["--admin", "delete", "1"])

        assert code == 0
        assert store.count("delete") == 0
        assert "Delete cancelled." in capsys.readouterr().out

    def test_delete_with_yes(self, store):
        code = run_cli(store, ["--admin", "delete", "1", "--yes"])

        assert code == 0
        assert store.calls[-2:] == [("delete", 1), ("list",)]

    def test_failed_delete_prints_alert(self, store, capsys):
        store.fail_next("delete", DeleteFailed(status=500))

        code = run_cli(store, ["--admin", "delete", "1", "-y"])

        assert code == 1
        assert "Failed to delete model" in capsys.readouterr().err


def test_subcommand_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
