"""Tests for the config command group."""

from click.testing import CliRunner

from nt_load_order.cli.cli import cli
from nt_load_order.config import InMemoryConfigStore, LoadOrderConfig
from nt_load_order.context import AppContext


def test_config_list_empty() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "list"], obj=AppContext.for_test())

    assert result.exit_code == 0, result.output
    assert "(nothing configured)" in result.output


def test_config_list_shows_values() -> None:
    store = InMemoryConfigStore(LoadOrderConfig(kd_driver="kdcom", add_imports=False))
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "list"], obj=AppContext.for_test(config_store=store))

    assert result.exit_code == 0, result.output
    assert "kd_driver=kdcom" in result.stdout
    assert "add_imports=false" in result.stdout


def test_config_set_and_unset() -> None:
    store = InMemoryConfigStore()
    app = AppContext.for_test(config_store=store)
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "set", "control_set", "2"], obj=app)
    assert result.exit_code == 0, result.output
    assert store.load().control_set == 2

    result = runner.invoke(cli, ["config", "set", "detect_cpu_vendor", "true"], obj=app)
    assert result.exit_code == 0, result.output
    assert store.load().detect_cpu_vendor is True

    result = runner.invoke(cli, ["config", "unset", "control_set"], obj=app)
    assert result.exit_code == 0, result.output
    assert store.load() == LoadOrderConfig(detect_cpu_vendor=True)


def test_config_set_invalid_value() -> None:
    store = InMemoryConfigStore()
    runner = CliRunner()

    result = runner.invoke(
        cli, ["config", "set", "add_imports", "maybe"], obj=AppContext.for_test(config_store=store)
    )

    assert result.exit_code == 1
    assert "Error: Invalid boolean value for add_imports: maybe" in result.output
    assert store.load() == LoadOrderConfig()


def test_config_set_unknown_key() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["config", "set", "colour", "red"], obj=AppContext.for_test())

    assert result.exit_code == 2
