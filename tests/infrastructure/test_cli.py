"""End-to-end CLI tests against a throwaway SQLite file."""

import logging

import pytest
from click.testing import CliRunner

from commerce.infrastructure import bootstrap
from commerce.infrastructure.cli.main import cli
from tests.db import seed


def _clear_caches():
    for cached in (bootstrap.settings, bootstrap.engine, bootstrap.session_factory):
        cached.cache_clear()


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("COMMERCE_DATABASE_URL", f"sqlite:///{tmp_path / 'db' / 'test.db'}")
    monkeypatch.setenv("COMMERCE_INGEST_CONCURRENCY", "2")
    _clear_caches()
    logging.getLogger("commerce").handlers.clear()
    runner = CliRunner()
    result = runner.invoke(cli, ["db", "init"])
    assert result.exit_code == 0, result.output
    seed(bootstrap.session_factory())
    yield runner
    bootstrap.engine().dispose()
    _clear_caches()
    logging.getLogger("commerce").handlers.clear()


def _csv(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestMigrateOrdersCommand:

    def test_reports_migrated_and_skipped(self, runner, tmp_path):
        path = _csv(tmp_path, "orders.csv", (
            "userId,totalAmount,productId,quantity\n"
            "1,40,10,2\n"
            "1,40,11,1\n"
            "2,10,99,1\n"
        ))
        result = runner.invoke(cli, ["migrate", "orders", path])

        assert result.exit_code == 0, result.output
        assert "1 order(s) migrated, 1 skipped" in result.output
        assert "Invalid product IDs: 99" in result.output

    def test_per_group_mode(self, runner, tmp_path):
        path = _csv(tmp_path, "orders.csv", (
            "userId,totalAmount,productId,quantity\n1,40,10,2\n2,5,11,1\n"
        ))
        result = runner.invoke(cli, ["migrate", "orders", path, "--commit-mode", "group"])
        assert "2 order(s) migrated, 0 skipped" in result.output

    def test_bad_header_fails_the_run(self, runner, tmp_path):
        path = _csv(tmp_path, "orders.csv", "user,total\n1,40\n")
        result = runner.invoke(cli, ["migrate", "orders", path])
        assert result.exit_code != 0
        assert "expected header" in result.output


class TestMigrateProductsCommand:

    def test_unknown_seller_skipped(self, runner, tmp_path):
        path = _csv(tmp_path, "products.csv", (
            "name,price,description,stock,sellerId\n"
            "Lamp,19.99,Desk lamp,5,1\n"
            "Chair,49.00,Office chair,2,77\n"
            "Rug,,Blue rug,1,1\n"
        ))
        result = runner.invoke(cli, ["migrate", "products", path])

        assert result.exit_code == 0, result.output
        assert "1 product(s) migrated, 2 skipped" in result.output
        assert "Seller 77 not found" in result.output

    def test_concurrency_must_be_positive(self, runner, tmp_path):
        path = _csv(tmp_path, "products.csv", "name,price,description,stock,sellerId\n")
        result = runner.invoke(cli, ["migrate", "products", path, "--concurrency", "0"])
        assert result.exit_code == 2


class TestOrderCommands:

    def _import_one(self, runner, tmp_path):
        path = _csv(tmp_path, "orders.csv", "userId,totalAmount,productId,quantity\n1,40,10,2\n")
        runner.invoke(cli, ["migrate", "orders", path])

    def test_show(self, runner, tmp_path):
        self._import_one(runner, tmp_path)
        result = runner.invoke(cli, ["order", "show", "--id", "1"])
        assert result.exit_code == 0, result.output
        assert "Order #1  (status=pending)" in result.output
        assert "40.00" in result.output

    def test_status_change(self, runner, tmp_path):
        self._import_one(runner, tmp_path)
        result = runner.invoke(cli, ["order", "status", "--id", "1", "--to", "cancelled"])
        assert "Order #1 is now cancelled." in result.output

        again = runner.invoke(cli, ["order", "status", "--id", "1", "--to", "completed"])
        assert again.exit_code == 1
        assert "already cancelled" in again.output

    def test_missing_order(self, runner):
        result = runner.invoke(cli, ["order", "show", "--id", "42"])
        assert result.exit_code == 1
        assert "Order not found" in result.output
