"""End-to-end tests for the click CLI against a temporary catalog file."""

import json
import logging

import pytest
from click.testing import CliRunner

from jewelcat.infrastructure.cli.main import cli
from jewelcat.infrastructure.config import get_settings
from jewelcat.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork

GOLD = {
    "kind": "metal",
    "code": "GOLD22K",
    "name": "Gold22K",
    "colorOrType": "Yellow",
    "variants": [
        {"name": "22K Gold", "unitPrice": 6000, "purity": 91.6},
        {"name": "18K Gold", "unitPrice": 5625, "purity": 75},
    ],
    "defaultWastagePercentage": 3,
    "defaultMakingChargeType": "flat",
    "defaultMakingCharges": 500,
}


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("JEWELCAT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("JEWELCAT_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == "jewelcat":
            root.removeHandler(handler)


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


def _catalog(tmp_path) -> dict:
    return json.loads((tmp_path / "data" / "catalog.json").read_text())


def _create_gold(runner, tmp_path) -> str:
    result = runner.invoke(cli, ["material", "create", _write(tmp_path, "gold.json", GOLD)])
    assert result.exit_code == 0, result.output
    return _catalog(tmp_path)["materials"][0]["id"]


def _save_ring(runner, tmp_path, gold_id, variant_index=0) -> None:
    ring = {
        "id": "ring",
        "name": "Gold Ring",
        "gstPercentage": 0,
        "lines": [
            {"materialKind": "metal", "materialRef": gold_id,
             "variantIndex": variant_index, "quantity": 10},
        ],
    }
    result = runner.invoke(cli, ["product", "save", _write(tmp_path, "ring.json", ring)])
    assert result.exit_code == 0, result.output


class TestMaterialCommands:

    def test_create_and_show(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        result = runner.invoke(cli, ["material", "show", "--id", gold_id])
        assert result.exit_code == 0
        assert "GOLD22K" in result.output
        assert "INR 6,000.00" in result.output
        assert "purity=91.6" in result.output

    def test_duplicate_code(self, env):
        runner = CliRunner()
        _create_gold(runner, env)
        result = runner.invoke(cli, ["material", "create", _write(env, "gold.json", GOLD)])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_invalid_json_file(self, env):
        path = env / "bad.json"
        path.write_text("{not json")
        result = CliRunner().invoke(cli, ["material", "create", str(path)])
        assert result.exit_code != 0
        assert "Invalid JSON" in result.output

    def test_list(self, env):
        runner = CliRunner()
        _create_gold(runner, env)
        result = runner.invoke(cli, ["material", "list", "--kind", "metal"])
        assert "Gold22K" in result.output
        result = runner.invoke(cli, ["material", "list", "--kind", "gemstone"])
        assert "No materials found." in result.output

    def test_set_price_out_of_range(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        result = runner.invoke(
            cli, ["material", "set-price", "--id", gold_id, "--variant", "5", "--price", "1"]
        )
        assert result.exit_code == 1
        assert "out of range" in result.output

    def test_delete_blocked_then_allowed(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        _save_ring(runner, env, gold_id)

        result = runner.invoke(cli, ["material", "delete", "--id", gold_id])
        assert result.exit_code == 1
        assert "still used by 1 product(s)" in result.output

        assert runner.invoke(cli, ["product", "delete", "--id", "ring"]).exit_code == 0
        result = runner.invoke(cli, ["material", "delete", "--id", gold_id])
        assert result.exit_code == 0
        assert _catalog(env)["materials"][0]["isDeleted"] is True


class TestPricingFlow:

    def test_price_follows_material_update(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        _save_ring(runner, env, gold_id)

        result = runner.invoke(cli, ["product", "price", "--id", "ring"])
        assert result.exit_code == 0
        assert "INR 62,300.00" in result.output

        result = runner.invoke(
            cli,
            ["material", "set-price", "--id", gold_id, "--variant", "0",
             "--price", "6200", "--by", "alice"],
        )
        assert result.exit_code == 0
        assert "INR 6,200.00" in result.output

        result = runner.invoke(cli, ["product", "price", "--id", "ring"])
        assert "INR 64,360.00" in result.output

        result = runner.invoke(cli, ["history", "show", "--entity-id", gold_id])
        assert "alice" in result.output
        assert "INR 6,000.00" in result.output

    def test_repeated_price_is_logged_once(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        args = ["material", "set-price", "--id", gold_id, "--variant", "0", "--price", "6200"]
        runner.invoke(cli, args)
        runner.invoke(cli, args)
        assert len(_catalog(env)["priceHistory"]) == 1

    def test_empty_history(self, env):
        result = CliRunner().invoke(cli, ["history", "show"])
        assert "No price changes recorded." in result.output

    def test_save_rejects_out_of_range_slot(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        ring = {
            "name": "Broken",
            "lines": [{"materialKind": "metal", "materialRef": gold_id,
                       "variantIndex": 5, "quantity": 1}],
        }
        result = runner.invoke(cli, ["product", "save", _write(env, "broken.json", ring)])
        assert result.exit_code == 1
        assert "out of range" in result.output

    def test_dangling_product_reported_unavailable(self, env):
        runner = CliRunner()
        gold_id = _create_gold(runner, env)
        _save_ring(runner, env, gold_id)

        # Simulate the catalog shrinking under a saved product
        catalog_path = env / "data" / "catalog.json"
        document = _catalog(env)
        document["products"][0]["lines"][0]["variantIndex"] = 5
        catalog_path.write_text(json.dumps(document))

        result = runner.invoke(cli, ["product", "price", "--id", "ring"])
        assert result.exit_code == 1
        assert "Price unavailable for product ring" in result.output

        result = runner.invoke(cli, ["product", "reprice"])
        assert result.exit_code == 0
        assert "Price unavailable" in result.output


class TestBusyStore:

    @pytest.mark.parametrize("args", [["product", "reprice"], ["material", "list"]])
    def test_locked_catalog_reported_cleanly(self, env, monkeypatch, args):
        monkeypatch.setenv("JEWELCAT_LOCK_TIMEOUT_SECONDS", "0.05")
        get_settings.cache_clear()
        holder = JsonUnitOfWork(env / "data" / "catalog.json")
        with holder:
            result = CliRunner().invoke(cli, args)
        assert result.exit_code == 1
        assert "busy" in result.output
        assert "Traceback" not in result.output
