"""End-to-end CLI tests with click's CliRunner over a temporary data dir."""

import csv
import io
import json

import pytest
from click.testing import CliRunner

from menuwallet.infrastructure.cli.main import cli

TRANSACTIONS = [
    {"id": "1", "driver_id": "d1", "transaction_type": "delivery_earnings",
     "amount": "42.00", "created_at": "2026-03-10T08:00:00",
     "processed_at": "2026-03-10T09:00:00", "description": "Lunch run"},
    {"id": "2", "driver_id": "d1", "transaction_type": "bank_transfer",
     "amount": "-30.00", "created_at": "2026-03-12T08:00:00",
     "processing_fee": "1.00", "reference_id": "BT-17"},
    {"id": "3", "driver_id": "d1", "transaction_type": "tip_payment",
     "amount": "5.00", "created_at": "2026-03-14T08:00:00", "description": "Lunch tip"},
]

MENU_ITEMS = [
    {"id": "1", "name": "Nasi Lemak", "category": "Rice", "base_price": "8.90"},
    {"id": "2", "name": "Roti Canai", "category": "Bread", "base_price": "2.50",
     "is_available": False},
]

TEMPLATES = [
    {"id": "1", "name": "Spice Level", "selection_mode": "single", "usage_count": 7,
     "created_at": "2026-01-05T00:00:00",
     "options": [{"name": "Mild"}, {"name": "Hot", "additional_price": "0.50"}]},
    {"id": "2", "name": "Extra Toppings", "selection_mode": "multiple", "usage_count": 2,
     "created_at": "2026-01-06T00:00:00",
     "options": [{"name": "Egg", "additional_price": "1.50"}]},
    {"id": "3", "name": "Old Sauce", "selection_mode": "single", "is_active": False,
     "created_at": "2026-01-07T00:00:00", "options": [{"name": "Chilli"}]},
]

PERFORMANCE = [
    {"template_id": "1", "template_name": "Spice Level", "usage_count": 7,
     "revenue": "35.00", "performance_score": 64},
    {"template_id": "2", "template_name": "Extra Toppings", "usage_count": 2,
     "revenue": "90.00", "performance_score": 88},
]


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    for name, rows in (
        ("transactions.json", TRANSACTIONS),
        ("menu_items.json", MENU_ITEMS),
        ("templates.json", TEMPLATES),
        ("template_performance.json", PERFORMANCE),
    ):
        (tmp_path / name).write_text(json.dumps(rows), encoding="utf-8")
    monkeypatch.setenv("MENUWALLET_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


def _load(data_dir, name):
    return json.loads((data_dir / name).read_text(encoding="utf-8"))


class TestWalletCommands:

    def test_history_newest_first(self, runner, data_dir):
        result = runner.invoke(cli, ["wallet", "history", "--driver", "d1"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "Tip" in lines[2]
        assert "Delivery Earnings" in lines[4]
        assert "filter(s) active" not in result.output

    def test_history_filters_report_count(self, runner, data_dir):
        result = runner.invoke(
            cli, ["wallet", "history", "--driver", "d1", "--search", "lunch", "--min", "10"]
        )
        assert result.exit_code == 0, result.output
        assert "Lunch run" in result.output
        assert "Lunch tip" not in result.output
        assert "1 transaction(s), 2 filter(s) active" in result.output

    def test_history_malformed_amount_is_ignored(self, runner, data_dir):
        result = runner.invoke(cli, ["wallet", "history", "--driver", "d1", "--min", "abc"])
        assert result.exit_code == 0, result.output
        assert "BT-17" not in result.output
        assert result.output.count("RM") == 3

    def test_history_reversed_dates_rejected(self, runner, data_dir):
        result = runner.invoke(
            cli, ["wallet", "history", "--driver", "d1", "--from", "2026-03-12", "--to", "2026-03-01"]
        )
        assert result.exit_code != 0
        assert "on or before end date" in result.output

    def test_history_period_with_explicit_dates_rejected(self, runner, data_dir):
        result = runner.invoke(
            cli, ["wallet", "history", "--driver", "d1", "--period", "week", "--from", "2026-03-01"]
        )
        assert result.exit_code == 2
        assert "either --period or --from/--to" in result.output

    def test_history_date_range_inclusive(self, runner, data_dir):
        result = runner.invoke(
            cli, ["wallet", "history", "--driver", "d1", "--from", "2026-03-12", "--to", "2026-03-14"]
        )
        assert result.exit_code == 0, result.output
        assert "Bank Transfer" in result.output
        assert "Tip" in result.output
        assert "Delivery Earnings" not in result.output

    def test_history_empty(self, runner, data_dir):
        result = runner.invoke(cli, ["wallet", "history", "--driver", "nobody"])
        assert result.exit_code == 0
        assert "No transactions found." in result.output

    def test_summary(self, runner, data_dir):
        result = runner.invoke(cli, ["wallet", "summary", "--driver", "d1"])
        assert result.exit_code == 0, result.output
        assert "Credits:       RM 47.00" in result.output
        assert "Debits:        RM 30.00" in result.output
        assert "Net:           RM 17.00" in result.output
        assert "(2 pending)" in result.output

    def test_export_csv_to_stdout(self, runner, data_dir):
        result = runner.invoke(cli, ["wallet", "export", "--driver", "d1"])
        assert result.exit_code == 0, result.output
        rows = list(csv.reader(io.StringIO(result.output)))
        assert rows[0][0] == "Date"
        assert [r[0] for r in rows[1:]] == ["2026-03-14", "2026-03-12", "2026-03-10"]

    def test_export_json_to_file(self, runner, data_dir):
        target = data_dir / "out.json"
        result = runner.invoke(
            cli, ["wallet", "export", "--driver", "d1", "--format", "json", "--output", str(target)]
        )
        assert result.exit_code == 0, result.output
        assert "Exported to" in result.output
        assert json.loads(target.read_text(encoding="utf-8"))["total_transactions"] == 3

    def test_export_nothing(self, runner, data_dir):
        result = runner.invoke(cli, ["wallet", "export", "--driver", "nobody"])
        assert result.exit_code != 0
        assert "No transactions to export" in result.output

    def test_broken_data_file(self, runner, data_dir):
        (data_dir / "transactions.json").write_text("oops", encoding="utf-8")
        result = runner.invoke(cli, ["wallet", "history", "--driver", "d1"])
        assert result.exit_code != 0
        assert "Could not read transactions.json" in result.output


class TestMenuCommands:

    def test_items_available_only(self, runner, data_dir):
        result = runner.invoke(cli, ["menu", "items", "--available-only"])
        assert result.exit_code == 0, result.output
        assert "Nasi Lemak" in result.output
        assert "Roti Canai" not in result.output

    def test_items_sorted_by_price(self, runner, data_dir):
        result = runner.invoke(cli, ["menu", "items", "--sort", "price", "--asc"])
        assert result.exit_code == 0, result.output
        assert result.output.index("Roti Canai") < result.output.index("Nasi Lemak")

    def test_apply_templates(self, runner, data_dir):
        result = runner.invoke(
            cli, ["menu", "apply-templates", "--items", "1,2", "--templates", "2,1"]
        )
        assert result.exit_code == 0, result.output
        assert "Applied 2 template(s) to 2 menu item(s) (4 new attachment(s))." in result.output
        items = _load(data_dir, "menu_items.json")
        assert items[0]["template_ids"] == ["2", "1"]
        usage = {t["id"]: t["usage_count"] for t in _load(data_dir, "templates.json")}
        assert usage == {"1": 9, "2": 4, "3": 0}

    def test_apply_unknown_template(self, runner, data_dir):
        result = runner.invoke(cli, ["menu", "apply-templates", "--items", "1", "--templates", "42"])
        assert result.exit_code != 0
        assert "Template with ID '42' not found" in result.output

    def test_apply_empty_ids(self, runner, data_dir):
        result = runner.invoke(cli, ["menu", "apply-templates", "--items", " , ", "--templates", "1"])
        assert result.exit_code != 0
        assert "comma-separated list" in result.output


class TestTemplateCommands:

    def test_list_default_order(self, runner, data_dir):
        result = runner.invoke(cli, ["template", "list"])
        assert result.exit_code == 0, result.output
        out = result.output
        assert out.index("Spice Level") < out.index("Extra Toppings") < out.index("Old Sauce")
        assert "Old Sauce (inactive)" in out

    def test_list_by_category(self, runner, data_dir):
        result = runner.invoke(cli, ["template", "list", "--category", "Add-ons"])
        assert result.exit_code == 0, result.output
        assert "Extra Toppings" in result.output
        assert "Spice Level" not in result.output

    def test_rank(self, runner, data_dir):
        result = runner.invoke(cli, ["template", "rank"])
        assert result.exit_code == 0, result.output
        assert result.output.index("Extra Toppings") < result.output.index("Spice Level")
        assert "88% score" in result.output

    def test_create(self, runner, data_dir):
        result = runner.invoke(
            cli, ["template", "create", "--name", "Portion Size", "--options", "Regular:0*,Large:2.50"]
        )
        assert result.exit_code == 0, result.output
        assert "Template #4 'Portion Size' created with 2 option(s)" in result.output
        created = _load(data_dir, "templates.json")[-1]
        assert created["options"][1] == {"name": "Large", "additional_price": "2.50", "is_default": False}

    def test_create_duplicate(self, runner, data_dir):
        result = runner.invoke(
            cli, ["template", "create", "--name", "spice level", "--options", "A"]
        )
        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_move_option(self, runner, data_dir):
        result = runner.invoke(cli, ["template", "move-option", "--id", "1", "--from", "0", "--to", "2"])
        assert result.exit_code == 0, result.output
        names = [o["name"] for o in _load(data_dir, "templates.json")[0]["options"]]
        assert names == ["Hot", "Mild"]

    def test_pick_applies_in_selection_order(self, runner, data_dir):
        result = runner.invoke(
            cli,
            ["template", "pick", "--items", "1"],
            input="t 2\nt 1\nmv 1 0\ndone\n",
        )
        assert result.exit_code == 0, result.output
        assert "Applied 2 template(s)" in result.output
        assert _load(data_dir, "menu_items.json")[0]["template_ids"] == ["1", "2"]

    def test_pick_hides_inactive_and_can_quit(self, runner, data_dir):
        result = runner.invoke(
            cli, ["template", "pick", "--items", "1"], input="/sauce\nquit\n"
        )
        assert result.exit_code == 0, result.output
        assert "No templates found." in result.output
        assert "Nothing applied." in result.output
        assert _load(data_dir, "menu_items.json")[0].get("template_ids", []) == []

    def test_pick_refuses_hidden_and_unknown_templates(self, runner, data_dir):
        result = runner.invoke(
            cli, ["template", "pick", "--items", "1"], input="t 3\nt 999\nquit\n"
        )
        assert result.exit_code == 0, result.output
        assert "! Cannot select '3' from templates: it is hidden by the current filter" in result.output
        assert "! Cannot select '999' from templates: it does not exist" in result.output
        assert "Selected (0)" in result.output
