"""Tests for the click command line."""

import json

import pytest
from click.testing import CliRunner

import pricecast.__main__ as main_module
from pricecast.__main__ import cli


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(main_module, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def runner():
    return CliRunner()


def write_csv(path, prices):
    path.write_text("close\n" + "\n".join(f"{p}" for p in prices))


class TestSimulateCommand:
    def test_json_output(self, runner, tmp_path, realistic_prices):
        csv_path = tmp_path / "prices.csv"
        write_csv(csv_path, realistic_prices)

        result = runner.invoke(cli, [
            "simulate", "--csv", str(csv_path), "--paths", "500", "--horizon", "10",
            "--bins", "8", "--seed", "3", "--json",
        ])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["path_count"] == 500
        assert payload["horizon_days"] == 10
        assert payload["start_price"] == pytest.approx(realistic_prices[-1])
        assert len(payload["histogram"]) == 8
        assert sum(b["count"] for b in payload["histogram"]) == 500
        assert payload["lower_bound"] <= payload["expected_price"] <= payload["upper_bound"]

    def test_seeded_runs_match(self, runner, tmp_path, realistic_prices):
        csv_path = tmp_path / "prices.csv"
        write_csv(csv_path, realistic_prices)
        args = ["simulate", "--csv", str(csv_path), "--paths", "200", "--seed", "9", "--json"]
        first = json.loads(runner.invoke(cli, args).stdout)
        second = json.loads(runner.invoke(cli, args).stdout)
        assert first == second

    def test_text_output(self, runner, tmp_path, realistic_prices):
        csv_path = tmp_path / "prices.csv"
        write_csv(csv_path, realistic_prices)

        result = runner.invoke(cli, [
            "simulate", "--csv", str(csv_path), "--paths", "300", "--seed", "1",
        ])
        assert result.exit_code == 0, result.output
        assert "Current price:" in result.stdout
        assert "Expected price:" in result.stdout
        assert "Best case (p95)" in result.stdout
        assert "Worst case (p5)" in result.stdout
        assert "#" in result.stdout

    def test_short_history_reports_error(self, runner, tmp_path):
        csv_path = tmp_path / "prices.csv"
        write_csv(csv_path, [100 + i for i in range(10)])

        result = runner.invoke(cli, ["simulate", "--csv", str(csv_path)])
        assert result.exit_code == 1
        assert "Error: Not enough historical data" in result.stderr

    def test_invalid_horizon_reports_error(self, runner, tmp_path, realistic_prices):
        csv_path = tmp_path / "prices.csv"
        write_csv(csv_path, realistic_prices)

        result = runner.invoke(cli, ["simulate", "--csv", str(csv_path), "--horizon", "0"])
        assert result.exit_code == 1
        assert "horizon_days" in result.stderr

    def test_requires_one_source(self, runner):
        result = runner.invoke(cli, ["simulate"])
        assert result.exit_code == 2

    def test_commodity_from_cache(self, runner, tmp_path, monkeypatch, realistic_prices):
        from pricecast.collectors.cache import PriceCache

        cache_dir = tmp_path / "cache"
        PriceCache(str(cache_dir)).set("COPPER", realistic_prices)
        monkeypatch.setenv("PC_CACHE_DIR", str(cache_dir))

        result = runner.invoke(cli, [
            "simulate", "--commodity", "copper", "--paths", "100", "--seed", "2", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["start_price"] == pytest.approx(realistic_prices[-1])


class TestFetchCommand:
    def test_reads_cache(self, runner, tmp_path, monkeypatch):
        from pricecast.collectors.cache import PriceCache

        cache_dir = tmp_path / "cache"
        PriceCache(str(cache_dir)).set("WTI", [70.0 + i for i in range(40)])
        monkeypatch.setenv("PC_CACHE_DIR", str(cache_dir))

        result = runner.invoke(cli, ["fetch", "wti"])
        assert result.exit_code == 0, result.output
        assert "WTI: 40 points, latest 109.00" in result.stdout

    def test_unknown_symbol(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("PC_CACHE_DIR", str(tmp_path / "cache"))
        result = runner.invoke(cli, ["fetch", "gold"])
        assert result.exit_code == 1
        assert "Unknown commodity: GOLD" in result.stderr
