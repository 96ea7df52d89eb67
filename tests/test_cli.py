"""Tests for the command line entry point."""

from unittest.mock import MagicMock, patch

import pytest

from suggest_expander.aggregator import Aggregator
from suggest_expander.cli import main
from suggest_expander.config import TemporalPolicy
from suggest_expander.errors import ValidationError
from suggest_expander.models import AggregationResult, Category, CategorySummary, ResultItem


@pytest.fixture
def mocks(monkeypatch):
    for name in ("SUGGEST_CLIENT", "SUGGEST_MAX_WORKERS", "SUGGEST_TEMPORAL_POLICY", "SEARCH_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    agg = MagicMock(spec=Aggregator)
    agg.aggregate.return_value = AggregationResult(
        results=[ResultItem(Category.BASE, "pizza, recipe")],
        summary=[CategorySummary(Category.BASE, 1)],
    )
    with patch("suggest_expander.cli.load_env"), patch("suggest_expander.cli.setup_logging"), patch(
        "suggest_expander.cli.build_aggregator", return_value=agg
    ) as build:
        yield build, agg


class TestMain:
    def test_prints_results(self, mocks, capsys):
        _, agg = mocks
        assert main(["pizza", "--country", "us", "--language", "en"]) == 0
        agg.aggregate.assert_called_once_with("pizza", "us", "en")
        out = capsys.readouterr().out
        assert "1 suggestions" in out
        assert "Base\tpizza, recipe" in out

    def test_keyword_is_trimmed(self, mocks):
        _, agg = mocks
        assert main(["  pizza ", "-c", "us", "-l", "en"]) == 0
        agg.aggregate.assert_called_once_with("pizza", "us", "en")

    def test_closes_worker_pool(self, mocks):
        _, agg = mocks
        main(["pizza", "-c", "us", "-l", "en"])
        agg.__exit__.assert_called_once()

    def test_writes_csv(self, mocks, tmp_path):
        target = tmp_path / "out.csv"
        assert main(["pizza", "-c", "us", "-l", "en", "--csv", str(target)]) == 0
        assert target.read_bytes().decode("utf-8-sig").splitlines() == ["category,suggestion", 'Base,"pizza, recipe"']

    def test_overrides(self, mocks):
        build, _ = mocks
        main(["pizza", "-c", "us", "-l", "en", "--client", "toolbar", "--workers", "2", "--policy", "full"])
        settings = build.call_args.args[0]
        assert settings.client == "toolbar"
        assert settings.max_workers == 2
        assert settings.temporal_policy is TemporalPolicy.FULL

    def test_blank_keyword(self, mocks):
        _, agg = mocks
        agg.aggregate.side_effect = ValidationError(["keyword"])
        assert main([" ", "-c", "us", "-l", "en"]) == 2

    def test_bad_client(self, mocks):
        build, _ = mocks
        build.side_effect = ValueError("unsupported suggest client: 'x'")
        assert main(["pizza", "-c", "us", "-l", "en", "--client", "x"]) == 2

    def test_missing_country(self, mocks):
        with pytest.raises(SystemExit):
            main(["pizza", "-l", "en"])
