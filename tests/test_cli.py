import json
import logging
from decimal import Decimal

import pyarrow.parquet as pq
import pytest
from click.testing import CliRunner

from govdecode.cli import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def proposal_file(tmp_path, addrs, calldata):
    path = tmp_path / "proposal.json"
    path.write_text(
        json.dumps(
            {
                "proposalId": "0x01",
                "targets": [addrs.stablecoin, addrs.recipient, addrs.drop_factory],
                "values": ["0", "2000000000000000000", "0"],
                "calldatas": [calldata.erc20_transfer(addrs.recipient, 1_500_000), "0x", calldata.create_edition()],
                "signatures": ["", "", ""],
            }
        )
    )
    return path


def registry_args(addrs) -> list[str]:
    return ["--stablecoin", addrs.stablecoin, "--drop-factory", addrs.drop_factory]


def test_classify_json(runner, proposal_file, addrs):
    result = runner.invoke(cli, ["classify", str(proposal_file), "--json", "--eth-price", "3000", *registry_args(addrs)])
    assert result.exit_code == 0, result.output
    out = json.loads(result.output)
    assert [tx["kind"] for tx in out["transactions"]] == ["send-stablecoin", "send-native", "create-drop"]
    assert out["totals"]["totalStablecoinMinorUnits"] == "1500000"
    assert out["totals"]["totalNativeWei"] == "2000000000000000000"
    assert Decimal(out["requestedUsd"]) == Decimal("6001.5")


def test_classify_without_registry_treats_everything_as_unknown(runner, proposal_file):
    result = runner.invoke(cli, ["classify", str(proposal_file), "--json"], env={})
    assert result.exit_code == 0, result.output
    kinds = [tx["kind"] for tx in json.loads(result.output)["transactions"]]
    assert kinds == ["send-erc20", "send-native", "custom"]


def test_classify_registry_from_env_and_file(runner, proposal_file, tmp_path, addrs):
    registry = tmp_path / "registry.json"
    registry.write_text(json.dumps({"stablecoinAddress": addrs.stablecoin}))
    result = runner.invoke(
        cli,
        ["classify", str(proposal_file), "--json", "--registry", str(registry)],
        env={"GOVDECODE_DROP_FACTORY": addrs.drop_factory},
    )
    assert result.exit_code == 0, result.output
    kinds = [tx["kind"] for tx in json.loads(result.output)["transactions"]]
    assert kinds == ["send-stablecoin", "send-native", "create-drop"]


def test_classify_table(runner, proposal_file, addrs):
    result = runner.invoke(cli, ["classify", str(proposal_file), "--explain", *registry_args(addrs)])
    assert result.exit_code == 0, result.output
    assert "Proposal transactions" in result.output
    assert "totals" in result.output


def test_classify_parquet(runner, proposal_file, tmp_path, addrs):
    out = tmp_path / "out.parquet"
    result = runner.invoke(cli, ["classify", str(proposal_file), "--json", "--parquet", str(out), *registry_args(addrs)])
    assert result.exit_code == 0, result.output
    assert pq.read_table(out).num_rows == 3


def test_classify_length_mismatch(runner, tmp_path, addrs):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"targets": [addrs.recipient] * 5, "values": ["1"] * 4, "calldatas": ["0x"] * 5}))
    result = runner.invoke(cli, ["classify", str(path)])
    assert result.exit_code == 1
    assert "differ in length" in result.output


def test_classify_invalid_json(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    result = runner.invoke(cli, ["classify", str(path)])
    assert result.exit_code == 1
    assert "invalid JSON" in result.output


def test_classify_bad_registry_address(runner, proposal_file):
    result = runner.invoke(cli, ["classify", str(proposal_file), "--stablecoin", "0x1234"])
    assert result.exit_code == 1
    assert "stablecoin" in result.output


def test_droposals_json(runner, tmp_path, addrs, calldata):
    path = tmp_path / "proposals.json"
    path.write_text(
        json.dumps(
            {
                "proposals": [
                    {
                        "proposalId": "0x01",
                        "proposalNumber": 7,
                        "targets": [addrs.drop_factory],
                        "values": ["0"],
                        "calldatas": [calldata.create_edition(name="Seven")],
                    },
                    {"proposalId": "0x02", "targets": [addrs.recipient], "values": ["1"], "calldatas": ["0x"]},
                ]
            }
        )
    )
    result = runner.invoke(cli, ["droposals", str(path), "--json", "--drop-factory", addrs.drop_factory])
    assert result.exit_code == 0, result.output
    (listing,) = json.loads(result.output)
    assert listing["proposal_id"] == "0x01"
    assert listing["title"] == "Proposal #7"
    assert listing["params"]["name"] == "Seven"


def test_droposals_rejects_non_list(runner, tmp_path):
    path = tmp_path / "proposals.json"
    path.write_text(json.dumps({"proposals": "nope"}))
    result = runner.invoke(cli, ["droposals", str(path)])
    assert result.exit_code == 1


def test_selectors(runner):
    result = runner.invoke(cli, ["selectors"])
    assert result.exit_code == 0, result.output
    assert "0xa9059cbb" in result.output
