import json

import pyarrow.parquet as pq

from govdecode.core.models import Call, Erc721Transfer, selector_of
from govdecode.export import analysis_to_dict, to_jsonable, transactions_to_arrow_table, write_parquet
from govdecode.pipeline import analyze_proposal


def sample_analysis(config, addrs, calldata):
    return analyze_proposal(
        {
            "targets": [addrs.stablecoin, addrs.recipient, addrs.drop_factory, addrs.token],
            "values": ["0", "1000000000000000000", "0", "0"],
            "calldatas": [
                calldata.erc20_transfer(addrs.recipient, 2**200),
                "0x",
                calldata.create_edition(),
                "0x12",
            ],
        },
        config,
    )


def test_analysis_to_dict(config, addrs, calldata):
    out = analysis_to_dict(sample_analysis(config, addrs, calldata))
    stable, native, drop, custom = out["transactions"]

    assert stable["kind"] == "send-stablecoin"
    assert stable["decoded"] == {"to": addrs.recipient, "amount": str(2**200)}
    assert stable["rule"] == "erc20_selector"
    assert native["value"] == "1000000000000000000"
    assert native["rawCalldata"] == "0x"
    assert drop["decoded"]["sale_config"]["presale_merkle_root"] == "0x" + "00" * 32
    assert drop["decoded"]["edition_size"] == "100"
    assert custom["rawCalldata"] == "0x12"
    assert out["totals"] == {
        "totalNativeWei": "1000000000000000000",
        "totalStablecoinMinorUnits": str(2**200),
    }
    json.dumps(out)


def test_to_jsonable_strips_trailing_underscore(addrs):
    record = Erc721Transfer(from_=addrs.treasury, to=addrs.recipient, token_id=1, data=b"\x01")
    assert to_jsonable(record) == {"from": addrs.treasury, "to": addrs.recipient, "token_id": "1", "data": "0x01"}


def test_arrow_table(config, addrs, calldata):
    table = transactions_to_arrow_table(sample_analysis(config, addrs, calldata))
    assert table.num_rows == 4
    assert table.column("kind").to_pylist() == ["send-stablecoin", "send-native", "create-drop", "custom"]
    assert table.column("selector").to_pylist()[1] is None
    assert table.column("selector").to_pylist()[3] is None
    assert json.loads(table.column("decoded").to_pylist()[0])["amount"] == str(2**200)


def test_write_parquet(tmp_path, config, addrs, calldata):
    out = write_parquet(sample_analysis(config, addrs, calldata), tmp_path / "nested" / "proposal.parquet")
    assert out.is_file()
    table = pq.read_table(out)
    assert table.column("value_wei").to_pylist()[1] == "1000000000000000000"


def test_selector_column_matches_call_selector(config, addrs, calldata, as_bytes):
    analysis = sample_analysis(config, addrs, calldata)
    column = transactions_to_arrow_table(analysis).column("selector").to_pylist()
    assert column == [selector_of(tx.raw_calldata) for tx in analysis.transactions]
    assert column[0] == Call(target=addrs.stablecoin, value=0, calldata=as_bytes(calldata.erc20_transfer(addrs.recipient, 1))).selector
    assert column[0] == "0xa9059cbb"
