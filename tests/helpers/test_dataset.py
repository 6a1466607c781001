import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from id_allocator.helpers import Dataset, load_dataset, is_blank, cell_text, id_text
from id_allocator.helpers.dataset import infer_delim, infer_encoding

def test_is_blank():
    assert is_blank(None)
    assert is_blank(float("nan"))
    assert is_blank("  ")
    assert is_blank("N/A")
    assert not is_blank("0")
    assert not is_blank(0)

def test_cell_text_normalises_numbers():
    assert cell_text(2000000001.0) == "2000000001"
    assert cell_text(" Guntur ") == "Guntur"
    assert cell_text(None) == ""

def test_id_text_canonicalises_numeric_forms():
    assert id_text("2000000002.0") == "2000000002"
    assert id_text(" 2000000002.000 ") == "2000000002"
    assert id_text(2000000002.0) == "2000000002"
    assert id_text("2E+9") == "2000000000"
    assert id_text("2.5") == "2.5"
    assert id_text("2.5e0") == "2.5e0"
    assert id_text("WAP0001") == "WAP0001"
    assert id_text(None) == ""

def test_dataset_rows_are_immutable_tuples():
    ds = Dataset.from_rows([" District ", None], [["Guntur", 1], ["Krishna"]])
    assert ds.headers == ("District", "")
    assert ds.rows == (("Guntur", 1), ("Krishna",))
    assert ds.column(1) == [1, None]
    assert len(ds) == 2

def test_dataframe_round_trip():
    df = pd.DataFrame({"District": ["Guntur", None], "Ticket Number": ["2000000001", "2000000002"]})
    ds = Dataset.from_dataframe(df)
    assert ds.rows[1] == (None, "2000000002")
    out = ds.to_dataframe()
    assert list(out.columns) == ["District", "Ticket Number"]
    assert out.shape == (2, 2)

def test_infer_delim_csv(tmp_path):
    p = tmp_path / "x.csv"
    p.write_text("a,b,c\n1,2,3\n")
    assert infer_delim(p) == ","

def test_infer_delim_tsv(tmp_path):
    p = tmp_path / "x.tsv"
    p.write_text("a\tb\tc\n1\t2\t3\n")
    assert infer_delim(p) == "\t"

def test_infer_encoding_utf8(tmp_path):
    p = tmp_path / "x.csv"
    p.write_text("hello")
    enc = infer_encoding(p).get("encoding") or ""
    assert enc.lower() in {"utf-8", "ascii"}

def test_load_csv_keeps_ids_as_text(tmp_path):
    p = tmp_path / "ledger.csv"
    p.write_text("District,Ticket Number\nGuntur,2000000001\n,2000000002\n")
    ds = load_dataset(p)
    assert ds.headers == ("District", "Ticket Number")
    assert ds.rows == (("Guntur", "2000000001"), (None, "2000000002"))

def test_load_parquet(tmp_path):
    p = tmp_path / "ledger.parquet"
    pq.write_table(pa.table({"District": ["Guntur"], "Ticket Number": ["2000000001"]}), p)
    ds = load_dataset(p)
    assert ds.rows == (("Guntur", "2000000001"),)
