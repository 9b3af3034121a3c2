import csv

from treeedb.consumer import SyntaxNode
from treeedb.narrow import NarrowCsvConsumer


def _read(path):
    with open(path, newline="", encoding="utf-8") as handle:
        return list(csv.reader(handle))


def test_creates_nested_directory(tmp_path):
    target = tmp_path / "a" / "b"
    with NarrowCsvConsumer(target):
        pass
    assert (target / "node_id.csv").is_file()


def test_writes_node_ids(tmp_path):
    with NarrowCsvConsumer(tmp_path) as fc:
        fc.node(SyntaxNode(id=11, kind="x"), b"")
        fc.node(SyntaxNode(id=12, kind="y"), b"")
    assert _read(tmp_path / "node_id.csv") == [["11", "11"], ["12", "12"]]


def test_field_and_child_write_nothing(tmp_path):
    a = SyntaxNode(id=1, kind="a")
    b = SyntaxNode(id=2, kind="b")
    with NarrowCsvConsumer(tmp_path) as fc:
        fc.field(a, "f", b)
        fc.child(a, b)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["node_id.csv"]
    assert _read(tmp_path / "node_id.csv") == []