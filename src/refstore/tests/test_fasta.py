import gzip
import io
import sys

import pytest

from refstore.core.errors import InvalidArgumentError
from refstore.core.fasta import iter_fasta_records, load_fasta
from refstore.core.records import Range


def test_iter_fasta_records(fasta_path):
    records = list(iter_fasta_records(str(fasta_path)))
    assert records == [
        ("chr1", "first chromosome", "ACGTACGTACGTNNACGT"),
        ("chr2", "", "GGCCAATT"),
    ]


def test_iter_fasta_records_gzip(tmp_path, fasta_path):
    gz = tmp_path / "ref.fa.gz"
    with gzip.open(gz, "wt") as f:
        f.write(fasta_path.read_text())
    assert [r[0] for r in iter_fasta_records(str(gz))] == ["chr1", "chr2"]


def test_load_fasta_caches_whole_records(fasta_path):
    reader = load_fasta(str(fasta_path))
    assert [(c.name, c.pos_in_fasta, c.n_bases) for c in reader.contigs] == [("chr1", 0, 18), ("chr2", 1, 8)]
    assert reader.contig("chr1").description == "first chromosome"
    assert reader.get_bases(Range("chr1", 12, 14)) == "NN"
    assert list(reader.iterate())[1] == ("chr2", "GGCCAATT")


def test_load_fasta_caches_regions_only(fasta_path):
    reader = load_fasta(str(fasta_path), regions=[Range("chr1", 4, 10)])
    assert reader.contig("chr1").n_bases == 18
    assert reader.cached_region("chr1") == Range("chr1", 4, 10)
    assert reader.get_bases(Range("chr1", 4, 8)) == "ACGT"
    with pytest.raises(InvalidArgumentError):
        reader.get_bases(Range("chr1", 0, 8))
    assert reader.cached_region("chr2") is None


def test_load_fasta_rejects_bad_regions(fasta_path):
    with pytest.raises(InvalidArgumentError, match="past the end"):
        load_fasta(str(fasta_path), regions=[Range("chr2", 0, 9)])
    with pytest.raises(InvalidArgumentError, match="not present"):
        load_fasta(str(fasta_path), regions=[Range("chr9", 0, 1)])
    with pytest.raises(InvalidArgumentError, match="one cached region"):
        load_fasta(str(fasta_path), regions=[Range("chr1", 0, 1), Range("chr1", 2, 3)])


def test_iter_fasta_records_stdin(monkeypatch, fasta_path):
    stdin = io.TextIOWrapper(io.BytesIO(fasta_path.read_bytes()))
    monkeypatch.setattr(sys, "stdin", stdin)
    reader = load_fasta("-")
    assert [c.name for c in reader.contigs] == ["chr1", "chr2"]
    assert reader.get_bases(Range("chr2", 0, 4)) == "GGCC"
