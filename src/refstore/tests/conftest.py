import pytest

from refstore.core.records import ContigInfo, Range, ReferenceSequence


@pytest.fixture
def contigs():
    return [
        ContigInfo(name="chr1", pos_in_fasta=0, n_bases=300),
        ContigInfo(name="chr2", pos_in_fasta=1, n_bases=8),
    ]


@pytest.fixture
def seqs():
    return [
        ReferenceSequence(region=Range("chr1", 100, 200), bases="ACGT" * 25),
        ReferenceSequence(region=Range("chr2", 0, 8), bases="GGCCAATT"),
    ]


@pytest.fixture
def fasta_path(tmp_path):
    path = tmp_path / "ref.fa"
    path.write_text(">chr1 first chromosome\nACGTACGTAC\nGTNNACGT\n>chr2\nggccaatt\n")
    return path
