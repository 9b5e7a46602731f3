import pytest

from refstore.core.config import MissingSequencePolicy, ReaderConfig
from refstore.core.errors import ReaderClosedError
from refstore.core.in_memory import InMemoryFastaReader
from refstore.core.records import ContigInfo, GenomeReferenceRecord, Range, ReferenceSequence


def _full(name, bases):
    return ReferenceSequence(region=Range(name, 0, len(bases)), bases=bases)


def test_iteration_follows_contig_order():
    contigs = [ContigInfo(name="chr2", n_bases=2), ContigInfo(name="chr1", n_bases=3)]
    seqs = [_full("chr1", "AAA"), _full("chr2", "CC")]
    reader = InMemoryFastaReader.create(contigs, seqs)
    assert list(reader.iterate()) == [("chr2", "CC"), ("chr1", "AAA")]


def test_next_record_signals_end_repeatedly():
    reader = InMemoryFastaReader.create([ContigInfo(name="chr1", n_bases=2)], [_full("chr1", "AC")])
    it = reader.iterate()
    assert it.next_record() == GenomeReferenceRecord("chr1", "AC")
    assert it.next_record() is None
    assert it.next_record() is None


def test_traversal_stops_at_contig_without_sequence():
    contigs = [ContigInfo(name="chr1", n_bases=4), ContigInfo(name="chr2", n_bases=2)]
    reader = InMemoryFastaReader.create(contigs, [_full("chr2", "GT")])
    assert list(reader.iterate()) == []


def test_traversal_stops_midway():
    contigs = [ContigInfo(name=n, n_bases=1) for n in ("chr1", "chr2", "chr3")]
    reader = InMemoryFastaReader.create(contigs, [_full("chr1", "A"), _full("chr3", "T")])
    assert list(reader.iterate()) == [("chr1", "A")]


def test_skip_policy_continues_past_missing_contigs():
    contigs = [ContigInfo(name=n, n_bases=1) for n in ("chr1", "chr2", "chr3")]
    reader = InMemoryFastaReader.create(
        contigs,
        [_full("chr2", "G"), _full("chr3", "T")],
        ReaderConfig(missing_sequence=MissingSequencePolicy.skip),
    )
    assert list(reader.iterate()) == [("chr2", "G"), ("chr3", "T")]


def test_iterators_are_independent():
    contigs = [ContigInfo(name="chr1", n_bases=1), ContigInfo(name="chr2", n_bases=1)]
    reader = InMemoryFastaReader.create(contigs, [_full("chr1", "A"), _full("chr2", "C")])
    a = reader.iterate()
    b = reader.iterate()
    assert next(a).name == "chr1"
    assert next(a).name == "chr2"
    assert next(b).name == "chr1"


def test_iterator_is_not_restartable():
    reader = InMemoryFastaReader.create([ContigInfo(name="chr1", n_bases=1)], [_full("chr1", "A")])
    it = reader.iterate()
    assert len(list(it)) == 1
    assert list(it) == []
    assert len(list(reader.iterate())) == 1


def test_iterator_fails_after_reader_closed():
    reader = InMemoryFastaReader.create([ContigInfo(name="chr1", n_bases=1)], [_full("chr1", "A")])
    it = reader.iterate()
    assert it.is_alive()
    reader.close()
    assert not it.is_alive()
    with pytest.raises(ReaderClosedError, match="not alive"):
        it.next_record()


def test_released_iterator_fails():
    reader = InMemoryFastaReader.create([ContigInfo(name="chr1", n_bases=1)], [_full("chr1", "A")])
    with reader.iterate() as it:
        pass
    with pytest.raises(ReaderClosedError, match="released"):
        next(it)
