from refstore.core.config import MissingSequencePolicy, ReaderConfig
from refstore.core.errors import InvalidArgumentError, ReaderClosedError, RefStoreError
from refstore.core.in_memory import InMemoryFastaReader
from refstore.core.records import ContigInfo, GenomeReferenceRecord, Range, ReferenceSequence

__all__ = [
    "ContigInfo",
    "GenomeReferenceRecord",
    "InMemoryFastaReader",
    "InvalidArgumentError",
    "MissingSequencePolicy",
    "Range",
    "ReaderClosedError",
    "ReaderConfig",
    "ReferenceSequence",
    "RefStoreError",
]

__version__ = "0.1.0"
