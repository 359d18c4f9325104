"""
pairwise.py

All-against-all comparison of the records of a sequence archive.
"""

from collections import deque
from concurrent.futures import ProcessPoolExecutor
from dataclasses import asdict, dataclass
from itertools import combinations, islice
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union
from tqdm.auto import tqdm

from compseq.alignment import AlignmentMode, Aligner, ScoringModel, identity, similarity
from compseq.utils.log import get_logger

Record = Tuple[str, str]

# Index pairs handed to a worker process at once
CHUNK_SIZE = 64
# Chunks queued per worker ahead of the one being consumed
CHUNKS_IN_FLIGHT_PER_WORKER = 4

# (records, mode, scoring), set once in every worker process
_worker_context = None


@dataclass(frozen=True)
class PairwiseResult:
    id_x: str
    id_y: str
    identity: int
    similarity: int
    score: int
    mode: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self):
        return (
            f"Alignment between {self.id_x} and {self.id_y}: "
            f"identity {self.identity}%, similarity {self.similarity}%."
        )


def compare_pair(
    record_x: Record,
    record_y: Record,
    mode: Union[str, AlignmentMode] = AlignmentMode.GLOBAL,
    scoring: Optional[ScoringModel] = None,
) -> PairwiseResult:
    """
    Align two (identifier, residues) records and summarize the alignment.

    Args:
        record_x: The first record.
        record_y: The second record.
        mode: 'global' or 'local'.
        scoring: The scoring model (default: BLOSUM62, gap open -5, gap extend -1).

    Returns:
        PairwiseResult: identifiers, identity and similarity percentages and
            the raw alignment score.
    """
    aligner = Aligner(scoring)
    id_x, x = record_x
    id_y, y = record_y

    alignment = aligner.align(x, y, mode)
    return PairwiseResult(
        id_x=id_x,
        id_y=id_y,
        identity=identity(alignment),
        similarity=similarity(alignment, x, y, aligner.scoring),
        score=alignment.score,
        mode=alignment.mode,
    )


def _init_worker(records: List[Record], mode: AlignmentMode, scoring: ScoringModel):
    # Records and scoring model are sent once per worker, not once per pair
    global _worker_context
    _worker_context = (records, mode, scoring)


def _compare_chunk(index_pairs: List[Tuple[int, int]]) -> List[PairwiseResult]:
    records, mode, scoring = _worker_context
    return [compare_pair(records[i], records[j], mode, scoring) for i, j in index_pairs]


def _chunked(pairs: Iterable[Tuple[int, int]], size: int) -> Iterator[List[Tuple[int, int]]]:
    pairs = iter(pairs)
    while True:
        chunk = list(islice(pairs, size))
        if not chunk:
            return
        yield chunk


def iter_all_pairs(
    records: Sequence[Record],
    mode: Union[str, AlignmentMode] = AlignmentMode.GLOBAL,
    scoring: Optional[ScoringModel] = None,
    num_workers: int = 1,
    progress: bool = False,
    chunksize: int = CHUNK_SIZE,
) -> Iterator[PairwiseResult]:
    """
    Compare every unordered pair of records, yielding results as they are ready.

    Pairs (i, j) with i < j are visited lazily in archive order and results are
    yielded in that order, whatever the number of workers. With several
    workers only a bounded number of chunks of index pairs is queued at any
    time, so memory does not grow with the number of pairs.

    Args:
        records: (identifier, residues) pairs, e.g. from `read_fasta`.
        mode: 'global' or 'local'.
        scoring: The scoring model (default: BLOSUM62, gap open -5, gap extend -1).
        num_workers: Number of worker processes. 1 runs everything in this process.
        progress: If True, show a tqdm progress bar.
        chunksize: Number of pairs sent to a worker at once.

    Returns:
        Iterator[PairwiseResult]: One result per pair, n * (n - 1) / 2 in total.

    Raises:
        InvalidMode: If `mode` is not recognized, when called (before any alignment).
        ValueError: If `num_workers` or `chunksize` is smaller than 1, when called.
    """
    mode = AlignmentMode.parse(mode)
    if num_workers < 1:
        raise ValueError(f"num_workers must be at least 1, got {num_workers}")
    if chunksize < 1:
        raise ValueError(f"chunksize must be at least 1, got {chunksize}")
    if scoring is None:
        scoring = ScoringModel.blosum62()

    return _generate_results(list(records), mode, scoring, num_workers, progress, chunksize)


def _generate_results(
    records: List[Record],
    mode: AlignmentMode,
    scoring: ScoringModel,
    num_workers: int,
    progress: bool,
    chunksize: int,
) -> Iterator[PairwiseResult]:
    logger = get_logger(__name__)

    num_pairs = len(records) * (len(records) - 1) // 2
    logger.debug(
        f"Comparing {num_pairs} pairs of {len(records)} records "
        f"({mode.value} mode, {num_workers} worker(s))"
    )

    with tqdm(total=num_pairs, desc="Aligning", disable=not progress) as pbar:
        if num_workers == 1 or num_pairs < 2:
            for record_x, record_y in combinations(records, 2):
                yield compare_pair(record_x, record_y, mode, scoring)
                pbar.update(1)
        else:
            chunks = _chunked(combinations(range(len(records)), 2), chunksize)
            with ProcessPoolExecutor(
                max_workers=num_workers,
                initializer=_init_worker,
                initargs=(records, mode, scoring),
            ) as executor:
                # Futures complete in any order, they are consumed in submission order
                pending = deque(
                    executor.submit(_compare_chunk, chunk)
                    for chunk in islice(chunks, num_workers * CHUNKS_IN_FLIGHT_PER_WORKER)
                )
                while pending:
                    results = pending.popleft().result()
                    next_chunk = next(chunks, None)
                    if next_chunk is not None:
                        pending.append(executor.submit(_compare_chunk, next_chunk))
                    yield from results
                    pbar.update(len(results))

    logger.debug(f"Finished {num_pairs} comparisons")


def compare_all_pairs(
    records: Sequence[Record],
    mode: Union[str, AlignmentMode] = AlignmentMode.GLOBAL,
    scoring: Optional[ScoringModel] = None,
    num_workers: int = 1,
    progress: bool = False,
) -> List[PairwiseResult]:
    """
    Compare every unordered pair of records and return all results at once,
    in archive order. See `iter_all_pairs` for the arguments.

    Raises:
        InvalidMode: If `mode` is not recognized (before any alignment is run).
        ValueError: If `num_workers` is smaller than 1.
    """
    return list(
        iter_all_pairs(
            records, mode=mode, scoring=scoring, num_workers=num_workers, progress=progress
        )
    )
