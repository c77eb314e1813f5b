"""
Spelling Bee Maximum Search

Tries every distinct 7-letter alphabet against the dictionary and keeps a
record of the best alphabet found for each statistic. Only one ordering of
the six outer letters is visited per center letter (ascending), which cuts
the search from 26 * 25!/19! permutations down to 26 * C(25, 6) = 4,604,600.
"""

import logging
import concurrent.futures
from dataclasses import dataclass
from itertools import combinations
from math import comb
from typing import Callable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from bee import ALPHABET_LEN, LETTERS, Stats, WordIndex

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================
FIELDS: Tuple[str, ...] = ("pangrams", "perfect", "words", "ratio", "score")
RATIO_MIN_WORDS: int = 9  # 1 pangram out of 2 words isn't fun

ImprovementCallback = Callable[[str, str, Stats], None]
ProgressCallback = Callable[[int, int], None]


class Record(NamedTuple):
    field: str
    alphabet: str
    stats: Stats


# =============================================================================
# Alphabet Enumeration
# =============================================================================
def enumerate_alphabets(letters: str = LETTERS, centers: Optional[str] = None) -> Iterator[str]:
    """
    Yields every alphabet of 7 distinct letters, center first.
    The outer six letters are always in ascending order, so each unordered
    set of outer letters appears exactly once per center.
    """
    letters = "".join(sorted(set(letters)))
    for center in (letters if centers is None else centers):
        outer = [c for c in letters if c != center]
        for rest in combinations(outer, ALPHABET_LEN - 1):
            yield center + "".join(rest)


def count_alphabets(letters: str = LETTERS) -> int:
    """Number of alphabets enumerate_alphabets(letters) yields."""
    n = len(set(letters))
    if n < ALPHABET_LEN:
        return 0
    return n * comb(n - 1, ALPHABET_LEN - 1)


# =============================================================================
# Maxima Class
# =============================================================================
@dataclass
class Maxima:
    """Best value seen so far for each statistic. Values only ever go up."""

    pangrams: int = 0
    perfect: int = 0
    words: int = 0
    ratio: int = 0
    score: int = 0

    def consider(self, stats: Stats, alphabet: str) -> List[Record]:
        """
        Updates every record the stats beat and returns one Record per improved field.
        Ratio records only count for solutions of more than RATIO_MIN_WORDS words.
        """
        return [Record(name, alphabet, stats) for name in FIELDS if self.consider_field(name, stats)]

    def consider_field(self, name: str, stats: Stats) -> bool:
        """Updates a single record if the stats beat it."""
        value = getattr(stats, name)
        if value <= getattr(self, name):
            return False
        if name == "ratio" and stats.words <= RATIO_MIN_WORDS:
            return False
        setattr(self, name, value)
        return True


# =============================================================================
# Search Functions
# =============================================================================
def search_partition(index: WordIndex, centers: str, letters: str = LETTERS) -> List[Record]:
    """
    Searches all alphabets with one of the given centers.
    Returns every local record in the order it was set.
    """
    maxima = Maxima()
    records: List[Record] = []
    for alphabet in enumerate_alphabets(letters, centers):
        records.extend(maxima.consider(index.stats(alphabet), alphabet))
    logger.debug(f"Partition {centers} done with {len(records)} records")
    return records


_worker_index: Optional[WordIndex] = None


def _init_worker(index: WordIndex) -> None:
    global _worker_index
    _worker_index = index


def _search_worker(center: str, letters: str) -> List[Record]:
    return search_partition(_worker_index, center, letters)


def search_maxima(dictionary: Sequence[str],
                  on_improvement: Optional[ImprovementCallback] = None,
                  letters: str = LETTERS,
                  workers: int = 1,
                  on_progress: Optional[ProgressCallback] = None) -> Maxima:
    """
    Finds the best alphabet for each statistic.

    The search is split by center letter. Each partition keeps its own maxima
    and the partitions are merged in center order, replaying their records
    against the overall maxima, so on_improvement sees the same events
    whether the partitions ran one after another or in worker processes.
    """
    letters = "".join(sorted(set(letters)))
    index = WordIndex(dictionary)
    maxima = Maxima()
    centers = letters if len(letters) >= ALPHABET_LEN else ""
    total = len(centers)
    logger.info(f"Searching {count_alphabets(letters)} alphabets over {total} partitions with {workers} worker(s)")

    def reduce_partition(done: int, records: List[Record]) -> None:
        for record in records:
            if maxima.consider_field(record.field, record.stats) and on_improvement is not None:
                on_improvement(*record)
        if on_progress is not None:
            on_progress(done, total)

    if workers <= 1:
        for done, center in enumerate(centers, start=1):
            reduce_partition(done, search_partition(index, center, letters))
        return maxima

    with concurrent.futures.ProcessPoolExecutor(max_workers=workers,
                                                initializer=_init_worker,
                                                initargs=(index,)) as executor:
        results = executor.map(_search_worker, centers, [letters] * len(centers))
        for done, records in enumerate(results, start=1):
            reduce_partition(done, records)
    return maxima
