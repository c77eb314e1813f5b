"""
Spelling Bee Solver

Finds every dictionary word that can be made from a 7-letter puzzle and
scores it with the NYT rules:
  - Words are at least 4 letters long.
  - Words must contain the center letter (the first letter of the alphabet).
  - Words may only use the 7 letters, any number of times.
  - A 4-letter word scores 1 point, longer words score their length.
  - Pangrams (words using all 7 letters) score a 7 point bonus.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple
import numpy as np

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================
LETTERS: str = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_LEN: int = 7
MIN_WORD_LEN: int = 4
PANGRAM_BONUS: int = 7
ORD_A: int = ord("a")


# =============================================================================
# Result Types
# =============================================================================
@dataclass(frozen=True)
class Stats:
    """Aggregate counters of a solution, without the word list."""

    words: int = 0
    pangrams: int = 0
    perfect: int = 0
    score: int = 0

    @property
    def ratio(self) -> int:
        """Pangrams as a whole percentage of words."""
        if self.words == 0:
            return 0
        return self.pangrams * 100 // self.words


@dataclass
class Solution:
    """All valid words for one alphabet, in dictionary order."""

    alphabet: str
    words: List[str] = field(default_factory=list)
    pangrams: int = 0
    perfect: int = 0
    score: int = 0

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def ratio(self) -> int:
        return self.stats.ratio

    @property
    def stats(self) -> Stats:
        return Stats(self.word_count, self.pangrams, self.perfect, self.score)


# =============================================================================
# Word Scoring
# =============================================================================
def is_valid(word: str, alphabet: str) -> bool:
    """
    Returns True if the word can be played on this alphabet:
    long enough, contains the center letter, and uses no other letters.
    """
    if len(word) < MIN_WORD_LEN or alphabet[0] not in word:
        return False
    return all(c in alphabet for c in word)


def is_pangram(word: str, alphabet: str) -> bool:
    """Returns True if the word contains every letter of the alphabet."""
    return all(c in word for c in alphabet)


def is_perfect(word: str, alphabet: str) -> bool:
    """A perfect pangram uses each letter exactly once."""
    return len(word) == ALPHABET_LEN and is_pangram(word, alphabet)


def base_score(word: str) -> int:
    return 1 if len(word) == MIN_WORD_LEN else len(word)


def score(word: str, alphabet: str) -> int:
    """Points for a word, including the pangram bonus."""
    points = base_score(word)
    if is_pangram(word, alphabet):
        points += PANGRAM_BONUS
    return points


# =============================================================================
# Solving
# =============================================================================
def solve(dictionary: Sequence[str], alphabet: str) -> Solution:
    """Scans the dictionary once and collects every valid word with its score."""
    solution = Solution(alphabet)
    for word in dictionary:
        if not is_valid(word, alphabet):
            continue
        solution.words.append(word)
        solution.score += base_score(word)
        if is_pangram(word, alphabet):
            solution.pangrams += 1
            solution.score += PANGRAM_BONUS
            if len(word) == ALPHABET_LEN:
                solution.perfect += 1
    return solution


solve_single = solve


def letter_mask(letters: str) -> int:
    """Bitmask of the distinct letters, bit 0 for 'a'."""
    mask = 0
    for c in letters:
        mask |= 1 << (ord(c) - ORD_A)
    return mask


# =============================================================================
# WordIndex Class
# =============================================================================
class WordIndex:
    """
    Groups dictionary words by their set of letters so an alphabet can be
    scored without scanning the whole dictionary.

    A word is valid for an alphabet exactly when its letter set is a subset
    of the alphabet that contains the center, so only the 2^6 subsets of the
    outer letters (each joined with the center) need to be looked up. A word
    is a pangram when its letter set equals the whole alphabet.
    """

    def __init__(self, dictionary: Sequence[str]) -> None:
        # mask -> (word count, base score total, 7-letter word count)
        self.groups: Dict[int, Tuple[int, int, int]] = {}

        playable = [w for w in dictionary
                    if len(w) >= MIN_WORD_LEN and w.isascii() and w.isalpha() and w.islower()
                    and len(set(w)) <= ALPHABET_LEN]
        if not playable:
            logger.info("Word index is empty")
            return

        masks = np.array([letter_mask(w) for w in playable], dtype=np.int64)
        lengths = np.array([len(w) for w in playable], dtype=np.int64)
        points = np.where(lengths == MIN_WORD_LEN, 1, lengths)

        unique, inverse = np.unique(masks, return_inverse=True)
        counts = np.bincount(inverse)
        totals = np.bincount(inverse, weights=points)
        sevens = np.bincount(inverse, weights=(lengths == ALPHABET_LEN).astype(np.int64))

        for mask, count, total, seven in zip(unique, counts, totals, sevens):
            self.groups[int(mask)] = (int(count), int(total), int(seven))

        logger.info(f"Indexed {len(playable)} words into {len(self.groups)} letter sets")

    def __len__(self) -> int:
        return len(self.groups)

    def stats(self, alphabet: str) -> Stats:
        """Same counters as solve(dictionary, alphabet).stats."""
        center = letter_mask(alphabet[0])
        outer = letter_mask(alphabet[1:]) & ~center
        groups = self.groups

        words = pangrams = perfect = points = 0
        subset = outer
        while True:
            entry = groups.get(subset | center)
            if entry is not None:
                count, total, sevens = entry
                words += count
                points += total
                if subset == outer:
                    pangrams += count
                    perfect += sevens
                    points += count * PANGRAM_BONUS
            if subset == 0:
                break
            subset = (subset - 1) & outer

        return Stats(words, pangrams, perfect, points)
