"""
Terminal and plot output for the Spelling Bee solver.
"""

import sys
import time
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Sequence, TextIO
import numpy as np
import matplotlib.pyplot as plt

from bee import ALPHABET_LEN, MIN_WORD_LEN, Solution, Stats, is_pangram
from maximum import FIELDS, Record

# =============================================================================
# Colours
# =============================================================================
BOLD = "\033[1m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
RESET = "\033[0m"

FIELD_COLOURS: Dict[str, str] = {
    "pangrams": RED,
    "perfect": GREEN,
    "words": "",
    "ratio": YELLOW,
    "score": BLUE,
}

FIELD_COLOURS_PLOT: Dict[str, str] = {
    "pangrams": "red",
    "perfect": "green",
    "words": "black",
    "ratio": "goldenrod",
    "score": "blue",
}


def colour(text: str, code: str) -> str:
    if not code:
        return text
    return f"{code}{text}{RESET}"


# =============================================================================
# Dashboard Class
# =============================================================================
class Dashboard:
    """Prints solutions, search records and search progress."""

    def __init__(self, out: TextIO = sys.stdout) -> None:
        self.out = out

    def print_solution(self, solution: Solution) -> None:
        """
        Prints the words of a solution with pangrams highlighted:
        perfect pangrams in green, other pangrams in red.
        """
        alphabet = solution.alphabet
        self.out.write("\n")
        for word in solution.words:
            if not is_pangram(word, alphabet):
                self.out.write(f"{word} ")
            elif len(word) == ALPHABET_LEN:
                self.out.write(colour(f"{word} ", BOLD + GREEN))
            else:
                self.out.write(colour(f"{word} ", BOLD + RED))

        self.out.write(f"\n\nWords: {solution.word_count} Score: {solution.score} "
                       f"Pangrams: {solution.pangrams} Perfect: {solution.perfect} "
                       f"Ratio: {solution.ratio}\n")
        self.out.flush()

    def print_record(self, field: str, alphabet: str, stats: Stats) -> None:
        """Prints a timestamped line for a new maximum."""
        self.out.write("\r{:<28} -- {:<8}{:>6}{:>4}{:>4}{:>6} ({:>3}) -- {}\n".format(
            datetime.now().isoformat(sep=" ", timespec="microseconds"),
            alphabet,
            stats.words, stats.pangrams, stats.perfect, stats.score, stats.ratio,
            colour(field, FIELD_COLOURS.get(field, ""))))
        self.out.flush()

    def progress_bar(self, current: int, total: int, start_time: float = None, bar_length: int = 25) -> None:
        """
        Displays a progress bar representing the search progress.
        """
        if total <= 0:
            return
        total_units = bar_length * 8
        filled_units = int((current / total) * total_units)
        bar = ""

        for _ in range(bar_length):
            if filled_units >= 8:
                bar += "█"
                filled_units -= 8
            else:
                partials = [" ", "▏", "▎", "▍", "▌", "▋", "▊", "▉"]
                bar += partials[filled_units]
                filled_units = 0

        fraction = current / total
        if current > 0 and start_time is not None:
            elapsed_time = time.perf_counter() - start_time
            time_remaining = elapsed_time / fraction - elapsed_time
            time_remaining_str = f"{time_remaining:.1f}s remaining"
        else:
            time_remaining_str = "Calculating..."

        self.out.write(f"\r[{bar}] {fraction*100:.1f}% | {time_remaining_str}")
        if current >= total:
            self.out.write("\n")
        self.out.flush()


# =============================================================================
# Plots
# =============================================================================
def plot_solution(solution: Solution) -> None:
    """Histogram of word lengths, pangrams stacked on top of other words."""
    lengths = np.array([len(w) for w in solution.words], dtype=int)
    pangram_mask = np.array([is_pangram(w, solution.alphabet) for w in solution.words], dtype=bool)
    top = int(lengths.max()) if lengths.size else MIN_WORD_LEN
    bins = np.arange(MIN_WORD_LEN, top + 1)

    plain = np.array([np.sum((lengths == n) & ~pangram_mask) for n in bins])
    pangrams = np.array([np.sum((lengths == n) & pangram_mask) for n in bins])

    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(bins, plain, color="skyblue", edgecolor="black", label="Words")
    ax.bar(bins, pangrams, bottom=plain, color="red", edgecolor="black", label="Pangrams")
    ax.set_title(f"Word Lengths for {solution.alphabet.upper()}")
    ax.set_xlabel("Word Length")
    ax.set_ylabel("Count")
    ax.legend()

    plt.tight_layout()
    plt.show()


def plot_records(records: Sequence[Record]) -> None:
    """Plot how each maximum grew over the course of a search."""
    series: Dict[str, List[int]] = defaultdict(list)
    for record in records:
        series[record.field].append(getattr(record.stats, record.field))

    fig, axs = plt.subplots(1, len(FIELDS), figsize=(4 * len(FIELDS), 4))
    for ax, name in zip(axs, FIELDS):
        values = series.get(name, [])
        ax.plot(range(1, len(values) + 1), values, marker="o", linestyle="-",
                color=FIELD_COLOURS_PLOT[name])
        ax.set_title(f"Maximum {name}")
        ax.set_xlabel("Record Number")
        ax.set_ylabel(name.capitalize())

    plt.tight_layout()
    plt.show()
