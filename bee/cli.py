import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional
from nltk.corpus import words

from bee import ALPHABET_LEN, LETTERS, MIN_WORD_LEN, solve
from maximum import Record, search_maxima
from dashboard import Dashboard, plot_records, plot_solution

logger = logging.getLogger(__name__)

DICT_FILENAME: str = "wordlist.txt"
DEFAULT_DICT: Path = Path(__file__).parent / DICT_FILENAME
PROMPT: str = "\nEnter 7 unique letters with the center letter first.\n> "
SEARCH_COMMAND: str = "maximum"
QUIT_COMMANDS = ("quit", "exit")


# =============================================================================
# Input Handling
# =============================================================================
def load_dictionary(path: Optional[str] = None, exclude: str = "") -> List[str]:
    """
    Loads the word list, one word per line, keeping lowercase ASCII words
    longer than 3 letters. Without a path, wordlist.txt beside this file is
    used if present, otherwise the nltk words corpus.
    """
    if path is None and DEFAULT_DICT.exists():
        path = str(DEFAULT_DICT)

    if path is not None:
        with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
            raw = [line.strip() for line in f]
        source = path
    else:
        try:
            raw = words.words()
        except LookupError as e:
            logger.error(f"nltk words corpus not found, run nltk.download('words'): {e}")
            raise
        source = "nltk words corpus"

    excluded = set(exclude.lower())
    dictionary = []
    for word in raw:
        word = word.lower()
        if len(word) < MIN_WORD_LEN or not (word.isascii() and word.isalpha()):
            continue
        if excluded.intersection(word):
            continue
        dictionary.append(word)
    dictionary = list(dict.fromkeys(dictionary))

    logger.info(f"Loaded dictionary from: {source}")
    logger.info(f"Dictionary has {len(raw)} words, filtered down to {len(dictionary)} words.")
    return dictionary


def parse_letters(text: str) -> str:
    """Validates puzzle input: 7 distinct letters, center letter first."""
    letters = text.strip().lower()
    if len(letters) != ALPHABET_LEN or not (letters.isascii() and letters.isalpha()):
        raise ValueError(f"Expected {ALPHABET_LEN} letters, got {text.strip()!r}")
    if len(set(letters)) != ALPHABET_LEN:
        raise ValueError(f"Letters must be unique, got {letters!r}")
    return letters


# =============================================================================
# Modes
# =============================================================================
def run_search(dictionary: List[str], dashboard: Dashboard, letters: str = LETTERS, workers: int = 1,
               visualize: bool = False) -> None:
    """Searches every alphabet, printing each new maximum as it is found."""
    records: List[Record] = []
    start_time = time.perf_counter()

    def on_improvement(field, alphabet, stats) -> None:
        records.append(Record(field, alphabet, stats))
        dashboard.print_record(field, alphabet, stats)

    dashboard.out.write("\n")
    maxima = search_maxima(dictionary, on_improvement, letters=letters, workers=workers,
                           on_progress=lambda done, total: dashboard.progress_bar(done, total, start_time))

    elapsed = time.perf_counter() - start_time
    dashboard.out.write(f"\nWords: {maxima.words} Pangrams: {maxima.pangrams} Perfect: {maxima.perfect} "
                        f"Score: {maxima.score} Ratio: {maxima.ratio} ({elapsed:.2f}s elapsed)\n")
    if visualize:
        plot_records(records)


def run_single(dictionary: List[str], letters: str, dashboard: Dashboard, visualize: bool = False) -> None:
    solution = solve(dictionary, letters)
    dashboard.print_solution(solution)
    if visualize:
        plot_solution(solution)


def manual(dictionary: List[str], dashboard: Dashboard, search_letters: str = LETTERS, workers: int = 1,
           visualize: bool = False, read: Callable[[str], str] = input) -> None:
    """Interactive loop: solve puzzles until EOF or quit; 'maximum' starts a search."""
    while True:
        try:
            text = read(PROMPT).strip().lower()
        except EOFError:
            break

        if text in QUIT_COMMANDS:
            break
        if text == SEARCH_COMMAND:
            run_search(dictionary, dashboard, search_letters, workers=workers, visualize=visualize)
            continue

        try:
            letters = parse_letters(text)
        except ValueError as e:
            dashboard.out.write(f"Invalid input: {e}\n")
            continue
        run_single(dictionary, letters, dashboard, visualize=visualize)


# =============================================================================
# Main Execution
# =============================================================================
def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for the Spelling Bee solver."""
    parser = argparse.ArgumentParser(description="Spelling Bee Solver CLI")

    # Mode selection
    parser.add_argument(
        "--mode", choices=["manual", "search"], default="manual",
        help="Solve puzzles interactively, or search every alphabet for maximum values."
    )
    parser.add_argument(
        "--letters", type=str, default=None,
        help="Solve a single puzzle (7 unique letters, center first) and exit."
    )

    # Dictionary
    parser.add_argument(
        "--dict", type=str, default=None,
        help=f"Word list file (default: {DICT_FILENAME} beside this script, else the nltk words corpus)."
    )
    parser.add_argument(
        "--exclude", type=str, default="",
        help="Drop dictionary words containing any of these letters."
    )

    # Search
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Worker processes for the maximum search."
    )
    parser.add_argument(
        "--search-letters", type=str, default=LETTERS,
        help="Letters the maximum search draws alphabets from (default: a-z)."
    )

    # Output
    parser.add_argument(
        "--visualize", action="store_true",
        help="Show plots after solving or searching."
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log progress information."
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    letters = None
    if args.letters is not None:
        try:
            letters = parse_letters(args.letters)
        except ValueError as e:
            parser.error(str(e))

    search_letters = args.search_letters.lower()
    if len(set(search_letters)) < ALPHABET_LEN or not (search_letters.isascii() and search_letters.isalpha()):
        parser.error(f"--search-letters needs at least {ALPHABET_LEN} distinct letters")

    try:
        dictionary = load_dictionary(args.dict, exclude=args.exclude)
    except (OSError, LookupError) as e:
        print(f"\nProblem opening the dictionary: {e}", file=sys.stderr)
        return 1
    if not dictionary:
        print("\nThe dictionary is empty after filtering.", file=sys.stderr)
        return 1

    dashboard = Dashboard(sys.stdout)
    if letters is not None:
        run_single(dictionary, letters, dashboard, visualize=args.visualize)
    elif args.mode == "search":
        run_search(dictionary, dashboard, search_letters, workers=args.workers, visualize=args.visualize)
    else:
        manual(dictionary, dashboard, search_letters, workers=args.workers, visualize=args.visualize)
    return 0


if __name__ == "__main__":
    sys.exit(main())
