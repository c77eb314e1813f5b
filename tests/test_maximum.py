from bee import Stats, WordIndex, solve
from maximum import (FIELDS, Maxima, Record, count_alphabets, enumerate_alphabets, search_maxima,
                     search_partition)

SEARCH_LETTERS = "aeilnrst"
SEARCH_WORDS = [
    "stainer", "retains", "nastier", "rain", "train", "itinerants", "retain",
    "listen", "silent", "enlist", "tinsel", "inlets", "saltier", "retinal",
    "latrines", "ratlines", "entrails", "lists", "tail", "tails", "snail",
    "nails", "slain", "lair", "liar", "rail", "trail", "trials", "stall",
    "tall", "tell", "sell", "tens", "nets", "nest", "rents", "stern",
    "terns", "tern", "rent", "sent", "tent", "lent",
]


def expected_records(dictionary, letters):
    maxima = Maxima()
    records = []
    for alphabet in enumerate_alphabets(letters):
        records.extend(maxima.consider(solve(dictionary, alphabet).stats, alphabet))
    return maxima, records


def test_count_alphabets() -> None:
    assert count_alphabets() == 4_604_600
    assert count_alphabets("abcdefgh") == 56
    assert count_alphabets("abcdef") == 0


def test_enumerate_all_alphabets() -> None:
    assert sum(1 for _ in enumerate_alphabets()) == 4_604_600


def test_enumerate_alphabets_canonical() -> None:
    alphabets = list(enumerate_alphabets("ihgfedcba"))

    assert len(alphabets) == 9 * 28
    assert len(set(alphabets)) == len(alphabets)
    assert len({(a[0], frozenset(a[1:])) for a in alphabets}) == len(alphabets)
    for alphabet in alphabets:
        assert len(set(alphabet)) == 7
        assert list(alphabet[1:]) == sorted(alphabet[1:])


def test_enumerate_alphabets_by_center() -> None:
    alphabets = list(enumerate_alphabets("abcdefgh", centers="a"))

    assert alphabets[0] == "abcdefg"
    assert alphabets[-1] == "acdefgh"
    assert len(alphabets) == 7
    assert all(a[0] == "a" for a in alphabets)


def test_maxima_reports_every_broken_record() -> None:
    maxima = Maxima()

    records = maxima.consider(Stats(words=5, pangrams=1, perfect=0, score=12), "abcdefg")
    assert [r.field for r in records] == ["pangrams", "words", "score"]
    assert records[0] == Record("pangrams", "abcdefg", Stats(5, 1, 0, 12))
    assert maxima == Maxima(pangrams=1, perfect=0, words=5, ratio=0, score=12)

    records = maxima.consider(Stats(words=10, pangrams=1, perfect=1, score=12), "bcdefgh")
    assert [r.field for r in records] == ["perfect", "words", "ratio"]
    assert maxima == Maxima(pangrams=1, perfect=1, words=10, ratio=10, score=12)


def test_maxima_ratio_needs_more_than_nine_words() -> None:
    maxima = Maxima()

    records = maxima.consider(Stats(words=9, pangrams=9, perfect=0, score=100), "abcdefg")
    assert "ratio" not in [r.field for r in records]
    assert maxima.ratio == 0

    records = maxima.consider(Stats(words=10, pangrams=9, perfect=0, score=100), "abcdefg")
    assert [r.field for r in records] == ["words", "ratio"]
    assert maxima.ratio == 90


def test_maxima_never_decreases() -> None:
    maxima = Maxima(pangrams=3, perfect=2, words=50, ratio=20, score=200)

    assert maxima.consider(Stats(words=40, pangrams=3, perfect=1, score=150), "abcdefg") == []
    assert maxima == Maxima(pangrams=3, perfect=2, words=50, ratio=20, score=200)


def test_search_maxima_matches_brute_force() -> None:
    maxima, records = expected_records(SEARCH_WORDS, SEARCH_LETTERS)
    events = []
    progress = []

    result = search_maxima(SEARCH_WORDS, lambda *event: events.append(Record(*event)),
                           letters=SEARCH_LETTERS, on_progress=lambda done, total: progress.append((done, total)))

    assert result == maxima
    assert events == records
    assert progress == [(i, 8) for i in range(1, 9)]
    assert {r.field for r in events} == set(FIELDS)


def test_search_maxima_parallel_matches_sequential() -> None:
    sequential = []
    parallel = []

    first = search_maxima(SEARCH_WORDS, lambda *event: sequential.append(event), letters=SEARCH_LETTERS)
    second = search_maxima(SEARCH_WORDS, lambda *event: parallel.append(event), letters=SEARCH_LETTERS, workers=2)

    assert first == second
    assert parallel == sequential


def test_search_maxima_empty_dictionary() -> None:
    events = []
    assert search_maxima([], lambda *event: events.append(event), letters="abcdefgh") == Maxima()
    assert events == []


def test_search_maxima_too_few_letters() -> None:
    progress = []
    assert search_maxima(SEARCH_WORDS, letters="aeinrs", on_progress=lambda *p: progress.append(p)) == Maxima()
    assert progress == []


def test_search_partition_returns_local_records() -> None:
    records = search_partition(WordIndex(SEARCH_WORDS), "r", SEARCH_LETTERS)

    assert records
    assert all(r.alphabet[0] == "r" for r in records)
    assert records[0].alphabet == "raeilns"
    assert "words" in [r.field for r in records if r.alphabet == "raeilns"]


def test_search_maxima_ignores_punctuated_words() -> None:
    dictionary = ["don't", "abcdefg", "abcd"]
    expected, records = expected_records(dictionary, "abcdefgh")
    events = []

    assert search_maxima(dictionary, lambda *event: events.append(Record(*event)), letters="abcdefgh") == expected
    assert events == records
