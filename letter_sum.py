#!/usr/bin/env python3
"""
letter_sum.py

Letter value sums over a word list, plus the puzzle questions built on top of them.
Every lowercase letter gets a value from 1 (a) to 26 (z); a word's letter sum is the
sum of its letters' values.

Queries:
- bonus1: first word with a given letter sum (319 by default)
- bonus2: how many words have an odd letter sum
- bonus3: most common letter sum and how many words share it
- bonus4: same-sum pairs whose lengths differ by 11
- bonus5: same-sum pairs with no letters in common
- bonus6: greedy longest list where every word has a different length AND a different sum
          (slow on the full list, like really slow)

Word list:
- Defaults to enable1.txt in the current directory (or next to this script).
  The file is split on newlines as-is, so a trailing newline gives an empty "word".

Usage:
  python3 letter_sum.py excellent microspectrophotometries
  python3 letter_sum.py --words enable1.txt --bonus 1 --bonus 3
"""

import argparse
import hashlib
import json
import os
import pathlib
import sys
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import tqdm


DEFAULT_WORD_LIST = "enable1.txt"
DEFAULT_TARGET_SUM = 319
DEFAULT_LENGTH_GAP = 11
# The puzzle asks for disjoint-letter pairs with a sum larger than this one
PUZZLE_MIN_DISJOINT_SUM = 188
DEFAULT_CACHE_PATH = "~/.cache/letter-sum/longest_chain.json"

WordPair = Tuple[str, str]
SumIndex = Dict[int, List[str]]
# read-only view of an index, as handed out by WordValueAnalyzer
FrozenSumIndex = Mapping[int, Tuple[str, ...]]

_ORD_A = ord("a")


@dataclass(frozen=True)
class SumCount:
    sum: int
    count: int


# letter_sum maps a word to the sum of its letter values (a=1 ... z=26)
def letter_sum(word: str) -> int:
    """
    Input is normalized (lowercase, stripped) before scoring.
    Non-letters are not filtered; the word list is expected to be clean.
    """
    word = word.lower().strip()
    return sum(ord(ch) - _ORD_A + 1 for ch in word)


# build_sum_index groups words by letter sum, keeping list order inside each bucket
def build_sum_index(words: Iterable[str]) -> SumIndex:
    index: SumIndex = {}
    for w in words:
        index.setdefault(letter_sum(w), []).append(w)
    return index


# bonus1: first word (in list order) with the target letter sum, None if there isn't one
def find_by_sum(words: Iterable[str], target: int = DEFAULT_TARGET_SUM) -> Optional[str]:
    for w in words:
        if letter_sum(w) == target:
            return w
    return None


# bonus2: number of words with an odd letter sum
def count_odd_sums(words: Iterable[str]) -> int:
    return sum(1 for w in words if letter_sum(w) % 2 != 0)


def count_even_sums(words: Iterable[str]) -> int:
    return sum(1 for w in words if letter_sum(w) % 2 == 0)


# bonus3: the biggest bucket
def most_common_sum(index: Mapping[int, Sequence[str]]) -> SumCount:
    """
    Ties go to the bucket seen last, same as a stable ascending sort by size
    followed by taking the final element.
    """
    best: Optional[SumCount] = None
    for s, bucket in index.items():
        if best is None or len(bucket) >= best.count:
            best = SumCount(sum=s, count=len(bucket))
    return best if best is not None else SumCount(sum=0, count=0)


# bonus4: ordered same-sum pairs where the first word is `gap` letters longer
def length_gap_pairs(index: Mapping[int, Sequence[str]], gap: int = DEFAULT_LENGTH_GAP) -> List[WordPair]:
    pairs: List[WordPair] = []
    for bucket in index.values():
        for w1 in bucket:
            for w2 in bucket:
                if len(w1) - len(w2) == gap:
                    pairs.append((w1, w2))
    return pairs


# bonus5: ordered same-sum pairs with no letters in common
def disjoint_letter_pairs(index: Mapping[int, Sequence[str]], min_sum: Optional[int] = None) -> List[WordPair]:
    """
    Both orders of a pair are returned. A word only pairs with itself when it has
    no letters at all (the empty word).
    min_sum: only look at buckets whose sum is strictly larger than this.
    """
    pairs: List[WordPair] = []
    for s, bucket in index.items():
        if min_sum is not None and s <= min_sum:
            continue
        letter_sets = [set(w) for w in bucket]
        for w1, set1 in zip(bucket, letter_sets):
            for w2, set2 in zip(bucket, letter_sets):
                if set1.isdisjoint(set2):
                    pairs.append((w1, w2))
    return pairs


# bonus6: greedy longest list with pairwise distinct lengths and letter sums
def longest_distinct_chain(words: Sequence[str], show_progress: bool = False) -> List[str]:
    """
    Scan the words left to right. Each word is appended to every candidate list
    where no member shares its length or its letter sum, then starts a new list
    of its own. The longest list wins; on ties the last one generated wins.

    This is a heuristic, not an exhaustive search, and it is quadratic in the
    number of words.
    """
    # (members, lengths used, sums used) per candidate list
    lists: List[Tuple[List[str], Set[int], Set[int]]] = []

    iterator = tqdm.tqdm(words, desc="Building chains", unit="word") if show_progress else words
    for w in iterator:
        n = len(w)
        s = letter_sum(w)
        for members, lengths, sums in lists:
            if n not in lengths and s not in sums:
                members.append(w)
                lengths.add(n)
                sums.add(s)
        lists.append(([w], {n}, {s}))

    best: List[str] = []
    for members, _, _ in lists:
        if len(members) >= len(best):
            best = members
    return best


# load_words_from_file reads a word list, one word per line, without any filtering
def load_words_from_file(path: str) -> Tuple[str, ...]:
    # newline="" keeps any \r from CRLF files, like a plain split on "\n"
    with open(path, "r", encoding="utf-8", newline="") as f:
        return tuple(f.read().split("\n"))


# default_word_source finds enable1.txt in the working directory or next to this script
def default_word_source() -> Optional[str]:
    script_dir = pathlib.Path(__file__).resolve().parent
    for candidate in (pathlib.Path(DEFAULT_WORD_LIST), script_dir / DEFAULT_WORD_LIST):
        if candidate.is_file():
            return str(candidate)
    return None


# load_word_list is the process-wide word list: read once per path, then reused
@lru_cache(maxsize=8)
def load_word_list(path: Optional[str] = None) -> Tuple[str, ...]:
    if path is None:
        path = default_word_source()
        if path is None:
            raise FileNotFoundError(f"No word list found. Put {DEFAULT_WORD_LIST} next to this script or pass a path.")
    return load_words_from_file(path)


# analyzer class tying the queries to one immutable word list
class WordValueAnalyzer:
    _CHAIN_CACHE_FORMAT_VERSION = 1

    def __init__(self, words: Iterable[str], cache_path: Optional[str] = None):
        self.words: Tuple[str, ...] = tuple(words)
        # words never change, so the index is built at most once
        self._sum_index: Optional[FrozenSumIndex] = None
        self._chain_cache_path = pathlib.Path(cache_path).expanduser() if cache_path else None

    def letter_sum(self, word: str) -> int:
        return letter_sum(word)

    @property
    def sum_index(self) -> FrozenSumIndex:
        if self._sum_index is None:
            index = build_sum_index(self.words)
            self._sum_index = MappingProxyType({s: tuple(bucket) for s, bucket in index.items()})
        return self._sum_index

    def bonus1(self, target: int = DEFAULT_TARGET_SUM) -> Optional[str]:
        return find_by_sum(self.words, target)

    def bonus2(self) -> int:
        return count_odd_sums(self.words)

    def even_count(self) -> int:
        return count_even_sums(self.words)

    def bonus3(self) -> SumCount:
        return most_common_sum(self.sum_index)

    def bonus4(self, gap: int = DEFAULT_LENGTH_GAP) -> List[WordPair]:
        return length_gap_pairs(self.sum_index, gap)

    def bonus5(self, min_sum: Optional[int] = None) -> List[WordPair]:
        return disjoint_letter_pairs(self.sum_index, min_sum)

    def bonus6(self, show_progress: bool = False) -> List[str]:
        if self._chain_cache_path is None:
            return longest_distinct_chain(self.words, show_progress=show_progress)

        cache_key = self._chain_cache_key()
        cached = self._load_chain(cache_key)
        if cached is not None:
            return cached

        chain = longest_distinct_chain(self.words, show_progress=show_progress)
        self._save_chain(cache_key, chain)
        return chain

    # hash the word list so a changed list never hits a stale cache entry
    def _chain_cache_key(self) -> str:
        payload = "\n".join(self.words).encode("utf-8")
        return f"v{self._CHAIN_CACHE_FORMAT_VERSION}|words={hashlib.sha256(payload).hexdigest()}"

    # load a cached bonus6 result if available and valid, else return None
    def _load_chain(self, cache_key: str) -> Optional[List[str]]:
        try:
            with open(self._chain_cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None
        entry = data.get(cache_key)
        if not isinstance(entry, dict):
            return None
        chain = entry.get("chain")
        if not isinstance(chain, list) or not all(isinstance(w, str) for w in chain):
            return None
        return chain

    def _save_chain(self, cache_key: str, chain: List[str]) -> None:
        try:
            existing: dict = {}
            try:
                with open(self._chain_cache_path, "r", encoding="utf-8") as f:
                    existing = json.load(f)
                    if not isinstance(existing, dict):
                        existing = {}
            except (OSError, json.JSONDecodeError):
                existing = {}

            existing[cache_key] = {
                "format_version": self._CHAIN_CACHE_FORMAT_VERSION,
                "chain": chain,
            }

            self._chain_cache_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = str(self._chain_cache_path) + ".tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(existing, f, ensure_ascii=False, separators=(",", ":"))
            os.replace(tmp_path, self._chain_cache_path)
        except OSError:
            # cache is an optimization, if it fails, skip
            return


def _print_answer(analyzer: WordValueAnalyzer, bonus: int, show_progress: bool) -> None:
    if bonus == 1:
        word = analyzer.bonus1()
        print(f"bonus1: {word if word is not None else '(no word)'}")
    elif bonus == 2:
        print(f"bonus2: {analyzer.bonus2()} words with an odd letter sum")
    elif bonus == 3:
        sc = analyzer.bonus3()
        print(f"bonus3: sum {sc.sum} is shared by {sc.count} words")
    elif bonus == 4:
        pairs = analyzer.bonus4()
        print(f"bonus4: {len(pairs)} pairs")
        for w1, w2 in pairs:
            print(f"  {w1}  |  {w2}  ({letter_sum(w1)})")
    elif bonus == 5:
        pairs = analyzer.bonus5(min_sum=PUZZLE_MIN_DISJOINT_SUM)
        print(f"bonus5: {len(pairs)} pairs above {PUZZLE_MIN_DISJOINT_SUM}")
        for w1, w2 in pairs:
            print(f"  {w1}  |  {w2}  ({letter_sum(w1)})")
    else:
        chain = analyzer.bonus6(show_progress=show_progress)
        print(f"bonus6: {len(chain)} words")
        print("  " + " ".join(chain))


def cli(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Letter value sums and the letter-sum puzzle questions.")
    ap.add_argument("word", nargs="*", help="Words to score.")
    ap.add_argument("--words", type=str, default=None,
                    help=f"Word list, one word per line. Defaults to {DEFAULT_WORD_LIST} if present.")
    ap.add_argument("--bonus", type=int, action="append", choices=range(1, 7), default=[],
                    help="Answer a puzzle question (1-6). Repeatable.")
    ap.add_argument("--cache-path", type=str, default=None,
                    help=f"Cache the bonus6 result here (e.g. {DEFAULT_CACHE_PATH}).")
    ap.add_argument("--no-progress", action="store_true", help="Disable progress bars.")
    args = ap.parse_args(argv)

    for w in args.word:
        print(f"{w}: {letter_sum(w)}")

    if not args.bonus:
        return 0

    try:
        words = load_word_list(args.words)
    except OSError as e:
        print(f"Could not load word list: {e}", file=sys.stderr)
        return 1

    analyzer = WordValueAnalyzer(words, cache_path=args.cache_path)
    for bonus in args.bonus:
        _print_answer(analyzer, bonus, show_progress=not args.no_progress)
    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
