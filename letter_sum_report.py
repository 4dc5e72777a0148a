#!/usr/bin/env python3
"""letter_sum_report.py

Runs every letter-sum puzzle question from letter_sum.py against a word list and prints a summary.
Optionally writes the answers as JSON and a matplotlib histogram of letter sums to disk.

Examples:
  python3 letter_sum_report.py --words enable1.txt
  python3 letter_sum_report.py --longest-chain --cache-path ~/.cache/letter-sum/longest_chain.json
  python3 letter_sum_report.py --result-path report.json --plot sums.png

Notes:
- --longest-chain runs bonus6, which takes hours on enable1. Use --cache-path to run it once.
- Use --plot to require matplotlib.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

import letter_sum

LogFn = Callable[[str], None]


@dataclass(frozen=True)
class QueryReport:
    total_words: int
    target_sum: int
    word_for_target: Optional[str]
    odd_count: int
    even_count: int
    most_common: letter_sum.SumCount
    length_gap: int
    length_gap_pairs: List[letter_sum.WordPair]
    min_disjoint_sum: Optional[int]
    disjoint_pairs: List[letter_sum.WordPair]
    longest_chain: Optional[List[str]] = None


def _expand_path(p: str) -> Path:
    return Path(p).expanduser().resolve()


def _write_json(path: Path, payload: dict, *, log: Optional[LogFn] = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    tmp.replace(path)
    if log is not None:
        log(f"result: wrote {path}")


def build_report(
    analyzer: letter_sum.WordValueAnalyzer,
    *,
    target: int = letter_sum.DEFAULT_TARGET_SUM,
    gap: int = letter_sum.DEFAULT_LENGTH_GAP,
    min_sum: Optional[int] = None,
    longest_chain: bool = False,
    show_progress: bool = False,
    log: Optional[LogFn] = None,
) -> QueryReport:
    def _log(msg: str) -> None:
        if log is not None:
            log(msg)

    _log(f"bonus1: looking for sum {target}")
    word_for_target = analyzer.bonus1(target)
    _log("bonus2: counting parities")
    odd = analyzer.bonus2()
    even = analyzer.even_count()
    _log("bonus3: indexing by sum")
    most_common = analyzer.bonus3()
    _log(f"bonus4: pairs {gap} letters apart")
    gap_pairs = analyzer.bonus4(gap)
    _log("bonus5: disjoint letter pairs")
    disjoint = analyzer.bonus5(min_sum)

    chain = None
    if longest_chain:
        _log("bonus6: building chains (slow)")
        chain = analyzer.bonus6(show_progress=show_progress)

    return QueryReport(
        total_words=len(analyzer.words),
        target_sum=target,
        word_for_target=word_for_target,
        odd_count=odd,
        even_count=even,
        most_common=most_common,
        length_gap=gap,
        length_gap_pairs=gap_pairs,
        min_disjoint_sum=min_sum,
        disjoint_pairs=disjoint,
        longest_chain=chain,
    )


def summarize(report: QueryReport) -> str:
    lines: List[str] = []
    lines.append(f"Words: {report.total_words}")
    if report.word_for_target is not None:
        lines.append(f"Word with sum {report.target_sum}: {report.word_for_target}")
    else:
        lines.append(f"Word with sum {report.target_sum}: none")
    lines.append(f"Odd sums: {report.odd_count}")
    lines.append(f"Even sums: {report.even_count}")
    lines.append(f"Most common sum: {report.most_common.sum} ({report.most_common.count} words)")

    lines.append(f"Same-sum pairs {report.length_gap} letters apart: {len(report.length_gap_pairs)}")
    for w1, w2 in report.length_gap_pairs:
        lines.append(f"  {w1} / {w2} ({letter_sum.letter_sum(w1)})")

    above = f" above {report.min_disjoint_sum}" if report.min_disjoint_sum is not None else ""
    lines.append(f"Same-sum pairs with no common letters{above}: {len(report.disjoint_pairs)}")
    # the full list is huge without a floor; show a sample
    for w1, w2 in report.disjoint_pairs[:10]:
        lines.append(f"  {w1} / {w2} ({letter_sum.letter_sum(w1)})")

    if report.longest_chain is not None:
        lines.append(f"Longest distinct chain: {len(report.longest_chain)} words")
        if report.longest_chain:
            lines.append("  " + ", ".join(report.longest_chain))

    return "\n".join(lines)


def report_to_json(report: QueryReport) -> dict:
    payload = asdict(report)
    payload["length_gap_pairs"] = [list(p) for p in report.length_gap_pairs]
    payload["disjoint_pairs"] = [list(p) for p in report.disjoint_pairs]
    return payload


def plot_sum_histogram(*, index: Mapping[int, Sequence[str]], out_path: str) -> None:
    # Import matplotlib only if plotting is requested.
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt  # noqa: E402

    xs = sorted(index)
    ys = [len(index[s]) for s in xs]

    fig, ax = plt.subplots(figsize=(10, 4.5))
    ax.bar(xs, ys, label="Words", color="C0")

    if xs:
        top = letter_sum.most_common_sum(index)
        ax.bar([top.sum], [top.count], label="Most common", color="C3")
        ax.text(
            0.99,
            0.95,
            f"Most common: {top.sum} ({top.count} words)",
            transform=ax.transAxes,
            ha="right",
            va="top",
        )

    ax.set_title("Letter sum distribution")
    ax.set_xlabel("Letter sum")
    ax.set_ylabel("# words")

    ax.legend(loc="upper left")
    fig.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Answer the letter-sum puzzle questions for a word list.")
    ap.add_argument("--words", type=str, default=None,
                    help=f"Word list, one word per line (defaults to {letter_sum.DEFAULT_WORD_LIST} if present).")
    ap.add_argument("--target", type=int, default=letter_sum.DEFAULT_TARGET_SUM, help="Letter sum to look up.")
    ap.add_argument("--gap", type=int, default=letter_sum.DEFAULT_LENGTH_GAP, help="Length difference for pairs.")
    ap.add_argument(
        "--min-sum",
        type=int,
        default=letter_sum.PUZZLE_MIN_DISJOINT_SUM,
        help="Only report disjoint-letter pairs with a letter sum above this (-1 = all).",
    )
    ap.add_argument("--longest-chain", action="store_true", help="Also run the (very slow) longest chain search.")
    ap.add_argument("--cache-path", type=str, default=None,
                    help=f"Cache the longest chain here (e.g. {letter_sum.DEFAULT_CACHE_PATH}).")
    ap.add_argument("--result-path", type=str, default=None, help="Write the answers to this JSON file.")
    ap.add_argument("--plot", type=str, default=None, help="Write a matplotlib histogram to this path (e.g. sums.png).")
    ap.add_argument("--no-progress", action="store_true", help="Disable progress bars.")
    ap.add_argument("--verbose", action="store_true", help="Print timestamped progress to the console.")
    args = ap.parse_args(argv)

    start_t = time.time()

    def log(msg: str) -> None:
        if not args.verbose:
            return
        dt = time.time() - start_t
        print(f"[{dt:7.2f}s] {msg}")

    try:
        words = letter_sum.load_word_list(args.words)
    except OSError as e:
        print(f"Could not load word list: {e}", file=sys.stderr)
        return 2

    if not any(words):
        print("Loaded 0 words.", file=sys.stderr)
        return 2
    log(f"loaded {len(words)} words")

    analyzer = letter_sum.WordValueAnalyzer(words, cache_path=args.cache_path)
    report = build_report(
        analyzer,
        target=args.target,
        gap=args.gap,
        min_sum=args.min_sum if args.min_sum >= 0 else None,
        longest_chain=args.longest_chain,
        show_progress=not args.no_progress,
        log=log,
    )

    print(summarize(report))

    if args.result_path:
        _write_json(_expand_path(args.result_path), report_to_json(report), log=log)

    if args.plot:
        try:
            plot_sum_histogram(index=analyzer.sum_index, out_path=args.plot)
            print(f"Wrote plot: {args.plot}")
        except ModuleNotFoundError as e:
            print(f"Plot requested but missing dependency: {e}. Install matplotlib to use --plot.", file=sys.stderr)
            return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
