"""cProfile wrapper for strata tokenizing.

Run with:
    uv run python -m cProfile -o profile.prof benchmarks/profile_tokenize.py
    uv run python -m snakeviz profile.prof

Or for direct profiling:
    uv run python benchmarks/profile_tokenize.py
"""

from __future__ import annotations

import cProfile
import io
import pstats
import sys


def build_corpus(sections: int = 200) -> str:
    """Generate a large indented stylesheet (~60KB)."""
    parts = []
    for i in range(sections):
        parts.append(f"""\
// Section {i}
  notes for section {i}
$size-{i}: {i}px + 1.5em
=mixin-{i}($a, $b: #fff)
  margin: $a
  color: $b
.block-{i}
  +mixin-{i}(2px)
  &:hover, a.link-{i}
    background: url("img/{i}.png") no-repeat
    content: "item #{{$size-{i}}} of #{{1 + #{{2}}}}"
  @for $j from 1 through {i % 7}
    .col-#{{$j}}
      width: percentage($j / 12)
""")
    return "\n".join(parts)


def tokenize_corpus(source: str, iterations: int = 10) -> int:
    """Tokenize the corpus multiple times; return the token count."""
    from strata import lex

    count = 0
    for _ in range(iterations):
        for _token in lex(source):
            count += 1
    return count


def main() -> None:
    """Run profiling and print results."""
    print("strata Profiling")
    print("=" * 60)
    print(f"Python {sys.version.split()[0]}")

    iterations = 10
    source = build_corpus()
    print(f"\nTokenizing {len(source):,} characters {iterations}x...")

    profiler = cProfile.Profile()
    profiler.enable()

    count = tokenize_corpus(source, iterations)

    profiler.disable()
    print(f"{count:,} tokens")

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY CUMULATIVE TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.CUMULATIVE)
    ps.print_stats(30)
    print(s.getvalue())

    print("\n" + "=" * 60)
    print("TOP 30 FUNCTIONS BY TOTAL (SELF) TIME")
    print("=" * 60 + "\n")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(pstats.SortKey.TIME)
    ps.print_stats(30)
    print(s.getvalue())

    print("\nTo visualize with snakeviz:")
    print("  uv run python -m cProfile -o profile.prof benchmarks/profile_tokenize.py")
    print("  uv run python -m snakeviz profile.prof")


if __name__ == "__main__":
    main()
