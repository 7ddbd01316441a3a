import argparse
import concurrent.futures
import logging
import os
import sys
import time

import psutil

from .dictionary import load_dictionary
from .errors import TokenLimitExceeded
from .newmm import NewMMSegmenter
from .tokenize import default_dict_path


def get_memory_mb():
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def run_concurrently(segment_func, lines, workers):
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        # Map returns an iterator, converting to list forces execution
        list(executor.map(segment_func, lines))


def read_lines(paths, limit):
    lines = []
    for filepath in paths:
        with open(filepath, 'r', encoding='utf-8') as f:
            for line in f:
                if limit == 0:
                    return lines
                line = line.strip()
                if not line:
                    continue
                lines.append(line)
                if limit > 0:
                    limit -= 1
    return lines


def benchmark(seg, lines, threads):
    count = len(lines)
    total_bytes = sum(len(line.encode('utf-8')) for line in lines)
    total_mb = total_bytes / (1024 * 1024)
    print(f"\n--- Input Benchmark ({count} lines, {total_mb:.2f} MB) ---")
    print(f"Initial Memory: {get_memory_mb():.2f} MB")

    print("[1 Thread] Processing...", end="", flush=True)
    start_time = time.time()
    start_mem = get_memory_mb()
    for line in lines:
        seg.segment(line)
    dur_seq = max(time.time() - start_time, 0.001)
    print(f" Done in {dur_seq:.3f}s")
    print(f"Throughput: {count / dur_seq:.2f} lines/sec ({total_mb / dur_seq:.2f} MB/s)")
    print(f"Mem Delta: {get_memory_mb() - start_mem:.2f} MB")

    if threads > 1:
        print(f"\n[{threads} Threads] Processing...", end="", flush=True)
        start_time = time.time()
        start_mem = get_memory_mb()
        run_concurrently(seg.segment, lines, threads)
        dur_conc = max(time.time() - start_time, 0.001)
        print(f" Done in {dur_conc:.3f}s")
        print(f"Throughput: {count / dur_conc:.2f} lines/sec ({total_mb / dur_conc:.2f} MB/s)")
        print(f"Mem Delta: {get_memory_mb() - start_mem:.2f} MB")
        print(f"Speedup: {dur_seq / dur_conc:.2f}x")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="thai_segmenter", description="Thai word segmenter (newmm)")
    parser.add_argument("text", nargs="*", help="Text to segment (reads stdin if omitted)")
    parser.add_argument("--dict", dest="dict_path", help="Word list, one word per line")
    parser.add_argument("--input", nargs="+", help="Input file(s)")
    parser.add_argument("--limit", type=int, default=-1, help="Limit number of lines")
    parser.add_argument("--separator", default="|", help="Token separator for output")
    parser.add_argument("--no-whitespace", action="store_true",
                        help="Drop whitespace-only tokens")
    parser.add_argument("--max-tokens", type=int, default=None,
                        help="Fail a line that produces more tokens than this")
    parser.add_argument("--benchmark", action="store_true", help="Run benchmark mode")
    parser.add_argument("--threads", type=int, default=4,
                        help="Number of threads for concurrent benchmark")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log dictionary loading")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dict_path = args.dict_path or default_dict_path()
    dictionary = load_dictionary(dict_path)
    seg = NewMMSegmenter(dictionary, max_tokens=args.max_tokens)

    try:
        if args.input:
            lines = read_lines(args.input, args.limit)
        elif args.text:
            lines = [" ".join(args.text)]
        else:
            lines = [line.rstrip("\r\n") for line in sys.stdin]

        if args.benchmark:
            if not lines:
                print("Usage: python -m thai_segmenter --benchmark --input <file> [options]")
                return 1
            benchmark(seg, lines, args.threads)
            return 0

        status = 0
        for line in lines:
            try:
                tokens = seg.segment(line)
            except TokenLimitExceeded as e:
                print(f"Error: {e}", file=sys.stderr)
                status = 1
                continue
            if args.no_whitespace:
                tokens = [t for t in tokens if not t.isspace()]
            print(args.separator.join(tokens))
        return status
    finally:
        dictionary.free()


if __name__ == "__main__":
    sys.exit(main())
