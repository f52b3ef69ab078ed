#!/usr/bin/env python3
"""Microbenchmark: query string decoding.

1. wsgiquery.decode on typical API query strings (10K iterations).
2. stdlib urllib.parse.parse_qsl on the same inputs, for comparison.
3. A full pass through the QueryParser middleware (10K requests).

Usage:
    python benchmarks/bench_decode.py
"""

import io
import os
import statistics
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


def _query_strings(n):
    return [
        f"page={i % 10}&limit=20&sort=name&order=asc&filter=active&q=search+term+{i}"
        for i in range(n)
    ]


def _measure(name, func, inputs, rounds=5):
    for item in inputs[:100]:
        func(item)

    timings = []
    for _ in range(rounds):
        start = time.perf_counter()
        for item in inputs:
            func(item)
        timings.append(time.perf_counter() - start)

    return {
        "name": name,
        "n": len(inputs),
        "min_s": min(timings),
        "median_s": statistics.median(timings),
        "mean_s": statistics.mean(timings),
        "ops_per_sec": len(inputs) / statistics.median(timings),
    }


def bench_decode(n=10_000):
    from wsgiquery import decode
    return _measure("wsgiquery.decode", decode, _query_strings(n))


def bench_stdlib_parse_qsl(n=10_000):
    from urllib.parse import parse_qsl

    def run(qs):
        return dict(parse_qsl(qs, keep_blank_values=True))

    return _measure("stdlib parse_qsl", run, _query_strings(n))


def bench_middleware(n=10_000):
    from wsgiquery import QueryParser, Request

    def app(environ, start_response):
        Request(environ).query("page")
        start_response("200 OK", [("Content-Type", "text/plain")])
        return [b""]

    wrapped = QueryParser(app)

    def start_response(status, headers):
        pass

    def run(qs):
        environ = {
            "REQUEST_METHOD": "GET",
            "PATH_INFO": "/api/users",
            "QUERY_STRING": qs,
            "wsgi.errors": io.StringIO(),
        }
        wrapped(environ, start_response)

    return _measure("QueryParser request", run, _query_strings(n))


def print_result(result):
    """Pretty-print a benchmark result dict."""
    print(f"  {result['name']:>30s}: "
          f"median={result['median_s']:.4f}s  "
          f"min={result['min_s']:.4f}s  "
          f"({result['ops_per_sec']:,.0f} ops/sec)")


def main():
    n = 10_000

    print(f"Query decoding benchmarks ({n} iterations, 5 rounds each)")
    print("-" * 70)

    decode_result = bench_decode(n)
    print_result(decode_result)

    stdlib_result = bench_stdlib_parse_qsl(n)
    print_result(stdlib_result)

    ratio = stdlib_result["median_s"] / decode_result["median_s"]
    print(f"\n  wsgiquery.decode is {ratio:.2f}x "
          f"{'faster' if ratio > 1 else 'slower'} than stdlib parse_qsl")
    print()

    print_result(bench_middleware(n))
    print()


if __name__ == "__main__":
    main()
