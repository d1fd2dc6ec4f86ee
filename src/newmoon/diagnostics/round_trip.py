from __future__ import annotations

import argparse
import random
from datetime import datetime, timedelta

from newmoon.reference import time_scales as ts


def parse_date(s: str) -> datetime:
    y, m, d = s.split("-")
    return datetime(int(y), int(m), int(d))


def random_instant(start: datetime, end: datetime) -> datetime:
    span_ms = int((end - start).total_seconds() * 1000)
    return start + timedelta(milliseconds=random.randint(0, span_ms))


def roundtrip_test(
    N: int,
    start: datetime,
    end: datetime,
    seed: int,
    *,
    max_failures: int,
) -> int:
    random.seed(seed)
    failures = 0

    for _ in range(N):
        d0 = random_instant(start, end)

        jd = ts.from_calendar(d0)
        cal = ts.to_calendar(jd)
        # Julian-calendar output cannot be compared with a proleptic Gregorian datetime
        if cal.calendar == "gregorian" and abs((cal.to_datetime().replace(tzinfo=None) - d0).total_seconds()) > 1e-3:
            failures += 1
            print("\nFAIL (calendar)")
            print("d0:", d0.isoformat())
            print("jd:", repr(jd))
            print("cal:", cal)
            if failures >= max_failures:
                return failures

        jd2 = ts.calendar_datetime_to_jd(cal)
        if abs(jd2 - jd) * 86400.0 > 1e-3:
            failures += 1
            print("\nFAIL (jd)")
            print("d0:", d0.isoformat())
            print("jd:", repr(jd), "jd2:", repr(jd2))
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: datetime -> JD -> calendar -> JD.")
    p.add_argument("--N", type=int, default=20000, help="Trials.")
    p.add_argument("--start", type=str, default="1582-10-15", help="Start date YYYY-MM-DD.")
    p.add_argument("--end", type=str, default="2999-12-31", help="End date YYYY-MM-DD.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    start = parse_date(args.start)
    end = parse_date(args.end)

    if end < start:
        raise SystemExit("--end must be >= --start")

    failures = roundtrip_test(N=args.N, start=start, end=end, seed=args.seed, max_failures=args.max_failures)

    if failures == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {failures}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
