from __future__ import annotations

import argparse
from datetime import datetime
import logging
import sys
import importlib
import inspect


def _parse_ymd(s: str) -> datetime:
    try:
        y, m, d = map(int, s.split("-"))
        return datetime(y, m, d)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}") from e


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_table(argv: list[str]) -> int:
    import newmoon
    from newmoon.config import LUNAR_CYCLE

    p = argparse.ArgumentParser(prog="newmoon table", description="Print new moons (UT) between two dates.")
    p.add_argument("--start", type=_parse_ymd, default=datetime(2000, 1, 6), help="YYYY-MM-DD (default: 2000-01-06)")
    p.add_argument("--end", type=_parse_ymd, default=datetime(2050, 12, 14), help="YYYY-MM-DD (default: 2050-12-14)")
    p.add_argument("--step-days", type=float, default=LUNAR_CYCLE, help="candidate spacing in days")
    p.add_argument("--width", type=int, default=20, help="right-justify each line to this width")
    p.add_argument("--iso", action="store_true", help="ISO-8601 timestamps instead of M/D/YYYY")
    p.add_argument("--strict-delta-t", action="store_true", help="skip lunations outside the ΔT model instead of using ΔT=0")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    _setup_logging(args.verbose)

    if args.end < args.start:
        raise SystemExit("--end must be >= --start")

    cfg = newmoon.NewMoonConfig(
        start=args.start,
        end=args.end,
        step_days=args.step_days,
        width=args.width,
        strict_delta_t=args.strict_delta_t,
    )

    print("Looking for new moon phases in the date range...")
    print()
    for nm in newmoon.iter_new_moons(cfg):
        if args.iso:
            print(f"{nm.ut.isoformat()}Z".rjust(cfg.width))
        else:
            print(newmoon.format_utc(nm.ut, width=cfg.width))
    return 0


def cmd_k(argv: list[str]) -> int:
    import newmoon

    p = argparse.ArgumentParser(prog="newmoon k", description="Show every stage of the computation for one lunation.")
    p.add_argument("--k", type=int, default=0, help="lunation index (0 = 2000-01-06)")
    p.add_argument("--strict-delta-t", action="store_true")
    args = p.parse_args(argv)

    info = newmoon.explain(args.k, strict_delta_t=args.strict_delta_t)

    print(f"k = {info['k']}")
    print(f"T (Julian centuries from J2000.0) = {info['T']:.12f}")
    print()
    print("Mean elements (degrees, wrapped to [0,360))")
    print(f"  E      = {info['E']:.10f}")
    print(f"  M      = {info['M']:.10f}")
    print(f"  M'     = {info['Mp']:.10f}")
    print(f"  F      = {info['F']:.10f}")
    print(f"  Omega  = {info['Omega']:.10f}")
    print()
    print("JDE (TT)")
    print(f"  mean       = {info['jde_mean']:.8f}")
    print(f"  principal  = {info['principal']:+.8f}")
    print(f"  planetary  = {info['planetary']:+.8f}")
    print(f"  corrected  = {info['jde']:.8f}  ({info['tt']} TT)")
    print()
    print(f"Delta T = {info['delta_t']:.2f} s")
    print(f"New moon = {info['ut']} UT")
    return 0


def cmd_deltat(argv: list[str]) -> int:
    from newmoon.reference import deltat as dt

    p = argparse.ArgumentParser(prog="newmoon deltat", description="Print ΔT = TT - UT (seconds) for a year.")
    p.add_argument("--year", type=int, default=2000)
    p.add_argument("--strict", action="store_true", help="fail outside -1999..3000 instead of returning 0")
    args = p.parse_args(argv)

    try:
        value = dt.estimate_delta_t(args.year, strict=args.strict)
    except dt.DeltaTRangeError as e:
        raise SystemExit(str(e)) from e

    band = dt.band_of(args.year)
    print(f"year    = {args.year}")
    print(f"band    = {band if band is not None else '(none, fallback 0)'}")
    print(f"Delta T = {value:.3f} s")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="newmoon", description="New moon times after Meeus, chapter 49.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("table", help="Print new moons (UT) between two dates")
    sub.add_parser("k", help="Explain the computation for one lunation index")
    sub.add_parser("deltat", help="Print ΔT for a year")

    # diagnostics (no ephemeris)
    p_diag = sub.add_parser("diag", help="Diagnostics tools (no ephemeris required)")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "plot-deltat"],
        help="Which diagnostic to run",
    )

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument(
        "tool",
        choices=["validate"],
        help="Which ephemeris diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "table":
        return cmd_table(rest)

    if args.cmd == "k":
        return cmd_k(rest)

    if args.cmd == "deltat":
        return cmd_deltat(rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "newmoon.diagnostics.round_trip",
            "plot-deltat": "newmoon.diagnostics.plot_deltat",
        }
        return _run_module_main(tool_map[args.tool], rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate": "newmoon.diagnostics.ephem.validate_new_moons",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
