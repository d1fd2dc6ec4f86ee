#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import date
from typing import List, Optional

from newmoon.core.errors import NewMoonError
from newmoon.core.time import LUNATIONS_PER_YEAR, lunation_index
from newmoon.reference import astro_args as aa
from newmoon.reference import periodic
from newmoon.ephemeris import require_ephemeris
from newmoon.ephemeris.de422 import DE422Elongation, conjunction_for_lunation


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "newmoon[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "newmoon[diagnostics]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare Meeus new moons (TT) against DE422 conjunctions.")
    p.add_argument("--year-start", type=int, default=1600)
    p.add_argument("--year-end", type=int, default=2400)
    p.add_argument("--every", type=int, default=1, help="use every n-th lunation")
    p.add_argument("--out-png", default="new_moon_validation.png")
    args = p.parse_args(argv)

    if args.year_end < args.year_start:
        raise SystemExit("--year-end must be >= --year-start")
    if args.year_start < 1:
        raise SystemExit("--year-start must be >= 1")

    require_ephemeris()
    np = _need_numpy()
    plt = _need_matplotlib()

    print("Loading DE422 Ephemeris...")
    el = DE422Elongation.load()

    k0 = lunation_index(date(args.year_start, 1, 1))
    k1 = lunation_index(date(args.year_end, 1, 1))
    ks = list(range(k0, k1 + 1, max(1, args.every)))

    print(f"Validating {len(ks)} lunations, k = {k0} .. {k1}...")

    years = []
    err_min = []
    for k in ks:
        T = aa.century_fraction(k)
        jde = periodic.corrected_jde(k, T)
        try:
            t_de = conjunction_for_lunation(el, k)
        except NewMoonError as e:
            print(f"  k={k}: {e}, skipped")
            continue

        years.append(2000.0 + k / LUNATIONS_PER_YEAR)
        err_min.append((jde - t_de) * 1440.0)

    if not err_min:
        print("No lunations validated.")
        return 1

    err = np.array(err_min, dtype=float)
    print(f"Meeus - DE422 (minutes): mean {err.mean():+.3f}, rms {np.sqrt((err ** 2).mean()):.3f}, max |err| {np.abs(err).max():.3f}")

    fig, ax = plt.subplots(figsize=(12, 5))
    ax.scatter(years, err_min, s=2, alpha=0.6)
    ax.set_title("New moon time error (Meeus ch. 49 - DE422), TT")
    ax.set_xlabel("Year")
    ax.set_ylabel("Error (minutes)")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(args.out_png, dpi=200)
    print(f"Validation complete. Plot saved to {args.out_png}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
