#!/usr/bin/env python3
from __future__ import annotations

import argparse


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


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot Delta T (TT-UT) using newmoon.reference.deltat.")
    p.add_argument("--y0", type=int, default=1600, help="start year")
    p.add_argument("--y1", type=int, default=2200, help="end year")
    p.add_argument("--out", default="deltat.png", help="output image filename")
    p.add_argument("--show-bands", action="store_true", help="mark polynomial band edges")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    from newmoon.reference import deltat as dt

    # the model is evaluated on whole years
    ys = np.arange(args.y0, args.y1 + 1, dtype=int)
    vals = np.array([dt.estimate_delta_t(int(y)) for y in ys], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(ys, vals, linewidth=2, label="Espenak–Meeus polynomials")

    if args.show_bands:
        for lo, hi in dt.DELTA_T_BANDS:
            if args.y0 <= hi <= args.y1:
                ax.axvline(hi, color="grey", linewidth=0.8, linestyle=":")

    # jumps between neighbouring years larger than the local trend
    jumps = np.abs(np.diff(vals))
    worst = int(jumps.argmax()) if len(jumps) else 0
    if len(jumps):
        print(f"Largest year-to-year change: {jumps[worst]:.3f} s at {ys[worst]}->{ys[worst + 1]}")

    ax.set_title("Delta T = TT − UT (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("ΔT (s)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
