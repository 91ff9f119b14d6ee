"""
Benchmark the banded Mandelbrot renderer across backends and band counts.

Usage examples:
  python benchmark.py --backends numba,python --res 400x300,800x600 \
      --bands 1,2,4,8 --runs 5 --max-iter 255

  python benchmark.py --backends numba --res 1920x1080 --bands 8,16 --csv bands.csv
"""

import os
import csv
import time
import argparse
import platform
from typing import List, Tuple, Optional

from fractals.base import Viewport, ImageBounds, RenderSettings
from fractals.mandelbrot import MandelbrotFractal
from rendering.core import Renderer
from utils.enums import BackendType
from utils.parsing import parse_pair_list, parse_int_list

# Canonical view of the whole set
VIEWPORT = Viewport(complex(-2.0, -1.0), complex(1.0, 1.0))

# --- Helpers -----------------------------------------------------------------

def parse_backend_list(text: str) -> List[BackendType]:
    """
    Parse backends like "numba,python".
    """
    out: List[BackendType] = []
    for token in text.split(','):
        token = token.strip().upper()
        if not token:
            continue
        try:
            out.append(BackendType[token])
        except KeyError:
            raise ValueError(f"Unknown backend tag: {token.lower()}") from None
    return out

def hardware_summary() -> Tuple[str, str]:
    """
    Return (CPU summary, logical core count).
    """
    cpu_info = platform.processor() or platform.machine() or "Unknown CPU"
    return cpu_info, str(os.cpu_count() or "unknown")

# --- Benchmark core ----------------------------------------------------------

def benchmark_combo(backend: BackendType,
                    bands: int,
                    max_iter: int,
                    width: int,
                    height: int,
                    runs: int,
                    warmup: int = 1) -> Tuple[float, float]:
    """
    Runs warmups (not timed), then 'runs' timed renders.
    Returns (avg_time_seconds, fps).
    """
    settings = RenderSettings(max_iter=max_iter, bands=bands, backend=backend)
    bounds = ImageBounds(width, height)

    # Builds and warms up the kernel before timing
    with Renderer(MandelbrotFractal(), settings) as renderer:
        for _ in range(max(0, warmup)):
            renderer.render(VIEWPORT, bounds)

        times = []
        for _ in range(max(1, runs)):
            t0 = time.perf_counter()
            renderer.render(VIEWPORT, bounds)
            times.append(time.perf_counter() - t0)

    avg = sum(times) / len(times)
    fps = 1.0 / avg if avg > 0 else 0.0
    return avg, fps

# --- CSV writer --------------------------------------------------------------

def write_csv_row(writer,
                  resolution: Tuple[int, int],
                  bands: int,
                  rows_by_backend: List[Tuple[str, Optional[Tuple[float, float]]]]):
    """
    rows_by_backend: list of (backend_label, (avg, fps)) where the tuple is None if the run failed
    """
    base = [f"{resolution[0]}x{resolution[1]}", str(bands)]
    for _, result in rows_by_backend:
        if result is None:
            base.extend(["n/a", "n/a"])
        else:
            avg, fps = result
            base.extend([f"{avg:.4f}", f"{fps:.2f}"])
    writer.writerow(base)

# --- CLI ---------------------------------------------------------------------

def main(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Benchmark banded Mandelbrot renderer.")
    p.add_argument("--backends", type=str, default="numba,python",
                   help="Comma separated list: numba,python")
    p.add_argument("--res", type=str, default="400x300,800x600",
                   help="Comma separated WxH list")
    p.add_argument("--bands", type=str, default="1,2,4,8",
                   help="Comma separated band counts")
    p.add_argument("--max-iter", type=int, default=255)
    p.add_argument("--runs", type=int, default=3)
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--csv", type=str, default="benchmark_results.csv")
    args = p.parse_args(argv)

    backends = parse_backend_list(args.backends)
    resolutions = parse_pair_list(args.res)
    band_counts = parse_int_list(args.bands)

    # Hardware summary
    cpu_info, cores = hardware_summary()
    print("=== Hardware Summary ===")
    print("CPU:", cpu_info)
    print("Cores:", cores)
    print()

    # Prepare CSV
    if os.path.exists(args.csv):
        os.remove(args.csv)
    with open(args.csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Hardware Summary"])
        writer.writerow(["CPU", cpu_info])
        writer.writerow(["Cores", cores])
        writer.writerow([])

        # Header row
        header = ["Resolution", "Bands"]
        for backend in backends:
            header.extend([f"{backend.name} Time (s)", f"{backend.name} FPS"])
        writer.writerow(header)

        print(f"Settings: max_iter={args.max_iter}, runs={args.runs}, warmup={args.warmup}")
        print()

        for (w, h) in resolutions:
            for bands in band_counts:
                print(f"=== {w}x{h}, {bands} bands ===")
                row_results: List[Tuple[str, Optional[Tuple[float, float]]]] = []
                for backend in backends:
                    name = backend.name
                    try:
                        avg, fps = benchmark_combo(
                            backend=backend,
                            bands=bands,
                            max_iter=args.max_iter,
                            width=w,
                            height=h,
                            runs=args.runs,
                            warmup=args.warmup,
                        )
                        print(f"{name:>8}  avg={avg:.4f}s  fps={fps:.2f}")
                        row_results.append((name, (avg, fps)))
                    except ValueError as e:
                        print(f"{name:>8}  FAIL: {e}")
                        row_results.append((name, None))
                write_csv_row(writer, (w, h), bands, row_results)
                print()

    print(f"Benchmark results saved to {args.csv}")

if __name__ == "__main__":
    main()
