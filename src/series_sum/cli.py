# src/series_sum/cli.py
from __future__ import annotations

import argparse
import csv
import importlib
import json
import logging
import subprocess
import sys
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import mpmath as mp

from series_sum import __version__
from series_sum.errors import InvalidArgument
from series_sum.options import DEFAULT_TOLERANCE, SeriesOptions, validate_producer
from series_sum.series import sum_series_detailed

TOOL_NAME = "series-sum"
TOOL_VERSION = __version__

logger = logging.getLogger(__name__)


# ----------------------------- Data models -----------------------------

@dataclass(frozen=True)
class ReportInputs:
    target: str
    args: List[float]
    initial_value: float
    tolerance: float
    max_terms: Optional[int]
    relative: bool
    mp_dps: int

@dataclass(frozen=True)
class ReportOutputs:
    value: float
    terms: int
    stop_reason: str
    last_term: Optional[float]
    # same terms re-summed with mpmath at mp_dps digits
    reference_value: float
    rounding_error: float

@dataclass(frozen=True)
class ReportMeta:
    timestamp_utc: str
    tool: str
    tool_version: str
    python_version: str
    mp_dps: int
    git_commit: str


# ----------------------------- Utilities -----------------------------

def _git_commit() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode("utf-8").strip()
    except (OSError, subprocess.CalledProcessError):
        return "unknown"

def load_factory(target: str) -> Callable[..., Any]:
    """
    Resolve "package.module:attr" to a callable. The callable is a factory:
    called with the --arg values, it must return a producer.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise InvalidArgument("target must look like 'module:factory'; got %r" % target)
    module = importlib.import_module(module_name)
    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        raise InvalidArgument("%s is not callable" % target)
    return obj

def _validate_report_inputs(inp: ReportInputs) -> None:
    if inp.mp_dps < 20:
        raise InvalidArgument("--mp-dps should be at least 20 to resolve double rounding")


# ----------------------------- Core computations -----------------------------

def _compute_report(inp: ReportInputs) -> ReportOutputs:
    producer = load_factory(inp.target)(*inp.args)
    validate_producer(producer)
    seen: List[float] = []

    def tapped() -> Any:
        value = producer() if callable(producer) else next(producer)
        seen.append(value)
        return value

    opts = SeriesOptions(
        initial_value=inp.initial_value,
        tolerance=inp.tolerance,
        max_terms=inp.max_terms,
        relative=inp.relative,
    )
    result = sum_series_detailed(tapped, opts)

    mp.mp.dps = inp.mp_dps
    reference = mp.fsum([mp.mpf(inp.initial_value)] + [mp.mpf(float(t)) for t in seen])
    error = abs(mp.mpf(result.value) - reference)

    return ReportOutputs(
        value=result.value,
        terms=result.terms,
        stop_reason=result.stop_reason,
        last_term=result.last_term,
        reference_value=float(reference),
        rounding_error=float(error),
    )


def _print_report_console(inp: ReportInputs, out: ReportOutputs, meta: ReportMeta) -> None:
    mode = f"exact count ({inp.max_terms} terms)" if inp.max_terms is not None else (
        "relative tolerance" if inp.relative else "absolute tolerance")

    print(f"\n=== {meta.tool} Report (v{meta.tool_version}) ===")
    print(f"[Meta] time_utc={meta.timestamp_utc} python={meta.python_version} mp_dps={meta.mp_dps} git={meta.git_commit}")

    print(f"\n[Inputs]")
    print(f"  producer={inp.target}  args={inp.args}")
    print(f"  initial_value={inp.initial_value:.17g}  tolerance={inp.tolerance:.6g}  mode={mode}")

    print(f"\n[Sum]")
    print(f"  S = {out.value:.17g}")
    print(f"  terms consumed = {out.terms}  stop = {out.stop_reason}  last term = {out.last_term!r}")

    print(f"\n[Rounding] (mpmath fsum of the same terms, mp_dps={meta.mp_dps})")
    print(f"  S_ref = {out.reference_value:.17g}")
    print(f"  |S - S_ref| = {out.rounding_error:.6g}")


def _write_report_csv(path: Path, inp: ReportInputs, out: ReportOutputs, meta: ReportMeta) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    row: Dict[str, Any] = {
        **asdict(inp),
        **asdict(out),
        "args": " ".join(repr(a) for a in inp.args),
        "timestamp_utc": meta.timestamp_utc,
        "tool": meta.tool,
        "tool_version": meta.tool_version,
        "python_version": meta.python_version,
        "git_commit": meta.git_commit,
    }
    cols = [
        # meta
        "timestamp_utc","tool","tool_version","python_version","git_commit",
        # inputs
        "target","args","initial_value","tolerance","max_terms","relative","mp_dps",
        # outputs
        "value","terms","stop_reason","last_term","reference_value","rounding_error",
    ]
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=cols)
        w.writeheader()
        w.writerow({k: row.get(k, "") for k in cols})


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, sort_keys=True))


# ----------------------------- Subcommands -----------------------------

def _cmd_report(ns: argparse.Namespace) -> int:
    inp = ReportInputs(
        target=ns.target, args=list(ns.arg or []),
        initial_value=ns.initial_value, tolerance=ns.tolerance,
        max_terms=ns.max_terms, relative=ns.relative, mp_dps=ns.mp_dps,
    )
    _validate_report_inputs(inp)
    out = _compute_report(inp)
    meta = ReportMeta(
        timestamp_utc=datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        tool=TOOL_NAME,
        tool_version=TOOL_VERSION,
        python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
        mp_dps=ns.mp_dps,
        git_commit=_git_commit(),
    )
    _print_report_console(inp, out, meta)
    if ns.csv:
        _write_report_csv(Path(ns.csv), inp, out, meta)
        print(f"[CSV] wrote {ns.csv}")
    if ns.json:
        _write_json(Path(ns.json), {"meta": asdict(meta), "inputs": asdict(inp), "outputs": asdict(out)})
        print(f"[JSON] wrote {ns.json}")
    return 0


# ----------------------------- Parser wiring -----------------------------

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Sum a series produced term by term by a Python callable.",
    )
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    rp = sub.add_parser("report", help="Sum a series and check the double-precision rounding error.")
    rp.add_argument("target", help="Producer factory as 'module:attr'; called with the --arg values.")
    rp.add_argument("--arg", type=float, action="append", help="Positional float argument for the factory (repeatable).")
    rp.add_argument("--initial-value", type=float, default=0.0)
    rp.add_argument("--tolerance", type=float, default=DEFAULT_TOLERANCE)
    rp.add_argument("--max-terms", type=int, help="Sum exactly this many terms (disables the tolerance test).")
    rp.add_argument("--relative", action="store_true", help="Stop when |term| <= tolerance * |sum|.")
    rp.add_argument("--mp-dps", type=int, default=50, help="mpmath precision (decimal digits) for the reference sum.")
    rp.add_argument("--csv", type=Path)
    rp.add_argument("--json", type=Path)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    try:
        ns = parser.parse_args(argv)
        logging.basicConfig(level=getattr(logging, ns.log_level), format="%(levelname)s %(name)s: %(message)s")
        if ns.cmd == "report":
            sys.exit(_cmd_report(ns))
        else:
            parser.error("Unknown command")
    except KeyboardInterrupt:
        print("\nAborted by user.", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger.debug("report failed", exc_info=True)
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
