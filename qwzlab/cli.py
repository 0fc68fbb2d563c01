# qwzlab/cli.py
import argparse
import logging
import pathlib
import sys

from .config import load_settings
from .io import save_result, write_kpoints, write_phases
from .pipeline import run_wilson_loop

BANNER = "Wilson loop spectrum in the Qi-Wu-Zhang model."


def build_parser():
    ap = argparse.ArgumentParser(prog="qwzlab", description=BANNER)
    ap.add_argument("mass", type=float, help="Mass parameter M of the QWZ Hamiltonian")
    ap.add_argument("--config", default=None, help="YAML settings file (nk, proj_subspace, solver, ...)")
    ap.add_argument("--out-dir", default=".", help="Directory for the phase and k-point artifacts")
    ap.add_argument("--bundle", default=None, help="Also save the full result (.npz or .h5)")
    ap.add_argument("--closed", action="store_true", help="Also print the Chern number with the seam step closed")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def _is_negative_number(token):
    if not token.startswith("-"):
        return False
    try:
        float(token)
    except ValueError:
        return False
    return True


def _shield_negative_mass(argv):
    """Move negative floats such as -1e-3 or -1. behind '--' so argparse reads them as the mass."""
    argv = list(argv)
    head, tail = argv, []
    if "--" in argv:
        i = argv.index("--")
        head, tail = argv[:i], argv[i + 1:]
    masses = [t for t in head if _is_negative_number(t)]
    if not masses:
        return argv
    rest = [t for t in head if not _is_negative_number(t)]
    return rest + ["--"] + masses + tail


def main(argv=None):
    print(BANNER)
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(_shield_negative_mass(argv))
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    settings, outputs = load_settings(args.config)
    print(f"Mass parameter: {args.mass:g}")

    res = run_wilson_loop(args.mass, settings)

    out = pathlib.Path(args.out_dir); out.mkdir(parents=True, exist_ok=True)
    phases_path = write_phases(out / outputs["phases_file"], res.phases)
    kpoints_path = write_kpoints(out / outputs["kpoints_file"], res.kpoints)
    print(f"Wrote {phases_path}")
    print(f"Wrote {kpoints_path}")
    if args.bundle:
        print(f"Wrote {save_result(args.bundle, res)}")

    print(f"Chern number  =>   {res.chern_number:g}")
    if args.closed:
        print(f"Closed-loop Chern number  =>   {res.closed_chern_number:g}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
