import argparse
import sys
from typing import List, Optional

from .body_arrays import summarize, to_com_frame
from .config_loader import load_config
from .exceptions import SystemGenError
from .gen_config import GeneratorConfig
from .resolver import SystemGenerator
from .writer import DataWriter, write_csv

"""
This module implements the sysgen command. It loads a YAML or JSON system configuration, generates the bodies for the whole tree or for one named template or system, optionally shifts them into the centre-of-mass frame, prints one line per body followed by a short summary, and optionally writes the bodies to a CSV table and an x,y frame file. Generation errors are reported as a single [error] line with exit status 1.

"""


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="sysgen", description="Generate N-body initial conditions from a system configuration.")
	parser.add_argument("config", help="YAML or JSON configuration file")
	parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible output")
	parser.add_argument("--system", default=None, help="generate only this template or system definition")
	parser.add_argument("--csv", default=None, help="write the generated bodies to this CSV file")
	parser.add_argument("--frames", default=None, help="write an x,y frame file into this directory")
	parser.add_argument("--com-frame", action="store_true", help="remove the centre-of-mass velocity before output")
	parser.add_argument("--strict", action="store_true", help="reject bodies with non-positive mass")
	parser.add_argument("--quiet", action="store_true", help="suppress diagnostic prints")
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	cfg = GeneratorConfig(seed=args.seed, diag_prints=not args.quiet, strict_bodies=args.strict)

	try:
		tree = load_config(args.config)
		gen = SystemGenerator(tree, cfg)
		if args.system:
			bodies = gen.generate_named(args.system)
		else:
			bodies = gen.generate()
	except (OSError, SystemGenError) as exc:
		print(f"[error] {exc}", file=sys.stderr)
		return 1

	if args.com_frame:
		bodies = to_com_frame(bodies)

	for b in bodies:
		print(f"{b.label()} {b}")

	info = summarize(bodies)
	print(f"Generated {info['n_bodies']} bodies, total mass {info['total_mass']:.6g}")
	print(f"Centre of mass: {info['com_position']}, velocity {info['com_velocity']}")

	if args.csv:
		write_csv(bodies, args.csv)
		print(f"Bodies saved to {args.csv}")
	if args.frames:
		path = DataWriter(args.frames).write(bodies)
		print(f"Frame saved to {path}")
	return 0


if __name__ == "__main__":
	sys.exit(main())
