"""Verify a table of safety instrumented functions and print the traces.

Usage::

    python sil_report.py sif_table.csv --config config.yaml --export results.yaml
    python sil_report.py --lattices
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from integrity_core import LATTICES, describe_lattice, verify_lattice_axioms
from integrity_core.batch import export_results_yaml, load_sif_table, verify_sif_table
from integrity_core.config import ConfigError, load_config

logger = logging.getLogger("sil_report")


def print_lattices() -> bool:
    all_valid = True
    for lattice in LATTICES.values():
        print(describe_lattice(lattice))
        check = verify_lattice_axioms(lattice)
        if check.valid:
            print("  Axioms: OK")
        else:
            all_valid = False
            for violation in check.violations:
                print(f"  Axiom violation: {violation}")
        print()
    return all_valid


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("table", nargs="?", help="SIF table (.csv or .xlsx); defaults to table.path of the config")
    parser.add_argument("--config", default="config.yaml", help="YAML configuration (default: config.yaml)")
    parser.add_argument("--export", metavar="YAML", help="write the results to this YAML file")
    parser.add_argument("--lattices", action="store_true", help="list the built-in lattices and check their axioms")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.lattices:
        ok = print_lattices()
        if not args.table:
            return 0 if ok else 1

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2

    table_path = args.table or config.table.path
    if not table_path:
        logger.error("No SIF table given and no table.path in %s", args.config)
        return 2

    df = load_sif_table(table_path, delimiter=config.table.delimiter, sheet=config.table.sheet)
    results = verify_sif_table(df, config)

    for row in results.itertuples(index=False):
        print(f"\n{row.sif}:")
        if row.error:
            print(f"\tERROR: {row.error}")
            continue
        for line in str(row.details).splitlines():
            print(f"\t{line}")

    if args.export:
        export_results_yaml(results, args.export)

    failed = int((results["verified"] != True).sum())  # noqa: E712
    print(f"\n{len(results) - failed}/{len(results)} SIFs verified.")
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
