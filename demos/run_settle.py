"""
BRICK STACK SETTLEMENT DEMO
===========================

PURPOSE:
--------
Command-line front end for the settlement engine:
1. Read a snapshot of suspended bricks
2. Let them settle
3. Report how many bricks can be safely removed
4. Optionally: chain-reaction total, per-brick CSV, side-view plot

Examples:
  python demos/run_settle.py demos/data/example.txt
  python demos/run_settle.py input.txt --chain --csv artifacts/bricks.csv
  python demos/run_settle.py input.txt --plot artifacts/side.png --axis y
"""

import argparse
import logging
import os
import sys

from brick_stack.config import SettleConfig, configure_logging
from brick_stack.kernel import SettlementError, settle_bricks
from brick_stack.model import BrickGeometryError
from brick_stack.parse import BrickParseError, load_bricks
from brick_stack.support import SupportGraph

logger = logging.getLogger("brick_stack.demos.run_settle")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Settle a snapshot of falling bricks and count the removable ones',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demos/run_settle.py demos/data/example.txt
  python demos/run_settle.py input.txt --chain --csv artifacts/bricks.csv
        """
    )
    parser.add_argument('input', help='Snapshot file, one brick per line')
    parser.add_argument(
        '--chain',
        action='store_true',
        help='Also report the total chain reaction (sum over bricks of how many others fall)'
    )
    parser.add_argument('--csv', default=None, help='Write the per-brick report to this CSV file')
    parser.add_argument('--plot', default=None, help='Save a side-view image to this file')
    parser.add_argument('--axis', choices=['x', 'y'], default='x', help='Side view axis (default: x)')
    parser.add_argument(
        '--no-validate',
        action='store_true',
        help='Skip the axis-aligned brick check'
    )
    parser.add_argument('--log-level', default='WARNING', help='Logging level (default: WARNING)')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    config = SettleConfig(validate_geometry=not args.no_validate)

    try:
        bricks = load_bricks(args.input)
        result = settle_bricks(bricks, config)
    except (OSError, BrickParseError, BrickGeometryError) as e:
        print(f"error: {args.input}: {e}", file=sys.stderr)
        return 1
    except SettlementError as e:
        print(f"error: settlement failed: {e}", file=sys.stderr)
        return 1

    print(f"Removable bricks: {result.n_removable}")

    graph = SupportGraph.from_result(result)
    if args.chain:
        print(f"Chain reaction total: {graph.total_chain_reaction()}")

    if args.csv:
        os.makedirs(os.path.dirname(args.csv) if os.path.dirname(args.csv) else ".", exist_ok=True)
        graph.to_dataframe().to_csv(args.csv, index=False)
        logger.info("report saved to %s", args.csv)

    if args.plot:
        from brick_stack.viz import plot_side_view
        plot_side_view(result.bricks, args.plot, axis=args.axis, removable=result.removable)

    return 0


if __name__ == "__main__":
    sys.exit(main())
