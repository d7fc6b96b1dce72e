#!/usr/bin/env python3
"""
CLI for analysing auction rounds.

Usage:
    python -m reporting.cli sample [--bid N] [--pdf]
    python -m reporting.cli analyze <scenario_json> [--bid N] [--prev-exp N] [--pdf]
    python -m reporting.cli policy [--difficulty easy|normal|hard]

Examples:
    # Analyse the built-in sample round at the recommended midpoint
    python -m reporting.cli sample

    # Analyse a scenario file, bid 320,000,000 and write the PDF
    python -m reporting.cli analyze scenarios/apt.json --bid 320000000 --pdf
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from auction import AuctionAnalyzer, DifficultyMode, policy_for_difficulty
from auction.intake import InvalidCourtDocs, InvalidSeed, ScenarioInput
from auction.policy import PolicyError, merge_policy
from utils.config import Config
from utils.formatting import format_currency

from .pdf_generator import generate_report
from .samples import create_sample_scenario


logger = logging.getLogger(__name__)


def run_scenario(scenario: ScenarioInput, args, config: Config) -> int:
    """Analyse a scenario, print JSON and optionally write the PDF."""
    analyzer = AuctionAnalyzer(base_policy=config.policy())

    seed = scenario.property.to_seed()
    court_docs = scenario.court_docs.to_raw() if scenario.court_docs else None

    policy = None
    if scenario.policy_overrides:
        prop = analyzer.normalize(seed)
        policy = merge_policy(analyzer.policy_for(prop), scenario.policy_overrides)

    user_bid = args.bid if args.bid is not None else scenario.user_bid
    if not user_bid:
        # No bid given: bid the recommended midpoint
        preview = analyzer.analyze(seed, court_docs, 0, policy)
        user_bid = round(preview.valuation.recommended_bid_range.midpoint)
        logger.info("No bid given; using recommended midpoint %s", user_bid)

    bid_round = analyzer.submit_bid(
        seed,
        court_docs,
        user_bid,
        policy=policy,
        prev_total_exp=args.prev_exp,
    )

    print(json.dumps(bid_round.to_dict(), ensure_ascii=False, indent=2))
    print(
        f"Bid {format_currency(bid_round.user_bid)}: {bid_round.outcome.value} "
        f"(min bid {format_currency(bid_round.result.valuation.min_bid)})",
        file=sys.stderr,
    )

    if args.pdf:
        path = generate_report(bid_round.result, bid_round, output_dir=Path(config.report_dir))
        print(f"Report generated: {path}", file=sys.stderr)
    return 0


def cmd_sample(args, config: Config) -> int:
    """Analyse the built-in sample round."""
    return run_scenario(create_sample_scenario(), args, config)


def cmd_analyze(args, config: Config) -> int:
    """Analyse a round from a JSON scenario file."""
    input_path = Path(args.scenario_file)

    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON: {e}", file=sys.stderr)
        return 1

    try:
        scenario = ScenarioInput.model_validate(data)
    except ValidationError as e:
        print(f"Error: Invalid scenario data: {e}", file=sys.stderr)
        return 1

    return run_scenario(scenario, args, config)


def cmd_policy(args, config: Config) -> int:
    """Print the merged policy for a difficulty."""
    difficulty = (
        DifficultyMode.from_string(args.difficulty) if args.difficulty else config.difficulty
    )
    if difficulty is None:
        print(f"Error: Unknown difficulty: {args.difficulty}", file=sys.stderr)
        return 1

    policy = policy_for_difficulty(difficulty, base=config.policy())
    print(json.dumps(policy.to_dict(), ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Auction Trainer - foreclosure auction round analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m reporting.cli sample --bid 330000000
    python -m reporting.cli analyze scenario.json --pdf
    python -m reporting.cli policy --difficulty hard

Environment:
    AUCTION_POLICY_FILE   JSON policy overlay merged onto the default policy
    AUCTION_REPORT_DIR    PDF output directory (default: ./reports)
    AUCTION_LOG_LEVEL     Logging level (default: WARNING)
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_bid_options(sub):
        sub.add_argument("--bid", type=int, default=None, help="Bid amount in won")
        sub.add_argument(
            "--prev-exp",
            type=int,
            default=None,
            help="Cumulative EXP before this round (enables level info)",
        )
        sub.add_argument("--pdf", action="store_true", help="Also write the PDF report")

    sample_parser = subparsers.add_parser("sample", help="Analyse the built-in sample round")
    add_bid_options(sample_parser)
    sample_parser.set_defaults(func=cmd_sample)

    analyze_parser = subparsers.add_parser("analyze", help="Analyse a JSON scenario file")
    analyze_parser.add_argument("scenario_file", help="Path to JSON scenario file")
    add_bid_options(analyze_parser)
    analyze_parser.set_defaults(func=cmd_analyze)

    policy_parser = subparsers.add_parser("policy", help="Print the merged policy")
    policy_parser.add_argument("--difficulty", default=None, help="easy, normal or hard")
    policy_parser.set_defaults(func=cmd_policy)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = Config.load()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args, config)
    except InvalidSeed as e:
        for error in e.errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1
    except (InvalidCourtDocs, PolicyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
