"""
Reporting module for the auction trainer.

Renders analysed auction rounds as PDF reports and provides the CLI.

Usage:
    from auction import AuctionAnalyzer
    from reporting import generate_report

    bid_round = AuctionAnalyzer().submit_bid(seed, court_docs, user_bid)
    path = generate_report(bid_round.result, bid_round)
"""

from .pdf_generator import ReportGenerator, generate_report
from .samples import SAMPLE_SCENARIO, create_sample_scenario

__all__ = [
    "ReportGenerator",
    "generate_report",
    "SAMPLE_SCENARIO",
    "create_sample_scenario",
]
