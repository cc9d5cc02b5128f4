"""
Transaction Text Parser - Batch Pipeline
Parses several pasted transaction lines and summarizes the results.
"""

import json
import logging
import sys
from collections import defaultdict
from datetime import date
from typing import Callable, Optional

from config import config
from logging_config import setup_logging
from extractors.financial_rules import ConfidenceTier, TransactionType, format_idr
from extractors.text_parser import ParseResult, TextParser

logger = logging.getLogger(__name__)


class BatchTextParser:
    """Parses multiple transaction lines independently."""

    def __init__(
        self,
        today_provider: Callable[[], date] = date.today,
        max_lines: Optional[int] = None
    ):
        self.parser = TextParser(today_provider=today_provider)
        self.max_lines = max_lines if max_lines is not None else config.MAX_BATCH_LINES
        self.stats = {
            "lines_processed": 0,
            "parsed": 0,
            "successful": 0,
            "failed": 0,
            "low_confidence": 0
        }

    def process(self, lines: list[str]) -> list[ParseResult]:
        """
        Parse every non-blank line.

        Args:
            lines: Raw transaction lines

        Returns:
            One ParseResult per non-blank line, in input order

        Raises:
            ValueError: If there are more non-blank lines than max_lines
        """
        texts = [line.strip() for line in lines if line and line.strip()]
        self.stats["lines_processed"] += len(lines)

        if len(texts) > self.max_lines:
            raise ValueError(f"Too many lines ({len(texts)}). Maximum: {self.max_lines}")

        logger.info(f"Parsing {len(texts)} transaction line(s)")

        results = []
        for text in texts:
            result = self.parser.parse(text)
            results.append(result)

            self.stats["parsed"] += 1
            self.stats["successful" if result.success else "failed"] += 1
            if result.needs_review():
                self.stats["low_confidence"] += 1

        logger.info(
            f"Batch complete: {self.stats['successful']} successful, "
            f"{self.stats['failed']} failed, {self.stats['low_confidence']} need review"
        )
        return results

    @staticmethod
    def summarize(results: list[ParseResult]) -> dict:
        """
        Totals of successful drafts per type plus counts per category.

        Returns:
            Dict with total_income, total_expense, net_amount and categories
        """
        totals = {TransactionType.INCOME: 0, TransactionType.EXPENSE: 0}
        categories = defaultdict(int)

        for result in results:
            if not result.success:
                continue
            draft = result.data
            totals[draft.type] += draft.amount
            categories[draft.category] += 1

        net = totals[TransactionType.INCOME] - totals[TransactionType.EXPENSE]
        return {
            "total_income": totals[TransactionType.INCOME],
            "total_expense": totals[TransactionType.EXPENSE],
            "net_amount": net,
            "net_amount_display": format_idr(net),
            "categories": dict(categories),
        }

    def get_stats(self) -> dict:
        """Get batch statistics."""
        return self.stats.copy()


def _print_result(text: str, result: ParseResult):
    """Print a one-line human summary of a parse to stderr."""
    if result.success:
        draft = result.data
        flag = " (periksa)" if result.confidence["amount"] < ConfidenceTier.MEDIUM else ""
        print(
            f"✅ {text} -> {draft.type.value} {format_idr(draft.amount)}{flag} "
            f"[{draft.category}] {draft.date.isoformat()}",
            file=sys.stderr
        )
    else:
        print(f"❌ {text} -> {'; '.join(result.errors)}", file=sys.stderr)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Entry point - parse sentences given as arguments, or one per stdin line.

    Prints JSON results to stdout. Returns 1 when nothing parsed successfully.
    """
    setup_logging(log_level="WARNING", stream=sys.stderr)

    if argv is None:
        argv = sys.argv[1:]
    lines = argv if argv else sys.stdin.read().splitlines()

    batch = BatchTextParser()
    try:
        results = batch.process(lines)
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"\n❌ Input Error: {e}", file=sys.stderr)
        return 1

    texts = [line.strip() for line in lines if line and line.strip()]
    for text, result in zip(texts, results):
        _print_result(text, result)

    output = {
        "results": [result.to_dict() for result in results],
        "summary": batch.summarize(results),
        "stats": batch.get_stats(),
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))

    return 0 if batch.stats["successful"] > 0 else 1


if __name__ == "__main__":
    sys.exit(main())
