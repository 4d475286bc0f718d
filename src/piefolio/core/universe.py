"""Ticker universe tracked by the snapshot builder."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class PortfolioStock:
    """A ticker in the pie together with its display name."""

    ticker: str
    name: str


PORTFOLIO_STOCKS: List[PortfolioStock] = [
    PortfolioStock("GOOGL", "Alphabet Class A"),
    PortfolioStock("META", "Meta Platforms"),
    PortfolioStock("MSFT", "Microsoft"),
    PortfolioStock("NVDA", "NVIDIA"),
    PortfolioStock("AMD", "Advanced Micro Devices"),
    PortfolioStock("AMZN", "Amazon"),
    PortfolioStock("AAPL", "Apple"),
    PortfolioStock("ANET", "Arista Networks"),
    PortfolioStock("ASML", "ASML"),
    PortfolioStock("AVGO", "Broadcom"),
    PortfolioStock("AI", "C3.ai"),
    PortfolioStock("CRWV", "CoreWeave"),
    PortfolioStock("IBM", "IBM"),
    PortfolioStock("INTC", "Intel"),
    PortfolioStock("MRVL", "Marvell Technology"),
    PortfolioStock("MU", "Micron Technology"),
    PortfolioStock("ORCL", "Oracle"),
    PortfolioStock("PLTR", "Palantir"),
    PortfolioStock("QCOM", "Qualcomm"),
    PortfolioStock("REKR", "Rekor Systems"),
    PortfolioStock("NOW", "ServiceNow"),
    PortfolioStock("SNPS", "Synopsys"),
    PortfolioStock("TSM", "Taiwan Semiconductor"),
    PortfolioStock("TSLA", "Tesla"),
    PortfolioStock("VERI", "Veritone"),
]
