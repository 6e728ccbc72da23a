"""
ORACLE - Price Consensus Engine

Collects price reports from staked oracles, finalizes a consensus value
once quorum is reached and publishes it as the asset's verified price.
"""

from .buffer import RoundBuffer, SubmissionBuffer
from .consensus import ConsensusEngine, mean_price
from .service import OracleService

__all__ = [
    "ConsensusEngine",
    "OracleService",
    "RoundBuffer",
    "SubmissionBuffer",
    "mean_price",
]
