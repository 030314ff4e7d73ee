"""
gp2p — Get Paid to Play Reward Engine
=======================================
Turns finished game sessions into earnings and decides whether a
requested withdrawal can be paid out, and what the platform keeps.

Package layout::

    gp2p/
    ├── config.py          # YAML → typed RewardConfig (+ env overrides)
    ├── constants.py       # Currency defaults, precision, rounding rule
    ├── engine/
    │   ├── errors.py      # InvalidScore / UnknownPlatform / InvalidAmount
    │   ├── models.py      # ScoreSubmission, RateTable, EarningsResult
    │   └── reward.py      # Earnings + payout calculation pipeline
    ├── services/
    │   └── reward_service.py  # Session-report / payout-quote adapters
    └── api/
        ├── main.py        # FastAPI app
        └── routes/        # Earnings, payout quote, rates endpoints
"""

__version__ = "0.1.0"
