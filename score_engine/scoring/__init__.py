"""
scoring/ - Score Engine calculations

Modules:
    utils.py                   - Decimal utilities
    weights.py                 - Level weight table (validated at import)
    score_calculator.py        - Weighted score calculator
    peer_aggregation.py        - Peer feedback averaging + anonymization
    final_score_calculator.py  - Evaluation → FinalScore
    adjustment_applier.py      - Approved adjustment → FinalScore (unlock/update/re-lock)
"""
