"""
scoring/ — Candidate Intelligence Scoring Engine

Modules:
    utils.py                     - Decimal and statistics helpers
    consistency.py               - Rule-based consistency / contradiction detection
    dimension_calculators.py     - Pure per-dimension calculators
    algorithms.py                - Algorithm registry and recommendation templates
    tiers.py                     - Tier tables, validation and selection
    behavioral.py                - Behavioral multiplier and pipeline confidence
    behavioral_analysis.py       - Engagement, trust/risk signals and cognitive load
    multi_dimensional_scorer.py  - Weighted multi-dimensional scorer
    benchmark.py                 - Cohort percentile, distribution and similarity
    pipeline.py                  - Full submission pipeline
"""
