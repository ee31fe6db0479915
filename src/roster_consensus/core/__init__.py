"""Core consensus engine.

- evaluators: the four domain evaluators and their registry
- debate: debate coordinator and topic heuristics
- aggregator: weighted vote over evaluator decisions
- context_builder: assembles DecisionContext from a data source
- ledger: transparent, editable decisions
- lifecycle: review state machine for transparent decisions
- service: the ConsensusService facade
"""
