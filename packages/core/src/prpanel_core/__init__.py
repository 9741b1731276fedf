"""Review orchestration: providers, budget, session driver and cost ledger."""
