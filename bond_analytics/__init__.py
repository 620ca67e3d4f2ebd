"""
Bond Analytics Engine

Modules:
- bonds: bond terms + cashflows + present value at a flat yield
- solvers: bisection root-finder with pluggable stopping rules
- valuation: valuation state (supplied/derived yield) + YTM / break-even solvers
- risk: Macaulay/modified duration, convexity, current yield, DV01
- scenarios: yield sensitivity, scenario, frequency and amortization tables
- report: full analysis report assembly/formatting
- cli: console front end (python -m bond_analytics)
- config: BOND_* environment settings
- errors: exception taxonomy
"""
