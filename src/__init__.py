"""
Karin Deadlines - Legal deadline computation and alerting engine

Computes the statutory deadlines of workplace harassment investigations
under Chile's Ley 21.643 (Ley Karin), tracks extension requests through
approval, and schedules deadline alerts on business-day thresholds.

Core rules:
- Business days skip weekends and the national (plus regional) holidays
  of a versioned catalog
- Extensions are bounded per stage and approved exactly once
- Every engine operation returns a result; failures carry a stable code
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
