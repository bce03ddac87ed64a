"""
Core business logic for the jobmatch engine.

Submodules:
- matching: Score primitive and the forward, reverse and advanced matchers
- exceptions: Not-found errors raised by the matchers
"""
