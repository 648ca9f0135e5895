"""Shadow-ban risk scoring system.

A registry of independent scoring agents evaluates a check request along five
weighted factors; the orchestrator combines their results into a probability,
a confidence, a verdict and a list of recommendations.
"""

__version__ = "0.1.0"
