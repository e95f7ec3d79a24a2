"""
Tane (種) - Seeded Value Generation

A composable random-value engine for property-based testing:
- Gen: a function from a generation context to a value, composed monadically
- Sampling: weighted choice, Fisher-Yates shuffle, Bernoulli subsets
- Derived generators: numeric ranges, characters, strings, tuples, maps

Every value is reproducible from its seed.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
