"""ACPC activation-tree privacy simulator.

Models the binary activation tree used for activation-code style
certificate revocation and measures the crowd size obtained by the
Fixed-Size Subset (FSS) and Variable-Size Subset (VSS) picking strategies.
"""

__version__ = "0.1.0"
