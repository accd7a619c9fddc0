"""HTTP surface for the QuickEst estimation engine."""
