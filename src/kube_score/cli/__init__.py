"""Command line interface for kube-score."""
