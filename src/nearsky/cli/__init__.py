"""Command-line front end for the nearsky engine."""
