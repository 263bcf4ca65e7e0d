"""Periodic-series theories for the planets, Pluto, and the Moon."""
